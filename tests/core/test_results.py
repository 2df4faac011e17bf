from collections import Counter

import pytest

from genecouple.core.locations import Location
from genecouple.core.results import ClassPair, ClassResult, PairAggregate


def test_pair_is_canonical():
    forward = ClassPair("PF00002", "PF00001")
    backward = ClassPair("PF00001", "PF00002")

    assert forward == backward
    assert hash(forward) == hash(backward)
    assert str(forward) == str(backward) == "PF00001\tPF00002"
    assert forward.class1 == "PF00001"
    assert "PF00002" in forward and "PF00003" not in forward


def test_pairs_sort_by_class_ids():
    pairs = [ClassPair("B", "C"), ClassPair("C", "A"), ClassPair("B", "A")]

    assert sorted(pairs) == [ClassPair("A", "B"), ClassPair("A", "C"), ClassPair("B", "C")]


def test_result_weight_reads_shared_counter():
    counts = Counter()
    result = ClassResult("fig|1.1.peg.1", Location("c1", "+", 1, 100), ["PF00001"])
    result.connect_weights(counts)

    counts.update(["PF00001", "PF00001", "PF00001", "PF00001"])

    assert result.weight("PF00001") == pytest.approx(0.25)
    with pytest.raises(KeyError):
        result.weight("PF00002")


def test_unconnected_weight_fails():
    result = ClassResult("fig|1.1.peg.1", Location("c1", "+", 1, 100), ["PF00001"])

    with pytest.raises(RuntimeError):
        result.weight("PF00001")


def test_results_sort_by_contig_strand_and_begin():
    a = ClassResult("a", Location("c1", "-", 500, 600))
    b = ClassResult("b", Location("c1", "+", 700, 800))
    c = ClassResult("c", Location("c1", "+", 100, 200))
    d = ClassResult("d", Location("c0", "-", 100, 200))

    assert [r.fid for r in sorted([a, b, c, d])] == ["d", "c", "b", "a"]


def test_remove_and_iteration_order():
    result = ClassResult("fig|1.1.peg.1", Location("c1", "+", 1, 100), ["C", "A", "B"])

    assert list(result) == ["A", "B", "C"]
    assert result.remove({"B", "Z"}) == 1
    assert list(result) == ["A", "C"]
    assert result.remove({"A", "C"}) == 2
    assert not result.good


def test_opposite_strand_distance_is_unbounded():
    plus = ClassResult("a", Location("c1", "+", 1, 100))
    minus = ClassResult("b", Location("c1", "-", 101, 200))

    assert plus.distance(minus) == float("inf")


def test_first_contribution_only(make_feature, make_genome):
    genome = make_genome(
        "G1",
        [
            make_feature("f1", 1, 100, subsystems={"S1"}),
            make_feature("f2", 201, 300, subsystems={"S1"}),
            make_feature("f3", 401, 500),
            make_feature("f4", 601, 700),
        ],
    )
    aggregate = PairAggregate()

    assert aggregate.add_genome(genome, 0.5, "f1", "f2")
    assert not aggregate.add_genome(genome, 1.0, "f3", "f4")

    assert aggregate.size == 1
    assert aggregate.weight == pytest.approx(0.5)
    assert aggregate.sub_match == 1
    assert aggregate.sub_fail == 0


def test_subsystem_mismatch_counted(make_feature, make_genome):
    genome = make_genome(
        "G1",
        [make_feature("f1", 1, 100, subsystems={"S1"}), make_feature("f2", 201, 300)],
    )
    aggregate = PairAggregate()

    aggregate.add_genome(genome, 1.0, "f1", "f2")

    assert (aggregate.sub_match, aggregate.sub_fail) == (0, 1)


def test_no_subsystems_counts_neither(make_feature, make_genome):
    genome = make_genome("G1", [make_feature("f1", 1, 100), make_feature("f2", 201, 300)])
    aggregate = PairAggregate()

    aggregate.add_genome(genome, 1.0, "f1", "f2")

    assert (aggregate.sub_match, aggregate.sub_fail) == (0, 0)


def test_missing_feature_is_fatal(make_feature, make_genome):
    genome = make_genome("G1", [make_feature("f1", 1, 100)])
    aggregate = PairAggregate()

    with pytest.raises(RuntimeError, match="Missing feature f9"):
        aggregate.add_genome(genome, 1.0, "f1", "f9")
    assert aggregate.size == 0
