import pytest

from genecouple.core.kmers import ProteinKmers


def test_identical_proteins():
    first = ProteinKmers("MKVLAAGIVGLLAQ", k=4)
    second = ProteinKmers("mkvlaagivgllaq", k=4)

    assert first.similarity(second) == len(first)
    assert first.distance(second) == pytest.approx(0.0)


def test_disjoint_proteins():
    first = ProteinKmers("AAAAAAAAAA", k=4)
    second = ProteinKmers("CCCCCCCCCC", k=4)

    assert first.similarity(second) == 0
    assert first.distance(second) == pytest.approx(1.0)


def test_partial_overlap():
    first = ProteinKmers("ABCDE", k=3)
    second = ProteinKmers("BCDEF", k=3)

    # {ABC, BCD, CDE} vs {BCD, CDE, DEF}
    assert first.similarity(second) == 2
    assert first.distance(second) == pytest.approx(0.5)


def test_short_sequences_have_no_kmers():
    assert len(ProteinKmers("MKV", k=8)) == 0
    assert ProteinKmers("MKV", k=8).distance(ProteinKmers("", k=8)) == 1.0
