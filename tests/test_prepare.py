import pytest

from genecouple.core.classifiers import FamilyClassifier
from genecouple.core.neighbors import CloseNeighborFinder
from genecouple.core.results import ClassPair
from genecouple.prepare import CouplingPreparer

SCORE_HEADER = (
    "family_id1\tfamily_product1\tfamily_id2\tfamily_product2\tsize\tweight\tsub_match\tsub_fail"
    "\tsim_distance\tphes_distance\tpercent1\tpercent2\tfamily1\tfamily2"
)


@pytest.fixture
def scores_file(tmp_path):
    path = tmp_path / "scores.tbl"
    path.write_text(
        SCORE_HEADER
        + "\n"
        + "PF00001\tAlpha\tPF00002\tBeta\t2\t  2.0000\t1\t1\t  1.5000\t  1.0000\t  100.00\t  100.00\t2\t2\n"
        + "PF00002\tBeta\tPF07777\tOther\t9\t  9.0000\t0\t0\t  4.0000\t  2.0000\t  100.00\t  100.00\t9\t9\n",
        encoding="utf-8",
    )
    return path


def test_couplings_read_both_ways(scores_file):
    preparer = CouplingPreparer(FamilyClassifier(), CloseNeighborFinder(200), scores_file)

    assert preparer.couplings["PF00001"]["PF00002"].size == 2
    assert preparer.couplings["PF00002"]["PF00001"].strength == pytest.approx(1.5)
    assert set(preparer.couplings["PF00002"]) == {"PF00001", "PF07777"}


def test_mark_genomes(scores_file, corpus):
    preparer = CouplingPreparer(FamilyClassifier(), CloseNeighborFinder(200), scores_file)

    assert preparer.mark_genomes(corpus) == 2

    g1 = corpus[0]
    assert g1.get_feature("fig|1.1.peg.1").couplings == [("fig|1.1.peg.2", 2, 1.5)]
    assert g1.get_feature("fig|1.1.peg.2").couplings == [("fig|1.1.peg.1", 2, 1.5)]
    assert g1.get_feature("fig|1.1.peg.3").couplings == []
    assert preparer.instances[ClassPair("PF00001", "PF00002")] == {
        "fig|1.1.peg.1:fig|1.1.peg.2",
        "fig|2.1.peg.1:fig|2.1.peg.2",
    }
    assert preparer.instances[ClassPair("PF00002", "PF07777")] == set()


def test_marking_replaces_old_couplings(scores_file, corpus):
    preparer = CouplingPreparer(FamilyClassifier(), CloseNeighborFinder(200), scores_file)
    feat = corpus[0].get_feature("fig|1.1.peg.1")
    feat.add_coupling("fig|1.1.peg.9", 99, 9.9)

    preparer.mark_genome(corpus[0])

    assert feat.couplings == [("fig|1.1.peg.2", 2, 1.5)]


def test_write_tables(scores_file, corpus, tmp_path):
    preparer = CouplingPreparer(FamilyClassifier(), CloseNeighborFinder(200), scores_file)
    preparer.mark_genomes(corpus)

    genome_path, couples_path = preparer.write_tables(tmp_path / "out")

    assert genome_path.read_text().splitlines() == ["G1\tGenome one\t1", "G2\tGenome two\t1"]
    assert couples_path.read_text().splitlines() == [
        "family_id1\tfamily_product1\tfamily_id2\tfamily_product2\tfeatures",
        "PF00001\tAlpha\tPF00002\tBeta\tfig|1.1.peg.1:fig|1.1.peg.2,fig|2.1.peg.1:fig|2.1.peg.2",
    ]


def test_genomes_without_couplings_left_out(scores_file, corpus, tmp_path):
    preparer = CouplingPreparer(FamilyClassifier(), CloseNeighborFinder(10), scores_file)

    assert preparer.mark_genomes(corpus) == 0
    genome_path, couples_path = preparer.write_tables(tmp_path)
    assert genome_path.read_text() == ""
    assert len(couples_path.read_text().splitlines()) == 1


def test_coupling_file_needs_score_columns(write_text):
    path = write_text("groups.tbl", "family_id1\tfamily_product1\tfamily_id2\tfamily_product2\tgenomes\n")

    with pytest.raises(ValueError, match="size"):
        CouplingPreparer(FamilyClassifier(), CloseNeighborFinder(200), path)


def test_coupling_file_must_exist(tmp_path):
    with pytest.raises(FileNotFoundError):
        CouplingPreparer(FamilyClassifier(), CloseNeighborFinder(200), tmp_path / "none.tbl")
