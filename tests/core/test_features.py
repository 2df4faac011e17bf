import hashlib

import pytest

from genecouple.core.features import (
    SEED_PROTEIN_FUNCTION,
    Genome,
    comment_free,
    is_hypothetical,
    roles_of_function,
)


def test_roles_split_on_all_separators():
    function = "Role A / Role B @ Role C; Role D # a comment"

    assert roles_of_function(function) == ["Role A", "Role B", "Role C", "Role D"]


def test_comments_removed():
    assert comment_free("Thioredoxin ! from curation") == "Thioredoxin"
    assert roles_of_function("# only a comment") == []
    assert roles_of_function(None) == []


@pytest.mark.parametrize(
    "role",
    ["hypothetical protein", "Putative protein", "uncharacterized protein YbaB", "DUF1234", "", None],
)
def test_hypothetical_roles(role):
    assert is_hypothetical(role)


def test_real_role_is_not_hypothetical():
    assert not is_hypothetical(SEED_PROTEIN_FUNCTION)
    assert not is_hypothetical("Protein translocase subunit SecA")


def test_md5_uses_upper_case_translation(make_feature):
    feat = make_feature("fig|1.1.peg.1", 1, 30, protein="mkv")
    expected = hashlib.md5(b"MKV").hexdigest()

    assert feat.md5 == expected
    assert make_feature("fig|1.1.rna.1", 1, 30).md5 is None


def test_genome_lookup_and_duplicates(make_feature):
    feat = make_feature("fig|1.1.peg.1", 1, 30)
    genome = Genome("1.1", "Test genome", [feat])

    assert genome.get_feature("fig|1.1.peg.1") is feat
    assert genome.get_feature("fig|1.1.peg.9") is None
    assert len(genome) == 1
    assert str(genome) == "1.1 (Test genome)"
    with pytest.raises(ValueError, match="Duplicate feature"):
        genome.add_feature(make_feature("fig|1.1.peg.1", 100, 200))


def test_by_function_ignores_comments(make_feature):
    seed = make_feature("fig|1.1.peg.2", 100, 200, function=SEED_PROTEIN_FUNCTION + " # confirmed")
    genome = Genome("1.1", features=[make_feature("fig|1.1.peg.1", 1, 30), seed])

    assert genome.by_function(SEED_PROTEIN_FUNCTION) is seed
    assert genome.by_function("Thioredoxin") is None


def test_seed_protein_picks_longest(make_feature):
    short = make_feature("fig|1.1.peg.1", 1, 30, function=SEED_PROTEIN_FUNCTION, protein="MKV")
    long = make_feature("fig|1.1.peg.2", 100, 200, function=SEED_PROTEIN_FUNCTION, protein="MKVLLA")

    assert Genome("1.1", features=[short, long]).seed_protein() == "MKVLLA"
    assert Genome("1.2").seed_protein() == ""


def test_couplings_can_be_added_and_cleared(make_feature):
    feat = make_feature("fig|1.1.peg.1", 1, 30)

    feat.add_coupling("fig|1.1.peg.2", 12, 3.5)
    assert feat.couplings == [("fig|1.1.peg.2", 12, 3.5)]

    feat.clear_couplings()
    assert feat.couplings == []


def test_pegs_are_protein_features(make_feature):
    peg = make_feature("fig|1.1.peg.1", 1, 30)
    rna = make_feature("fig|1.1.rna.1", 100, 200)
    rna.type = "rna"

    assert list(Genome("1.1", features=[peg, rna]).pegs()) == [peg]
