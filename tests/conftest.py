import json
import textwrap
from pathlib import Path

import pytest

from genecouple.core.features import SEED_PROTEIN_FUNCTION, Feature, Genome
from genecouple.core.locations import Location

# Two unrelated 40-residue seed proteins; they share no 8-mers.
PHES_A = "MSHLAELVASAKAAISQASDVAALDNVRVEYLGKKGHLTL"
PHES_B = "MENLDALVAEALRQIEAAQDLAALEQLRVRYLGKKGELSA"


def build_feature(
    fid,
    left,
    right,
    strand="+",
    contig="c1",
    pgfam=None,
    plfam=None,
    function="",
    protein=None,
    subsystems=(),
):
    return Feature(
        id=fid,
        location=Location(contig=contig, strand=strand, left=left, right=right),
        function=function,
        pgfam=pgfam,
        plfam=plfam,
        protein_translation=protein,
        subsystems=set(subsystems),
    )


@pytest.fixture
def make_feature():
    return build_feature


@pytest.fixture
def make_genome():
    def _make(genome_id, features, name=""):
        return Genome(genome_id, name, features)

    return _make


@pytest.fixture
def write_text(tmp_path):
    """Write dedented text to a file under tmp_path and return its path."""

    def _write(name, content):
        path = tmp_path / name
        path.write_text(textwrap.dedent(content).strip() + "\n", encoding="utf-8")
        return path

    return _write


@pytest.fixture
def corpus():
    """
    Two genomes sharing one coupled family pair.

    G1 has PF00001 and PF00002 100 bases apart, G2 has them 50 bases
    apart. Each genome also carries a seed protein far downstream.
    """
    g1 = Genome(
        "G1",
        "Genome one",
        [
            build_feature("fig|1.1.peg.1", 1, 1000, pgfam="PF00001", function="Alpha protein",
                          subsystems={"Sub1"}),
            build_feature("fig|1.1.peg.2", 1101, 2000, pgfam="PF00002", function="Beta protein",
                          subsystems={"Sub1"}),
            build_feature("fig|1.1.peg.3", 20001, 21000, pgfam="PF09999",
                          function=SEED_PROTEIN_FUNCTION, protein=PHES_A),
        ],
    )
    g2 = Genome(
        "G2",
        "Genome two",
        [
            build_feature("fig|2.1.peg.1", 1, 1000, pgfam="PF00001", function="Alpha protein",
                          subsystems={"Sub1"}),
            build_feature("fig|2.1.peg.2", 1051, 2000, pgfam="PF00002", function="Beta protein",
                          subsystems={"Sub2"}),
            build_feature("fig|2.1.peg.3", 20001, 21000, pgfam="PF09999",
                          function=SEED_PROTEIN_FUNCTION, protein=PHES_B),
        ],
    )
    return [g1, g2]


def gto_feature(fid, contig, begin, strand, length, function="", pgfam=None, plfam=None, protein=None):
    record = {
        "id": fid,
        "type": "CDS",
        "location": [[contig, begin, strand, length]],
        "function": function,
        "family_assignments": [],
    }
    if pgfam:
        record["family_assignments"].append(["PGFAM", pgfam, "family"])
    if plfam:
        record["family_assignments"].append(["PLFAM", plfam, "family"])
    if protein:
        record["protein_translation"] = protein
    return record


def write_gto(directory: Path, genome_id, name, features, subsystems=()):
    data = {
        "id": genome_id,
        "scientific_name": name,
        "features": features,
        "subsystems": list(subsystems),
    }
    path = directory / f"{genome_id}.gto"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


@pytest.fixture
def gto_dir(tmp_path):
    """Directory holding the two-genome corpus as GTO files."""
    directory = tmp_path / "gtos"
    directory.mkdir()
    write_gto(
        directory,
        "G1",
        "Genome one",
        [
            gto_feature("fig|1.1.peg.1", "c1", 1, "+", 1000, "Alpha protein", pgfam="PF00001"),
            gto_feature("fig|1.1.peg.2", "c1", 1101, "+", 900, "Beta protein", pgfam="PF00002"),
            gto_feature("fig|1.1.peg.3", "c1", 20001, "+", 1000, SEED_PROTEIN_FUNCTION,
                        pgfam="PF09999", protein=PHES_A),
        ],
        subsystems=[
            {
                "name": "Sub1",
                "role_bindings": [
                    {"role_id": "Alph", "features": ["fig|1.1.peg.1"]},
                    {"role_id": "Beta", "features": ["fig|1.1.peg.2"]},
                ],
            }
        ],
    )
    write_gto(
        directory,
        "G2",
        "Genome two",
        [
            gto_feature("fig|2.1.peg.1", "c1", 1, "+", 1000, "Alpha protein", pgfam="PF00001"),
            gto_feature("fig|2.1.peg.2", "c1", 1051, "+", 950, "Beta protein", pgfam="PF00002"),
            gto_feature("fig|2.1.peg.3", "c1", 20001, "+", 1000, SEED_PROTEIN_FUNCTION,
                        pgfam="PF09999", protein=PHES_B),
        ],
    )
    return directory


@pytest.fixture
def seedless_gto_dir(gto_dir):
    """The GTO corpus plus a third genome with no seed protein."""
    write_gto(
        gto_dir,
        "G3",
        "Genome three",
        [gto_feature("fig|3.1.peg.1", "c1", 1, "+", 900, "Alpha protein", pgfam="PF00001")],
    )
    return gto_dir
