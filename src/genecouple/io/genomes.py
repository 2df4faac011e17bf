"""
GTO genome loading.

A GTO is the JSON genome-object format used by PATRIC and RAST. Only the
parts the coupling engine needs are read: feature locations, functions,
protein family assignments, protein translations and subsystem
membership.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Set

from genecouple.core.features import Feature, Genome
from genecouple.core.locations import Location
from genecouple.io.tables import PathLike

logger = logging.getLogger(__name__)

GTO_SUFFIX = ".gto"


def _subsystem_map(data: Dict[str, Any]) -> Dict[str, Set[str]]:
    """Map each feature ID to the names of the subsystems that contain it."""
    membership: Dict[str, Set[str]] = {}
    for subsystem in data.get("subsystems", []):
        name = subsystem.get("name", "")
        for binding in subsystem.get("role_bindings", []):
            for fid in binding.get("features", []):
                membership.setdefault(fid, set()).add(name)
    return membership


def _families(record: Dict[str, Any]) -> Dict[str, str]:
    families = {}
    for assignment in record.get("family_assignments", []):
        if len(assignment) >= 2:
            families[assignment[0].upper()] = assignment[1]
    return families


def genome_from_dict(data: Dict[str, Any]) -> Genome:
    """
    Build a genome from parsed GTO JSON.

    Features without a location are skipped; only the first segment of a
    multi-segment location is used.
    """
    genome = Genome(data["id"], data.get("scientific_name", ""))
    membership = _subsystem_map(data)
    skipped = 0
    for record in data.get("features", []):
        regions = record.get("location") or []
        if not regions:
            skipped += 1
            continue
        families = _families(record)
        fid = record["id"]
        genome.add_feature(
            Feature(
                id=fid,
                location=Location.from_gto(regions[0]),
                function=record.get("function", "") or "",
                type=record.get("type", "CDS"),
                pgfam=families.get("PGFAM"),
                plfam=families.get("PLFAM"),
                protein_translation=record.get("protein_translation"),
                subsystems=membership.get(fid, set()),
            )
        )
    if skipped:
        logger.debug(f"{skipped} features without locations skipped in {genome.id}.")
    return genome


def load_genome(path: PathLike) -> Genome:
    """Load a genome from a GTO file."""
    with open(path) as fh:
        data = json.load(fh)
    return genome_from_dict(data)


class GenomeDirectory:
    """
    Genome source backed by a directory of GTO files.

    Genomes are loaded one at a time, in file-name order.

    Args:
        directory: Directory containing *.gto files
    """

    def __init__(self, directory: PathLike):
        self.directory = Path(directory)
        if not self.directory.is_dir():
            raise FileNotFoundError(f"Genome directory {self.directory} is not found or invalid.")
        self.files: List[Path] = sorted(self.directory.glob(f"*{GTO_SUFFIX}"))
        self.current_file: Optional[Path] = None

    def __len__(self) -> int:
        return len(self.files)

    def __iter__(self) -> Iterator[Genome]:
        for path in self.files:
            self.current_file = path
            yield load_genome(path)

    def __repr__(self) -> str:
        return f"GenomeDirectory({self.directory}, genomes={len(self.files)})"
