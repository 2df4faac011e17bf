"""
Annotated genome model.

These are the collaborator objects the coupling engine reads from:
a genome is an ordered collection of features, each with a location,
a functional assignment, optional protein family IDs and the set of
subsystems it participates in.
"""

import hashlib
import re
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Optional, Set, Tuple

from genecouple.core.locations import Location

# Function comments start with a pound sign or an exclamation point.
_COMMENT = re.compile(r"\s*[#!].*$")
# Multi-role separators: domains (/), multifunctional (@), ambiguous (;).
_ROLE_SEPARATOR = re.compile(r"\s+/\s+|\s+@\s+|;\s+")
SEED_PROTEIN_FUNCTION = "Phenylalanyl-tRNA synthetase alpha chain (EC 6.1.1.20)"

_HYPOTHETICAL = re.compile(
    r"^(hypothetical|putative|uncharacterized|predicted)(\s+\w+)?\s+protein\b"
    r"|^hypothetical\b"
    r"|^(conserved\s+)?(protein|domain)\s+of\s+unknown\s+function"
    r"|^DUF\d+",
    re.IGNORECASE,
)


def comment_free(function: str) -> str:
    """Strip the trailing comment from a functional assignment."""
    return _COMMENT.sub("", function).strip()


def roles_of_function(function: Optional[str]) -> List[str]:
    """
    Split a functional assignment into its component roles.

    Args:
        function: Functional assignment text (may be None)

    Returns:
        List of role names, in order of appearance
    """
    if not function:
        return []
    text = comment_free(function)
    if not text:
        return []
    return [role for role in (part.strip() for part in _ROLE_SEPARATOR.split(text)) if role]


def is_hypothetical(role: Optional[str]) -> bool:
    """Check whether a role carries no real functional information."""
    if role is None:
        return True
    role = role.strip()
    return not role or bool(_HYPOTHETICAL.search(role))


@dataclass(eq=False)
class Feature:
    """
    Annotated genomic feature.

    Attributes:
        id: Feature identifier (e.g. 'fig|83333.1.peg.4')
        location: Position on the chromosome
        function: Functional assignment text
        type: Feature type ('CDS', 'rna', ...)
        pgfam: Global protein family ID, if any
        plfam: Local (genus-level) protein family ID, if any
        protein_translation: Amino-acid sequence for protein features
        subsystems: Names of the subsystems containing this feature
        couplings: (other_fid, size, strength) tuples added when
            coupling data is projected back onto a genome
    """

    id: str
    location: Location
    function: str = ""
    type: str = "CDS"
    pgfam: Optional[str] = None
    plfam: Optional[str] = None
    protein_translation: Optional[str] = None
    subsystems: Set[str] = field(default_factory=set)
    couplings: List[Tuple[str, int, float]] = field(default_factory=list)

    @property
    def md5(self) -> Optional[str]:
        """MD5 of the protein translation, or None for non-protein features."""
        if not self.protein_translation:
            return None
        return hashlib.md5(self.protein_translation.upper().encode("utf-8")).hexdigest()

    @property
    def roles(self) -> List[str]:
        return roles_of_function(self.function)

    @property
    def is_peg(self) -> bool:
        return self.type in ("CDS", "peg")

    def add_coupling(self, other_fid: str, size: int, strength: float) -> None:
        self.couplings.append((other_fid, size, strength))

    def clear_couplings(self) -> None:
        self.couplings.clear()

    def __repr__(self) -> str:
        return f"Feature({self.id}, {self.location})"


class Genome:
    """
    Annotated genome: an ordered, ID-indexed collection of features.

    Args:
        genome_id: Genome identifier (e.g. '83333.1')
        name: Scientific name
        features: Features in their original order
    """

    def __init__(self, genome_id: str, name: str = "", features: Iterable[Feature] = ()):
        self.id = genome_id
        self.name = name
        self._features: Dict[str, Feature] = {}
        for feat in features:
            self.add_feature(feat)

    def add_feature(self, feat: Feature) -> None:
        if feat.id in self._features:
            raise ValueError(f"Duplicate feature {feat.id} in genome {self.id}")
        self._features[feat.id] = feat

    @property
    def features(self) -> List[Feature]:
        return list(self._features.values())

    def get_feature(self, fid: str) -> Optional[Feature]:
        """Return the feature with the given ID, or None if it is not in this genome."""
        return self._features.get(fid)

    def pegs(self) -> Iterator[Feature]:
        return (feat for feat in self._features.values() if feat.is_peg)

    def by_function(self, function: str) -> Optional[Feature]:
        """
        Find the first feature with a specified functional assignment.

        Comments are ignored on both sides of the comparison.
        """
        target = comment_free(function)
        for feat in self._features.values():
            if feat.function and comment_free(feat.function) == target:
                return feat
        return None

    def seed_protein(self) -> str:
        """
        Longest protein translation of a seed-protein feature.

        Returns:
            Amino-acid sequence, or an empty string if the genome has none
        """
        target = comment_free(SEED_PROTEIN_FUNCTION)
        best = ""
        for feat in self._features.values():
            if feat.function and comment_free(feat.function) == target:
                prot = feat.protein_translation or ""
                if len(prot) > len(best):
                    best = prot
        return best

    def __len__(self) -> int:
        return len(self._features)

    def __iter__(self) -> Iterator[Feature]:
        return iter(self._features.values())

    def __str__(self) -> str:
        return f"{self.id} ({self.name})" if self.name else self.id

    def __repr__(self) -> str:
        return f"Genome(id={self.id}, features={len(self)})"
