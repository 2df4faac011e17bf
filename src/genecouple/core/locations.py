"""Genomic locations."""

import math
from dataclasses import dataclass
from typing import Sequence, Union


@dataclass(frozen=True)
class Location:
    """
    Single-segment location of a feature on a contig.

    Coordinates are 1-based and inclusive. ``left`` is always the lower
    coordinate regardless of strand.

    Attributes:
        contig: Contig identifier
        strand: '+' or '-'
        left: Leftmost base
        right: Rightmost base
    """

    contig: str
    strand: str
    left: int
    right: int

    def __post_init__(self):
        if self.strand not in ("+", "-"):
            raise ValueError(f"Invalid strand {self.strand!r}; must be '+' or '-'")
        if self.left > self.right:
            raise ValueError(f"Invalid location: left {self.left} > right {self.right}")

    @property
    def begin(self) -> int:
        """Start point in the direction of transcription."""
        return self.left if self.strand == "+" else self.right

    @property
    def end(self) -> int:
        """End point in the direction of transcription."""
        return self.right if self.strand == "+" else self.left

    @property
    def length(self) -> int:
        return self.right - self.left + 1

    def distance(self, other: "Location") -> Union[int, float]:
        """
        Number of bases between two locations.

        Overlapping locations have a negative distance. Locations on
        different contigs are infinitely far apart.
        """
        if self.contig != other.contig:
            return math.inf
        return max(self.left, other.left) - min(self.right, other.right) - 1

    @classmethod
    def from_gto(cls, region: Sequence) -> "Location":
        """
        Create a location from a GTO region.

        Args:
            region: [contig, begin, strand, length]

        Returns:
            Location covering the region
        """
        contig, begin, strand, length = region[0], int(region[1]), region[2], int(region[3])
        if strand == "+":
            return cls(contig=contig, strand=strand, left=begin, right=begin + length - 1)
        return cls(contig=contig, strand=strand, left=begin - length + 1, right=begin)

    def __str__(self) -> str:
        return f"{self.contig}_{self.begin}{self.strand}{self.length}"
