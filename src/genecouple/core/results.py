"""
Classification results, canonical class pairs and pair aggregates.

A ClassResult holds the class IDs assigned to one feature together with
the feature's location. Results for a genome are sorted by location so
that neighbors can be found by scanning forward. Neighboring classes
are paired into ClassPairs, and every pair accumulates a PairAggregate
across the genome corpus.
"""

import math
from collections import Counter
from dataclasses import dataclass, field
from functools import total_ordering
from typing import Collection, Iterator, Optional, Set, Tuple, Union

from genecouple.core.features import Feature, Genome
from genecouple.core.locations import Location


@total_ordering
class ClassResult:
    """
    Classes assigned to a single feature.

    Identity is the feature ID. Results sort by contig, strand, begin
    point and finally feature ID.

    Args:
        fid: Feature ID
        location: Feature location
        classes: Initial class IDs
    """

    __slots__ = ("fid", "location", "classes", "_counts")

    def __init__(self, fid: str, location: Location, classes: Collection[str] = ()):
        self.fid = fid
        self.location = location
        self.classes: Set[str] = set(classes)
        self._counts: Optional[Counter] = None

    @classmethod
    def for_feature(cls, feat: Feature) -> "ClassResult":
        """Create an empty result for a feature."""
        return cls(feat.id, feat.location)

    def add(self, class_id: str) -> None:
        self.classes.add(class_id)

    def connect_weights(self, counts: Counter) -> None:
        """
        Attach the class occurrence counts of the feature's genome.

        The counter is shared by all results of a genome and is read
        lazily, so it may still be filling when it is connected.
        """
        self._counts = counts

    def weight(self, class_id: str) -> float:
        """
        Weight of a class in this result's genome.

        Returns:
            1 / (number of features in the genome carrying the class)
        """
        if self._counts is None:
            raise RuntimeError(f"No class counts connected to result for {self.fid}")
        count = self._counts[class_id]
        if count <= 0:
            raise KeyError(f"Class {class_id} does not occur in the genome of {self.fid}")
        return 1.0 / count

    def distance(self, other: "ClassResult") -> Union[int, float]:
        """Distance to another result; unbounded across strands or contigs."""
        if self.location.strand != other.location.strand:
            return math.inf
        return self.location.distance(other.location)

    def remove(self, blacklist: Collection[str]) -> int:
        """
        Remove classes in a blacklist from this result.

        Returns:
            Number of classes removed
        """
        doomed = self.classes.intersection(blacklist)
        self.classes.difference_update(doomed)
        return len(doomed)

    @property
    def good(self) -> bool:
        """True if the result has any classes."""
        return bool(self.classes)

    def sort_key(self) -> Tuple[str, str, int, str]:
        loc = self.location
        return (loc.contig, loc.strand, loc.begin, self.fid)

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self.classes))

    def __len__(self) -> int:
        return len(self.classes)

    def __contains__(self, class_id: str) -> bool:
        return class_id in self.classes

    def __eq__(self, other) -> bool:
        if not isinstance(other, ClassResult):
            return NotImplemented
        return self.fid == other.fid

    def __lt__(self, other: "ClassResult") -> bool:
        if not isinstance(other, ClassResult):
            return NotImplemented
        return self.sort_key() < other.sort_key()

    def __hash__(self) -> int:
        return hash(self.fid)

    def __repr__(self) -> str:
        return f"ClassResult({self.fid}, {self.location}, {sorted(self.classes)})"


@dataclass(frozen=True, order=True)
class ClassPair:
    """
    Unordered pair of class IDs.

    The two IDs are stored in lexical order, so ClassPair(a, b) and
    ClassPair(b, a) are equal and hash alike.
    """

    class1: str
    class2: str

    def __post_init__(self):
        if self.class2 < self.class1:
            first, second = self.class2, self.class1
            object.__setattr__(self, "class1", first)
            object.__setattr__(self, "class2", second)

    def __contains__(self, class_id: str) -> bool:
        return class_id == self.class1 or class_id == self.class2

    def __iter__(self) -> Iterator[str]:
        yield self.class1
        yield self.class2

    def __str__(self) -> str:
        return f"{self.class1}\t{self.class2}"


@dataclass
class PairAggregate:
    """
    Corpus-wide statistics for one class pair.

    A genome counts once no matter how many times the pair occurs in it:
    the weight and subsystem counters are only updated by the first
    occurrence recorded for each genome.

    Attributes:
        genome_ids: Genomes in which the pair was found
        weight: Sum over genomes of the product of the two class weights
        sub_match: Genomes whose paired features share a subsystem
        sub_fail: Genomes whose paired features are in different subsystems
    """

    genome_ids: Set[str] = field(default_factory=set)
    weight: float = 0.0
    sub_match: int = 0
    sub_fail: int = 0

    def add_genome(self, genome: Genome, increment: float, fid1: str, fid2: str) -> bool:
        """
        Record an occurrence of the pair in a genome.

        Args:
            genome: Genome containing the occurrence
            increment: Weight of the occurrence
            fid1: First feature of the occurrence
            fid2: Paired feature

        Returns:
            True if this was the genome's first contribution to the pair

        Raises:
            RuntimeError: If either feature is not in the genome
        """
        feat1 = genome.get_feature(fid1)
        if feat1 is None:
            raise RuntimeError(f"Missing feature {fid1} in {genome}.")
        feat2 = genome.get_feature(fid2)
        if feat2 is None:
            raise RuntimeError(f"Missing feature {fid2} in {genome}.")
        if genome.id in self.genome_ids:
            return False
        self.genome_ids.add(genome.id)
        self.weight += increment
        subs1, subs2 = feat1.subsystems, feat2.subsystems
        if subs1 or subs2:
            if subs1 & subs2:
                self.sub_match += 1
            else:
                self.sub_fail += 1
        return True

    @property
    def size(self) -> int:
        """Number of genomes containing the pair."""
        return len(self.genome_ids)

    @property
    def genomes(self) -> Set[str]:
        return self.genome_ids

    def __repr__(self) -> str:
        return (
            f"PairAggregate(size={self.size}, weight={self.weight:.4f}, "
            f"sub_match={self.sub_match}, sub_fail={self.sub_fail})"
        )
