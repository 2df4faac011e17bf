"""
Neighbor finders.

A neighbor finder takes the location-sorted results of a genome and a
position in that list, and returns the later results that count as
neighbors of the result at that position. Results on a different strand
or contig are never neighbors.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import List, Sequence

from genecouple.core.results import ClassResult


class NeighborFinder(ABC):
    """
    Abstract base class for neighbor-finding policies.

    Args:
        max_gap: Maximum distance between neighboring features
    """

    def __init__(self, max_gap: int):
        if max_gap < 1:
            raise ValueError(f"Invalid maximum gap size {max_gap}. Must be at least 1.")
        self.max_gap = max_gap

    @abstractmethod
    def neighbors(self, results: Sequence[ClassResult], pos: int) -> List[ClassResult]:
        """
        Find the neighbors of a result.

        Args:
            results: Location-sorted results for one genome
            pos: Position of the result of interest

        Returns:
            Neighboring results after pos, in list order
        """
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(max_gap={self.max_gap})"


class AdjacentNeighborFinder(NeighborFinder):
    """Only the next result, and only if it is within the gap distance."""

    def neighbors(self, results: Sequence[ClassResult], pos: int) -> List[ClassResult]:
        nxt = pos + 1
        if nxt >= len(results):
            return []
        if results[pos].distance(results[nxt]) > self.max_gap:
            return []
        return [results[nxt]]


class CloseNeighborFinder(NeighborFinder):
    """
    Every subsequent result within the gap distance.

    The results are sorted by location within strand, so the first
    result out of range ends the scan.
    """

    def neighbors(self, results: Sequence[ClassResult], pos: int) -> List[ClassResult]:
        origin = results[pos]
        found = []
        for j in range(pos + 1, len(results)):
            if origin.distance(results[j]) > self.max_gap:
                break
            found.append(results[j])
        return found


class NeighborType(Enum):
    """Neighbor-finding algorithm."""

    ADJACENT = "adjacent"
    """Next feature only."""

    CLOSE = "close"
    """All following features within the gap."""

    def create(self, max_gap: int) -> NeighborFinder:
        if self is NeighborType.ADJACENT:
            return AdjacentNeighborFinder(max_gap)
        return CloseNeighborFinder(max_gap)
