"""Protein k-mer sets for genome similarity."""

from typing import FrozenSet

DEFAULT_K = 8


class ProteinKmers:
    """
    Set of the distinct k-mers in a protein sequence.

    Args:
        sequence: Amino-acid sequence
        k: K-mer length
    """

    def __init__(self, sequence: str, k: int = DEFAULT_K):
        if k < 1:
            raise ValueError(f"Invalid k-mer size {k}")
        self.k = k
        seq = sequence.upper()
        self.kmers: FrozenSet[str] = frozenset(seq[i:i + k] for i in range(len(seq) - k + 1))

    def similarity(self, other: "ProteinKmers") -> int:
        """Number of k-mers in common."""
        return len(self.kmers & other.kmers)

    def distance(self, other: "ProteinKmers") -> float:
        """Jaccard distance between the two k-mer sets."""
        sim = self.similarity(other)
        union = len(self.kmers) + len(other.kmers) - sim
        if union == 0:
            return 1.0
        return 1.0 - sim / union

    def __len__(self) -> int:
        return len(self.kmers)
