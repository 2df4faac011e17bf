"""Class name resolution."""

from abc import ABC, abstractmethod
from typing import Collection, Dict

from genecouple.io.tables import PathLike, read_fasta_labels, read_name_table


class NameResolver(ABC):
    """
    Best-effort source of human-readable class names.

    Unknown IDs are simply omitted from the returned map.
    """

    @abstractmethod
    def resolve(self, class_ids: Collection[str]) -> Dict[str, str]:
        """
        Look up the names for a batch of class IDs.

        Args:
            class_ids: IDs of the classes to name

        Returns:
            Map of class ID -> name for the IDs that could be resolved
        """
        pass


class MappingNameResolver(NameResolver):
    """Resolve names from an in-memory map."""

    def __init__(self, names: Dict[str, str]):
        self.names = dict(names)

    def resolve(self, class_ids: Collection[str]) -> Dict[str, str]:
        return {cid: self.names[cid] for cid in class_ids if cid in self.names}

    @classmethod
    def from_table(cls, path: PathLike) -> "MappingNameResolver":
        """Load names from a headered two-column table (ID, name)."""
        return cls(read_name_table(path))

    @classmethod
    def from_fasta(cls, path: PathLike) -> "MappingNameResolver":
        """Load names from FASTA headers (label = ID, comment = name)."""
        return cls(read_fasta_labels(path))

    def __len__(self) -> int:
        return len(self.names)
