"""
Class filters.

A class filter runs on the classification results of one genome before
pairing and strips out classes that should not take part in couplings.
Results are modified in place; a result may end up with no classes.
"""

import logging
from abc import ABC, abstractmethod
from collections import Counter
from enum import Enum
from typing import Collection, List, Optional, Set

from genecouple.core.results import ClassResult
from genecouple.io.tables import PathLike, read_id_set, require_file

logger = logging.getLogger(__name__)


def remove_classes(blacklist: Collection[str], results: List[ClassResult]) -> int:
    """
    Remove a set of classes from a list of results.

    Returns:
        Number of class instances removed
    """
    removed = sum(result.remove(blacklist) for result in results)
    logger.info(f"{removed} class instances removed from {len(results)} results.")
    return removed


class ClassFilter(ABC):
    """Abstract base class for per-genome class filters."""

    @abstractmethod
    def apply(self, results: List[ClassResult]) -> int:
        """
        Filter the results of a single genome in place.

        Args:
            results: Results for one genome

        Returns:
            Number of class instances removed
        """
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Display name of the filter."""
        pass

    def __str__(self) -> str:
        return self.name


class NullClassFilter(ClassFilter):
    """Filter that removes nothing."""

    def apply(self, results: List[ClassResult]) -> int:
        return 0

    @property
    def name(self) -> str:
        return "NONE"


class BlacklistClassFilter(ClassFilter):
    """
    Remove classes listed in a blacklist file.

    The file is tab-delimited with headers; the first column holds the
    class IDs.

    Args:
        blacklist_file: Path to the blacklist
    """

    def __init__(self, blacklist_file: PathLike):
        self.blacklist_file = require_file(blacklist_file, "Blacklist file")
        self.blacklist: Set[str] = read_id_set(self.blacklist_file, "Blacklist file")
        logger.info(f"{len(self.blacklist)} blacklisted class IDs found in {self.blacklist_file}.")

    def apply(self, results: List[ClassResult]) -> int:
        return remove_classes(self.blacklist, results)

    @property
    def name(self) -> str:
        return f"BLACKLIST removing {len(self.blacklist)} classes read from {self.blacklist_file}"


class LimitedClassFilter(ClassFilter):
    """
    Remove classes that occur too often within a genome.

    The blacklist is computed separately for each genome.

    Args:
        class_limit: Maximum number of occurrences of a class per genome
    """

    def __init__(self, class_limit: int):
        if class_limit < 1:
            raise ValueError(f"Invalid class limit {class_limit}. Must be at least 1.")
        self.class_limit = class_limit

    def apply(self, results: List[ClassResult]) -> int:
        counts: Counter = Counter()
        for result in results:
            counts.update(result.classes)
        blacklist = {cid for cid, count in counts.items() if count > self.class_limit}
        return remove_classes(blacklist, results)

    @property
    def name(self) -> str:
        return f"LIMITED to classes having no more than {self.class_limit} occurrences per genome"


class ClassFilterType(Enum):
    """Class filtering algorithm."""

    NONE = "none"
    BLACKLIST = "blacklist"
    LIMITED = "limited"

    def create(
        self,
        blacklist_file: Optional[PathLike] = None,
        class_limit: int = 2,
    ) -> ClassFilter:
        if self is ClassFilterType.NONE:
            return NullClassFilter()
        if self is ClassFilterType.BLACKLIST:
            if blacklist_file is None:
                raise ValueError("Blacklist file is required for filter type BLACKLIST.")
            return BlacklistClassFilter(blacklist_file)
        return LimitedClassFilter(class_limit)
