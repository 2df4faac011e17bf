"""
Pair filters.

After the whole corpus is aggregated, a pair filter decides which class
pairs are significant enough to report.
"""

import logging
import math
from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional, Set

from genecouple.core.results import ClassPair, PairAggregate
from genecouple.io.tables import PathLike, read_id_set, require_file

logger = logging.getLogger(__name__)


class PairFilter(ABC):
    """Abstract base class for pair significance tests."""

    @abstractmethod
    def is_significant(self, pair: ClassPair, aggregate: PairAggregate) -> bool:
        """
        Decide whether a class pair is worth keeping.

        Args:
            pair: Class pair to check
            aggregate: Corpus statistics for the pair

        Returns:
            True if the pair should be reported
        """
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        pass

    def __str__(self) -> str:
        return self.name


class SizePairFilter(PairFilter):
    """
    Accept pairs found in at least a minimum number of genomes.

    A fractional minimum is rounded up, so 15.0 means 15 and 15.1 means 16.

    Args:
        min_size: Minimum group size; must round up to more than 1
    """

    def __init__(self, min_size: float):
        limit = math.ceil(min_size)
        if limit <= 1:
            raise ValueError("Minimum group size limit must be greater than 1.")
        self.min_size = int(limit)

    def is_significant(self, pair: ClassPair, aggregate: PairAggregate) -> bool:
        return aggregate.size >= self.min_size

    @property
    def name(self) -> str:
        return "SIZE"


class WeightPairFilter(PairFilter):
    """
    Accept pairs whose weighted genome count reaches a minimum.

    Args:
        min_weight: Minimum group weight; must be non-negative
    """

    def __init__(self, min_weight: float):
        if min_weight < 0.0:
            raise ValueError("Minimum weight limit must be non-negative.")
        self.min_weight = float(min_weight)

    def is_significant(self, pair: ClassPair, aggregate: PairAggregate) -> bool:
        return aggregate.weight >= self.min_weight

    @property
    def name(self) -> str:
        return "WEIGHT"


class WhitelistPairFilter(PairFilter):
    """
    Accept pairs in which at least one class is on a whitelist.

    Args:
        whitelist_file: Headered tab-delimited file, class IDs in column 1
    """

    def __init__(self, whitelist_file: PathLike):
        path = require_file(whitelist_file, "Whitelist file")
        self.whitelist: Set[str] = read_id_set(path, "Whitelist file")
        logger.info(f"{len(self.whitelist)} class identifiers in whitelist.")

    def is_significant(self, pair: ClassPair, aggregate: PairAggregate) -> bool:
        return pair.class1 in self.whitelist or pair.class2 in self.whitelist

    @property
    def name(self) -> str:
        return "WHITELIST"


class PairFilterType(Enum):
    """Pair significance test."""

    SIZE = "size"
    WEIGHT = "weight"
    WHITELIST = "whitelist"

    def create(
        self,
        min_group: float = 15.0,
        whitelist_file: Optional[PathLike] = None,
    ) -> PairFilter:
        if self is PairFilterType.SIZE:
            return SizePairFilter(min_group)
        if self is PairFilterType.WEIGHT:
            return WeightPairFilter(min_group)
        if whitelist_file is None:
            raise ValueError("Whitelist file required for pair-filtering of type WHITELIST.")
        return WhitelistPairFilter(whitelist_file)
