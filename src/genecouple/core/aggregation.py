"""
Coupling aggregation.

The aggregator pairs every class of a feature with every class of each
of its neighbors and accumulates the pairs across a genome corpus. The
pair map belongs to one aggregator and lives for one corpus run.

Genomes are processed one at a time; after each genome completes the
map is consistent and the run may be stopped.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Set, Tuple

from genecouple.core.class_filters import ClassFilter, NullClassFilter
from genecouple.core.classifiers import FeatureClassifier
from genecouple.core.features import Genome
from genecouple.core.neighbors import NeighborFinder
from genecouple.core.pair_filters import PairFilter
from genecouple.core.results import ClassPair, ClassResult, PairAggregate

logger = logging.getLogger(__name__)


@dataclass
class GenomeCouplingStats:
    """
    Per-genome aggregation counts.

    Attributes:
        genome_id: Genome processed
        n_features: Number of results (one per feature)
        n_classified: Results with at least one class before filtering
        n_filtered: Class instances removed by the class filter
        n_pairs: Class-pair occurrences recorded
        classes: Every class found in the genome before filtering
    """

    genome_id: str
    n_features: int
    n_classified: int
    n_filtered: int
    n_pairs: int
    classes: Set[str] = field(default_factory=set)


class CouplingAggregator:
    """
    Accumulate neighboring class pairs over a genome corpus.

    Args:
        classifier: Feature classification scheme
        finder: Neighbor-finding policy
        class_filter: Per-genome class filter (default: no filtering)
    """

    def __init__(
        self,
        classifier: FeatureClassifier,
        finder: NeighborFinder,
        class_filter: Optional[ClassFilter] = None,
    ):
        self.classifier = classifier
        self.finder = finder
        self.class_filter = class_filter if class_filter is not None else NullClassFilter()
        self.pairs: Dict[ClassPair, PairAggregate] = {}

    def couple_results(self, genome: Genome, results: List[ClassResult]) -> int:
        """
        Record the class pairs of neighboring results in one genome.

        Args:
            genome: Genome the results came from
            results: Location-sorted, filtered results of the genome

        Returns:
            Number of class-pair occurrences recorded
        """
        pair_count = 0
        for i in range(len(results) - 1):
            res_i = results[i]
            if not res_i.good:
                continue
            neighbors = self.finder.neighbors(results, i)
            for class_i in res_i:
                for res_j in neighbors:
                    for class_j in res_j:
                        if class_i == class_j:
                            continue
                        pair = ClassPair(class_i, class_j)
                        weight = res_i.weight(class_i) * res_j.weight(class_j)
                        aggregate = self.pairs.get(pair)
                        if aggregate is None:
                            aggregate = PairAggregate()
                            self.pairs[pair] = aggregate
                        aggregate.add_genome(genome, weight, res_i.fid, res_j.fid)
                        pair_count += 1
        return pair_count

    def add_genome(self, genome: Genome) -> GenomeCouplingStats:
        """
        Classify, filter and couple one genome.

        Returns:
            Counts describing the genome's contribution
        """
        results = self.classifier.results(genome)
        n_classified = sum(1 for result in results if result.good)
        classes = {cid for result in results for cid in result}
        logger.info(f"{n_classified} classifiable features found.")
        n_filtered = self.class_filter.apply(results)
        pair_count = self.couple_results(genome, results)
        logger.info(f"{pair_count} pairs found in {genome}.")
        return GenomeCouplingStats(
            genome_id=genome.id,
            n_features=len(results),
            n_classified=n_classified,
            n_filtered=n_filtered,
            n_pairs=pair_count,
            classes=classes,
        )

    def items(self) -> List[Tuple[ClassPair, PairAggregate]]:
        """All aggregated pairs in canonical pair order."""
        return sorted(self.pairs.items(), key=lambda item: item[0])

    def significant(self, pair_filter: PairFilter) -> Iterator[Tuple[ClassPair, PairAggregate]]:
        """Aggregated pairs that pass a pair filter, in canonical pair order."""
        for pair, aggregate in self.items():
            if pair_filter.is_significant(pair, aggregate):
                yield pair, aggregate

    def get(self, pair: ClassPair) -> Optional[PairAggregate]:
        return self.pairs.get(pair)

    def __len__(self) -> int:
        return len(self.pairs)

    def __contains__(self, pair: ClassPair) -> bool:
        return pair in self.pairs

    def __repr__(self) -> str:
        return (
            f"CouplingAggregator(classifier={self.classifier!r}, finder={self.finder!r}, "
            f"pairs={len(self.pairs)})"
        )
