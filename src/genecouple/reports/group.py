"""Genome-list coupling report."""

from typing import Collection

from genecouple.core.features import Genome
from genecouple.core.results import ClassPair, PairAggregate
from genecouple.reports.base import CouplingReporter


class GroupCouplingReporter(CouplingReporter):
    """For each coupled pair, list the genomes in which it was found."""

    @property
    def score_headings(self) -> str:
        return "genomes"

    def register(self, genome: Genome, classes: Collection[str]) -> None:
        pass

    def write_pair_line(self, pair: ClassPair, aggregate: PairAggregate) -> None:
        genomes = ",".join(sorted(aggregate.genomes))
        self.println(f"{self.classifier.pair_name(pair)}\t{genomes}")
