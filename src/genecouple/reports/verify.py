"""
Coupling verification report.

Compares a new coupling run with the pairs of a previous one. For each
pair of the previous run, the report shows how often the pair was
coupled relative to how many genomes contain both classes at all.
"""

import logging
from collections import Counter
from itertools import combinations
from typing import Collection, Set, TextIO

from genecouple.core.classifiers import FeatureClassifier
from genecouple.core.features import Genome
from genecouple.core.results import ClassPair, PairAggregate
from genecouple.io.tables import PathLike, read_table, require_file
from genecouple.reports.base import CouplingReporter

logger = logging.getLogger(__name__)


def read_coupling_pairs(path: PathLike, classifier: FeatureClassifier) -> Set[ClassPair]:
    """
    Read the class pairs from a previous coupling report.

    Args:
        path: Coupling report with a header line
        classifier: Classifier that wrote the report

    Returns:
        Set of canonical pairs
    """
    path = require_file(path, "Coupling file")
    df = read_table(path)
    return {classifier.read_pair(list(row)) for row in df.itertuples(index=False)}


class VerifyCouplingReporter(CouplingReporter):
    """
    Verify the pairs of a previous coupling run.

    Args:
        output: Text stream receiving the report
        classifier: Classifier used by both runs
        old_output: Coupling report from the previous run
    """

    def __init__(self, output: TextIO, classifier: FeatureClassifier, old_output: PathLike):
        super().__init__(output, classifier)
        logger.info("Reading old output.")
        self.good_pairs: Set[ClassPair] = read_coupling_pairs(old_output, classifier)
        logger.info(f"{len(self.good_pairs)} pairs selected for analysis.")
        self.occurrences: Counter = Counter()

    @property
    def score_headings(self) -> str:
        return "size\toccurrences\tpercent"

    def register(self, genome: Genome, classes: Collection[str]) -> None:
        for class1, class2 in combinations(sorted(set(classes)), 2):
            pair = ClassPair(class1, class2)
            if pair in self.good_pairs:
                self.occurrences[pair] += 1

    def write_pair_line(self, pair: ClassPair, aggregate: PairAggregate) -> None:
        occurs = ""
        percent = ""
        if pair in self.good_pairs:
            count = self.occurrences[pair]
            occurs = str(count)
            percent = str(aggregate.size * 100.0 / count) if count else ""
            # Verified pairs are left out of the trailer.
            self.good_pairs.discard(pair)
        self.println(f"{self.classifier.pair_name(pair)}\t{aggregate.size}\t{occurs}\t{percent}")

    def summarize(self) -> None:
        for pair in sorted(self.good_pairs):
            count = self.occurrences[pair]
            if count > 0:
                self.println(f"{self.classifier.pair_name(pair)}\t0\t{count}\t0.0")
