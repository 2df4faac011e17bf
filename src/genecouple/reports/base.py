"""
Base class for coupling reports.

Pairs are queued in batches so the classifier can look up the names of
all the classes in a batch at once before any line is written.
"""

from abc import ABC, abstractmethod
from typing import Collection, Dict, Set, TextIO

from genecouple.core.classifiers import FeatureClassifier
from genecouple.core.features import Genome
from genecouple.core.results import ClassPair, PairAggregate

BATCH_SIZE = 100


class CouplingReporter(ABC):
    """
    Streaming coupling report.

    The driver calls ``write_header`` once, ``register`` for every genome
    processed, ``write_pair`` for every significant pair and finally
    ``finish``.

    Args:
        output: Text stream receiving the report
        classifier: Classifier that produced the pairs (supplies names)
    """

    def __init__(self, output: TextIO, classifier: FeatureClassifier):
        self.output = output
        self.classifier = classifier
        self._line_queue: Dict[ClassPair, PairAggregate] = {}
        self._class_queue: Set[str] = set()
        self.lines_written = 0

    @property
    @abstractmethod
    def score_headings(self) -> str:
        """Headings for the columns following the pair names."""
        pass

    @abstractmethod
    def register(self, genome: Genome, classes: Collection[str]) -> None:
        """
        Record whatever the report needs to know about a processed genome.

        Args:
            genome: Genome just aggregated
            classes: Every class the aggregator found in the genome
        """
        pass

    @abstractmethod
    def write_pair_line(self, pair: ClassPair, aggregate: PairAggregate) -> None:
        """Write the output line for one coupled pair."""
        pass

    def summarize(self) -> None:
        """Optional trailer written after the last pair."""
        pass

    def println(self, text: str) -> None:
        self.output.write(text + "\n")

    def write_header(self) -> None:
        self.println(f"{self.classifier.headings()}\t{self.score_headings}")

    def write_pair(self, pair: ClassPair, aggregate: PairAggregate) -> None:
        """
        Queue a coupled pair for output.

        Args:
            pair: Class pair found to be coupled
            aggregate: Corpus statistics for the pair
        """
        if len(self._line_queue) >= BATCH_SIZE:
            self._process_queue()
        self._line_queue[pair] = aggregate
        self._class_queue.add(pair.class1)
        self._class_queue.add(pair.class2)

    def _process_queue(self) -> None:
        self.classifier.cache_names(self._class_queue)
        for pair, aggregate in self._line_queue.items():
            self.write_pair_line(pair, aggregate)
            self.lines_written += 1
        self._line_queue.clear()
        self._class_queue.clear()

    def finish(self) -> None:
        """Flush the last batch and write the trailer."""
        self._process_queue()
        self.summarize()
        self.output.flush()
