"""
Scored coupling report.

Besides group size and weight, each coupled pair is scored by how
diverse its genome group is. Diversity is measured on the seed protein
(PheS): for every pair of genomes in the group, the k-mer similarity of
their seed proteins gives a similarity distance 1/(sim + 1) and a
Jaccard distance; the report shows the sums over all genome pairs.
"""

from collections import Counter
from dataclasses import dataclass
from typing import Collection, Dict, TextIO, Tuple

from genecouple.core.classifiers import FeatureClassifier
from genecouple.core.features import Genome
from genecouple.core.kmers import ProteinKmers
from genecouple.core.results import ClassPair, PairAggregate
from genecouple.reports.base import CouplingReporter


@dataclass
class GroupScores:
    """Distance scores summed over the genome pairs of a group."""

    sim_distance: float = 0.0
    real_distance: float = 0.0

    @classmethod
    def between(cls, first: ProteinKmers, second: ProteinKmers) -> "GroupScores":
        sim = first.similarity(second)
        return cls(sim_distance=1.0 / (sim + 1), real_distance=first.distance(second))

    def plus(self, other: "GroupScores") -> None:
        self.sim_distance += other.sim_distance
        self.real_distance += other.real_distance


class ScoreCouplingReporter(CouplingReporter):
    """
    Report group size, weight, subsystem agreement and group diversity.

    Every registered genome must contain a seed protein.
    """

    def __init__(self, output: TextIO, classifier: FeatureClassifier):
        super().__init__(output, classifier)
        self._seed_kmers: Dict[str, ProteinKmers] = {}
        self._score_cache: Dict[Tuple[str, str], GroupScores] = {}
        self.class_counts: Counter = Counter()

    @property
    def score_headings(self) -> str:
        return (
            "size\tweight\tsub_match\tsub_fail\tsim_distance\tphes_distance"
            "\tpercent1\tpercent2\tfamily1\tfamily2"
        )

    def register(self, genome: Genome, classes: Collection[str]) -> None:
        prot = genome.seed_protein()
        if not prot:
            raise ValueError(f"Invalid genome {genome} has no seed protein.")
        self._seed_kmers[genome.id] = ProteinKmers(prot)
        self.class_counts.update(set(classes))

    def _genome_pair_scores(self, genome1: str, genome2: str) -> GroupScores:
        key = (genome1, genome2) if genome1 < genome2 else (genome2, genome1)
        scores = self._score_cache.get(key)
        if scores is None:
            scores = GroupScores.between(self._seed_kmers[key[0]], self._seed_kmers[key[1]])
            self._score_cache[key] = scores
        return scores

    def group_scores(self, aggregate: PairAggregate) -> GroupScores:
        """Sum the distance scores over every pair of genomes in a group."""
        total = GroupScores()
        genomes = sorted(aggregate.genomes)
        for i, genome1 in enumerate(genomes):
            for genome2 in genomes[i + 1:]:
                total.plus(self._genome_pair_scores(genome1, genome2))
        return total

    def write_pair_line(self, pair: ClassPair, aggregate: PairAggregate) -> None:
        scores = self.group_scores(aggregate)
        size1 = self.class_counts[pair.class1]
        size2 = self.class_counts[pair.class2]
        percent1 = aggregate.size * 100.0 / size1 if size1 else 0.0
        percent2 = aggregate.size * 100.0 / size2 if size2 else 0.0
        self.println(
            f"{self.classifier.pair_name(pair)}\t{aggregate.size}\t{aggregate.weight:8.4f}"
            f"\t{aggregate.sub_match}\t{aggregate.sub_fail}"
            f"\t{scores.sim_distance:8.4f}\t{scores.real_distance:8.4f}"
            f"\t{percent1:8.2f}\t{percent2:8.2f}\t{size1}\t{size2}"
        )
