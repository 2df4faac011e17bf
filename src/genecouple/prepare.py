"""
Coupling projection.

Takes the pairs of a scored coupling report and marks them on a genome
corpus: every pair of neighboring features whose classes are coupled
gets a coupling entry naming the other feature, and the feature pairs
are collected per class pair for a summary table.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Set, Tuple

from genecouple.core.classifiers import FeatureClassifier
from genecouple.core.features import Genome
from genecouple.core.neighbors import NeighborFinder
from genecouple.core.results import ClassPair
from genecouple.io.tables import PathLike, read_table, require_file

logger = logging.getLogger(__name__)

GENOMES_TABLE = "genomes.tbl"
COUPLES_TABLE = "couples.tbl"


@dataclass(frozen=True)
class Coupling:
    """Coupling from one class to a target class, as scored in a report."""

    target: str
    size: int
    strength: float


class CouplingPreparer:
    """
    Project the couplings of a scored report onto genomes.

    Args:
        classifier: Classifier used for the coupling run
        finder: Neighbor-finding policy
        coupling_file: Scored coupling report (needs size and sim_distance
            columns)

    Raises:
        FileNotFoundError: If the coupling file does not exist
        ValueError: If the coupling file lacks a required column
    """

    def __init__(self, classifier: FeatureClassifier, finder: NeighborFinder, coupling_file: PathLike):
        self.classifier = classifier
        self.finder = finder
        self.couplings: Dict[str, Dict[str, Coupling]] = {}
        self.instances: Dict[ClassPair, Set[str]] = {}
        self.genome_counts: List[Tuple[str, str, int]] = []
        self._read_couplings(require_file(coupling_file, "Input couplings file"))

    def _read_couplings(self, path: Path) -> None:
        df = read_table(path)
        for column in ("size", "sim_distance"):
            if column not in df.columns:
                raise ValueError(f"Coupling file {path} has no {column} column.")
        size_col = df.columns.get_loc("size")
        strength_col = df.columns.get_loc("sim_distance")
        for fields in df.itertuples(index=False, name=None):
            pair = self.classifier.read_pair(list(fields))
            size = int(float(fields[size_col]))
            strength = float(fields[strength_col])
            self._add_coupling(pair.class1, Coupling(pair.class2, size, strength))
            self._add_coupling(pair.class2, Coupling(pair.class1, size, strength))
            self.instances[pair] = set()
        logger.info(
            f"{len(df)} couplings read from {path}. {len(self.couplings)} classes have couplings."
        )

    def _add_coupling(self, class_id: str, coupling: Coupling) -> None:
        targets = self.couplings.setdefault(class_id, {})
        old = targets.get(coupling.target)
        if old is None or coupling.strength > old.strength:
            targets[coupling.target] = coupling

    def mark_genome(self, genome: Genome) -> int:
        """
        Mark the coupled neighbors of one genome.

        Existing couplings on the genome's features are erased first. Where
        a pair of neighbors is coupled through several class pairs, the
        strongest coupling is used.

        Returns:
            Number of coupled feature pairs found
        """
        results = self.classifier.results(genome)
        for feat in genome.features:
            feat.clear_couplings()
        coupling_count = 0
        eligible = 0
        isolated = 0
        for i in range(len(results) - 1):
            res_i = results[i]
            table: Dict[str, Coupling] = {}
            for class_i in res_i:
                table.update(self.couplings.get(class_i, {}))
            if not table:
                continue
            eligible += 1
            neighbors = self.finder.neighbors(results, i)
            if not neighbors:
                isolated += 1
                continue
            feat_i = genome.get_feature(res_i.fid)
            for res_j in neighbors:
                best = None
                for class_j in res_j:
                    target = table.get(class_j)
                    if target is None:
                        continue
                    instance = f"{res_i.fid}:{res_j.fid}"
                    for class_i in res_i:
                        fids = self.instances.get(ClassPair(class_i, class_j))
                        if fids is not None:
                            fids.add(instance)
                    if best is None or target.strength > best.strength:
                        best = target
                if best is not None:
                    feat_i.add_coupling(res_j.fid, best.size, best.strength)
                    genome.get_feature(res_j.fid).add_coupling(res_i.fid, best.size, best.strength)
                    coupling_count += 1
        logger.info(
            f"Genome {genome} had {len(results)} classifiable features, {eligible} with eligible "
            f"classes, with {isolated} having no neighbors."
        )
        if coupling_count <= 0:
            logger.warning(f"No couplings were found in {genome}.")
        else:
            self.genome_counts.append((genome.id, genome.name, coupling_count))
        return coupling_count

    def mark_genomes(self, genomes: Iterable[Genome]) -> int:
        """Mark every genome of a corpus. Returns the total couplings found."""
        total = 0
        for genome in genomes:
            logger.info(f"Processing genome {genome}.")
            total += self.mark_genome(genome)
        return total

    def sorted_instances(self) -> List[Tuple[ClassPair, List[str]]]:
        """Pairs with at least one instance, most instances first."""
        found = [(pair, sorted(fids)) for pair, fids in self.instances.items() if fids]
        found.sort(key=lambda item: (-len(item[1]), item[0].class1, item[0].class2))
        return found

    def write_tables(self, out_dir: PathLike) -> Tuple[Path, Path]:
        """
        Write the genome and coupled-feature summary tables.

        Args:
            out_dir: Output directory

        Returns:
            Paths of the genome table and the coupled-feature table
        """
        out_dir = Path(out_dir)
        out_dir.mkdir(parents=True, exist_ok=True)
        genome_path = out_dir / GENOMES_TABLE
        with open(genome_path, "w") as fh:
            for genome_id, name, count in self.genome_counts:
                fh.write(f"{genome_id}\t{name}\t{count}\n")
        couples_path = out_dir / COUPLES_TABLE
        instances = self.sorted_instances()
        self.classifier.cache_names({cid for pair, _ in instances for cid in pair})
        with open(couples_path, "w") as fh:
            fh.write(f"{self.classifier.headings()}\tfeatures\n")
            for pair, fids in instances:
                fh.write(f"{self.classifier.pair_name(pair)}\t{','.join(fids)}\n")
        logger.info(f"{len(instances)} coupled pairs written to {couples_path}.")
        return genome_path, couples_path
