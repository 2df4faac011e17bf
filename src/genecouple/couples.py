"""
Functional coupling driver.

Runs the full coupling pipeline over a genome corpus: each genome is
classified, class-filtered and aggregated in turn, then the aggregated
pairs that pass the pair filter are written by a coupling reporter.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, List

import numpy as np

from genecouple.config import CouplingConfig
from genecouple.core.aggregation import CouplingAggregator
from genecouple.core.features import SEED_PROTEIN_FUNCTION, Genome
from genecouple.reports.base import CouplingReporter

logger = logging.getLogger(__name__)

PROGRESS_INTERVAL = 5000


@dataclass
class CouplingRunSummary:
    """
    Totals for one coupling run.

    Attributes:
        genomes_processed: Genomes aggregated
        genomes_skipped: Genomes rejected for lacking a seed protein
        distinct_pairs: Distinct class pairs found in the corpus
        pairs_output: Pairs passed to the reporter
        pairs_skipped: Pairs rejected by the pair filter
        classes_filtered: Class instances removed by the class filter
        mean_group_size: Mean genome-group size of the output pairs
        max_group_size: Largest genome-group size of the output pairs
    """

    genomes_processed: int = 0
    genomes_skipped: int = 0
    distinct_pairs: int = 0
    pairs_output: int = 0
    pairs_skipped: int = 0
    classes_filtered: int = 0
    mean_group_size: float = 0.0
    max_group_size: int = 0


def find_couplings(
    genomes: Iterable[Genome],
    config: CouplingConfig,
    reporter: CouplingReporter,
) -> CouplingRunSummary:
    """
    Find the functionally coupled class pairs of a genome corpus.

    The classifier is the reporter's own, so the names in the report
    always come from the scheme that produced the pairs. The neighbor
    finder and the filters are built from the configuration before any
    genome is read.

    Args:
        genomes: Genome source (a GenomeDirectory or any iterable)
        config: Run parameters
        reporter: Report writer; receives the header, every processed
            genome and every significant pair

    Returns:
        Run totals

    Raises:
        ValueError: Invalid configuration
        FileNotFoundError: A configured input file is missing
        RuntimeError: A pair references a feature missing from its genome
    """
    config.validate()
    finder = config.build_finder()
    class_filter = config.build_class_filter()
    pair_filter = config.build_pair_filter()
    aggregator = CouplingAggregator(reporter.classifier, finder, class_filter)
    logger.info(
        f"Coupling with classifier {config.classifier_type.name}, finder {config.neighbor_type.name}, "
        f"class filter {class_filter}, pair filter {pair_filter.name}."
    )

    summary = CouplingRunSummary()
    try:
        total = len(genomes)  # type: ignore[arg-type]
    except TypeError:
        total = None
    reporter.write_header()
    for count, genome in enumerate(genomes, start=1):
        if total is not None:
            logger.info(f"Processing genome {count} of {total}: {genome}.")
        else:
            logger.info(f"Processing genome {count}: {genome}.")
        if config.seed_filtering and genome.by_function(SEED_PROTEIN_FUNCTION) is None:
            logger.info(f"Genome {genome} skipped: no seed protein.")
            summary.genomes_skipped += 1
            continue
        stats = aggregator.add_genome(genome)
        summary.classes_filtered += stats.n_filtered
        reporter.register(genome, stats.classes)
        summary.genomes_processed += 1

    summary.distinct_pairs = len(aggregator)
    logger.info(f"{summary.distinct_pairs} distinct pairs found in {summary.genomes_processed} genomes.")

    sizes: List[int] = []
    processed = 0
    for pair, aggregate in aggregator.items():
        if pair_filter.is_significant(pair, aggregate):
            reporter.write_pair(pair, aggregate)
            sizes.append(aggregate.size)
        else:
            summary.pairs_skipped += 1
        processed += 1
        if processed % PROGRESS_INTERVAL == 0:
            logger.info(f"{processed} pairs processed.")
    reporter.finish()

    summary.pairs_output = len(sizes)
    if sizes:
        group_sizes = np.asarray(sizes)
        summary.mean_group_size = float(np.mean(group_sizes))
        summary.max_group_size = int(np.max(group_sizes))
    logger.info(
        f"{summary.pairs_output} pairs output, {summary.pairs_skipped} pairs skipped, "
        f"{summary.classes_filtered} class instances filtered."
    )
    if sizes:
        logger.info(
            f"Mean group size is {summary.mean_group_size:.2f}, maximum is {summary.max_group_size}."
        )
    return summary
