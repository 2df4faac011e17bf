"""
genecouple: Functional coupling of genes across annotated genomes

Finds pairs of feature classes (protein families, functional roles) that
occur near each other on the chromosome in many genomes.
"""

__version__ = "0.1.0"

from genecouple.core import (
    ClassPair,
    ClassResult,
    ClassifierType,
    ClassFilterType,
    CouplingAggregator,
    FeatureClassifier,
    Genome,
    Feature,
    Location,
    NeighborType,
    PairAggregate,
    PairFilterType,
)
from genecouple.io import GenomeDirectory, load_genome
from genecouple.config import CouplingConfig
from genecouple.reports import ReportType
from genecouple.couples import CouplingRunSummary, find_couplings
from genecouple.prepare import CouplingPreparer

__all__ = [
    "ClassPair",
    "ClassResult",
    "ClassifierType",
    "ClassFilterType",
    "CouplingAggregator",
    "FeatureClassifier",
    "Genome",
    "Feature",
    "Location",
    "NeighborType",
    "PairAggregate",
    "PairFilterType",
    "GenomeDirectory",
    "load_genome",
    "CouplingConfig",
    "ReportType",
    "CouplingRunSummary",
    "find_couplings",
    "CouplingPreparer",
    "__version__",
]
