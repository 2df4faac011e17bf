"""Core coupling engine: classification, neighbors, filtering and aggregation."""

from genecouple.core.locations import Location
from genecouple.core.features import (
    Feature,
    Genome,
    comment_free,
    is_hypothetical,
    roles_of_function,
)
from genecouple.core.roles import Role, RoleMap
from genecouple.core.results import ClassPair, ClassResult, PairAggregate
from genecouple.core.classifiers import (
    ClassifierType,
    FamilyClassifier,
    FeatureClassifier,
    FileClassifier,
    LocalFamilyClassifier,
    RandomClassifier,
    RoleClassifier,
)
from genecouple.core.neighbors import (
    AdjacentNeighborFinder,
    CloseNeighborFinder,
    NeighborFinder,
    NeighborType,
)
from genecouple.core.class_filters import (
    BlacklistClassFilter,
    ClassFilter,
    ClassFilterType,
    LimitedClassFilter,
    NullClassFilter,
)
from genecouple.core.pair_filters import (
    PairFilter,
    PairFilterType,
    SizePairFilter,
    WeightPairFilter,
    WhitelistPairFilter,
)
from genecouple.core.aggregation import CouplingAggregator, GenomeCouplingStats
from genecouple.core.kmers import ProteinKmers

__all__ = [
    "Location",
    "Feature",
    "Genome",
    "comment_free",
    "is_hypothetical",
    "roles_of_function",
    "Role",
    "RoleMap",
    "ClassPair",
    "ClassResult",
    "PairAggregate",
    "ClassifierType",
    "FeatureClassifier",
    "FamilyClassifier",
    "FileClassifier",
    "LocalFamilyClassifier",
    "RandomClassifier",
    "RoleClassifier",
    "NeighborFinder",
    "NeighborType",
    "AdjacentNeighborFinder",
    "CloseNeighborFinder",
    "ClassFilter",
    "ClassFilterType",
    "NullClassFilter",
    "BlacklistClassFilter",
    "LimitedClassFilter",
    "PairFilter",
    "PairFilterType",
    "SizePairFilter",
    "WeightPairFilter",
    "WhitelistPairFilter",
    "CouplingAggregator",
    "GenomeCouplingStats",
    "ProteinKmers",
]
