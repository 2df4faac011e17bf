"""Run configuration for coupling analyses."""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from genecouple.core.class_filters import ClassFilter, ClassFilterType
from genecouple.core.classifiers import ClassifierType, FamilyClassifier, FeatureClassifier
from genecouple.core.neighbors import NeighborFinder, NeighborType
from genecouple.core.pair_filters import PairFilter, PairFilterType
from genecouple.io.names import NameResolver
from genecouple.io.tables import require_file


@dataclass
class CouplingConfig:
    """
    Parameters of a coupling run.

    Scalar values are checked on construction; ``validate`` also checks
    the input files required by the selected strategies.
    """

    max_gap: int = 5000
    """Maximum distance between neighboring features."""

    classifier_type: ClassifierType = ClassifierType.PGFAMS
    neighbor_type: NeighborType = NeighborType.CLOSE
    class_filter_type: ClassFilterType = ClassFilterType.NONE
    pair_filter_type: PairFilterType = PairFilterType.WEIGHT

    min_group: float = 15.0
    """Minimum group size (SIZE) or weight (WEIGHT) for a reported pair."""

    class_limit: int = 2
    """Maximum occurrences of a class per genome (LIMITED)."""

    blacklist_file: Optional[Path] = None
    whitelist_file: Optional[Path] = None

    family_file: Optional[Path] = None
    """Family definitions (FILE_FAMILY) or family names (PLFAMS)."""

    name_file: Optional[Path] = None
    """FASTA file of family names (PGFAMS)."""

    seed_filtering: bool = False
    """Skip genomes without a seed protein."""

    random_seed: Optional[int] = None

    def __post_init__(self):
        if self.max_gap < 1:
            raise ValueError("Invalid maximum gap size. Must be at least 1.")
        if self.class_limit < 1:
            raise ValueError("Invalid class limit. Must be at least 1.")
        if self.min_group < 0:
            raise ValueError("Invalid minimum group size/weight. Must be non-negative.")
        for name in ("blacklist_file", "whitelist_file", "family_file", "name_file"):
            value = getattr(self, name)
            if value is not None and not isinstance(value, Path):
                setattr(self, name, Path(value))

    def validate(self) -> None:
        """
        Check that every file the selected strategies need is present.

        Raises:
            ValueError: A required file option is missing
            FileNotFoundError: A configured file does not exist
        """
        if self.class_filter_type is ClassFilterType.BLACKLIST and self.blacklist_file is None:
            raise ValueError("Blacklist file is required for filter type BLACKLIST.")
        if self.pair_filter_type is PairFilterType.WHITELIST and self.whitelist_file is None:
            raise ValueError("Whitelist file required for pair-filtering of type WHITELIST.")
        if self.classifier_type is ClassifierType.FILE_FAMILY and self.family_file is None:
            raise ValueError("A family definition file is required for classification type FILE_FAMILY.")
        if self.family_file is not None:
            require_file(self.family_file, "Family definition file")
        if self.name_file is not None:
            require_file(self.name_file, "Family name file")

    def build_classifier(self, resolver: Optional[NameResolver] = None) -> FeatureClassifier:
        classifier = self.classifier_type.create(
            family_file=self.family_file,
            resolver=resolver,
            seed=self.random_seed,
        )
        if isinstance(classifier, FamilyClassifier) and self.name_file is not None:
            classifier.load_names(self.name_file)
        return classifier

    def build_finder(self) -> NeighborFinder:
        return self.neighbor_type.create(self.max_gap)

    def build_class_filter(self) -> ClassFilter:
        return self.class_filter_type.create(
            blacklist_file=self.blacklist_file,
            class_limit=self.class_limit,
        )

    def build_pair_filter(self) -> PairFilter:
        return self.pair_filter_type.create(
            min_group=self.min_group,
            whitelist_file=self.whitelist_file,
        )
