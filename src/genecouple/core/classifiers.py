"""
Feature classifiers.

A classifier maps a genome feature to a (usually small) set of class IDs:
protein families, functional roles, or a substitute such as a family
table keyed on protein MD5. A feature with no usable class produces an
empty result rather than an error, so every feature of a genome can be
sorted and scanned uniformly.

Classifiers also own the presentation of their classes: report
headings, class names and the parsing of pairs back out of report lines.
"""

import logging
from abc import ABC, abstractmethod
from collections import Counter
from enum import Enum
from typing import Collection, Dict, List, Optional, Sequence, Union

import numpy as np

from genecouple.core.features import Feature, Genome, is_hypothetical
from genecouple.core.results import ClassPair, ClassResult
from genecouple.core.roles import RoleMap
from genecouple.io.names import NameResolver
from genecouple.io.tables import (
    PathLike,
    read_family_table,
    read_fasta_labels,
    read_name_table,
    split_line,
)

logger = logging.getLogger(__name__)

PairLine = Union[str, Sequence[str]]

FAMILY_HEADINGS = "family_id1\tfamily_product1\tfamily_id2\tfamily_product2"


def _line_fields(line: PairLine, needed: int) -> List[str]:
    """Split a report line into fields and verify there are enough of them."""
    if isinstance(line, str):
        fields = split_line(line)
    elif isinstance(line, Sequence):
        fields = [str(value) for value in line]
    else:
        raise TypeError(f"Report line must be a string or a sequence of fields, got {type(line)}")
    if len(fields) < needed:
        raise ValueError(f"Report line has {len(fields)} fields; at least {needed} required")
    return fields


class FeatureClassifier(ABC):
    """
    Abstract base class for feature classification schemes.
    """

    @abstractmethod
    def classify(self, feat: Feature) -> ClassResult:
        """
        Classify a single feature.

        Args:
            feat: Feature of interest

        Returns:
            ClassResult, possibly with no classes
        """
        pass

    @abstractmethod
    def name(self, class_id: str) -> str:
        """Display form of a class in reports."""
        pass

    @abstractmethod
    def headings(self) -> str:
        """Report column headings for a pair of classes."""
        pass

    @abstractmethod
    def read_pair(self, line: PairLine) -> ClassPair:
        """
        Parse the class pair at the start of a coupling report line.

        Args:
            line: Report line, either raw text or already split into fields

        Returns:
            Canonical ClassPair
        """
        pass

    def cache_names(self, class_ids: Collection[str]) -> None:
        """Make sure names are known for a batch of classes."""
        pass

    def begin_genome(self, genome: Genome) -> None:
        """Hook called before the features of a genome are classified."""
        pass

    def pair_name(self, pair: ClassPair) -> str:
        """Display form of a pair: the two class names, tab-delimited."""
        return f"{self.name(pair.class1)}\t{self.name(pair.class2)}"

    def results(self, genome: Genome) -> List[ClassResult]:
        """
        Classify every feature of a genome.

        Each result is connected to the genome's class occurrence counts
        so it can compute class weights.

        Returns:
            Results for all features, sorted by location
        """
        self.begin_genome(genome)
        counts: Counter = Counter()
        results = []
        for feat in genome.features:
            result = self.classify(feat)
            counts.update(result.classes)
            result.connect_weights(counts)
            results.append(result)
        results.sort()
        return results

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class MapFamilyClassifier(FeatureClassifier, ABC):
    """
    Base class for family schemes that keep family names in memory.

    Report lines have the form ID1, NAME1, ID2, NAME2. A line of exactly
    two fields holds the two IDs without names.
    """

    def __init__(self):
        self._names: Dict[str, str] = {}

    def put_name(self, family_id: str, name: str) -> None:
        self._names[family_id] = name

    def family_name(self, family_id: str) -> str:
        return self._names.get(family_id, "")

    def name(self, class_id: str) -> str:
        return f"{class_id}\t{self.family_name(class_id)}"

    def headings(self) -> str:
        return FAMILY_HEADINGS

    def read_pair(self, line: PairLine) -> ClassPair:
        fields = _line_fields(line, 2)
        if len(fields) == 2:
            # IDs only, no names to cache.
            return ClassPair(fields[0], fields[1])
        class1, class2 = fields[0], fields[2]
        self._names[class1] = fields[1]
        if len(fields) > 3:
            self._names[class2] = fields[3]
        return ClassPair(class1, class2)

    @property
    def n_names(self) -> int:
        return len(self._names)


class FamilyClassifier(MapFamilyClassifier):
    """
    Classify features by global protein family.

    Family names are resolved lazily in batches from an optional name
    resolver, or preloaded from a FASTA file. Names that cannot be
    resolved display as empty strings.

    Args:
        resolver: Optional source of family names
    """

    def __init__(self, resolver: Optional[NameResolver] = None):
        super().__init__()
        self.resolver = resolver

    def classify(self, feat: Feature) -> ClassResult:
        result = ClassResult.for_feature(feat)
        if feat.pgfam:
            result.add(feat.pgfam)
        return result

    def cache_names(self, class_ids: Collection[str]) -> None:
        batch = {cid for cid in class_ids if cid not in self._names}
        if not batch or self.resolver is None:
            return
        try:
            resolved = self.resolver.resolve(batch)
        except Exception as e:
            logger.warning(f"Name lookup failed for {len(batch)} families: {e}")
            return
        self._names.update(resolved)

    def load_names(self, fasta_file: PathLike) -> int:
        """
        Cache family names from a FASTA file.

        The sequence label is the family ID and the comment is the name.

        Returns:
            Number of names read
        """
        logger.info(f"Reading family names from {fasta_file}.")
        names = read_fasta_labels(fasta_file)
        self._names.update(names)
        logger.info(f"{len(names)} family names read from file.")
        return len(names)


class LocalFamilyClassifier(MapFamilyClassifier):
    """
    Classify features by local (genus-level) protein family.

    Args:
        name_file: Optional headered table of family IDs and names
    """

    def __init__(self, name_file: Optional[PathLike] = None):
        super().__init__()
        if name_file is not None:
            logger.info(f"Reading family data from {name_file}.")
            for family_id, name in read_name_table(name_file).items():
                self.put_name(family_id, name)
            logger.info(f"{self.n_names} family names read from {name_file}.")

    def classify(self, feat: Feature) -> ClassResult:
        result = ClassResult.for_feature(feat)
        if feat.plfam and feat.plfam.strip():
            result.add(feat.plfam)
        return result


class FileClassifier(MapFamilyClassifier):
    """
    Classify features using a family table keyed on protein MD5.

    Each MD5 maps to a single family, so a feature gets at most one class.

    Args:
        family_file: Headered table with fam_id, product and md5 columns
    """

    def __init__(self, family_file: PathLike):
        super().__init__()
        logger.info(f"Reading family data from {family_file}.")
        df = read_family_table(family_file)
        self._md5_map: Dict[str, str] = {}
        for fam_id, product, md5 in zip(df["fam_id"], df["product"], df["md5"]):
            self._md5_map[md5] = fam_id
            self.put_name(fam_id, product)
        logger.info(
            f"{len(df)} records read. {self.n_names} families for {len(self._md5_map)} proteins."
        )

    def classify(self, feat: Feature) -> ClassResult:
        result = ClassResult.for_feature(feat)
        md5 = feat.md5
        if md5 is not None:
            family = self._md5_map.get(md5)
            if family is not None:
                result.add(family)
        return result


class RoleClassifier(FeatureClassifier):
    """
    Classify features by the functional roles in their assignments.

    Hypothetical roles are ignored. Role IDs are minted as new role
    names are encountered.
    """

    def __init__(self, roles: Optional[RoleMap] = None):
        self.roles = roles if roles is not None else RoleMap()

    def classify(self, feat: Feature) -> ClassResult:
        result = ClassResult.for_feature(feat)
        for role in feat.roles:
            if not is_hypothetical(role):
                result.add(self.roles.find_or_insert(role).id)
        return result

    def name(self, class_id: str) -> str:
        return self.roles.name(class_id)

    def headings(self) -> str:
        return "role1\trole2"

    def read_pair(self, line: PairLine) -> ClassPair:
        fields = _line_fields(line, 2)
        role1 = self.roles.find_or_insert(fields[0])
        role2 = self.roles.find_or_insert(fields[1])
        return ClassPair(role1.id, role2.id)


class RandomClassifier(FeatureClassifier):
    """
    Null-hypothesis classifier.

    Every peg of a genome that has a protein family receives a family
    drawn without replacement from a shuffled list of the family
    assignments of the genome's pegs. Other features get no class.
    Coupling on these classes measures how often pairs arise by chance.

    Args:
        seed: Optional RNG seed for reproducibility
    """

    def __init__(self, seed: Optional[int] = None):
        self.rng = np.random.default_rng(seed)
        self._genome_id: Optional[str] = None
        self._families: List[str] = []
        self._pos = 0

    def begin_genome(self, genome: Genome) -> None:
        """Shuffle the family assignments of a genome for dealing."""
        families = [feat.pgfam for feat in genome.pegs() if feat.pgfam]
        order = self.rng.permutation(len(families))
        self._families = [families[i] for i in order]
        self._genome_id = genome.id
        self._pos = 0

    def classify(self, feat: Feature) -> ClassResult:
        result = ClassResult.for_feature(feat)
        if feat.pgfam and feat.is_peg:
            if self._genome_id is None:
                raise RuntimeError("Random classification requires begin_genome() first")
            if self._pos >= len(self._families):
                raise RuntimeError(f"Family list for genome {self._genome_id} is exhausted")
            result.add(self._families[self._pos])
            self._pos += 1
        return result

    def name(self, class_id: str) -> str:
        return class_id

    def headings(self) -> str:
        return "class1\tclass2"

    def read_pair(self, line: PairLine) -> ClassPair:
        fields = _line_fields(line, 2)
        return ClassPair(fields[0], fields[1])


class ClassifierType(Enum):
    """Feature classification scheme."""

    ROLES = "roles"
    """Functional roles parsed from the assignment."""

    PGFAMS = "pgfams"
    """Global protein families."""

    PLFAMS = "plfams"
    """Local protein families, names from a family file."""

    RANDOM = "random"
    """Shuffled families (null baseline)."""

    FILE_FAMILY = "file-family"
    """Families from a table keyed on protein MD5."""

    def create(
        self,
        family_file: Optional[PathLike] = None,
        resolver: Optional[NameResolver] = None,
        seed: Optional[int] = None,
    ) -> FeatureClassifier:
        """
        Create a classifier of this type.

        Args:
            family_file: Family definition file (FILE_FAMILY, PLFAMS)
            resolver: Family name source (PGFAMS)
            seed: RNG seed (RANDOM)
        """
        if self is ClassifierType.ROLES:
            return RoleClassifier()
        if self is ClassifierType.PGFAMS:
            return FamilyClassifier(resolver)
        if self is ClassifierType.PLFAMS:
            return LocalFamilyClassifier(family_file)
        if self is ClassifierType.RANDOM:
            return RandomClassifier(seed)
        if family_file is None:
            raise ValueError("A family definition file is required for classification type FILE_FAMILY.")
        return FileClassifier(family_file)
