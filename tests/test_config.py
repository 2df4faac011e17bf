from pathlib import Path

import pytest

from genecouple.config import CouplingConfig
from genecouple.core.class_filters import ClassFilterType, LimitedClassFilter, NullClassFilter
from genecouple.core.classifiers import ClassifierType, FamilyClassifier, RoleClassifier
from genecouple.core.neighbors import CloseNeighborFinder, NeighborType, AdjacentNeighborFinder
from genecouple.core.pair_filters import PairFilterType, SizePairFilter, WeightPairFilter


def test_defaults():
    config = CouplingConfig()

    assert config.max_gap == 5000
    assert config.classifier_type is ClassifierType.PGFAMS
    assert config.neighbor_type is NeighborType.CLOSE
    assert config.class_filter_type is ClassFilterType.NONE
    assert config.pair_filter_type is PairFilterType.WEIGHT
    assert config.min_group == 15.0
    assert config.class_limit == 2
    assert not config.seed_filtering


def test_default_strategies():
    config = CouplingConfig()

    assert isinstance(config.build_classifier(), FamilyClassifier)
    finder = config.build_finder()
    assert isinstance(finder, CloseNeighborFinder) and finder.max_gap == 5000
    assert isinstance(config.build_class_filter(), NullClassFilter)
    pair_filter = config.build_pair_filter()
    assert isinstance(pair_filter, WeightPairFilter) and pair_filter.min_weight == 15.0


def test_selected_strategies():
    config = CouplingConfig(
        max_gap=300,
        classifier_type=ClassifierType.ROLES,
        neighbor_type=NeighborType.ADJACENT,
        class_filter_type=ClassFilterType.LIMITED,
        pair_filter_type=PairFilterType.SIZE,
        min_group=4,
        class_limit=3,
    )

    assert isinstance(config.build_classifier(), RoleClassifier)
    assert isinstance(config.build_finder(), AdjacentNeighborFinder)
    assert isinstance(config.build_class_filter(), LimitedClassFilter)
    assert isinstance(config.build_pair_filter(), SizePairFilter)


@pytest.mark.parametrize(
    "kwargs,message",
    [
        ({"max_gap": 0}, "gap"),
        ({"class_limit": 0}, "class limit"),
        ({"min_group": -1.0}, "non-negative"),
    ],
)
def test_invalid_values(kwargs, message):
    with pytest.raises(ValueError, match=message):
        CouplingConfig(**kwargs)


def test_validate_requires_strategy_files():
    with pytest.raises(ValueError, match="Blacklist"):
        CouplingConfig(class_filter_type=ClassFilterType.BLACKLIST).validate()
    with pytest.raises(ValueError, match="Whitelist"):
        CouplingConfig(pair_filter_type=PairFilterType.WHITELIST).validate()
    with pytest.raises(ValueError, match="FILE_FAMILY"):
        CouplingConfig(classifier_type=ClassifierType.FILE_FAMILY).validate()


def test_validate_checks_files_exist(tmp_path):
    config = CouplingConfig(name_file=str(tmp_path / "names.fa"))

    assert isinstance(config.name_file, Path)
    with pytest.raises(FileNotFoundError, match="Family name file"):
        config.validate()


def test_name_file_loaded_into_classifier(write_text):
    names = write_text("names.fa", ">PF00001 Alpha family\nMKV\n")
    config = CouplingConfig(name_file=names)

    classifier = config.build_classifier()

    assert classifier.family_name("PF00001") == "Alpha family"
