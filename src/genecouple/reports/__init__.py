"""Coupling report formats."""

from enum import Enum
from typing import Optional, TextIO

from genecouple.core.classifiers import FeatureClassifier
from genecouple.io.tables import PathLike
from genecouple.reports.base import CouplingReporter
from genecouple.reports.group import GroupCouplingReporter
from genecouple.reports.scores import ScoreCouplingReporter
from genecouple.reports.verify import VerifyCouplingReporter, read_coupling_pairs


class ReportType(Enum):
    """Coupling report format."""

    GROUP = "group"
    """Pair names and the genomes containing them."""

    SCORES = "scores"
    """Group size, weight, subsystem agreement and diversity scores."""

    VERIFY = "verify"
    """Comparison with a previous coupling run."""

    def create(
        self,
        output: TextIO,
        classifier: FeatureClassifier,
        old_output: Optional[PathLike] = None,
    ) -> CouplingReporter:
        if self is ReportType.GROUP:
            return GroupCouplingReporter(output, classifier)
        if self is ReportType.SCORES:
            return ScoreCouplingReporter(output, classifier)
        if old_output is None:
            raise ValueError("A previous coupling file is required for report type VERIFY.")
        return VerifyCouplingReporter(output, classifier, old_output)


__all__ = [
    "ReportType",
    "CouplingReporter",
    "GroupCouplingReporter",
    "ScoreCouplingReporter",
    "VerifyCouplingReporter",
    "read_coupling_pairs",
]
