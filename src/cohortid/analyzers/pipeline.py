"""End-to-end cohort analysis over a set of repository records."""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field

from cohortid.analyzers.aggregator import aggregate, aggregate_by_group
from cohortid.analyzers.classifier import CohortClassifier
from cohortid.analyzers.features import detect_features
from cohortid.analyzers.weights import weight_for
from cohortid.models.schemas import CohortAggregate, CohortAssignment, GroupAggregate, WeightConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CohortRun:
    """Results of one analysis run."""

    assignments: tuple[CohortAssignment, ...] = ()
    summaries: tuple[CohortAggregate, ...] = ()
    enterprises: tuple[GroupAggregate, ...] = ()
    config_version: str = ""

    @property
    def total_repositories(self) -> int:
        return len(self.assignments)

    @property
    def total_weight(self) -> int:
        return sum(a.weight for a in self.assignments)


@dataclass
class CohortPipeline:
    """Orchestrates the analysis stages.

    Pipeline stages:
    1. Detect features (once per record)
    2. Calculate migration weight
    3. Assign cohort, reasons and summary
    4. Aggregate by cohort and by enterprise

    The configuration is never modified; each record is processed
    independently, and aggregation runs over the input-ordered results.
    """

    config: WeightConfig
    classifier: CohortClassifier = field(init=False)

    def __post_init__(self) -> None:
        self.classifier = CohortClassifier(self.config)

    def assign(self, record: Mapping[str, str]) -> CohortAssignment:
        """Run detection, weighting and classification for one record."""
        presence = detect_features(record)
        weight = weight_for(presence, self.config)
        assignment = self.classifier.classify(record, weight, presence)
        logger.debug(
            "%s/%s -> %s (weight %d)",
            assignment.organization_name,
            assignment.repository_name,
            assignment.cohort.value,
            weight,
        )
        return assignment

    def assign_all(self, records: Iterable[Mapping[str, str]]) -> list[CohortAssignment]:
        """Classify every record, preserving input order."""
        return [self.assign(record) for record in records]

    def run(self, records: Iterable[Mapping[str, str]]) -> CohortRun:
        """Classify and aggregate a full record set."""
        return self.summarize(self.assign_all(records))

    def summarize(self, assignments: Sequence[CohortAssignment]) -> CohortRun:
        """Aggregate already-classified repositories."""
        counts = Counter(a.cohort.value for a in assignments)
        logger.info(
            "Classified %d repositories (config version %s): %s",
            len(assignments),
            self.config.version,
            ", ".join(f"{name}={n}" for name, n in sorted(counts.items())) or "none",
        )

        return CohortRun(
            assignments=tuple(assignments),
            summaries=tuple(aggregate(assignments)),
            enterprises=tuple(aggregate_by_group(assignments)),
            config_version=self.config.version,
        )
