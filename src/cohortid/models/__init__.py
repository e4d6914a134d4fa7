"""Data models and schemas."""

from cohortid.models.schemas import (
    Cohort,
    CohortAggregate,
    CohortAssignment,
    FeatureCategory,
    FeatureToggles,
    GroupAggregate,
    Thresholds,
    WeightConfig,
)

__all__ = [
    "Cohort",
    "CohortAggregate",
    "CohortAssignment",
    "FeatureCategory",
    "FeatureToggles",
    "GroupAggregate",
    "Thresholds",
    "WeightConfig",
]
