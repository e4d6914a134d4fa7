"""Cohort classification engine."""

from cohortid.analyzers.aggregator import aggregate, aggregate_by_group
from cohortid.analyzers.classifier import CohortClassifier, classify, generate_summary
from cohortid.analyzers.features import FeaturePresence, detect_features
from cohortid.analyzers.pipeline import CohortPipeline, CohortRun
from cohortid.analyzers.weights import compute_weight

__all__ = [
    "CohortClassifier",
    "CohortPipeline",
    "CohortRun",
    "FeaturePresence",
    "aggregate",
    "aggregate_by_group",
    "classify",
    "compute_weight",
    "detect_features",
    "generate_summary",
]
