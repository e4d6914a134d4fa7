"""Cohort assignment for repository records."""

from collections.abc import Mapping

from cohortid.analyzers.features import FeaturePresence, detect_features
from cohortid.models.schemas import Cohort, CohortAssignment, FeatureCategory, WeightConfig


# Static summaries for cohorts decided by a flag rather than by weight
CATEGORICAL_SUMMARIES = {
    Cohort.UNMIGRATABLE: "Repository has features that cannot be migrated - requires special handling",
    Cohort.ARCHIVED: "Archived repository - lower migration priority",
    Cohort.CLEAN: "Clean repository with no migration blockers - can migrate easily",
    Cohort.MACOS_RUNNERS: "Repository with macOS runners - requires runner migration planning",
    Cohort.MAVEN_PACKAGES: "Repository with Maven packages - requires package migration planning",
    Cohort.CODESPACES: "Repository with Codespaces usage - requires Codespaces migration planning",
}

COMPLEXITY_SUMMARIES = {
    Cohort.LOW_COMPLEXITY: "Low complexity migration (weight: {weight}) - {count} minor issues",
    Cohort.MEDIUM_COMPLEXITY: "Medium complexity migration (weight: {weight}) - {count} moderate issues",
    Cohort.HIGH_COMPLEXITY: "High complexity migration (weight: {weight}) - {count} major issues",
}


def generate_summary(cohort: Cohort | str, reason_count: int, weight: int) -> str:
    """Build the one-line summary for a cohort assignment."""
    try:
        cohort = Cohort(cohort)
    except ValueError:
        return f"Migration weight: {weight}"

    if cohort in CATEGORICAL_SUMMARIES:
        return CATEGORICAL_SUMMARIES[cohort]
    if cohort in COMPLEXITY_SUMMARIES:
        return COMPLEXITY_SUMMARIES[cohort].format(weight=weight, count=reason_count)
    return f"Migration weight: {weight}"


class CohortClassifier:
    """Assigns each repository to exactly one migration cohort.

    Decision order (first match wins):
    1. UNMIGRATABLE: unmigratable flag, when the cohort is enabled
    2. ARCHIVED: archived flag
    3. MACOS_RUNNERS / MAVEN_PACKAGES / CODESPACES: platform gaps, each when enabled
    4. CLEAN / LOW / MEDIUM / HIGH complexity: by weight against the thresholds

    A repository can match several rules at once; only the first is reported,
    but its reasons always list every present category.
    """

    def __init__(self, config: WeightConfig) -> None:
        self.config = config

    def classify(
        self,
        record: Mapping[str, str],
        weight: int,
        presence: FeaturePresence | None = None,
    ) -> CohortAssignment:
        """Classify one repository record.

        Args:
            record: Raw repository fields.
            weight: Migration weight already computed for the record.
            presence: Detected features; detected from the record when omitted.

        Returns:
            Immutable CohortAssignment.
        """
        if presence is None:
            presence = detect_features(record)

        cohort = self.assign_cohort(presence, weight)
        reasons = presence.reasons()

        return CohortAssignment(
            repository_name=record.get("Repo_Name") or "",
            organization_name=record.get("Org_Name") or "",
            enterprise_name=record.get("Enterprise") or "",
            cohort=cohort,
            weight=weight,
            reasons=tuple(reasons),
            summary=generate_summary(cohort, len(reasons), weight),
            features=presence.flags(),
            feature_gap_count=presence.feature_gap_count,
        )

    def assign_cohort(self, presence: FeaturePresence, weight: int) -> Cohort:
        """Apply the ordered decision list."""
        features = self.config.features

        if features.separate_unmigratable_cohort and FeatureCategory.UNMIGRATABLE in presence:
            return Cohort.UNMIGRATABLE

        if FeatureCategory.IS_ARCHIVED in presence:
            return Cohort.ARCHIVED

        if features.separate_macos_cohort and FeatureCategory.MACOS_RUNNERS in presence:
            return Cohort.MACOS_RUNNERS

        if features.separate_maven_cohort and FeatureCategory.MAVEN_PACKAGES in presence:
            return Cohort.MAVEN_PACKAGES

        if features.separate_codespace_cohort and FeatureCategory.CODESPACES in presence:
            return Cohort.CODESPACES

        return self._weight_to_cohort(weight)

    def _weight_to_cohort(self, weight: int) -> Cohort:
        """Convert a weight to a complexity tier."""
        thresholds = self.config.thresholds
        if weight <= thresholds.clean_max:
            return Cohort.CLEAN
        elif weight <= thresholds.low_max:
            return Cohort.LOW_COMPLEXITY
        elif weight <= thresholds.medium_max:
            return Cohort.MEDIUM_COMPLEXITY
        else:
            return Cohort.HIGH_COMPLEXITY


def classify(
    record: Mapping[str, str],
    weight: int,
    config: WeightConfig,
    presence: FeaturePresence | None = None,
) -> CohortAssignment:
    """Classify a record with a one-off classifier."""
    return CohortClassifier(config).classify(record, weight, presence)
