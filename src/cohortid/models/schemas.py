"""Pydantic models for repository cohort data."""

from collections.abc import Mapping
from enum import Enum
from types import MappingProxyType

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    field_validator,
    model_validator,
)


class FeatureCategory(str, Enum):
    """Migration blocker categories, in reporting order."""

    APP_INSTALLATIONS = "APP_INSTALLATIONS"
    GIT_LFS_OBJECTS = "GIT_LFS_OBJECTS"
    PACKAGES = "PACKAGES"
    PROJECTS = "PROJECTS"
    CUSTOM_PROPERTIES = "CUSTOM_PROPERTIES"
    RULESETS = "RULESETS"
    SECRETS = "SECRETS"
    ENVIRONMENTS = "ENVIRONMENTS"
    SELF_HOSTED_RUNNERS = "SELF_HOSTED_RUNNERS"
    WEBHOOKS = "WEBHOOKS"
    DISCUSSIONS = "DISCUSSIONS"
    DEPLOY_KEYS = "DEPLOY_KEYS"
    PAGES_CUSTOM_DOMAIN = "PAGES_CUSTOM_DOMAIN"
    RELEASES_LARGE = "RELEASES_LARGE"
    IS_ARCHIVED = "IS_ARCHIVED"
    EXTERNAL_COLLABORATORS = "EXTERNAL_COLLABORATORS"
    UNMIGRATABLE = "UNMIGRATABLE"
    # Platform gaps: features the migration target does not support
    MAVEN_PACKAGES = "MAVEN_PACKAGES"
    CODESPACES = "CODESPACES"
    MACOS_RUNNERS = "MACOS_RUNNERS"


PLATFORM_GAPS = (
    FeatureCategory.MAVEN_PACKAGES,
    FeatureCategory.CODESPACES,
    FeatureCategory.MACOS_RUNNERS,
)


class Cohort(str, Enum):
    """Migration cohorts a repository can be assigned to."""

    UNMIGRATABLE = "UNMIGRATABLE"
    ARCHIVED = "ARCHIVED"
    MACOS_RUNNERS = "MACOS_RUNNERS"
    MAVEN_PACKAGES = "MAVEN_PACKAGES"
    CODESPACES = "CODESPACES"
    CLEAN = "CLEAN"
    LOW_COMPLEXITY = "LOW_COMPLEXITY"
    MEDIUM_COMPLEXITY = "MEDIUM_COMPLEXITY"
    HIGH_COMPLEXITY = "HIGH_COMPLEXITY"


# --- Configuration Models ---


class Thresholds(BaseModel):
    """Upper weight bounds (inclusive) for the complexity cohorts."""

    model_config = ConfigDict(frozen=True)

    clean_max: int = Field(0, ge=0)
    low_max: int = Field(10, ge=0)
    medium_max: int = Field(25, ge=0)

    @model_validator(mode="after")
    def _check_order(self) -> "Thresholds":
        if not self.clean_max <= self.low_max <= self.medium_max:
            raise ValueError(
                "Thresholds must be ascending: "
                f"clean_max={self.clean_max}, low_max={self.low_max}, medium_max={self.medium_max}"
            )
        return self


class FeatureToggles(BaseModel):
    """Switches for the categorical cohorts."""

    model_config = ConfigDict(frozen=True)

    separate_unmigratable_cohort: bool = True
    separate_macos_cohort: bool = True
    separate_maven_cohort: bool = True
    separate_codespace_cohort: bool = True
    include_archived_in_main_analysis: bool = False  # Informational only


class WeightConfig(BaseModel):
    """Weights, thresholds and toggles that drive classification.

    Every FeatureCategory must have a non-negative weight. The model is frozen
    and the weights are a read-only mapping, so a single instance can be
    shared across a whole run.
    """

    model_config = ConfigDict(frozen=True)

    version: str = "1"
    weights: Mapping[FeatureCategory, int]
    thresholds: Thresholds = Field(default_factory=Thresholds)
    features: FeatureToggles = Field(default_factory=FeatureToggles)

    @field_validator("weights")
    @classmethod
    def _check_weights(
        cls, weights: Mapping[FeatureCategory, int]
    ) -> Mapping[FeatureCategory, int]:
        missing = [c.value for c in FeatureCategory if c not in weights]
        if missing:
            raise ValueError(f"Missing weights for categories: {', '.join(missing)}")

        negative = [c.value for c, w in weights.items() if w < 0]
        if negative:
            raise ValueError(f"Weights must be non-negative: {', '.join(negative)}")

        # Keep enumeration order regardless of input order
        return MappingProxyType({c: weights[c] for c in FeatureCategory})

    @field_serializer("weights")
    def _dump_weights(self, weights: Mapping[FeatureCategory, int]) -> dict[FeatureCategory, int]:
        return dict(weights)


# --- Result Models ---


class CohortAssignment(BaseModel):
    """Classification result for a single repository."""

    model_config = ConfigDict(frozen=True)

    repository_name: str = ""
    organization_name: str = ""
    enterprise_name: str = ""
    cohort: Cohort
    weight: int = Field(ge=0)
    reasons: tuple[str, ...] = ()
    summary: str = ""
    features: Mapping[FeatureCategory, bool] = Field(default_factory=dict, validate_default=True)
    feature_gap_count: int = 0

    @field_validator("features")
    @classmethod
    def _freeze_features(
        cls, features: Mapping[FeatureCategory, bool]
    ) -> Mapping[FeatureCategory, bool]:
        return MappingProxyType(dict(features))

    @field_serializer("features")
    def _dump_features(self, features: Mapping[FeatureCategory, bool]) -> dict[FeatureCategory, bool]:
        return dict(features)

    @property
    def is_archived(self) -> bool:
        """Whether the repository carried the archived flag."""
        return self.features.get(FeatureCategory.IS_ARCHIVED, False)


class CohortAggregate(BaseModel):
    """Repository count and weight statistics for one cohort."""

    model_config = ConfigDict(frozen=True)

    cohort: Cohort
    repository_count: int = 0
    total_weight: int = 0
    average_weight: float = 0.0


class GroupAggregate(BaseModel):
    """Cohort statistics nested under a grouping key such as an enterprise."""

    model_config = ConfigDict(frozen=True)

    name: str
    cohorts: tuple[CohortAggregate, ...] = ()
    total_repositories: int = 0
    total_weight: int = 0
    average_weight: float = 0.0
