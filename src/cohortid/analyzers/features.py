"""Feature detection for repository records.

Each migration blocker category is described by a row in CATEGORY_RULES:
the record fields it reads, how presence is decided, and the reason text
shown when it is present. Adding or removing a category only touches the
table (plus FeatureCategory and the configured weights).
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass

from cohortid.models.schemas import PLATFORM_GAPS, FeatureCategory

# Spellings accepted as "true" for boolean fields
TRUTHY_VALUES = frozenset({"true", "TRUE", "1", "yes", "YES"})

_LEADING_INT = re.compile(r"^\s*([+-]?[0-9]+)")


def to_number(value: str | None) -> int:
    """Parse a count field.

    Empty, "null", "undefined" and unparsable values are 0. A leading ASCII
    integer is honoured ("12 repos" -> 12, "3.7" -> 3).
    """
    if value is None:
        return 0
    match = _LEADING_INT.match(str(value))
    if not match:
        return 0
    return int(match.group(1))


def to_bool(value: str | None) -> bool:
    """Parse a boolean field against TRUTHY_VALUES."""
    if value is None:
        return False
    return str(value).strip() in TRUTHY_VALUES


@dataclass(frozen=True)
class CategoryRule:
    """How one category is detected and described."""

    category: FeatureCategory
    reason: str
    count_fields: tuple[str, ...] = ()
    flag_field: str | None = None

    def detect(self, record: Mapping[str, str]) -> FeatureHit | None:
        """Return a hit if the category is present on the record."""
        if self.flag_field is not None:
            if to_bool(record.get(self.flag_field)):
                return FeatureHit(self.category, ())
            return None

        raw = tuple(str(record.get(f) or "").strip() for f in self.count_fields)
        counts = tuple(to_number(value) for value in raw)
        if any(c > 0 for c in counts):
            return FeatureHit(self.category, counts, raw)
        return None

    def describe(self, hit: FeatureHit) -> str:
        """Render the reason text for a hit.

        A single-field count is shown as it appeared in the record ("3.7"
        stays "3.7"). Positional placeholders and counts summed over several
        fields use the normalized integers.
        """
        count = hit.raw[0] if len(hit.raw) == 1 else hit.total
        return self.reason.format(*hit.counts, count=count)


@dataclass(frozen=True)
class FeatureHit:
    """A category found on a record, with the counts that triggered it."""

    category: FeatureCategory
    counts: tuple[int, ...]
    raw: tuple[str, ...] = ()

    @property
    def total(self) -> int:
        return sum(c for c in self.counts if c > 0)


CATEGORY_RULES: tuple[CategoryRule, ...] = (
    CategoryRule(
        FeatureCategory.APP_INSTALLATIONS,
        "App installations ({count})",
        count_fields=("app_installations",),
    ),
    CategoryRule(
        FeatureCategory.GIT_LFS_OBJECTS,
        "Git LFS objects ({count})",
        count_fields=("git-lfs-objects",),
    ),
    CategoryRule(
        FeatureCategory.PACKAGES,
        "Repository packages ({count})",
        count_fields=("repository-packages",),
    ),
    CategoryRule(
        FeatureCategory.PROJECTS,
        "Projects linked (repo: {0}, issues: {1})",
        count_fields=("projects_linked_to_repo", "issues_linked_to_projects"),
    ),
    CategoryRule(
        FeatureCategory.CUSTOM_PROPERTIES,
        "Custom properties ({count})",
        count_fields=("repository-custom-properties",),
    ),
    CategoryRule(
        FeatureCategory.RULESETS,
        "Rulesets ({count})",
        count_fields=("repository-rulesets",),
    ),
    CategoryRule(
        FeatureCategory.SECRETS,
        "Secrets ({count})",
        count_fields=("repository-actions-secrets", "repository-dependabot-secrets"),
    ),
    CategoryRule(
        FeatureCategory.ENVIRONMENTS,
        "Environments ({count})",
        count_fields=("repository-environments",),
    ),
    CategoryRule(
        FeatureCategory.SELF_HOSTED_RUNNERS,
        "Self-hosted runners ({count})",
        count_fields=("repository-actions-self-hosted-runners",),
    ),
    CategoryRule(
        FeatureCategory.WEBHOOKS,
        "Webhooks ({count})",
        count_fields=("repository-webhooks",),
    ),
    CategoryRule(
        FeatureCategory.DISCUSSIONS,
        "Discussions ({count})",
        count_fields=("repository-discussions",),
    ),
    CategoryRule(
        FeatureCategory.DEPLOY_KEYS,
        "Deploy keys ({count})",
        count_fields=("repository-deploy-keys",),
    ),
    CategoryRule(
        FeatureCategory.PAGES_CUSTOM_DOMAIN,
        "Pages custom domain ({count})",
        count_fields=("repository-pages-customdomain",),
    ),
    CategoryRule(
        FeatureCategory.RELEASES_LARGE,
        "Large releases ({count})",
        count_fields=("repository-releases-gt-5gb",),
    ),
    CategoryRule(
        FeatureCategory.IS_ARCHIVED,
        "Repository is archived",
        flag_field="isArchived",
    ),
    CategoryRule(
        FeatureCategory.EXTERNAL_COLLABORATORS,
        "Repository has external collaborators",
        flag_field="has_external_collaborators",
    ),
    CategoryRule(
        FeatureCategory.UNMIGRATABLE,
        "Repository has unmigratable features",
        flag_field="has_unmigratable",
    ),
    CategoryRule(
        FeatureCategory.MAVEN_PACKAGES,
        "Maven packages (platform gap)",
        flag_field="has_maven_packages",
    ),
    CategoryRule(
        FeatureCategory.CODESPACES,
        "Codespaces (platform gap)",
        flag_field="has_codespaces",
    ),
    CategoryRule(
        FeatureCategory.MACOS_RUNNERS,
        "macOS runners (platform gap)",
        flag_field="has_macos_runners",
    ),
)

_RULES_BY_CATEGORY = {rule.category: rule for rule in CATEGORY_RULES}


@dataclass(frozen=True)
class FeaturePresence:
    """The categories present on one record, in FeatureCategory order."""

    hits: tuple[FeatureHit, ...] = ()

    def __contains__(self, category: object) -> bool:
        return any(hit.category == category for hit in self.hits)

    def __len__(self) -> int:
        return len(self.hits)

    @property
    def categories(self) -> tuple[FeatureCategory, ...]:
        return tuple(hit.category for hit in self.hits)

    @property
    def feature_gap_count(self) -> int:
        """Number of platform-gap categories present."""
        return sum(1 for c in PLATFORM_GAPS if c in self)

    def flags(self) -> dict[FeatureCategory, bool]:
        """Presence of every category, present or not."""
        present = set(self.categories)
        return {c: c in present for c in FeatureCategory}

    def reasons(self) -> list[str]:
        """Human-readable reason per present category."""
        return [_RULES_BY_CATEGORY[hit.category].describe(hit) for hit in self.hits]


def detect_features(record: Mapping[str, str]) -> FeaturePresence:
    """Evaluate every category rule against a record."""
    hits = []
    for rule in CATEGORY_RULES:
        hit = rule.detect(record)
        if hit is not None:
            hits.append(hit)
    return FeaturePresence(tuple(hits))
