"""CSV renderings of cohort analysis results."""

import csv
import io
import logging
from collections.abc import Iterable, Sequence
from pathlib import Path

from cohortid.analyzers.aggregator import UNKNOWN_GROUP
from cohortid.analyzers.pipeline import CohortRun
from cohortid.models.schemas import CohortAggregate, CohortAssignment, FeatureCategory, GroupAggregate

logger = logging.getLogger(__name__)

DETAILED_FILENAME = "cohort-analysis-detailed.csv"
SUMMARY_FILENAME = "cohort-analysis.csv"
ENTERPRISE_FILENAME = "cohort-analysis-enterprise.csv"

REASON_SEPARATOR = "; "

SUMMARY_HEADER = ["Cohort", "Repository Count", "Total Weight", "Average Weight"]
DETAIL_HEADER = [
    "Repository Name",
    "Organization",
    "Enterprise",
    "Cohort",
    "Migration Weight",
    "Migration Reasons",
    "Summary",
]

# Column order of the HAS_* flags in the detailed report
FLAG_COLUMN_ORDER = (
    FeatureCategory.APP_INSTALLATIONS,
    FeatureCategory.GIT_LFS_OBJECTS,
    FeatureCategory.PACKAGES,
    FeatureCategory.PROJECTS,
    FeatureCategory.CUSTOM_PROPERTIES,
    FeatureCategory.RULESETS,
    FeatureCategory.SECRETS,
    FeatureCategory.ENVIRONMENTS,
    FeatureCategory.SELF_HOSTED_RUNNERS,
    FeatureCategory.WEBHOOKS,
    FeatureCategory.DISCUSSIONS,
    FeatureCategory.DEPLOY_KEYS,
    FeatureCategory.PAGES_CUSTOM_DOMAIN,
    FeatureCategory.RELEASES_LARGE,
    FeatureCategory.CODESPACES,
    FeatureCategory.MAVEN_PACKAGES,
    FeatureCategory.MACOS_RUNNERS,
    FeatureCategory.IS_ARCHIVED,
    FeatureCategory.EXTERNAL_COLLABORATORS,
    FeatureCategory.UNMIGRATABLE,
)


def _by_cohort_then_weight(assignments: Iterable[CohortAssignment]) -> list[CohortAssignment]:
    return sorted(assignments, key=lambda a: (a.cohort.value, -a.weight))


def _enterprise(assignment: CohortAssignment) -> str:
    return assignment.enterprise_name or UNKNOWN_GROUP


def _detail_row(assignment: CohortAssignment, enterprise: str | None = None) -> list[str | int]:
    return [
        assignment.repository_name,
        assignment.organization_name,
        assignment.enterprise_name if enterprise is None else enterprise,
        assignment.cohort.value,
        assignment.weight,
        REASON_SEPARATOR.join(assignment.reasons),
        assignment.summary,
    ]


def _summary_rows(summaries: Iterable[CohortAggregate]) -> list[list[str | int]]:
    return [
        [s.cohort.value, s.repository_count, s.total_weight, f"{s.average_weight:.2f}"]
        for s in summaries
    ]


def detailed_csv(assignments: Sequence[CohortAssignment]) -> str:
    """One row per repository with every feature flag as a column."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")

    flag_columns = [f"HAS_{c.value}" for c in FLAG_COLUMN_ORDER]
    writer.writerow(DETAIL_HEADER + ["Feature Gap Count"] + flag_columns)

    for a in _by_cohort_then_weight(assignments):
        flags = ["true" if a.features.get(c, False) else "false" for c in FLAG_COLUMN_ORDER]
        writer.writerow(_detail_row(a) + [a.feature_gap_count] + flags)

    return buffer.getvalue()


def summary_csv(
    assignments: Sequence[CohortAssignment],
    summaries: Sequence[CohortAggregate],
) -> str:
    """Cohort summary section followed by repository details."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")

    writer.writerow(["=== COHORT SUMMARY ==="])
    writer.writerow(SUMMARY_HEADER)
    writer.writerows(_summary_rows(summaries))

    writer.writerow([])
    writer.writerow(["=== REPOSITORY DETAILS ==="])
    writer.writerow(DETAIL_HEADER)
    for a in _by_cohort_then_weight(assignments):
        writer.writerow(_detail_row(a))

    return buffer.getvalue()


def enterprise_csv(
    groups: Sequence[GroupAggregate],
    assignments: Sequence[CohortAssignment],
) -> str:
    """Enterprise overview, per-enterprise cohort summaries, then details."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")

    writer.writerow(["=== ENTERPRISE OVERVIEW ==="])
    writer.writerow(["Enterprise", "Total Repositories", "Total Weight", "Average Weight"])
    for g in groups:
        writer.writerow([g.name, g.total_repositories, g.total_weight, f"{g.average_weight:.2f}"])

    for g in groups:
        writer.writerow([])
        writer.writerow([f"=== {g.name} COHORT SUMMARY ==="])
        writer.writerow(SUMMARY_HEADER)
        writer.writerows(_summary_rows(g.cohorts))

    writer.writerow([])
    writer.writerow(["=== REPOSITORY DETAILS BY ENTERPRISE ==="])
    writer.writerow(DETAIL_HEADER)
    ordered = sorted(
        assignments,
        key=lambda a: (_enterprise(a).casefold(), _enterprise(a), a.cohort.value, -a.weight),
    )
    for a in ordered:
        writer.writerow(_detail_row(a, enterprise=_enterprise(a)))

    return buffer.getvalue()


def write_reports(run: CohortRun, output_dir: Path) -> list[Path]:
    """Write the detailed, summary and enterprise reports.

    Args:
        run: Completed analysis run.
        output_dir: Directory to write into; created if missing.

    Returns:
        Paths of the written files.
    """
    output_dir.mkdir(parents=True, exist_ok=True)

    reports = {
        DETAILED_FILENAME: detailed_csv(run.assignments),
        SUMMARY_FILENAME: summary_csv(run.assignments, run.summaries),
        ENTERPRISE_FILENAME: enterprise_csv(run.enterprises, run.assignments),
    }

    written = []
    for filename, content in reports.items():
        path = output_dir / filename
        path.write_text(content, encoding="utf-8")
        logger.info("Wrote %s", path)
        written.append(path)
    return written
