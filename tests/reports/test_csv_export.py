"""Tests for CSV report rendering."""

import csv
import io

from cohortid.analyzers.pipeline import CohortPipeline
from cohortid.models.schemas import FeatureCategory
from cohortid.reports.csv_export import (
    DETAILED_FILENAME,
    ENTERPRISE_FILENAME,
    SUMMARY_FILENAME,
    detailed_csv,
    enterprise_csv,
    summary_csv,
    write_reports,
)


def _rows(text: str) -> list[list[str]]:
    return list(csv.reader(io.StringIO(text)))


class TestDetailedCsv:
    def test_header_has_every_flag(self, default_config, sample_records) -> None:
        run = CohortPipeline(default_config).run(sample_records)

        header = _rows(detailed_csv(run.assignments))[0]

        assert header[:8] == [
            "Repository Name",
            "Organization",
            "Enterprise",
            "Cohort",
            "Migration Weight",
            "Migration Reasons",
            "Summary",
            "Feature Gap Count",
        ]
        assert sorted(header[8:]) == sorted(f"HAS_{c.value}" for c in FeatureCategory)
        assert header[-6:] == [
            "HAS_CODESPACES",
            "HAS_MAVEN_PACKAGES",
            "HAS_MACOS_RUNNERS",
            "HAS_IS_ARCHIVED",
            "HAS_EXTERNAL_COLLABORATORS",
            "HAS_UNMIGRATABLE",
        ]

    def test_rows_sorted_by_cohort_then_weight(self, default_config, sample_records) -> None:
        run = CohortPipeline(default_config).run(sample_records)

        rows = _rows(detailed_csv(run.assignments))[1:]

        assert [(r[3], r[0]) for r in rows] == [
            ("ARCHIVED", "old-service"),
            ("CLEAN", "clean-repo"),
            ("HIGH_COMPLEXITY", "busy"),
            ("MACOS_RUNNERS", "ios-app"),
            ("MEDIUM_COMPLEXITY", "apps"),
        ]

    def test_row_contents(self, default_config, sample_records) -> None:
        run = CohortPipeline(default_config).run(sample_records)

        header, *body = _rows(detailed_csv(run.assignments))
        rows = {r[0]: r for r in body}
        ios = rows["ios-app"]

        assert ios[4] == "35"
        assert ios[5] == "Webhooks (1); macOS runners (platform gap)"
        assert ios[7] == "1"
        flags = dict(zip(header[8:], ios[8:]))
        assert flags["HAS_MACOS_RUNNERS"] == "true"
        assert flags["HAS_WEBHOOKS"] == "true"
        assert flags["HAS_SECRETS"] == "false"

    def test_input_order_untouched(self, default_config, sample_records) -> None:
        run = CohortPipeline(default_config).run(sample_records)
        before = list(run.assignments)

        detailed_csv(run.assignments)

        assert list(run.assignments) == before


class TestSummaryCsv:
    def test_sections(self, default_config, sample_records) -> None:
        run = CohortPipeline(default_config).run(sample_records)

        rows = _rows(summary_csv(run.assignments, run.summaries))

        assert rows[0] == ["=== COHORT SUMMARY ==="]
        assert rows[1] == ["Cohort", "Repository Count", "Total Weight", "Average Weight"]
        assert rows[2] == ["HIGH_COMPLEXITY", "1", "49", "49.00"]
        details_at = rows.index(["=== REPOSITORY DETAILS ==="])
        assert rows[details_at - 1] == []
        assert len(rows) - details_at - 2 == len(sample_records)

    def test_reasons_with_commas_are_quoted(self, default_config) -> None:
        record = {"Repo_Name": "p", "projects_linked_to_repo": "1", "issues_linked_to_projects": "2"}
        run = CohortPipeline(default_config).run([record])

        text = summary_csv(run.assignments, run.summaries)

        assert '"Projects linked (repo: 1, issues: 2)"' in text
        assert _rows(text)[-1][5] == "Projects linked (repo: 1, issues: 2)"


class TestEnterpriseCsv:
    def test_sections(self, default_config, sample_records) -> None:
        run = CohortPipeline(default_config).run(sample_records)

        rows = _rows(enterprise_csv(run.enterprises, run.assignments))

        assert rows[0] == ["=== ENTERPRISE OVERVIEW ==="]
        assert rows[2] == ["acme", "3", "50", "16.67"]
        assert rows[3] == ["globex", "1", "13", "13.00"]
        assert rows[4] == ["Unknown", "1", "49", "49.00"]
        assert ["=== acme COHORT SUMMARY ==="] in rows
        assert ["=== Unknown COHORT SUMMARY ==="] in rows

    def test_details_grouped_by_enterprise(self, default_config, sample_records) -> None:
        run = CohortPipeline(default_config).run(sample_records)

        rows = _rows(enterprise_csv(run.enterprises, run.assignments))
        details = rows[rows.index(["=== REPOSITORY DETAILS BY ENTERPRISE ==="]) + 2 :]

        assert [(r[2], r[0]) for r in details] == [
            ("acme", "clean-repo"),
            ("acme", "ios-app"),
            ("acme", "apps"),
            ("globex", "old-service"),
            ("Unknown", "busy"),
        ]


class TestWriteReports:
    def test_writes_three_files(self, default_config, sample_records, tmp_path) -> None:
        run = CohortPipeline(default_config).run(sample_records)
        output_dir = tmp_path / "nested" / "output"

        paths = write_reports(run, output_dir)

        assert [p.name for p in paths] == [DETAILED_FILENAME, SUMMARY_FILENAME, ENTERPRISE_FILENAME]
        assert all(p.exists() for p in paths)
        assert (output_dir / SUMMARY_FILENAME).read_text().startswith("=== COHORT SUMMARY ===")
