"""Report rendering for cohort analysis results."""

from cohortid.reports.csv_export import detailed_csv, enterprise_csv, summary_csv, write_reports

__all__ = ["detailed_csv", "enterprise_csv", "summary_csv", "write_reports"]
