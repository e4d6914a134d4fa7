"""Repository record sources."""

from cohortid.adapters.base import BaseRecordSource, RepositoryRecord
from cohortid.adapters.csv_source import CsvRecordSource

__all__ = ["BaseRecordSource", "CsvRecordSource", "RepositoryRecord"]
