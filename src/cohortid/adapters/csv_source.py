"""CSV record source for repository analysis exports."""

import csv
import logging
from pathlib import Path

from cohortid.adapters.base import BaseRecordSource, RepositoryRecord
from cohortid.errors import RecordSourceError

logger = logging.getLogger(__name__)

DEFAULT_INPUT = Path("data/repository_analysis_all.csv")


class CsvRecordSource(BaseRecordSource):
    """Reads repository records from a CSV file with a header row.

    A UTF-8 byte order mark is dropped, blank lines are skipped and every
    value is whitespace-trimmed. Short rows yield empty strings for the
    missing columns.
    """

    def __init__(self, path: Path = DEFAULT_INPUT) -> None:
        self.path = Path(path)

    @property
    def name(self) -> str:
        return str(self.path)

    def load(self) -> list[RepositoryRecord]:
        logger.info("Reading repository analysis data from %s", self.path)
        try:
            # utf-8-sig strips a leading BOM
            with self.path.open(encoding="utf-8-sig", newline="") as f:
                reader = csv.DictReader(f)
                if reader.fieldnames is None:
                    raise RecordSourceError(self.name, "file is empty")
                records = [self._normalize_row(row) for row in reader if self._has_values(row)]
        except OSError as e:
            raise RecordSourceError(self.name, e.strerror or str(e)) from e
        except (csv.Error, UnicodeDecodeError) as e:
            raise RecordSourceError(self.name, str(e)) from e

        logger.info("Loaded %d repository records", len(records))
        return records

    @staticmethod
    def _has_values(row: dict[str | None, str | list[str] | None]) -> bool:
        return any(isinstance(v, str) and v.strip() for v in row.values())

    @staticmethod
    def _normalize_row(row: dict[str | None, str | list[str] | None]) -> RepositoryRecord:
        return {
            key.strip(): value.strip() if isinstance(value, str) else ""
            for key, value in row.items()
            if key is not None
        }
