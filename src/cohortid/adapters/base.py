"""Abstract base class for repository record sources."""

from abc import ABC, abstractmethod

RepositoryRecord = dict[str, str]


class BaseRecordSource(ABC):
    """Base class for record sources.

    Each source turns some persisted tabular export into plain string
    mappings keyed by column name. Sources do no normalization beyond
    trimming; the engine handles empty and malformed values.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable description of where records come from."""
        ...

    @abstractmethod
    def load(self) -> list[RepositoryRecord]:
        """Return every repository record.

        Raises:
            RecordSourceError: If the source cannot be read or parsed.
        """
        ...
