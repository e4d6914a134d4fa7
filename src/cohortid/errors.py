"""Exception types raised outside the classification engine."""


class CohortError(Exception):
    """Base class for cohortid errors."""


class ConfigurationError(CohortError):
    """Raised when a weight configuration is missing, malformed, or inconsistent."""


class RecordSourceError(CohortError):
    """Raised when repository records cannot be loaded."""

    def __init__(self, source: str, reason: str) -> None:
        self.source = source
        self.reason = reason
        super().__init__(f"Could not load records from {source}: {reason}")
