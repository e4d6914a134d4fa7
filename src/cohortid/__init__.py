"""Repository migration cohort identification."""

__version__ = "0.1.0"
