"""Shared fixtures for cohortid tests."""

from collections.abc import Callable
from typing import Any

import pytest

from cohortid.config import build_config, load_config
from cohortid.models.schemas import FeatureCategory, WeightConfig


def _zero_weights(**overrides: int) -> dict[str, int]:
    weights = {c.value: 0 for c in FeatureCategory}
    weights.update(overrides)
    return weights


@pytest.fixture
def make_config() -> Callable[..., WeightConfig]:
    """Factory for configs with zero weights unless overridden."""

    def _make(
        weights: dict[str, int] | None = None,
        thresholds: dict[str, int] | None = None,
        features: dict[str, bool] | None = None,
    ) -> WeightConfig:
        data: dict[str, Any] = {"weights": _zero_weights(**(weights or {}))}
        data["thresholds"] = thresholds or {"clean_max": 0, "low_max": 10, "medium_max": 25}
        if features is not None:
            data["features"] = features
        return build_config(data)

    return _make


@pytest.fixture
def default_config() -> WeightConfig:
    return load_config("default")


@pytest.fixture
def sample_records() -> list[dict[str, str]]:
    """A small mixed set of repositories across two enterprises."""
    return [
        {"Enterprise": "acme", "Org_Name": "platform", "Repo_Name": "clean-repo"},
        {
            "Enterprise": "acme",
            "Org_Name": "platform",
            "Repo_Name": "apps",
            "app_installations": "2",
        },
        {
            "Enterprise": "acme",
            "Org_Name": "mobile",
            "Repo_Name": "ios-app",
            "has_macos_runners": "true",
            "repository-webhooks": "1",
        },
        {
            "Enterprise": "globex",
            "Org_Name": "legacy",
            "Repo_Name": "old-service",
            "isArchived": "TRUE",
            "repository-actions-secrets": "5",
        },
        {
            "Enterprise": "",
            "Org_Name": "misc",
            "Repo_Name": "busy",
            "app_installations": "1",
            "repository-actions-secrets": "2",
            "repository-webhooks": "3",
            "has_external_collaborators": "yes",
        },
    ]
