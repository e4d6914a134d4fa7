"""Weight configuration profiles and loading."""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from cohortid.errors import ConfigurationError
from cohortid.models.schemas import WeightConfig

logger = logging.getLogger(__name__)

DEFAULT_PROFILE = "default"

# Built-in weight tables. "default" reflects current migration tooling support;
# "legacy" is the earlier table, kept so older reports can be reproduced.
PROFILES: dict[str, dict[str, Any]] = {
    "default": {
        "version": "2",
        "weights": {
            "APP_INSTALLATIONS": 15,       # Users, teams and repository access
            "GIT_LFS_OBJECTS": 2,          # Migration support added
            "PACKAGES": 3,                 # Migration support added
            "PROJECTS": 3,                 # Partial migration support
            "CUSTOM_PROPERTIES": 2,        # Migration support added
            "RULESETS": 3,                 # Supported, with limitations
            "SECRETS": 12,                 # Only names are migrated
            "ENVIRONMENTS": 3,
            "SELF_HOSTED_RUNNERS": 12,
            "WEBHOOKS": 10,                # Webhook secrets must be re-entered
            "DISCUSSIONS": 2,
            "DEPLOY_KEYS": 8,
            "PAGES_CUSTOM_DOMAIN": 2,
            "RELEASES_LARGE": 7,
            "IS_ARCHIVED": 1,
            "EXTERNAL_COLLABORATORS": 12,
            "UNMIGRATABLE": 30,
            "MAVEN_PACKAGES": 25,
            "CODESPACES": 25,
            "MACOS_RUNNERS": 25,
        },
        "thresholds": {"clean_max": 0, "low_max": 10, "medium_max": 25},
        "features": {
            "separate_unmigratable_cohort": True,
            "separate_macos_cohort": True,
            "separate_maven_cohort": True,
            "separate_codespace_cohort": True,
            "include_archived_in_main_analysis": False,
        },
    },
    "legacy": {
        "version": "1",
        "weights": {
            "APP_INSTALLATIONS": 10,
            "GIT_LFS_OBJECTS": 1,
            "PACKAGES": 9,
            "PROJECTS": 7,
            "CUSTOM_PROPERTIES": 1,
            "RULESETS": 1,
            "SECRETS": 5,
            "ENVIRONMENTS": 4,
            "SELF_HOSTED_RUNNERS": 8,
            "WEBHOOKS": 3,
            "DISCUSSIONS": 2,
            "DEPLOY_KEYS": 3,
            "PAGES_CUSTOM_DOMAIN": 2,
            "RELEASES_LARGE": 7,
            "IS_ARCHIVED": 5,
            "EXTERNAL_COLLABORATORS": 0,
            "UNMIGRATABLE": 0,
            "MAVEN_PACKAGES": 8,
            "CODESPACES": 6,
            "MACOS_RUNNERS": 9,
        },
        "thresholds": {"clean_max": 0, "low_max": 10, "medium_max": 25},
        "features": {
            "separate_unmigratable_cohort": False,
            "separate_macos_cohort": True,
            "separate_maven_cohort": True,
            "separate_codespace_cohort": True,
        },
    },
}


def build_config(data: dict[str, Any]) -> WeightConfig:
    """Validate raw configuration data.

    Raises:
        ConfigurationError: If a category is missing or unknown, a weight is
            negative, or the thresholds are not ascending.
    """
    try:
        return WeightConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid weight configuration: {e}") from e


def load_config(source: str | Path | None = None) -> WeightConfig:
    """Load a weight configuration.

    Args:
        source: A built-in profile name, a path to a JSON file, or None for
            the default profile.

    Returns:
        Validated, frozen WeightConfig.

    Raises:
        ConfigurationError: If the profile or file cannot be loaded or fails validation.
    """
    if source is None:
        source = DEFAULT_PROFILE

    if isinstance(source, str) and source in PROFILES:
        logger.debug("Using built-in weight profile %r", source)
        return build_config(PROFILES[source])

    path = Path(source)
    if not path.is_file():
        available = ", ".join(PROFILES)
        raise ConfigurationError(
            f"Unknown configuration '{source}': not a file or built-in profile ({available})"
        )

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Could not read configuration {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration {path} must be a JSON object")

    logger.debug("Loaded weight configuration from %s", path)
    return build_config(data)
