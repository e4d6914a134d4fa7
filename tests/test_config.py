"""Tests for weight configuration validation and loading."""

import json

import pytest
from pydantic import ValidationError

from cohortid.config import PROFILES, build_config, load_config
from cohortid.errors import ConfigurationError
from cohortid.models.schemas import FeatureCategory


def zero_weights(**overrides: int) -> dict[str, int]:
    weights = {c.value: 0 for c in FeatureCategory}
    weights.update(overrides)
    return weights


class TestBuildConfig:
    def test_toggles_default_to_enabled(self) -> None:
        config = build_config({"weights": zero_weights()})

        assert config.features.separate_unmigratable_cohort
        assert config.features.separate_macos_cohort
        assert config.features.separate_maven_cohort
        assert config.features.separate_codespace_cohort
        assert (config.thresholds.clean_max, config.thresholds.low_max, config.thresholds.medium_max) == (0, 10, 25)

    def test_missing_category_is_rejected(self) -> None:
        weights = zero_weights()
        del weights["WEBHOOKS"]

        with pytest.raises(ConfigurationError, match="WEBHOOKS"):
            build_config({"weights": weights})

    def test_unknown_category_is_rejected(self) -> None:
        weights = zero_weights(NOT_A_CATEGORY=3)

        with pytest.raises(ConfigurationError):
            build_config({"weights": weights})

    def test_negative_weight_is_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="non-negative"):
            build_config({"weights": zero_weights(SECRETS=-1)})

    def test_descending_thresholds_are_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="ascending"):
            build_config(
                {"weights": zero_weights(), "thresholds": {"clean_max": 0, "low_max": 30, "medium_max": 20}}
            )

    def test_weights_kept_in_category_order(self) -> None:
        weights = dict(reversed(list(zero_weights().items())))

        config = build_config({"weights": weights})

        assert list(config.weights) == list(FeatureCategory)

    def test_config_is_frozen(self) -> None:
        config = build_config({"weights": zero_weights()})

        with pytest.raises(ValidationError):
            config.version = "99"  # type: ignore[misc]

    def test_weights_are_read_only(self) -> None:
        config = load_config("default")

        with pytest.raises(TypeError):
            config.weights[FeatureCategory.APP_INSTALLATIONS] = 999  # type: ignore[index]

        assert config.weights[FeatureCategory.APP_INSTALLATIONS] == 15

    def test_weights_dump_as_plain_dict(self) -> None:
        dumped = load_config("default").model_dump()

        assert isinstance(dumped["weights"], dict)
        assert dumped["weights"][FeatureCategory.SECRETS] == 12


class TestLoadConfig:
    def test_default_profile(self) -> None:
        config = load_config()

        assert config == load_config("default")
        assert config.weights[FeatureCategory.UNMIGRATABLE] == 30
        assert config.weights[FeatureCategory.MACOS_RUNNERS] == 25

    def test_legacy_profile(self) -> None:
        config = load_config("legacy")

        assert config.version == "1"
        assert config.weights[FeatureCategory.PACKAGES] == 9
        assert not config.features.separate_unmigratable_cohort

    def test_every_profile_is_valid(self) -> None:
        for name in PROFILES:
            assert load_config(name).weights

    def test_json_file(self, tmp_path) -> None:
        path = tmp_path / "weights.json"
        path.write_text(
            json.dumps(
                {
                    "version": "custom-1",
                    "weights": zero_weights(APP_INSTALLATIONS=7),
                    "thresholds": {"clean_max": 1, "low_max": 5, "medium_max": 8},
                    "features": {"separate_codespace_cohort": False},
                }
            )
        )

        config = load_config(path)

        assert config.version == "custom-1"
        assert config.weights[FeatureCategory.APP_INSTALLATIONS] == 7
        assert config.thresholds.low_max == 5
        assert not config.features.separate_codespace_cohort
        assert config.features.separate_maven_cohort

    def test_json_path_as_string(self, tmp_path) -> None:
        path = tmp_path / "weights.json"
        path.write_text(json.dumps({"weights": zero_weights()}))

        assert load_config(str(path)).version == "1"

    def test_unknown_profile(self) -> None:
        with pytest.raises(ConfigurationError, match="Unknown configuration"):
            load_config("no-such-profile")

    def test_invalid_json(self, tmp_path) -> None:
        path = tmp_path / "broken.json"
        path.write_text("{not json")

        with pytest.raises(ConfigurationError, match="Could not read"):
            load_config(path)

    def test_json_must_be_object(self, tmp_path) -> None:
        path = tmp_path / "list.json"
        path.write_text("[1, 2, 3]")

        with pytest.raises(ConfigurationError, match="JSON object"):
            load_config(path)

    def test_incomplete_file_fails_at_load(self, tmp_path) -> None:
        path = tmp_path / "partial.json"
        path.write_text(json.dumps({"weights": {"APP_INSTALLATIONS": 10}}))

        with pytest.raises(ConfigurationError, match="Missing weights"):
            load_config(path)
