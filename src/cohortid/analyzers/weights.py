"""Migration weight calculation."""

from collections.abc import Mapping

from cohortid.analyzers.features import FeaturePresence, detect_features
from cohortid.models.schemas import WeightConfig


def compute_weight(record: Mapping[str, str], config: WeightConfig) -> int:
    """Calculate the migration weight of a repository record.

    Args:
        record: Raw repository fields as strings.
        config: Weight configuration.

    Returns:
        Sum of the configured weights of every present category.
    """
    return weight_for(detect_features(record), config)


def weight_for(presence: FeaturePresence, config: WeightConfig) -> int:
    """Sum configured weights over already-detected categories."""
    return sum(config.weights[category] for category in presence.categories)
