"""State and settings models."""

from bitte_fleet.models.state.cluster_settings import (
    ClusterSettings,
    ConfigError,
    ConfigLoadError,
)

__all__ = [
    "ClusterSettings",
    "ConfigError",
    "ConfigLoadError",
]
