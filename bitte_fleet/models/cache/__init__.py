"""Cache models."""

from bitte_fleet.models.cache.snapshot_cache import SnapshotCache

__all__ = ["SnapshotCache"]
