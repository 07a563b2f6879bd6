"""On-disk snapshot cache implementation."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path

from pydantic import ValidationError

from bitte_fleet.constants.defaults import CACHE_PATH_DEFAULT
from bitte_fleet.models.core.cluster_snapshot import ClusterSnapshot

logger = logging.getLogger(__name__)


class SnapshotCache:
    """Single-file cache for a serialized ClusterSnapshot.

    The expiry travels inside the record (``ClusterSnapshot.ttl``), so
    freshness is decided by the reader, not by file timestamps.

    Every failure (missing file, unreadable file, corrupt JSON, schema
    mismatch, failed write) is reported as a miss or a failed save and never
    raised. The file is read once and written once per build; there is no
    locking.
    """

    def __init__(self, path: str | Path = CACHE_PATH_DEFAULT) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> ClusterSnapshot | None:
        """Load the cached snapshot, or None when missing or corrupt.

        Expired records are returned as-is; use ``get_if_fresh`` to apply
        the expiry.
        """
        try:
            raw = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.debug(f"No snapshot cache at {self._path}")
            return None
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning(f"Failed to read snapshot cache {self._path}: {exc}")
            return None

        try:
            return ClusterSnapshot.model_validate_json(raw)
        except ValidationError as exc:
            logger.warning(
                f"Discarding corrupt snapshot cache {self._path}: "
                f"{exc.error_count()} validation error(s)"
            )
            return None

    def get_if_fresh(self, now: datetime | None = None) -> ClusterSnapshot | None:
        """Load the cached snapshot only if its expiry is in the future."""
        snapshot = self.load()
        if snapshot is None:
            return None
        current = now or datetime.now(timezone.utc)
        if snapshot.is_expired(current):
            logger.debug(f"Snapshot cache expired at {snapshot.ttl.isoformat()}")
            return None
        return snapshot

    def save(self, snapshot: ClusterSnapshot) -> bool:
        """Persist ``snapshot``; returns False (and logs) on failure."""
        try:
            self._path.write_text(snapshot.model_dump_json(), encoding="utf-8")
        except (OSError, ValueError) as exc:
            logger.warning(f"Failed to write snapshot cache {self._path}: {exc}")
            return False
        logger.debug(f"Wrote snapshot cache {self._path}")
        return True


__all__ = [
    "SnapshotCache",
]
