"""Cluster snapshot model."""

from __future__ import annotations

from datetime import datetime, timezone

import httpx
from pydantic import BaseModel, ConfigDict, Field

from bitte_fleet.constants.enums import Provider
from bitte_fleet.models.core.node_info import Node


def _as_utc(value: datetime) -> datetime:
    """Read naive datetimes as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class ClusterSnapshot(BaseModel):
    """Immutable, time-bounded view of a cluster's nodes.

    ``ttl`` is the absolute expiry (UTC). ``nomad_api_client`` is the shared
    HTTP client used to build the snapshot; it is never serialized, so a
    snapshot reloaded from the cache carries ``None``.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str
    domain: str
    provider: Provider
    s3_cache: str
    nodes: tuple[Node, ...] = ()
    ttl: datetime
    nomad_api_client: httpx.AsyncClient | None = Field(
        default=None, exclude=True, repr=False
    )

    def is_expired(self, now: datetime | None = None) -> bool:
        """True when ``ttl`` is not in the future."""
        current = _as_utc(now or datetime.now(timezone.utc))
        return _as_utc(self.ttl) <= current
