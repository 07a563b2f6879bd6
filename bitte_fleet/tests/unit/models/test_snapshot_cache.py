"""Tests for the on-disk snapshot cache."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from pathlib import Path
from unittest.mock import patch

import pytest

from bitte_fleet.constants.enums import Provider
from bitte_fleet.models.cache.snapshot_cache import SnapshotCache
from bitte_fleet.models.core.cluster_snapshot import ClusterSnapshot
from bitte_fleet.models.core.node_info import Allocation, Node, NomadClient

NOW = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)


def _snapshot(ttl: datetime) -> ClusterSnapshot:
    alloc = Allocation(
        id="alloc-1",
        job_id="web",
        namespace="default",
        task_group="api",
        status="running",
        index=2,
        node_id="abc",
    )
    return ClusterSnapshot(
        name="testnet",
        domain="testnet.example.com",
        provider=Provider.AWS,
        s3_cache="s3://cache",
        nodes=(
            Node(
                id="i-1",
                name="client-0",
                priv_ip="10.0.0.1",
                pub_ip="3.3.3.1",
                nomad_client=NomadClient(id="abc", address="10.0.0.1", allocs=[alloc]),
            ),
            Node(id="i-2", name="core-1", priv_ip="10.0.0.2", pub_ip="0.0.0.0"),
        ),
        ttl=ttl,
    )


@pytest.fixture
def cache(tmp_path: Path) -> SnapshotCache:
    """Create a cache in a temporary directory."""
    return SnapshotCache(tmp_path / ".cache.json")


class TestSnapshotCache:
    """Tests for SnapshotCache class."""

    def test_missing_file_is_a_miss(self, cache: SnapshotCache) -> None:
        """No file means no snapshot."""
        assert cache.load() is None
        assert cache.get_if_fresh(NOW) is None

    def test_save_then_load(self, cache: SnapshotCache) -> None:
        """A saved snapshot is reloaded with the same nodes."""
        snapshot = _snapshot(NOW + timedelta(minutes=5))

        assert cache.save(snapshot) is True
        loaded = cache.get_if_fresh(NOW)

        assert loaded is not None
        assert loaded.nodes == snapshot.nodes
        assert loaded.ttl == snapshot.ttl
        assert loaded.nomad_api_client is None
        assert loaded.nodes[0].nomad_client.allocs[0].index == 2

    def test_expired_is_a_miss(self, cache: SnapshotCache) -> None:
        """Expired snapshots are loaded but not returned as fresh."""
        cache.save(_snapshot(NOW - timedelta(seconds=1)))

        assert cache.load() is not None
        assert cache.get_if_fresh(NOW) is None

    def test_expiry_boundary_is_a_miss(self, cache: SnapshotCache) -> None:
        """A snapshot expiring exactly now is stale."""
        cache.save(_snapshot(NOW))
        assert cache.get_if_fresh(NOW) is None

    def test_corrupt_json_is_a_miss(self, cache: SnapshotCache) -> None:
        """Unparseable content is discarded."""
        cache.path.write_text("{not json")
        assert cache.load() is None

    def test_schema_mismatch_is_a_miss(self, cache: SnapshotCache) -> None:
        """Valid JSON of the wrong shape is discarded."""
        cache.path.write_text('{"name": "testnet"}')
        assert cache.load() is None

    def test_save_failure_returns_false(self, tmp_path: Path) -> None:
        """Writes into a missing directory fail without raising."""
        cache = SnapshotCache(tmp_path / "missing" / ".cache.json")
        assert cache.save(_snapshot(NOW)) is False

    def test_save_permission_error(self, cache: SnapshotCache) -> None:
        """OS errors on write are reported, not raised."""
        with patch.object(Path, "write_text", side_effect=PermissionError("denied")):
            assert cache.save(_snapshot(NOW)) is False


class TestClusterSnapshot:
    """Tests for ClusterSnapshot expiry."""

    def test_naive_ttl_treated_as_utc(self) -> None:
        """Naive expiry timestamps compare as UTC."""
        snapshot = _snapshot(datetime(2026, 1, 1, 12, 5))
        assert snapshot.is_expired(NOW) is False
        assert snapshot.is_expired(NOW + timedelta(minutes=5)) is True

    def test_naive_now_treated_as_utc(self) -> None:
        """Naive clocks compare against an aware expiry as UTC."""
        snapshot = _snapshot(NOW + timedelta(minutes=5))
        naive_now = NOW.replace(tzinfo=None)

        assert snapshot.is_expired(naive_now) is False
        assert snapshot.is_expired(naive_now + timedelta(minutes=5)) is True


class TestSnapshotCacheNaiveClock:
    """Tests for SnapshotCache freshness with a naive clock."""

    def test_get_if_fresh_with_naive_now(self, cache: SnapshotCache) -> None:
        """Naive timestamps decide freshness instead of raising."""
        cache.save(_snapshot(NOW + timedelta(minutes=5)))
        naive_now = NOW.replace(tzinfo=None)

        assert cache.get_if_fresh(naive_now) is not None
        assert cache.get_if_fresh(naive_now + timedelta(minutes=6)) is None
