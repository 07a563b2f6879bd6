"""Tests for node, client and allocation models."""

from __future__ import annotations

import ipaddress

import pytest
from pydantic import ValidationError

from bitte_fleet.models.core.node_info import Allocation, Node, NomadClient


def _alloc_payload(**overrides: object) -> dict[str, object]:
    payload: dict[str, object] = {
        "ID": "5f2a4b2e-0000-4000-8000-000000000001",
        "JobID": "web",
        "Namespace": "default",
        "TaskGroup": "api",
        "ClientStatus": "running",
        "Name": "web.api[2]",
        "NodeID": "abc",
    }
    payload.update(overrides)
    return payload


class TestAllocation:
    """Tests for Allocation model."""

    def test_from_nomad_payload_normalizes_name(self) -> None:
        """The index is decoded from the allocation name."""
        alloc = Allocation.model_validate(_alloc_payload())

        assert alloc.index == 2
        assert alloc.node_id == "abc"
        assert alloc.task_group == "api"
        assert alloc.status == "running"

    def test_integer_index(self) -> None:
        """An integer Index is accepted as-is."""
        payload = _alloc_payload()
        del payload["Name"]
        payload["Index"] = 7

        assert Allocation.model_validate(payload).index == 7

    def test_malformed_index_fails(self) -> None:
        """A name without a bracketed index fails validation."""
        with pytest.raises(ValidationError):
            Allocation.model_validate(_alloc_payload(Name="web.api"))

    def test_dump_and_reload_by_field_name(self) -> None:
        """Cached form (field names, integer index) reloads unchanged."""
        alloc = Allocation.model_validate(_alloc_payload())
        dumped = alloc.model_dump()

        assert dumped["index"] == 2
        assert Allocation.model_validate(dumped) == alloc


class TestNomadClient:
    """Tests for NomadClient model."""

    def test_parses_address(self) -> None:
        """Address is parsed as an IP address."""
        client = NomadClient.model_validate({"ID": "abc", "Address": "10.0.0.1"})
        assert client.address == ipaddress.ip_address("10.0.0.1")
        assert client.allocs is None

    def test_empty_address_is_none(self) -> None:
        """An empty Address means the client has no address."""
        client = NomadClient.model_validate({"ID": "abc", "Address": ""})
        assert client.address is None

    def test_ignores_unknown_fields(self) -> None:
        """Extra Nomad node fields are ignored."""
        client = NomadClient.model_validate(
            {"ID": "abc", "Address": "10.0.0.1", "Datacenter": "dc1", "Status": "ready"}
        )
        assert client.id == "abc"


class TestNode:
    """Tests for Node model."""

    def test_node_is_frozen(self) -> None:
        """Nodes cannot be mutated after construction."""
        node = Node(id="i-1", priv_ip="10.0.0.1", pub_ip="0.0.0.0")
        with pytest.raises(ValidationError):
            node.name = "changed"

    def test_defaults(self) -> None:
        """Name and client default to empty."""
        node = Node(id="i-1", priv_ip="10.0.0.1", pub_ip="0.0.0.0")
        assert node.name == ""
        assert node.nomad_client is None
