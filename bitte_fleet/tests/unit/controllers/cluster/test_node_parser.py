"""Tests for node parser."""

from __future__ import annotations

import ipaddress

import pytest

from bitte_fleet.controllers.cluster.parsers.node_parser import NodeParser


@pytest.fixture
def parser() -> NodeParser:
    """Create NodeParser instance."""
    return NodeParser()


class TestNodeParser:
    """Tests for NodeParser class."""

    def test_parse_instance(self, parser: NodeParser) -> None:
        """Test parsing a tagged running instance."""
        node = parser.parse_instance(
            {
                "InstanceId": "i-0123",
                "PrivateIpAddress": "10.0.0.1",
                "PublicIpAddress": "3.3.3.1",
                "Tags": [
                    {"Key": "Name", "Value": "core-1"},
                    {"Key": "UID", "Value": "nixos-uid"},
                    {"Key": "Cluster", "Value": "testnet"},
                ],
            }
        )

        assert node.id == "i-0123"
        assert node.name == "core-1"
        assert node.priv_ip == ipaddress.ip_address("10.0.0.1")
        assert node.pub_ip == ipaddress.ip_address("3.3.3.1")
        assert node.nixos == "nixos-uid"
        assert node.nomad_client is None

    def test_missing_tags_and_public_ip(self, parser: NodeParser) -> None:
        """Untagged instances have empty names and an unspecified public IP."""
        node = parser.parse_instance(
            {"InstanceId": "i-0456", "PrivateIpAddress": "10.0.0.2"}
        )

        assert node.name == ""
        assert node.nixos == ""
        assert str(node.pub_ip) == "0.0.0.0"

    def test_invalid_ip_falls_back(self, parser: NodeParser) -> None:
        """Unparseable addresses are replaced by the unspecified address."""
        node = parser.parse_instance(
            {"InstanceId": "i-1", "PrivateIpAddress": "not-an-ip"}
        )
        assert str(node.priv_ip) == "0.0.0.0"

    def test_get_tag_value_default(self, parser: NodeParser) -> None:
        """Missing tags return the default."""
        assert parser._get_tag_value([], "Name", "fallback") == "fallback"
