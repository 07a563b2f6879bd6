"""Node parser for cluster controller - parses EC2 instances into nodes."""

from __future__ import annotations

import ipaddress
from typing import Any

from bitte_fleet.constants.values import NAME_TAG, NO_IP, UID_TAG
from bitte_fleet.models.core.node_info import Node


class NodeParser:
    """Parses raw EC2 instance dictionaries into Node records."""

    def _get_tag_value(self, tags: list[dict[str, Any]], key: str, default: str = "") -> str:
        """Extract a tag value from an EC2 ``Tags`` list."""
        for tag in tags:
            if tag.get("Key") == key:
                return tag.get("Value") or default
        return default

    @staticmethod
    def _parse_ip(value: Any) -> str:
        """Return ``value`` if it is a valid IP address, else ``0.0.0.0``."""
        if not value:
            return NO_IP
        try:
            return str(ipaddress.ip_address(value))
        except ValueError:
            return NO_IP

    def parse_instance(self, instance: dict[str, Any]) -> Node:
        """Parse a single EC2 instance into a Node without Nomad data.

        Args:
            instance: Raw instance dictionary from ``describe_instances``

        Returns:
            Node object. The name may be empty when the instance has no
            ``Name`` tag.
        """
        tags = instance.get("Tags") or []
        return Node(
            id=instance.get("InstanceId", ""),
            name=self._get_tag_value(tags, NAME_TAG),
            priv_ip=self._parse_ip(instance.get("PrivateIpAddress")),
            pub_ip=self._parse_ip(instance.get("PublicIpAddress")),
            nixos=self._get_tag_value(tags, UID_TAG),
        )
