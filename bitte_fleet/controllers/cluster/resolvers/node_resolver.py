"""Node resolver - finds snapshot nodes by id, name, Nomad client id or address."""

from __future__ import annotations

import ipaddress
from collections.abc import Iterable
from ipaddress import IPv4Address, IPv6Address

from bitte_fleet.controllers.cluster.errors import NodeNotFoundError
from bitte_fleet.models.core.node_info import Node


def _parse_ip(needle: str) -> IPv4Address | IPv6Address | None:
    try:
        return ipaddress.ip_address(needle)
    except ValueError:
        return None


def _identifiers(node: Node) -> set[str]:
    identifiers = {node.id, node.name}
    if node.nomad_client is not None:
        identifiers.add(str(node.nomad_client.id))
    return identifiers


class NodeResolver:
    """Resolves user-supplied needles against a node collection.

    A needle matches a node when it equals the node's id, name or Nomad
    client id, or parses as an IP address equal to its private or public
    address.
    """

    __slots__ = ("_nodes",)

    def __init__(self, nodes: Iterable[Node]) -> None:
        self._nodes = tuple(nodes)

    @staticmethod
    def _matches(node: Node, needles: set[str], ips: set[IPv4Address | IPv6Address]) -> bool:
        if _identifiers(node) & needles:
            return True
        return node.priv_ip in ips or node.pub_ip in ips

    def find_one(self, needle: str) -> Node:
        """Return the first node matching ``needle``.

        Raises:
            NodeNotFoundError: If no node matches.
        """
        ip = _parse_ip(needle)
        ips = {ip} if ip is not None else set()
        for node in self._nodes:
            if self._matches(node, {needle} - {""}, ips):
                return node
        raise NodeNotFoundError(needle)

    def find_many(self, needles: Iterable[str]) -> list[Node]:
        """Return every node matching any of ``needles``, in snapshot order."""
        needle_set = {needle for needle in needles if needle}
        ips = {ip for ip in map(_parse_ip, needle_set) if ip is not None}
        return [node for node in self._nodes if self._matches(node, needle_set, ips)]
