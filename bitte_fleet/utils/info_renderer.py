"""Cluster info rendering - node table for a snapshot."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from bitte_fleet.models.core.cluster_snapshot import ClusterSnapshot
from bitte_fleet.models.core.node_info import Node

_NO_VALUE = "-"


def _node_row(node: Node) -> tuple[str, ...]:
    client = node.nomad_client
    client_id = str(client.id) if client is not None else _NO_VALUE
    alloc_count = (
        str(len(client.allocs or [])) if client is not None else _NO_VALUE
    )
    return (
        escape(node.name) or _NO_VALUE,
        escape(node.id),
        str(node.priv_ip),
        str(node.pub_ip),
        client_id,
        alloc_count,
    )


def build_nodes_table(snapshot: ClusterSnapshot) -> Table:
    """Build a table with one row per node, sorted by name then id."""
    table = Table(
        title=f"{escape(snapshot.name)} ({escape(snapshot.domain)})",
        caption=f"valid until {snapshot.ttl.isoformat()}",
    )
    table.add_column("Name", style="bold")
    table.add_column("Instance")
    table.add_column("Private IP")
    table.add_column("Public IP")
    table.add_column("Nomad Client")
    table.add_column("Allocs", justify="right")

    for node in sorted(snapshot.nodes, key=lambda n: (n.name, n.id)):
        table.add_row(*_node_row(node))
    return table


def print_cluster_info(snapshot: ClusterSnapshot, console: Console | None = None) -> None:
    """Print the node table of ``snapshot``."""
    (console or Console()).print(build_nodes_table(snapshot))


__all__ = [
    "build_nodes_table",
    "print_cluster_info",
]
