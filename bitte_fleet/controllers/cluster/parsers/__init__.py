"""Parsers for the cluster controller."""

from bitte_fleet.controllers.cluster.parsers.node_parser import NodeParser

__all__ = ["NodeParser"]
