"""Resolvers turning user-supplied needles into nodes and instances."""

from bitte_fleet.controllers.cluster.resolvers.instance_resolver import InstanceResolver
from bitte_fleet.controllers.cluster.resolvers.node_resolver import NodeResolver

__all__ = ["InstanceResolver", "NodeResolver"]
