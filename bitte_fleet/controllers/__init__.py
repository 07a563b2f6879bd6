"""Controllers module for bitte_fleet.

This module provides the cluster controller that builds fleet snapshots from
Nomad, terraform and cloud inventory, plus the resolvers built on top of it.
"""

from __future__ import annotations

# Base classes
from bitte_fleet.controllers.base import BaseController, FetchStatus, SourceResult

# Cluster domain
from bitte_fleet.controllers.cluster.controller import ClusterController
from bitte_fleet.controllers.cluster.errors import (
    InstanceNotFoundError,
    NodeNotFoundError,
    NotFoundError,
    SourceFetchError,
)
from bitte_fleet.controllers.cluster.resolvers import InstanceResolver, NodeResolver

__all__ = [
    # Base
    "BaseController",
    "FetchStatus",
    "SourceResult",
    # Domain Controllers
    "ClusterController",
    # Errors
    "InstanceNotFoundError",
    "NodeNotFoundError",
    "NotFoundError",
    "SourceFetchError",
    # Resolvers
    "InstanceResolver",
    "NodeResolver",
]
