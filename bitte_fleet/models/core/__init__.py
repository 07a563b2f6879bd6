"""Core fleet models."""

from bitte_fleet.models.core.cluster_snapshot import ClusterSnapshot
from bitte_fleet.models.core.declared_state import (
    DeclaredAsg,
    DeclaredInstance,
    DeclaredStateValue,
)
from bitte_fleet.models.core.node_info import Allocation, Instance, Node, NomadClient
from bitte_fleet.models.core.nomad_info import (
    NomadDeployment,
    NomadDeploymentStatus,
    NomadEvaluation,
)

__all__ = [
    "Allocation",
    "ClusterSnapshot",
    "DeclaredAsg",
    "DeclaredInstance",
    "DeclaredStateValue",
    "Instance",
    "Node",
    "NomadClient",
    "NomadDeployment",
    "NomadDeploymentStatus",
    "NomadEvaluation",
]
