"""Init file for cluster module."""

from bitte_fleet.controllers.cluster.errors import (
    InstanceNotFoundError,
    NodeNotFoundError,
    NotFoundError,
    SourceFetchError,
)
from bitte_fleet.controllers.cluster.fetchers import (
    Ec2Fetcher,
    NomadFetcher,
    TerraformFetcher,
    VaultFetcher,
)
from bitte_fleet.controllers.cluster.parsers import NodeParser
from bitte_fleet.controllers.cluster.resolvers import InstanceResolver, NodeResolver

__all__ = [
    "Ec2Fetcher",
    "InstanceNotFoundError",
    "InstanceResolver",
    "NodeNotFoundError",
    "NodeParser",
    "NodeResolver",
    "NomadFetcher",
    "NotFoundError",
    "SourceFetchError",
    "TerraformFetcher",
    "VaultFetcher",
]
