"""All enum definitions for bitte_fleet."""

from enum import Enum

# =============================================================================
# Provider Enums
# =============================================================================

class Provider(str, Enum):
    """Cloud providers a cluster can run on."""

    AWS = "AWS"


# =============================================================================
# Fetch State Enums
# =============================================================================

class FetchState(Enum):
    """Data fetch state values."""

    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


class FetchSources(Enum):
    """Data source identifiers."""

    NOMAD_ALLOCATIONS = "nomad_allocations"
    NOMAD_NODES = "nomad_nodes"
    TERRAFORM_CLIENTS = "terraform_clients"
    TERRAFORM_CORE = "terraform_core"
    DECLARED_STATE = "declared_state"


class MatchMode(str, Enum):
    """How instance needles are compared against live instance fields."""

    CONTAINS = "contains"
    EXACT = "exact"
