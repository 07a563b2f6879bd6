"""Scalar constants for bitte_fleet.

Environment variable names, workspace names and remote endpoints.
"""

from typing import Final

# ============================================================================
# Environment variables
# ============================================================================

ENV_CLUSTER: Final = "BITTE_CLUSTER"
ENV_DOMAIN: Final = "BITTE_DOMAIN"
ENV_PROVIDER: Final = "BITTE_PROVIDER"
ENV_ASG_REGIONS: Final = "AWS_ASG_REGIONS"
ENV_DEFAULT_REGION: Final = "AWS_DEFAULT_REGION"
ENV_TERRAFORM_ORGANIZATION: Final = "TERRAFORM_ORGANIZATION"
ENV_NOMAD_TOKEN: Final = "NOMAD_TOKEN"
ENV_VAULT_ADDR: Final = "VAULT_ADDR"
ENV_VAULT_TOKEN: Final = "VAULT_TOKEN"

REGION_SEPARATOR: Final = ":"

# ============================================================================
# Declared state (terraform) workspaces
# ============================================================================

WORKSPACE_CLIENTS: Final = "clients"
WORKSPACE_CORE: Final = "core"
CLUSTER_OUTPUT_NAME: Final = "cluster"
TERRAFORM_CONTENT_TYPE: Final = "application/vnd.api+json"

# ============================================================================
# Cloud inventory
# ============================================================================

CLUSTER_TAG: Final = "Cluster"
NAME_TAG: Final = "Name"
UID_TAG: Final = "UID"
RUNNING_STATE: Final = "running"
NO_IP: Final = "0.0.0.0"

# ============================================================================
# Orchestrator
# ============================================================================

NOMAD_TOKEN_HEADER: Final = "X-Nomad-Token"
VAULT_TOKEN_HEADER: Final = "X-Vault-Token"

__all__ = [
    "CLUSTER_OUTPUT_NAME",
    "CLUSTER_TAG",
    "ENV_ASG_REGIONS",
    "ENV_CLUSTER",
    "ENV_DEFAULT_REGION",
    "ENV_DOMAIN",
    "ENV_NOMAD_TOKEN",
    "ENV_PROVIDER",
    "ENV_TERRAFORM_ORGANIZATION",
    "ENV_VAULT_ADDR",
    "ENV_VAULT_TOKEN",
    "NAME_TAG",
    "NOMAD_TOKEN_HEADER",
    "NO_IP",
    "REGION_SEPARATOR",
    "RUNNING_STATE",
    "TERRAFORM_CONTENT_TYPE",
    "UID_TAG",
    "VAULT_TOKEN_HEADER",
    "WORKSPACE_CLIENTS",
    "WORKSPACE_CORE",
]
