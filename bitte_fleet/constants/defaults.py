"""Default values for cluster settings."""

from typing import Final

# ============================================================================
# Snapshot cache defaults
# ============================================================================

SNAPSHOT_TTL_SECONDS_DEFAULT: Final = 300
CACHE_PATH_DEFAULT: Final = ".cache.json"

# ============================================================================
# Credential defaults
# ============================================================================

TERRAFORM_HOST_DEFAULT: Final = "app.terraform.io"
TERRAFORM_CREDENTIALS_PATH_DEFAULT: Final = "~/.terraform.d/credentials.tfrc.json"
VAULT_TOKEN_PATH_DEFAULT: Final = "~/.vault-token"
NOMAD_ROLE_DEFAULT: Final = "developer"

__all__ = [
    "CACHE_PATH_DEFAULT",
    "NOMAD_ROLE_DEFAULT",
    "SNAPSHOT_TTL_SECONDS_DEFAULT",
    "TERRAFORM_CREDENTIALS_PATH_DEFAULT",
    "TERRAFORM_HOST_DEFAULT",
    "VAULT_TOKEN_PATH_DEFAULT",
]
