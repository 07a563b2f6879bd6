"""Cluster settings models."""

from __future__ import annotations

import os
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict

from bitte_fleet.constants.defaults import (
    CACHE_PATH_DEFAULT,
    NOMAD_ROLE_DEFAULT,
    SNAPSHOT_TTL_SECONDS_DEFAULT,
    TERRAFORM_CREDENTIALS_PATH_DEFAULT,
    TERRAFORM_HOST_DEFAULT,
    VAULT_TOKEN_PATH_DEFAULT,
)
from bitte_fleet.constants.enums import Provider
from bitte_fleet.constants.timeouts import HTTP_REQUEST_TIMEOUT, SOURCE_FETCH_TIMEOUT
from bitte_fleet.constants.values import (
    ENV_ASG_REGIONS,
    ENV_CLUSTER,
    ENV_DEFAULT_REGION,
    ENV_DOMAIN,
    ENV_NOMAD_TOKEN,
    ENV_PROVIDER,
    ENV_TERRAFORM_ORGANIZATION,
    ENV_VAULT_ADDR,
    ENV_VAULT_TOKEN,
    REGION_SEPARATOR,
)


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigLoadError(ConfigError):
    """Raised when a credentials or settings file fails to load."""


class ClusterSettings(BaseModel):
    """Cluster settings with validation, usually read from the environment."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    # Cluster identity
    cluster: str
    domain: str
    provider: Provider = Provider.AWS

    # AWS regions
    asg_regions: list[str] = []
    default_region: str | None = None

    # Declared state backend
    terraform_organization: str | None = None
    terraform_host: str = TERRAFORM_HOST_DEFAULT
    terraform_credentials_path: str = TERRAFORM_CREDENTIALS_PATH_DEFAULT

    # Orchestrator credentials
    nomad_token: str | None = None
    nomad_role: str = NOMAD_ROLE_DEFAULT
    vault_addr: str | None = None
    vault_token: str | None = None
    vault_token_path: str = VAULT_TOKEN_PATH_DEFAULT

    # Snapshot cache
    cache_path: str = CACHE_PATH_DEFAULT
    snapshot_ttl_seconds: int = SNAPSHOT_TTL_SECONDS_DEFAULT

    # Timeouts (seconds)
    source_fetch_timeout: float = SOURCE_FETCH_TIMEOUT
    http_timeout: float = HTTP_REQUEST_TIMEOUT

    @property
    def nomad_url(self) -> str:
        """Base URL of the cluster's Nomad API."""
        return f"https://nomad.{self.domain}"

    @property
    def regions(self) -> list[str]:
        """Distinct regions to query, ASG regions first, then the default region."""
        seen: list[str] = []
        for region in [*self.asg_regions, self.default_region]:
            if region and region not in seen:
                seen.append(region)
        return seen

    def require_terraform_organization(self) -> str:
        """Return the terraform organization or fail with a configuration error."""
        if not self.terraform_organization:
            raise ConfigError(
                f"{ENV_TERRAFORM_ORGANIZATION} environment variable must be set"
            )
        return self.terraform_organization

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ClusterSettings:
        """Build settings from environment variables.

        Raises:
            ConfigError: If a required variable is missing or invalid.
        """
        env = os.environ if environ is None else environ

        def required(name: str) -> str:
            value = env.get(name, "").strip()
            if not value:
                raise ConfigError(f"{name} environment variable must be set")
            return value

        cluster = required(ENV_CLUSTER)
        domain = required(ENV_DOMAIN)
        provider = parse_provider(required(ENV_PROVIDER))

        asg_regions: list[str] = []
        default_region: str | None = None
        if provider is Provider.AWS:
            asg_regions = [
                region.strip()
                for region in required(ENV_ASG_REGIONS).split(REGION_SEPARATOR)
                if region.strip()
            ]
            default_region = required(ENV_DEFAULT_REGION)

        return cls(
            cluster=cluster,
            domain=domain,
            provider=provider,
            asg_regions=asg_regions,
            default_region=default_region,
            terraform_organization=env.get(ENV_TERRAFORM_ORGANIZATION) or None,
            nomad_token=env.get(ENV_NOMAD_TOKEN) or None,
            vault_addr=env.get(ENV_VAULT_ADDR) or None,
            vault_token=env.get(ENV_VAULT_TOKEN) or None,
        )


def parse_provider(value: str) -> Provider:
    """Parse a provider name case-insensitively.

    Raises:
        ConfigError: If the provider is not supported.
    """
    normalized = value.strip().upper()
    for provider in Provider:
        if provider.value == normalized:
            return provider
    raise ConfigError(f"Unsupported provider: {value}")
