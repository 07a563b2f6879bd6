"""Vault fetcher - obtains a Nomad token when none is configured."""

from __future__ import annotations

import logging

import httpx

from bitte_fleet.constants.values import VAULT_TOKEN_HEADER
from bitte_fleet.controllers.cluster.errors import SourceFetchError
from bitte_fleet.models.state.cluster_settings import ConfigError

logger = logging.getLogger(__name__)


class VaultFetcher:
    """Reads Nomad credentials from Vault's Nomad secrets engine."""

    _SOURCE = "vault"

    def __init__(
        self,
        client: httpx.AsyncClient,
        vault_addr: str | None,
        vault_token: str | None,
    ) -> None:
        self._client = client
        self._vault_addr = vault_addr.rstrip("/") if vault_addr else None
        self._vault_token = vault_token

    async def fetch_nomad_token(self, role: str) -> str:
        """Read ``nomad/creds/<role>`` and return its secret id.

        Raises:
            ConfigError: If no Vault address or token is configured.
            SourceFetchError: If Vault cannot be reached or denies the read.
        """
        if not self._vault_addr:
            raise ConfigError("VAULT_ADDR must be set when NOMAD_TOKEN is not")
        if not self._vault_token:
            raise ConfigError("No Vault token found; run `vault login`")

        url = f"{self._vault_addr}/v1/nomad/creds/{role}"
        logger.debug("GET %s", url)
        try:
            response = await self._client.get(
                url, headers={VAULT_TOKEN_HEADER: self._vault_token}
            )
            response.raise_for_status()
            token = response.json()["data"]["secret_id"]
        except httpx.HTTPStatusError as exc:
            raise SourceFetchError(
                self._SOURCE, f"HTTP {exc.response.status_code} from {url}"
            ) from exc
        except httpx.HTTPError as exc:
            raise SourceFetchError(self._SOURCE, f"request to {url} failed: {exc}") from exc
        except (ValueError, KeyError, TypeError) as exc:
            raise SourceFetchError(self._SOURCE, f"no secret_id in response from {url}") from exc

        logger.info("Obtained Nomad token from Vault role %s", role)
        return token
