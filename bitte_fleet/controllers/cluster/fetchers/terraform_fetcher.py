"""Terraform fetcher - reads the declared cluster state from Terraform Cloud."""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from bitte_fleet.constants.values import CLUSTER_OUTPUT_NAME
from bitte_fleet.controllers.cluster.errors import SourceFetchError
from bitte_fleet.models.core.declared_state import DeclaredStateValue

logger = logging.getLogger(__name__)


class TerraformFetcher:
    """Fetches workspace state outputs from the Terraform Cloud API.

    Only reads are performed: resolving a workspace id, finding the
    ``cluster`` output of the current state version, and reading its value.
    """

    _API_PREFIX = "/api/v2"

    def __init__(
        self,
        client: httpx.AsyncClient,
        organization: str,
        cluster: str,
    ) -> None:
        """Initialize with an authenticated client.

        Args:
            client: AsyncClient with base_url ``https://<host>`` and the bearer
                token header set
            organization: Terraform Cloud organization
            cluster: Cluster name, the workspace prefix
        """
        self._client = client
        self._organization = organization
        self._cluster = cluster

    async def _get_data(self, source: str, path: str) -> Any:
        url = f"{self._API_PREFIX}{path}"
        logger.debug("GET %s", url)
        try:
            response = await self._client.get(url)
            response.raise_for_status()
            return response.json()["data"]
        except httpx.HTTPStatusError as exc:
            raise SourceFetchError(
                source, f"HTTP {exc.response.status_code} from {url}"
            ) from exc
        except httpx.HTTPError as exc:
            raise SourceFetchError(source, f"request to {url} failed: {exc}") from exc
        except (ValueError, KeyError, TypeError) as exc:
            raise SourceFetchError(source, f"unexpected response from {url}") from exc

    async def workspace_id(self, workspace: str, source: str = "terraform") -> str:
        """Resolve a workspace id from organization and workspace name."""
        data = await self._get_data(
            source, f"/organizations/{self._organization}/workspaces/{workspace}"
        )
        try:
            return data["id"]
        except (KeyError, TypeError) as exc:
            raise SourceFetchError(source, f"workspace {workspace} has no id") from exc

    async def current_state_version(
        self, workspace_id: str, source: str = "terraform"
    ) -> str:
        """Return the id of the ``cluster`` output of the current state version."""
        outputs = await self._get_data(
            source, f"/workspaces/{workspace_id}/current-state-version-outputs"
        )
        for output in outputs or []:
            attributes = output.get("attributes", {})
            if attributes.get("name") == CLUSTER_OUTPUT_NAME:
                return output["id"]
        raise SourceFetchError(
            source,
            f"workspace {workspace_id} has no '{CLUSTER_OUTPUT_NAME}' output",
        )

    async def current_state_version_output(
        self, output_id: str, source: str = "terraform"
    ) -> DeclaredStateValue:
        """Fetch and decode the value of a state version output."""
        data = await self._get_data(source, f"/state-version-outputs/{output_id}")
        try:
            return DeclaredStateValue.model_validate(data["attributes"]["value"])
        except (KeyError, TypeError) as exc:
            raise SourceFetchError(source, f"output {output_id} has no value") from exc
        except ValidationError as exc:
            raise SourceFetchError(
                source, f"output {output_id} is not a cluster state: {exc}"
            ) from exc

    async def fetch_output(self, suffix: str) -> DeclaredStateValue:
        """Fetch the declared cluster state of workspace ``<cluster>_<suffix>``."""
        source = f"terraform_{suffix}"
        workspace = f"{self._cluster}_{suffix}"
        workspace_id = await self.workspace_id(workspace, source)
        output_id = await self.current_state_version(workspace_id, source)
        state = await self.current_state_version_output(output_id, source)
        logger.debug(
            "Fetched declared state for %s: %d instances, %d asgs",
            workspace,
            len(state.instances),
            len(state.asgs),
        )
        return state
