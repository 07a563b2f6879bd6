"""Nomad fetcher for cluster controller - fetches client nodes and allocations."""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import TypeAdapter, ValidationError

from bitte_fleet.constants.enums import FetchSources
from bitte_fleet.controllers.cluster.errors import SourceFetchError
from bitte_fleet.models.core.node_info import Allocation, NomadClient
from bitte_fleet.models.core.nomad_info import NomadDeployment, NomadEvaluation

logger = logging.getLogger(__name__)

_ALLOCATIONS = TypeAdapter(list[Allocation])
_CLIENTS = TypeAdapter(list[NomadClient])


class NomadFetcher:
    """Fetches orchestrator state from the Nomad HTTP API."""

    _ALLOCATIONS_PARAMS = {"namespace": "*", "task_states": "false"}

    def __init__(self, client: httpx.AsyncClient, base_url: str) -> None:
        """Initialize with a shared HTTP client.

        Args:
            client: AsyncClient carrying the ``X-Nomad-Token`` header
            base_url: Nomad address, e.g. ``https://nomad.example.com``
        """
        self._client = client
        self._base_url = base_url.rstrip("/")

    async def _get_json(
        self, source: str, path: str, params: dict[str, str] | None = None
    ) -> Any:
        url = f"{self._base_url}{path}"
        logger.debug("GET %s", url)
        try:
            response = await self._client.get(url, params=params)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as exc:
            raise SourceFetchError(
                source, f"HTTP {exc.response.status_code} from {url}"
            ) from exc
        except httpx.HTTPError as exc:
            raise SourceFetchError(source, f"request to {url} failed: {exc}") from exc
        except ValueError as exc:
            raise SourceFetchError(source, f"invalid JSON from {url}") from exc

    async def fetch_allocations(self) -> list[Allocation]:
        """Fetch all allocations across namespaces.

        Raises:
            SourceFetchError: On transport errors or when any allocation,
                including its index, fails to decode.
        """
        source = FetchSources.NOMAD_ALLOCATIONS.value
        payload = await self._get_json(
            source, "/v1/allocations", params=self._ALLOCATIONS_PARAMS
        )
        try:
            return _ALLOCATIONS.validate_python(payload)
        except ValidationError as exc:
            raise SourceFetchError(source, f"malformed allocation: {exc}") from exc

    async def fetch_nodes(self) -> list[NomadClient]:
        """Fetch all Nomad client nodes."""
        source = FetchSources.NOMAD_NODES.value
        payload = await self._get_json(source, "/v1/nodes")
        try:
            return _CLIENTS.validate_python(payload)
        except ValidationError as exc:
            raise SourceFetchError(source, f"malformed node: {exc}") from exc

    async def fetch_evaluation(self, eval_id: str) -> NomadEvaluation:
        """Fetch a single evaluation by id."""
        payload = await self._get_json("nomad_evaluation", f"/v1/evaluation/{eval_id}")
        try:
            return NomadEvaluation.model_validate(payload)
        except ValidationError as exc:
            raise SourceFetchError("nomad_evaluation", str(exc)) from exc

    async def fetch_deployment(self, deployment_id: str) -> NomadDeployment:
        """Fetch a single deployment by id."""
        payload = await self._get_json(
            "nomad_deployment", f"/v1/deployment/{deployment_id}"
        )
        try:
            return NomadDeployment.model_validate(payload)
        except ValidationError as exc:
            raise SourceFetchError("nomad_deployment", str(exc)) from exc
