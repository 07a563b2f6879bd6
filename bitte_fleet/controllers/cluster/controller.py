"""Cluster controller for fleet snapshot operations.

This module serves as the main orchestrator for cluster data operations: it
fans out to Nomad, terraform and the cloud provider concurrently, correlates
the results into nodes, and manages the on-disk snapshot cache.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from datetime import datetime, timedelta, timezone
from typing import Any

import httpx

from bitte_fleet.constants.enums import FetchSources, MatchMode, Provider
from bitte_fleet.constants.values import (
    NOMAD_TOKEN_HEADER,
    TERRAFORM_CONTENT_TYPE,
    WORKSPACE_CLIENTS,
    WORKSPACE_CORE,
)
from bitte_fleet.controllers.base import BaseController, SourceResult
from bitte_fleet.controllers.cluster.errors import SourceFetchError
from bitte_fleet.controllers.cluster.fetchers import (
    Ec2Fetcher,
    NomadFetcher,
    TerraformFetcher,
    VaultFetcher,
)
from bitte_fleet.controllers.cluster.parsers import NodeParser
from bitte_fleet.controllers.cluster.resolvers import InstanceResolver, NodeResolver
from bitte_fleet.models.cache.snapshot_cache import SnapshotCache
from bitte_fleet.models.core.cluster_snapshot import ClusterSnapshot
from bitte_fleet.models.core.declared_state import DeclaredStateValue
from bitte_fleet.models.core.node_info import Allocation, Instance, Node, NomadClient
from bitte_fleet.models.state.cluster_settings import ClusterSettings, ConfigError
from bitte_fleet.utils.credentials import load_terraform_token, load_vault_token

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ClusterController(BaseController):
    """Builds and caches cluster snapshots.

    Delegates to specialized fetchers:
    - NomadFetcher: allocations and client nodes
    - TerraformFetcher: declared state of the ``clients``/``core`` workspaces
    - Ec2Fetcher: running instances per region, autoscaling groups

    The Nomad token and HTTP clients are created once per controller and
    shared read-only by every concurrent fetch.
    """

    SOURCE_NOMAD_ALLOCATIONS = FetchSources.NOMAD_ALLOCATIONS.value
    SOURCE_NOMAD_NODES = FetchSources.NOMAD_NODES.value
    SOURCE_TERRAFORM_CLIENTS = FetchSources.TERRAFORM_CLIENTS.value
    SOURCE_TERRAFORM_CORE = FetchSources.TERRAFORM_CORE.value
    SOURCE_DECLARED_STATE = FetchSources.DECLARED_STATE.value

    def __init__(
        self,
        settings: ClusterSettings,
        *,
        cache: SnapshotCache | None = None,
        nomad_fetcher: NomadFetcher | None = None,
        terraform_fetcher: TerraformFetcher | None = None,
        ec2_fetcher: Ec2Fetcher | None = None,
        vault_fetcher: VaultFetcher | None = None,
        node_parser: NodeParser | None = None,
        now: Callable[[], datetime] = _utcnow,
    ) -> None:
        """Initialize the cluster controller.

        Args:
            settings: Cluster settings, usually ``ClusterSettings.from_env()``
            cache: Snapshot cache; defaults to ``settings.cache_path``
            nomad_fetcher: Pre-built Nomad fetcher (built lazily otherwise)
            terraform_fetcher: Pre-built terraform fetcher (built lazily otherwise)
            ec2_fetcher: Cloud inventory fetcher
            vault_fetcher: Fetcher used to obtain a Nomad token
            node_parser: Parser for cloud instances
            now: Clock returning an aware UTC datetime
        """
        super().__init__(source_timeout=settings.source_fetch_timeout)
        self.settings = settings
        self._cache = cache or SnapshotCache(settings.cache_path)
        self._nomad_fetcher = nomad_fetcher
        self._terraform_fetcher = terraform_fetcher
        self._ec2_fetcher = ec2_fetcher or Ec2Fetcher()
        self._vault_fetcher = vault_fetcher
        self._node_parser = node_parser or NodeParser()
        self._now = now

        self._nomad_token: str | None = settings.nomad_token
        self._nomad_api_client: httpx.AsyncClient | None = None
        self._owned_clients: list[httpx.AsyncClient] = []
        self._nonfatal_warnings: dict[str, str] = {}

    async def __aenter__(self) -> ClusterController:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close HTTP clients created by this controller."""
        while self._owned_clients:
            await self._owned_clients.pop().aclose()
        self._nomad_api_client = None

    def _new_http_client(self, **kwargs: Any) -> httpx.AsyncClient:
        client = httpx.AsyncClient(timeout=self.settings.http_timeout, **kwargs)
        self._owned_clients.append(client)
        return client

    # =========================================================================
    # Credentials and clients
    # =========================================================================

    async def nomad_token(self) -> str:
        """Return the Nomad token, asking Vault once if none is configured."""
        if self._nomad_token:
            return self._nomad_token

        if self._vault_fetcher is None:
            vault_token = self.settings.vault_token or load_vault_token(
                self.settings.vault_token_path
            )
            self._vault_fetcher = VaultFetcher(
                self._new_http_client(), self.settings.vault_addr, vault_token
            )
        self._nomad_token = await self._vault_fetcher.fetch_nomad_token(
            self.settings.nomad_role
        )
        return self._nomad_token

    async def nomad_api_client(self) -> httpx.AsyncClient:
        """Return the shared Nomad HTTP client, creating it on first use."""
        if self._nomad_api_client is None:
            token = await self.nomad_token()
            self._nomad_api_client = self._new_http_client(
                headers={NOMAD_TOKEN_HEADER: token}
            )
        return self._nomad_api_client

    async def _get_nomad_fetcher(self) -> NomadFetcher:
        if self._nomad_fetcher is None:
            self._nomad_fetcher = NomadFetcher(
                await self.nomad_api_client(), self.settings.nomad_url
            )
        return self._nomad_fetcher

    def _get_terraform_fetcher(self) -> TerraformFetcher:
        if self._terraform_fetcher is None:
            organization = self.settings.require_terraform_organization()
            token = load_terraform_token(
                self.settings.terraform_credentials_path, self.settings.terraform_host
            )
            client = self._new_http_client(
                base_url=f"https://{self.settings.terraform_host}",
                headers={
                    "Authorization": f"Bearer {token}",
                    "Content-Type": TERRAFORM_CONTENT_TYPE,
                },
            )
            self._terraform_fetcher = TerraformFetcher(
                client, organization, self.settings.cluster
            )
        return self._terraform_fetcher

    # =========================================================================
    # Source results
    # =========================================================================

    @staticmethod
    def _region_source(region: str) -> str:
        return f"ec2:{region}"

    @staticmethod
    def _require(results: dict[str, SourceResult], source: str) -> Any:
        """Return a source's data or raise its failure."""
        result = results[source]
        if result.success:
            return result.data
        error = result.error
        if isinstance(error, (SourceFetchError, ConfigError)):
            raise error
        raise SourceFetchError(source, str(error)) from error

    def _select_declared_state(
        self, clients: SourceResult, core: SourceResult
    ) -> DeclaredStateValue:
        """Prefer the ``clients`` workspace, fall back to ``core``.

        Raises:
            SourceFetchError: If neither workspace could be fetched.
        """
        if clients.success:
            return clients.data
        logger.warning(
            f"Couldn't fetch {WORKSPACE_CLIENTS} workspace ({clients.error}), "
            f"falling back to {WORKSPACE_CORE}"
        )
        self._record_nonfatal_warning(self.SOURCE_TERRAFORM_CLIENTS, clients.error)
        if core.success:
            return core.data
        raise SourceFetchError(
            self.SOURCE_DECLARED_STATE,
            f"Couldn't fetch {WORKSPACE_CLIENTS} or {WORKSPACE_CORE} workspaces "
            f"({clients.error}; {core.error})",
        ) from core.error

    def _record_nonfatal_warning(self, key: str, error: BaseException | str | None) -> None:
        """Store a warning that did not fail the build."""
        message = str(error).strip() if error is not None else ""
        self._nonfatal_warnings[str(key)] = message or "Unknown warning"

    def get_last_nonfatal_warnings(self) -> dict[str, str]:
        """Return warnings from the last build that did not fail it."""
        return dict(self._nonfatal_warnings)

    # =========================================================================
    # Correlation
    # =========================================================================

    def correlate_nodes(
        self,
        instances: Iterable[dict[str, Any]],
        clients: Iterable[NomadClient],
        allocs: Iterable[Allocation],
        state: DeclaredStateValue,
    ) -> list[Node]:
        """Join cloud instances with Nomad clients, allocations and declared names.

        - A client is attached when its address equals the node's private IP.
        - The client's allocations are those whose ``node_id`` is its id.
        - An empty node name is taken from the declared instance with the same
          private IP; a non-empty name is never replaced.
        """
        clients_by_address: dict[Any, NomadClient] = {}
        for client in clients:
            if client.address is not None:
                clients_by_address.setdefault(client.address, client)

        allocs_by_node: dict[Any, list[Allocation]] = {}
        for alloc in allocs:
            allocs_by_node.setdefault(alloc.node_id, []).append(alloc)

        nodes: list[Node] = []
        for instance in instances:
            node = self._node_parser.parse_instance(instance)
            updates: dict[str, Any] = {}

            client = clients_by_address.get(node.priv_ip)
            if client is not None:
                updates["nomad_client"] = client.model_copy(
                    update={"allocs": list(allocs_by_node.get(client.id, []))}
                )

            if not node.name:
                name = state.instance_name_for(str(node.priv_ip))
                if name:
                    updates["name"] = name

            nodes.append(node.model_copy(update=updates) if updates else node)
        return nodes

    # =========================================================================
    # Snapshot
    # =========================================================================

    async def fetch_declared_state(self) -> DeclaredStateValue:
        """Fetch declared state, preferring ``clients`` over ``core``."""
        terraform = self._get_terraform_fetcher()
        results = await self._gather_sources(
            {
                self.SOURCE_TERRAFORM_CLIENTS: terraform.fetch_output(WORKSPACE_CLIENTS),
                self.SOURCE_TERRAFORM_CORE: terraform.fetch_output(WORKSPACE_CORE),
            }
        )
        return self._select_declared_state(
            results[self.SOURCE_TERRAFORM_CLIENTS],
            results[self.SOURCE_TERRAFORM_CORE],
        )

    async def build_snapshot(self) -> ClusterSnapshot:
        """Fetch every source and build a fresh snapshot.

        All fetches run concurrently and are awaited before any failure is
        raised. Allocation, Nomad node and region failures are fatal; the
        declared state falls back from ``clients`` to ``core``. A failed cache
        write is logged and ignored.

        Raises:
            ConfigError: On missing configuration or credentials.
            SourceFetchError: When a required source cannot be fetched.
        """
        settings = self.settings
        if settings.provider is not Provider.AWS:
            raise ConfigError(f"Unsupported provider: {settings.provider.value}")
        regions = settings.regions
        if not regions:
            raise ConfigError("No AWS regions configured")

        self._nonfatal_warnings.clear()
        nomad = await self._get_nomad_fetcher()
        terraform = self._get_terraform_fetcher()

        logger.info(
            f"Building snapshot for {settings.cluster} across {len(regions)} region(s)"
        )
        fetches: dict[str, Any] = {
            self.SOURCE_NOMAD_ALLOCATIONS: nomad.fetch_allocations(),
            self.SOURCE_NOMAD_NODES: nomad.fetch_nodes(),
            self.SOURCE_TERRAFORM_CLIENTS: terraform.fetch_output(WORKSPACE_CLIENTS),
            self.SOURCE_TERRAFORM_CORE: terraform.fetch_output(WORKSPACE_CORE),
        }
        for region in regions:
            fetches[self._region_source(region)] = (
                self._ec2_fetcher.describe_running_instances(region, settings.cluster)
            )
        results = await self._gather_sources(fetches)

        try:
            allocs = self._require(results, self.SOURCE_NOMAD_ALLOCATIONS)
            clients = self._require(results, self.SOURCE_NOMAD_NODES)
            instances = [
                instance
                for region in regions
                for instance in self._require(results, self._region_source(region))
            ]
            state = self._select_declared_state(
                results[self.SOURCE_TERRAFORM_CLIENTS],
                results[self.SOURCE_TERRAFORM_CORE],
            )
        except SourceFetchError as exc:
            logger.error(f"Snapshot build failed: {exc}")
            raise

        nodes = self.correlate_nodes(instances, clients, allocs, state)
        snapshot = ClusterSnapshot(
            name=settings.cluster,
            domain=settings.domain,
            provider=settings.provider,
            s3_cache=state.s3_cache,
            nodes=tuple(nodes),
            ttl=self._now() + timedelta(seconds=settings.snapshot_ttl_seconds),
            nomad_api_client=self._nomad_api_client,
        )
        logger.info(f"Built snapshot with {len(nodes)} nodes")

        if not self._cache.save(snapshot):
            self._record_nonfatal_warning("cache", f"could not write {self._cache.path}")
        return snapshot

    async def load_or_build(self) -> ClusterSnapshot:
        """Return the cached snapshot if unexpired, otherwise build a new one.

        A missing, corrupt or expired cache triggers a rebuild; rebuild
        failures propagate.
        """
        snapshot = self._cache.get_if_fresh(self._now())
        if snapshot is not None:
            logger.info(f"Using cached snapshot valid until {snapshot.ttl.isoformat()}")
            return snapshot
        return await self.build_snapshot()

    async def fetch_all(self) -> dict[str, Any]:
        """Fetch the snapshot together with per-source fetch states.

        ``error_sources`` lists sources that failed without failing the
        build, such as a ``clients`` workspace replaced by ``core``.
        """
        snapshot = await self.load_or_build()
        return {
            "snapshot": snapshot,
            "fetch_states": {
                source: status.to_dict()
                for source, status in self.get_all_fetch_states().items()
            },
            "error_sources": self.get_error_sources(),
        }

    # =========================================================================
    # Resolution
    # =========================================================================

    async def find_node(self, needle: str) -> Node:
        """Resolve one needle against the current snapshot."""
        snapshot = await self.load_or_build()
        return NodeResolver(snapshot.nodes).find_one(needle)

    async def find_nodes(self, needles: Iterable[str]) -> list[Node]:
        """Resolve several needles against the current snapshot."""
        snapshot = await self.load_or_build()
        return NodeResolver(snapshot.nodes).find_many(needles)

    def instance_resolver(self, match_mode: MatchMode = MatchMode.CONTAINS) -> InstanceResolver:
        """Resolver over declared instances and autoscaling group members."""
        return InstanceResolver(self.fetch_declared_state, self._ec2_fetcher, match_mode)

    async def find_instances(
        self, needles: Iterable[str], match_mode: MatchMode = MatchMode.CONTAINS
    ) -> list[Instance]:
        """Resolve needles to declared instances and autoscaling group members."""
        return await self.instance_resolver(match_mode).find_instances(needles)


__all__ = [
    "ClusterController",
]
