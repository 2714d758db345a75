"""
Dependency container.

Builds one instance of every gateway, mirror cache and fetcher for the
process, so that all requests share the same HTTP connection pool and the
same mirrors. Use cases are cheap and created per request from the
container's fetchers.
"""

from __future__ import annotations

import logging

from desguace_catalog.adapters.backend_mappers import (
    ClientMapper,
    OrderMapper,
    PartMapper,
    PhotoMapper,
    VehicleMapper,
)
from desguace_catalog.adapters.http.backend_client import BackendClient
from desguace_catalog.adapters.http.rest_gateways import (
    RestClientGateway,
    RestOrderGateway,
    RestPartGateway,
    RestPhotoGateway,
    RestVehicleGateway,
)
from desguace_catalog.adapters.in_memory_snapshot_store import InMemorySnapshotStore
from desguace_catalog.adapters.sql_snapshot_store import SqlSnapshotStore
from desguace_catalog.cache.mirror_cache import MirrorCache
from desguace_catalog.cache.policy import CLIENTS_POLICY, DEFAULT_POLICY, FetchPolicy, VEHICLES_POLICY
from desguace_catalog.catalog.loader import CatalogLoader
from desguace_catalog.fetchers.entity_fetcher import (
    ClientFetcher,
    OrderFetcher,
    PartFetcher,
    PhotoFetcher,
    VehicleFetcher,
)
from desguace_catalog.infra.config import backend_api_url, backend_timeout_seconds, snapshot_ttl_seconds
from desguace_catalog.infra.db.config import database_configured
from desguace_catalog.infra.db.session import get_session_local
from desguace_catalog.joining.entity_joiner import OriginVehicleEnricher
from desguace_catalog.ports.snapshot_store import SnapshotStore

logger = logging.getLogger(__name__)

VEHICLES_SNAPSHOT_KEY = "kacum_vehiculos_data"
CLIENTS_SNAPSHOT_KEY = "kacum_clientes_data"


class AppContainer:
    """
    Process-wide wiring of the aggregation layer.

    Usage:
        container = AppContainer.from_env()
        vehicles = container.vehicles
        ...
        await container.aclose()
    """

    def __init__(
        self,
        client: BackendClient,
        snapshot_store: SnapshotStore,
        vehicles_policy: FetchPolicy = VEHICLES_POLICY,
    ) -> None:
        self.client = client
        self.snapshot_store = snapshot_store

        self.vehicles = VehicleFetcher(
            RestVehicleGateway(client),
            MirrorCache(VEHICLES_SNAPSHOT_KEY, VehicleMapper.to_payload, VehicleMapper.to_domain, snapshot_store),
            vehicles_policy,
        )
        self.clients = ClientFetcher(
            RestClientGateway(client),
            MirrorCache(CLIENTS_SNAPSHOT_KEY, ClientMapper.to_payload, ClientMapper.to_domain, snapshot_store),
            CLIENTS_POLICY,
        )
        self.parts = PartFetcher(
            RestPartGateway(client),
            MirrorCache("piezas", PartMapper.to_payload, PartMapper.to_domain),
            DEFAULT_POLICY,
        )
        self.photos = PhotoFetcher(
            RestPhotoGateway(client),
            MirrorCache("fotos", PhotoMapper.to_payload, PhotoMapper.to_domain),
            DEFAULT_POLICY,
        )
        self.orders = OrderFetcher(
            RestOrderGateway(client),
            MirrorCache("pedidos", OrderMapper.to_payload, OrderMapper.to_domain),
            DEFAULT_POLICY,
        )

        self.enricher = OriginVehicleEnricher(self.vehicles, self.parts, self.photos)
        self.catalog_loader = CatalogLoader(self.parts, self.vehicles, self.photos)

    @classmethod
    def from_env(cls) -> AppContainer:
        """
        Build the container from environment configuration.

        Raises:
            RuntimeError: If DESGUACE_API_URL is not set
        """
        client = BackendClient(backend_api_url(), timeout=backend_timeout_seconds())

        store: SnapshotStore
        if database_configured():
            store = SqlSnapshotStore(get_session_local())
        else:
            store = InMemorySnapshotStore()
        logger.info("Snapshot store selected", extra={"store": type(store).__name__})

        policy = FetchPolicy(
            fallback=VEHICLES_POLICY.fallback,
            ttl_ms=snapshot_ttl_seconds() * 1000,
            persist=VEHICLES_POLICY.persist,
            read_through=VEHICLES_POLICY.read_through,
        )
        return cls(client, store, vehicles_policy=policy)

    async def check_backend(self) -> bool:
        return await self.client.check_status()

    async def aclose(self) -> None:
        await self.client.aclose()
