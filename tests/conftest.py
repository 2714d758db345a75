"""Shared builders for domain entities used across the test suite."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from decimal import Decimal
from typing import Any, Callable

import pytest

from desguace_catalog.adapters.backend_mappers import (
    OrderMapper,
    PartMapper,
    PhotoMapper,
    VehicleMapper,
)
from desguace_catalog.adapters.in_memory_gateways import (
    InMemoryOrderGateway,
    InMemoryPartGateway,
    InMemoryPhotoGateway,
    InMemoryVehicleGateway,
)
from desguace_catalog.adapters.in_memory_snapshot_store import InMemorySnapshotStore
from desguace_catalog.cache.mirror_cache import MirrorCache
from desguace_catalog.cache.policy import VEHICLES_POLICY
from desguace_catalog.catalog.loader import CatalogLoader
from desguace_catalog.domain.order import Order, OrderStatus
from desguace_catalog.domain.part import Part, PartStatus
from desguace_catalog.domain.photo import Photo
from desguace_catalog.domain.vehicle import Vehicle
from desguace_catalog.fetchers.entity_fetcher import (
    OrderFetcher,
    PartFetcher,
    PhotoFetcher,
    VehicleFetcher,
)
from desguace_catalog.joining.entity_joiner import OriginVehicleEnricher


@pytest.fixture
def make_vehicle() -> Callable[..., Vehicle]:
    def factory(vehicle_id: int, **overrides: Any) -> Vehicle:
        fields: dict[str, Any] = {
            "id": vehicle_id,
            "marca": "Toyota",
            "modelo": "Corolla",
            "version": "1.8 Hybrid",
            "anio_fabricacion": 2015,
            "tipo_combustible": "Híbrido",
            "kilometros": 120000,
            "matricula": f"{vehicle_id:04d}ABC",
            "vin": f"JTDKB20U{vehicle_id:09d}",
            "color": "Gris",
        }
        fields.update(overrides)
        return Vehicle(**fields)

    return factory


@pytest.fixture
def make_part() -> Callable[..., Part]:
    def factory(part_id: int, **overrides: Any) -> Part:
        fields: dict[str, Any] = {
            "id": part_id,
            "tipo_pieza": "Faro",
            "estado": PartStatus.USADA,
            "id_vehiculo": None,
            "descripcion": f"Pieza {part_id}",
            "precio_venta": Decimal("50.00"),
        }
        fields.update(overrides)
        return Part(**fields)

    return factory


@pytest.fixture
def make_photo() -> Callable[..., Photo]:
    def factory(photo_id: int, **overrides: Any) -> Photo:
        fields: dict[str, Any] = {
            "id": photo_id,
            "url": f"/uploads/{photo_id}.jpg",
            "fecha_subida": datetime(2024, 1, 1, tzinfo=UTC),
        }
        fields.update(overrides)
        return Photo(**fields)

    return factory


@pytest.fixture
def make_order() -> Callable[..., Order]:
    def factory(order_id: int, part_id: int, estado: OrderStatus, **overrides: Any) -> Order:
        fields: dict[str, Any] = {
            "id": order_id,
            "id_cliente": 1,
            "id_pieza": part_id,
            "estado": estado,
            "total": Decimal("50.00"),
        }
        fields.update(overrides)
        return Order(**fields)

    return factory


@dataclass
class InMemoryBackend:
    """In-memory gateways with the fetchers built on top of them."""

    vehicle_gateway: InMemoryVehicleGateway
    part_gateway: InMemoryPartGateway
    photo_gateway: InMemoryPhotoGateway
    order_gateway: InMemoryOrderGateway
    store: InMemorySnapshotStore
    vehicles: VehicleFetcher
    parts: PartFetcher
    photos: PhotoFetcher
    orders: OrderFetcher

    @property
    def enricher(self) -> OriginVehicleEnricher:
        return OriginVehicleEnricher(self.vehicles, self.parts, self.photos)

    @property
    def catalog_loader(self) -> CatalogLoader:
        return CatalogLoader(self.parts, self.vehicles, self.photos)


@pytest.fixture
def make_backend() -> Callable[..., InMemoryBackend]:
    def factory(
        vehicles: list[Vehicle] | None = None,
        parts: list[Part] | None = None,
        photos: list[Photo] | None = None,
        orders: list[Order] | None = None,
    ) -> InMemoryBackend:
        store = InMemorySnapshotStore()
        vehicle_gateway = InMemoryVehicleGateway(vehicles)
        part_gateway = InMemoryPartGateway(parts)
        photo_gateway = InMemoryPhotoGateway(photos)
        order_gateway = InMemoryOrderGateway(orders)
        return InMemoryBackend(
            vehicle_gateway=vehicle_gateway,
            part_gateway=part_gateway,
            photo_gateway=photo_gateway,
            order_gateway=order_gateway,
            store=store,
            vehicles=VehicleFetcher(
                vehicle_gateway,
                MirrorCache(
                    "kacum_vehiculos_data", VehicleMapper.to_payload, VehicleMapper.to_domain, store
                ),
                VEHICLES_POLICY,
            ),
            parts=PartFetcher(part_gateway, MirrorCache("piezas", PartMapper.to_payload, PartMapper.to_domain)),
            photos=PhotoFetcher(photo_gateway, MirrorCache("fotos", PhotoMapper.to_payload, PhotoMapper.to_domain)),
            orders=OrderFetcher(order_gateway, MirrorCache("pedidos", OrderMapper.to_payload, OrderMapper.to_domain)),
        )

    return factory
