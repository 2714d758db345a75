"""In-memory implementations of the resource gateway ports."""

from __future__ import annotations

import asyncio
import math
from collections import Counter
from datetime import UTC, datetime
from typing import Any, Callable, Generic, TypeVar

from desguace_catalog.adapters.backend_mappers import (
    ClientMapper,
    OrderMapper,
    PartMapper,
    PhotoMapper,
    VehicleMapper,
)
from desguace_catalog.domain.client import Client
from desguace_catalog.domain.errors import DomainError, NotFoundError
from desguace_catalog.domain.order import Order
from desguace_catalog.domain.pagination import BACKEND_DEFAULT_LIMIT, Page, PageInfo, Paging
from desguace_catalog.domain.part import Part
from desguace_catalog.domain.photo import Photo, mark_principal
from desguace_catalog.domain.vehicle import Vehicle
from desguace_catalog.ports.resource_gateway import (
    ClientGateway,
    OrderGateway,
    PartGateway,
    PhotoGateway,
    ResourceGateway,
    VehicleGateway,
)

T = TypeVar("T")


class InMemoryResourceGateway(ResourceGateway[T], Generic[T]):
    """
    Canonical contract implementation for tests.

    - Stores entities in insertion order
    - Pages with the backend's semantics (1-based page, default limit 50)
    - Records every call in ``calls`` (method name → count)
    - ``fail_with`` makes every following call raise that error
    - ``delays`` maps an entity id to a sleep applied before answering
      calls about that id
    """

    def __init__(
        self,
        entities: list[T],
        to_domain: Callable[[dict[str, Any]], T],
        to_payload: Callable[[T], dict[str, Any]],
    ) -> None:
        self._entities: dict[int, T] = {entity.id: entity for entity in entities}  # type: ignore[attr-defined]
        self._to_domain = to_domain
        self._to_payload = to_payload
        self.calls: Counter[str] = Counter()
        self.fail_with: DomainError | None = None
        self.delays: dict[int, float] = {}

    @property
    def total_calls(self) -> int:
        return sum(self.calls.values())

    async def list(self, filters: dict[str, Any] | None = None, paging: Paging | None = None) -> Page[T]:
        await self._enter("list")
        items = [entity for entity in self._entities.values() if _matches(entity, filters)]

        page = paging.page if paging else 1
        limit = paging.limit if paging else BACKEND_DEFAULT_LIMIT
        start = (page - 1) * limit
        return Page(
            items=items[start : start + limit],
            pagination=PageInfo(
                page=page,
                limit=limit,
                total=len(items),
                total_pages=math.ceil(len(items) / limit),
            ),
        )

    async def get(self, entity_id: int) -> T:
        await self._enter("get", entity_id)
        entity = self._entities.get(entity_id)
        if entity is None:
            raise NotFoundError(self.resource, str(entity_id))
        return entity

    async def create(self, payload: dict[str, Any]) -> T:
        await self._enter("create")
        new_id = max(self._entities, default=0) + 1
        entity = self._to_domain({**payload, "id": new_id})
        self._entities[new_id] = entity
        return entity

    async def update(self, entity_id: int, payload: dict[str, Any]) -> T:
        await self._enter("update", entity_id)
        current = self._entities.get(entity_id)
        if current is None:
            raise NotFoundError(self.resource, str(entity_id))
        entity = self._to_domain({**self._to_payload(current), **payload, "id": entity_id})
        self._entities[entity_id] = entity
        return entity

    async def delete(self, entity_id: int) -> None:
        await self._enter("delete", entity_id)
        if self._entities.pop(entity_id, None) is None:
            raise NotFoundError(self.resource, str(entity_id))

    def stored(self) -> list[T]:
        return list(self._entities.values())

    async def _enter(self, method: str, entity_id: int | None = None) -> None:
        self.calls[method] += 1
        if entity_id is not None and entity_id in self.delays:
            await asyncio.sleep(self.delays[entity_id])
        if self.fail_with is not None:
            raise self.fail_with


def _matches(entity: Any, filters: dict[str, Any] | None) -> bool:
    if not filters:
        return True
    return all(getattr(entity, key, None) == value for key, value in filters.items())


class InMemoryVehicleGateway(InMemoryResourceGateway[Vehicle], VehicleGateway):
    resource = "vehiculos"

    def __init__(self, vehicles: list[Vehicle] | None = None) -> None:
        super().__init__(vehicles or [], VehicleMapper.to_domain, VehicleMapper.to_payload)

    async def list_by_client(self, client_id: int) -> list[Vehicle]:
        await self._enter("list_by_client")
        return [vehicle for vehicle in self._entities.values() if vehicle.id_cliente == client_id]


class InMemoryPartGateway(InMemoryResourceGateway[Part], PartGateway):
    resource = "piezas"

    def __init__(self, parts: list[Part] | None = None) -> None:
        super().__init__(parts or [], PartMapper.to_domain, PartMapper.to_payload)

    async def list_by_vehicle(self, vehicle_id: int) -> list[Part]:
        await self._enter("list_by_vehicle", vehicle_id)
        return [part for part in self._entities.values() if part.id_vehiculo == vehicle_id]


class InMemoryPhotoGateway(InMemoryResourceGateway[Photo], PhotoGateway):
    resource = "fotos"

    def __init__(self, photos: list[Photo] | None = None) -> None:
        super().__init__(photos or [], PhotoMapper.to_domain, PhotoMapper.to_payload)
        self.failing_parts: set[int] = set()

    async def list_by_part(self, part_id: int) -> list[Photo]:
        await self._enter("list_by_part", part_id)
        if part_id in self.failing_parts:
            raise NotFoundError("Fotos", str(part_id))
        return [photo for photo in self._entities.values() if photo.id_pieza == part_id]

    async def upload(
        self,
        part_id: int,
        content: bytes,
        filename: str,
        content_type: str,
        fields: dict[str, str],
    ) -> Photo:
        await self._enter("upload")
        new_id = max(self._entities, default=0) + 1
        photo = Photo(
            id=new_id,
            url=f"/uploads/piezas/{part_id}/{filename}",
            fecha_subida=datetime.now(UTC),
            id_pieza=part_id,
            nombre=filename,
            descripcion=fields.get("descripcion"),
            tamanio=len(content),
            origen=fields.get("origen", "manual"),
        )
        self._entities[new_id] = photo
        return photo

    async def set_principal(self, photo_id: int) -> Photo:
        await self._enter("set_principal", photo_id)
        if photo_id not in self._entities:
            raise NotFoundError(self.resource, str(photo_id))
        updated = mark_principal(list(self._entities.values()), photo_id)
        self._entities = {photo.id: photo for photo in updated}
        return self._entities[photo_id]


class InMemoryOrderGateway(InMemoryResourceGateway[Order], OrderGateway):
    resource = "pedidos"

    def __init__(self, orders: list[Order] | None = None) -> None:
        super().__init__(orders or [], OrderMapper.to_domain, OrderMapper.to_payload)

    async def list_by_part(self, part_id: int) -> list[Order]:
        await self._enter("list_by_part", part_id)
        return [order for order in self._entities.values() if order.id_pieza == part_id]

    async def list_by_client(self, client_id: int) -> list[Order]:
        await self._enter("list_by_client")
        return [order for order in self._entities.values() if order.id_cliente == client_id]


class InMemoryClientGateway(InMemoryResourceGateway[Client], ClientGateway):
    resource = "clientes"

    def __init__(self, clients: list[Client] | None = None) -> None:
        super().__init__(clients or [], ClientMapper.to_domain, ClientMapper.to_payload)
