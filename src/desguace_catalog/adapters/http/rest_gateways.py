"""REST implementations of the resource gateway ports."""

from __future__ import annotations

import logging
from typing import Any, Callable, Generic, TypeVar

from desguace_catalog.adapters.backend_mappers import (
    ClientMapper,
    OrderMapper,
    PartMapper,
    PhotoMapper,
    VehicleMapper,
)
from desguace_catalog.adapters.http.backend_client import BackendClient
from desguace_catalog.domain.client import Client
from desguace_catalog.domain.errors import InvalidResponseError
from desguace_catalog.domain.order import Order
from desguace_catalog.domain.pagination import Page, PageInfo, Paging
from desguace_catalog.domain.part import Part
from desguace_catalog.domain.photo import Photo
from desguace_catalog.domain.vehicle import Vehicle
from desguace_catalog.ports.resource_gateway import (
    ClientGateway,
    OrderGateway,
    PartGateway,
    PhotoGateway,
    ResourceGateway,
    VehicleGateway,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RestResourceGateway(ResourceGateway[T], Generic[T]):
    """
    Generic REST gateway for a ``/<resource>`` collection.

    - ``list`` always sends ``count=true`` unless the caller decides otherwise
    - Accepts both ``{data, pagination}`` envelopes and bare JSON arrays
    - Converts payloads to domain entities with the resource's mapper
    """

    resource: str = ""

    def __init__(self, client: BackendClient, to_domain: Callable[[dict[str, Any]], T]) -> None:
        self._client = client
        self._to_domain = to_domain

    @property
    def path(self) -> str:
        return f"/{self.resource}"

    async def list(self, filters: dict[str, Any] | None = None, paging: Paging | None = None) -> Page[T]:
        params: dict[str, Any] = dict(filters or {})
        if paging is not None:
            params.update(paging.to_params())
        params.setdefault("count", "true")

        body = await self._client.request("GET", self.path, resource=self.resource, params=params)
        raw_items, raw_pagination = self._unwrap(body)

        items = [self._to_domain(raw) for raw in raw_items]
        return Page(
            items=items,
            pagination=PageInfo.normalize(raw_pagination, item_count=len(items), requested=paging),
        )

    async def get(self, entity_id: int) -> T:
        body = await self._client.request(
            "GET", f"{self.path}/{entity_id}", resource=self.resource, entity_id=entity_id
        )
        return self._to_domain(self._expect_object(body))

    async def create(self, payload: dict[str, Any]) -> T:
        body = await self._client.request("POST", self.path, resource=self.resource, json=payload)
        return self._to_domain(self._expect_object(body))

    async def update(self, entity_id: int, payload: dict[str, Any]) -> T:
        body = await self._client.request(
            "PUT",
            f"{self.path}/{entity_id}",
            resource=self.resource,
            entity_id=entity_id,
            json=payload,
        )
        return self._to_domain(self._expect_object(body))

    async def delete(self, entity_id: int) -> None:
        await self._client.request(
            "DELETE", f"{self.path}/{entity_id}", resource=self.resource, entity_id=entity_id
        )

    async def _list_where(self, **params: Any) -> list[T]:
        body = await self._client.request("GET", self.path, resource=self.resource, params=params)
        raw_items, _ = self._unwrap(body)
        return [self._to_domain(raw) for raw in raw_items]

    def _unwrap(self, body: Any) -> tuple[list[dict[str, Any]], dict[str, Any] | None]:
        if isinstance(body, list):
            return body, None
        if isinstance(body, dict) and isinstance(body.get("data"), list):
            pagination = body.get("pagination")
            return body["data"], pagination if isinstance(pagination, dict) else None

        logger.error("Unexpected list payload", extra={"resource": self.resource})
        raise InvalidResponseError("Invalid list response format", resource=self.resource)

    def _expect_object(self, body: Any) -> dict[str, Any]:
        if not isinstance(body, dict):
            raise InvalidResponseError("Invalid response format", resource=self.resource)
        return body


class RestVehicleGateway(RestResourceGateway[Vehicle], VehicleGateway):
    resource = "vehiculos"

    def __init__(self, client: BackendClient) -> None:
        super().__init__(client, VehicleMapper.to_domain)

    async def create(self, payload: dict[str, Any]) -> Vehicle:
        return await super().create(VehicleMapper.to_write_payload(payload))

    async def update(self, entity_id: int, payload: dict[str, Any]) -> Vehicle:
        return await super().update(entity_id, VehicleMapper.to_write_payload(payload))

    async def list_by_client(self, client_id: int) -> list[Vehicle]:
        body = await self._client.request(
            "GET", f"{self.path}/cliente/{client_id}", resource=self.resource
        )
        if not isinstance(body, list):
            raise InvalidResponseError(
                f"Invalid response format for vehicles of client {client_id}",
                resource=self.resource,
            )
        return [self._to_domain(raw) for raw in body]


class RestPartGateway(RestResourceGateway[Part], PartGateway):
    resource = "piezas"

    def __init__(self, client: BackendClient) -> None:
        super().__init__(client, PartMapper.to_domain)

    async def list_by_vehicle(self, vehicle_id: int) -> list[Part]:
        body = await self._client.request(
            "GET", self.path, resource=self.resource, params={"id_vehiculo": vehicle_id}
        )
        if isinstance(body, list):
            raw_items = body
        elif isinstance(body, dict) and isinstance(body.get("data"), list):
            raw_items = body["data"]
        else:
            logger.error(
                "Unexpected response format for parts of vehicle",
                extra={"vehicle_id": vehicle_id},
            )
            return []
        return [self._to_domain(raw) for raw in raw_items]


class RestPhotoGateway(RestResourceGateway[Photo], PhotoGateway):
    resource = "fotos"

    def __init__(self, client: BackendClient) -> None:
        super().__init__(client, PhotoMapper.to_domain)

    async def list_by_part(self, part_id: int) -> list[Photo]:
        return await self._list_where(id_pieza=part_id)

    async def upload(
        self,
        part_id: int,
        content: bytes,
        filename: str,
        content_type: str,
        fields: dict[str, str],
    ) -> Photo:
        form = dict(fields)
        form.setdefault("origen", "manual")
        logger.info("Uploading photo", extra={"part_id": part_id, "filename": filename})
        body = await self._client.request(
            "POST",
            f"{self.path}/upload/{part_id}",
            resource=self.resource,
            entity_id=part_id,
            files={"foto": (filename, content, content_type)},
            data=form,
        )
        return self._to_domain(self._expect_object(body))

    async def set_principal(self, photo_id: int) -> Photo:
        body = await self._client.request(
            "PUT", f"{self.path}/{photo_id}/principal", resource=self.resource, entity_id=photo_id
        )
        return self._to_domain(self._expect_object(body))


class RestOrderGateway(RestResourceGateway[Order], OrderGateway):
    resource = "pedidos"

    def __init__(self, client: BackendClient) -> None:
        super().__init__(client, OrderMapper.to_domain)

    async def list_by_part(self, part_id: int) -> list[Order]:
        return await self._list_where(id_pieza=part_id)

    async def list_by_client(self, client_id: int) -> list[Order]:
        return await self._list_where(id_cliente=client_id)


class RestClientGateway(RestResourceGateway[Client], ClientGateway):
    resource = "clientes"

    def __init__(self, client: BackendClient) -> None:
        super().__init__(client, ClientMapper.to_domain)
