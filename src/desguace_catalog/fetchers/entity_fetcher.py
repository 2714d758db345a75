"""
Entity fetchers.

One fetcher per backend resource. A fetcher validates request parameters,
calls its gateway, writes successful results through to the resource's
mirror cache and, when the gateway fails, applies the resource's declared
fallback policy.
"""

from __future__ import annotations

import logging
from typing import Any, Generic, TypeVar

from desguace_catalog.cache.mirror_cache import MirrorCache
from desguace_catalog.cache.policy import DEFAULT_POLICY, Fallback, FetchPolicy
from desguace_catalog.domain.client import Client
from desguace_catalog.domain.errors import DomainError
from desguace_catalog.domain.order import Order
from desguace_catalog.domain.pagination import Page, PageInfo, Paging
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

logger = logging.getLogger(__name__)

T = TypeVar("T")
G = TypeVar("G", bound=ResourceGateway)


def _pagination_block(info: PageInfo) -> dict[str, int]:
    return {
        "page": info.page,
        "limit": info.limit,
        "total": info.total,
        "totalPages": info.total_pages,
    }


class EntityFetcher(Generic[T, G]):
    """
    Typed data access for one backend resource.

    Contract:
        - ``get_all`` validates ``paging`` before any request is sent
        - Successful reads and writes are mirrored in ``cache``
        - Mutation failures are logged and re-raised
        - ``get_all`` failures are answered from the persisted snapshot only
          when ``policy.fallback`` is ``CACHE`` and the snapshot is fresh;
          otherwise the original error propagates
    """

    def __init__(
        self,
        gateway: G,
        cache: MirrorCache[T],
        policy: FetchPolicy = DEFAULT_POLICY,
    ) -> None:
        self._gateway = gateway
        self._cache = cache
        self._policy = policy

    @property
    def resource(self) -> str:
        return self._gateway.resource

    @property
    def cache(self) -> MirrorCache[T]:
        return self._cache

    async def get_all(
        self,
        filters: dict[str, Any] | None = None,
        paging: Paging | None = None,
    ) -> Page[T]:
        """
        Fetch one page of the resource.

        Raises:
            PagingValidationError: If ``paging`` is invalid
            DomainError: Backend failure with no usable fallback
        """
        if paging is not None:
            paging.validate()

        try:
            page = await self._gateway.list(filters=filters, paging=paging)
        except DomainError as exc:
            logger.error(
                "Failed to fetch list",
                extra={"resource": self.resource, "error_code": exc.error_code, "error": exc.message},
            )
            fallback = self._fallback_page(paging)
            if fallback is None:
                raise
            return fallback

        self._cache.replace_all(page.items)
        if self._policy.persist:
            self._cache.persist(pagination=_pagination_block(page.pagination))
        return page

    async def get_by_id(self, entity_id: int) -> T:
        """
        Fetch one entity.

        Resources with ``read_through`` answer from the mirror when it already
        holds the entity.
        """
        if self._policy.read_through:
            cached = self._cache.get(entity_id)
            if cached is not None:
                logger.debug(
                    "Entity served from mirror",
                    extra={"resource": self.resource, "entity_id": entity_id},
                )
                return cached

        try:
            entity = await self._gateway.get(entity_id)
        except DomainError as exc:
            logger.error(
                "Failed to fetch entity",
                extra={"resource": self.resource, "entity_id": entity_id, "error": exc.message},
            )
            raise

        self._cache.upsert(entity)
        return entity

    async def create(self, payload: dict[str, Any]) -> T:
        try:
            entity = await self._gateway.create(payload)
        except DomainError as exc:
            logger.error("Failed to create entity", extra={"resource": self.resource, "error": exc.message})
            raise

        self._write_through(entity)
        logger.info("Entity created", extra={"resource": self.resource, "entity_id": _entity_id(entity)})
        return entity

    async def update(self, entity_id: int, payload: dict[str, Any]) -> T:
        try:
            entity = await self._gateway.update(entity_id, payload)
        except DomainError as exc:
            logger.error(
                "Failed to update entity",
                extra={"resource": self.resource, "entity_id": entity_id, "error": exc.message},
            )
            raise

        self._write_through(entity)
        logger.info("Entity updated", extra={"resource": self.resource, "entity_id": entity_id})
        return entity

    async def delete(self, entity_id: int) -> None:
        try:
            await self._gateway.delete(entity_id)
        except DomainError as exc:
            logger.error(
                "Failed to delete entity",
                extra={"resource": self.resource, "entity_id": entity_id, "error": exc.message},
            )
            raise

        self._cache.remove(entity_id)
        if self._policy.persist:
            self._cache.persist()
        logger.info("Entity deleted", extra={"resource": self.resource, "entity_id": entity_id})

    def _write_through(self, entity: T) -> None:
        self._cache.upsert(entity)
        if self._policy.persist:
            self._cache.persist()

    def _fallback_page(self, paging: Paging | None) -> Page[T] | None:
        if self._policy.fallback is not Fallback.CACHE:
            return None

        restored = self._cache.restore(max_age_ms=self._policy.ttl_ms)
        if restored is None:
            return None

        logger.warning(
            "Serving list from cache snapshot",
            extra={"resource": self.resource, "age_ms": restored.age_ms, "entities": len(restored.items)},
        )
        return Page(
            items=restored.items,
            pagination=PageInfo.normalize(restored.pagination, item_count=len(restored.items), requested=paging),
        )


def _entity_id(entity: Any) -> Any:
    return getattr(entity, "id", None)


class VehicleFetcher(EntityFetcher[Vehicle, VehicleGateway]):
    async def list_by_client(self, client_id: int) -> list[Vehicle]:
        """Vehicles owned by a client; each one is mirrored."""
        vehicles = await self._gateway.list_by_client(client_id)
        for vehicle in vehicles:
            self._cache.upsert(vehicle)
        if vehicles and self._policy.persist:
            self._cache.persist()
        return vehicles


class PartFetcher(EntityFetcher[Part, PartGateway]):
    async def list_by_vehicle(self, vehicle_id: int) -> list[Part]:
        return await self._gateway.list_by_vehicle(vehicle_id)


class PhotoFetcher(EntityFetcher[Photo, PhotoGateway]):
    async def list_by_part(self, part_id: int) -> list[Photo]:
        photos = await self._gateway.list_by_part(part_id)
        for photo in photos:
            self._cache.upsert(photo)
        return photos

    async def upload(
        self,
        part_id: int,
        content: bytes,
        filename: str,
        content_type: str,
        fields: dict[str, str] | None = None,
    ) -> Photo:
        try:
            photo = await self._gateway.upload(part_id, content, filename, content_type, dict(fields or {}))
        except DomainError as exc:
            logger.error(
                "Failed to upload photo",
                extra={"part_id": part_id, "filename": filename, "error": exc.message},
            )
            raise

        self._write_through(photo)
        logger.info("Photo uploaded", extra={"part_id": part_id, "photo_id": photo.id})
        return photo

    async def set_principal(self, photo_id: int) -> Photo:
        """
        Mark a photo as principal in the backend and in the mirror.

        After the call, ``photo_id`` is the only principal photo among the
        mirrored photos of its owner. Repeating the call leaves the same state.
        """
        try:
            photo = await self._gateway.set_principal(photo_id)
        except DomainError as exc:
            logger.error("Failed to set principal photo", extra={"photo_id": photo_id, "error": exc.message})
            raise

        self._cache.upsert(photo)
        known = self._cache.list()
        for updated, previous in zip(mark_principal(known, photo.id), known):
            if updated != previous:
                self._cache.upsert(updated)

        principal = self._cache.get(photo.id)
        return principal if principal is not None else photo


class OrderFetcher(EntityFetcher[Order, OrderGateway]):
    async def list_by_part(self, part_id: int) -> list[Order]:
        return await self._gateway.list_by_part(part_id)

    async def list_by_client(self, client_id: int) -> list[Order]:
        return await self._gateway.list_by_client(client_id)


class ClientFetcher(EntityFetcher[Client, ClientGateway]):
    pass
