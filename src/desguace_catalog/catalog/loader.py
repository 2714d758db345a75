"""Loads backend parts and turns them into storefront catalog items."""

from __future__ import annotations

import logging

from desguace_catalog.catalog.storefront import to_catalog_item
from desguace_catalog.domain.catalog import CatalogItem
from desguace_catalog.domain.pagination import Page, Paging
from desguace_catalog.domain.part import Part
from desguace_catalog.domain.vehicle import Vehicle
from desguace_catalog.fetchers.entity_fetcher import PartFetcher, PhotoFetcher, VehicleFetcher
from desguace_catalog.joining.entity_joiner import join_related

logger = logging.getLogger(__name__)


class CatalogLoader:
    """
    Joins parts with their vehicle of origin and photos.

    Vehicles and photos are optional decorations: if either cannot be
    loaded for a part, the part is still listed without them.
    """

    def __init__(self, parts: PartFetcher, vehicles: VehicleFetcher, photos: PhotoFetcher) -> None:
        self._parts = parts
        self._vehicles = vehicles
        self._photos = photos

    async def load_page(self, paging: Paging) -> Page[CatalogItem]:
        page = await self._parts.get_all(paging=paging)
        items = await self.to_items(page.items)
        return Page(items=items, pagination=page.pagination)

    async def load_item(self, part_id: int) -> CatalogItem:
        """
        Raises:
            NotFoundError: If the part does not exist
        """
        part = await self._parts.get_by_id(part_id)
        items = await self.to_items([part])
        return items[0]

    async def to_items(self, parts: list[Part]) -> list[CatalogItem]:
        vehicles = await self._vehicles_by_id(parts)
        photos = await join_related(parts, lambda part: self._photos.list_by_part(part.id), lambda part: [])
        return [
            to_catalog_item(part, vehicles.get(part.id_vehiculo), part_photos)
            for part, part_photos in zip(parts, photos)
        ]

    async def _vehicles_by_id(self, parts: list[Part]) -> dict[int, Vehicle]:
        vehicle_ids = list(dict.fromkeys(part.id_vehiculo for part in parts if part.id_vehiculo is not None))
        vehicles = await join_related(vehicle_ids, self._vehicles.get_by_id, lambda vehicle_id: None)
        return {vehicle.id: vehicle for vehicle in vehicles if vehicle is not None}
