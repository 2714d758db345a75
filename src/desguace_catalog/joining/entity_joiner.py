"""
Entity joiner.

Parallel fan-out over related resources. Each per-item fetch runs
concurrently and a failing item is replaced by a fallback value instead of
failing the whole join.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import replace
from typing import Awaitable, Callable, Sequence, TypeVar

from desguace_catalog.domain.part import Part
from desguace_catalog.domain.photo import Photo, latest_photos
from desguace_catalog.domain.vehicle import PLACEHOLDER_IMAGE_URL, OriginVehicle, Vehicle
from desguace_catalog.fetchers.entity_fetcher import PartFetcher, PhotoFetcher, VehicleFetcher

logger = logging.getLogger(__name__)

ItemT = TypeVar("ItemT")
ResultT = TypeVar("ResultT")

DEFAULT_IMAGE_LIMIT = 3

# Key under datos_adicionales where list-view enrichment is published.
ENRICHMENT_KEY = "enriquecimiento"


async def join_related(
    items: Sequence[ItemT],
    fetch: Callable[[ItemT], Awaitable[ResultT]],
    fallback: Callable[[ItemT], ResultT],
) -> list[ResultT]:
    """
    Run ``fetch`` for every item concurrently.

    Results are aligned with ``items`` regardless of completion order. An
    item whose fetch raises gets ``fallback(item)``; the failure is logged
    and not retried.
    """

    async def guarded(item: ItemT) -> ResultT:
        try:
            return await fetch(item)
        except Exception as exc:
            logger.warning(
                "Related fetch failed, using fallback",
                extra={"item": repr(item)[:200], "error": str(exc)},
            )
            return fallback(item)

    return list(await asyncio.gather(*(guarded(item) for item in items)))


async def photos_of_parts(
    parts: Sequence[Part],
    photos: PhotoFetcher,
    limit: int = DEFAULT_IMAGE_LIMIT,
) -> list[Photo]:
    """
    Latest photos across ``parts``.

    A part whose photos cannot be loaded contributes nothing. Photos are
    merged in part order, then sorted newest first with ties kept in merge
    order.
    """
    per_part = await join_related(
        list(parts),
        lambda part: photos.list_by_part(part.id),
        lambda part: [],
    )
    merged = [photo for part_photos in per_part for photo in part_photos]
    return latest_photos(merged, limit)


async def vehicle_photos(
    vehicle_id: int,
    parts: PartFetcher,
    photos: PhotoFetcher,
    limit: int = DEFAULT_IMAGE_LIMIT,
) -> list[Photo]:
    """Latest photos of a vehicle's parts; ``[]`` when its parts cannot be loaded."""
    try:
        vehicle_parts = await parts.list_by_vehicle(vehicle_id)
    except Exception as exc:
        logger.warning(
            "Could not load parts for vehicle photos",
            extra={"vehicle_id": vehicle_id, "error": str(exc)},
        )
        return []
    return await photos_of_parts(vehicle_parts, photos, limit)


class OriginVehicleEnricher:
    """
    Builds the "vehicles of origin" view of vehicles.

    - List view: part count and a display image per vehicle
    - Detail view: part count, latest part photos and a display image
    - ``publish`` pushes enriched data back into the vehicle mirror so that
      cache subscribers see it without refetching
    """

    def __init__(
        self,
        vehicles: VehicleFetcher,
        parts: PartFetcher,
        photos: PhotoFetcher,
        image_limit: int = DEFAULT_IMAGE_LIMIT,
    ) -> None:
        self._vehicles = vehicles
        self._parts = parts
        self._photos = photos
        self._image_limit = image_limit

    async def enrich(self, vehicles: Sequence[Vehicle]) -> list[OriginVehicle]:
        return await join_related(
            list(vehicles),
            self._enrich_one,
            lambda vehicle: OriginVehicle(vehicle=vehicle),
        )

    async def enrich_detail(self, vehicle_id: int) -> OriginVehicle:
        """
        Detail view of one vehicle.

        Raises:
            NotFoundError: If the vehicle does not exist
        """
        vehicle = await self._vehicles.get_by_id(vehicle_id)

        try:
            parts = await self._parts.list_by_vehicle(vehicle.id)
        except Exception as exc:
            logger.warning(
                "Could not load parts for vehicle detail",
                extra={"vehicle_id": vehicle.id, "error": str(exc)},
            )
            parts = []

        images = await photos_of_parts(parts, self._photos, self._image_limit)

        imagen_url = vehicle.datos_adicionales.get("imagen_url")
        if not imagen_url and images:
            imagen_url = images[0].url

        return OriginVehicle(
            vehicle=vehicle,
            num_piezas=len(parts),
            imagen_url=imagen_url or PLACEHOLDER_IMAGE_URL,
            imagenes=tuple(images),
        )

    def publish(self, enriched: Sequence[OriginVehicle]) -> None:
        """
        Upsert each vehicle with its list-view enrichment.

        The enrichment goes under ``datos_adicionales["enriquecimiento"]``. The
        stored ``imagen_url`` key is never written here.
        """
        for origin in enriched:
            vehicle = origin.vehicle
            datos = {
                **vehicle.datos_adicionales,
                ENRICHMENT_KEY: {
                    "num_piezas": origin.num_piezas,
                    "imagen_url": origin.imagen_url,
                },
            }
            self._vehicles.cache.upsert(replace(vehicle, datos_adicionales=datos))

    async def enrich_and_publish(self, vehicles: Sequence[Vehicle]) -> list[OriginVehicle]:
        enriched = await self.enrich(vehicles)
        self.publish(enriched)
        return enriched

    async def _enrich_one(self, vehicle: Vehicle) -> OriginVehicle:
        parts = await self._parts.list_by_vehicle(vehicle.id)

        imagen_url = PLACEHOLDER_IMAGE_URL
        first = next((part for part in parts if part.id), None)
        if first is not None:
            first_photos = await self._photos.list_by_part(first.id)
            if first_photos:
                imagen_url = first_photos[0].url

        return OriginVehicle(vehicle=vehicle, num_piezas=len(parts), imagen_url=imagen_url)
