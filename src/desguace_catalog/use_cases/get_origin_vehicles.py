"""Vehicles of origin list use case."""

from __future__ import annotations

from dataclasses import dataclass

from desguace_catalog.domain.pagination import PageInfo, Paging
from desguace_catalog.domain.vehicle import OriginVehicle
from desguace_catalog.fetchers.entity_fetcher import VehicleFetcher
from desguace_catalog.joining.entity_joiner import OriginVehicleEnricher


@dataclass(frozen=True, slots=True)
class GetOriginVehiclesRequest:
    paging: Paging


@dataclass(frozen=True, slots=True)
class GetOriginVehiclesResponse:
    vehicles: list[OriginVehicle]
    pagination: PageInfo


class GetOriginVehicles:
    """
    One page of vehicles, each with its part count and display image.

    Enrichment is published to the vehicle mirror once computed.
    """

    def __init__(self, vehicles: VehicleFetcher, enricher: OriginVehicleEnricher) -> None:
        self._vehicles = vehicles
        self._enricher = enricher

    async def execute(self, request: GetOriginVehiclesRequest) -> GetOriginVehiclesResponse:
        page = await self._vehicles.get_all(paging=request.paging)
        if not page.items and request.paging.page == 1:
            return GetOriginVehiclesResponse(
                vehicles=[],
                pagination=PageInfo.empty(request.paging.page, request.paging.limit),
            )

        enriched = await self._enricher.enrich_and_publish(page.items)
        return GetOriginVehiclesResponse(vehicles=enriched, pagination=page.pagination)
