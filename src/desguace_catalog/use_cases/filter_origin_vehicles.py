"""Filtered vehicles of origin use case."""

from __future__ import annotations

from dataclasses import dataclass, field

from desguace_catalog.catalog.filtering import (
    filter_vehicles,
    paginate_filtered,
    unique_brands,
    unique_fuel_types,
    unique_models,
    unique_years,
)
from desguace_catalog.domain.catalog import VehicleFilters
from desguace_catalog.domain.pagination import PageInfo, Paging
from desguace_catalog.domain.vehicle import OriginVehicle
from desguace_catalog.fetchers.entity_fetcher import VehicleFetcher
from desguace_catalog.joining.entity_joiner import OriginVehicleEnricher


@dataclass(frozen=True, slots=True)
class FilterOriginVehiclesRequest:
    filters: VehicleFilters
    paging: Paging


@dataclass(frozen=True, slots=True)
class VehicleFilterOptions:
    marcas: list[str] = field(default_factory=list)
    modelos: list[str] = field(default_factory=list)
    anios: list[int] = field(default_factory=list)
    combustibles: list[str] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class FilterOriginVehiclesResponse:
    vehicles: list[OriginVehicle]
    pagination: PageInfo
    options: VehicleFilterOptions


class FilterOriginVehicles:
    """
    Vehicles of origin filtered by brand, model, year and fuel type.

    Filtering runs on the current backend page only: ``total`` and
    ``total_pages`` describe the vehicles of that page that match, and the
    option lists are drawn from the same page before filtering.
    """

    def __init__(self, vehicles: VehicleFetcher, enricher: OriginVehicleEnricher) -> None:
        self._vehicles = vehicles
        self._enricher = enricher

    async def execute(self, request: FilterOriginVehiclesRequest) -> FilterOriginVehiclesResponse:
        """
        Execute the filtered listing.

        Raises:
            PagingValidationError: If paging parameters are invalid
        """
        page = await self._vehicles.get_all(paging=request.paging)

        matching = filter_vehicles(page.items, request.filters)
        filtered = paginate_filtered(matching, page.pagination)
        enriched = await self._enricher.enrich(filtered.items)

        options = VehicleFilterOptions(
            marcas=unique_brands(page.items),
            modelos=unique_models(page.items, request.filters.marca),
            anios=unique_years(page.items),
            combustibles=unique_fuel_types(page.items),
        )
        return FilterOriginVehiclesResponse(
            vehicles=enriched,
            pagination=filtered.pagination,
            options=options,
        )
