from __future__ import annotations

from dataclasses import dataclass

from desguace_catalog.catalog.filtering import filter_options
from desguace_catalog.catalog.loader import CatalogLoader
from desguace_catalog.domain.catalog import CatalogFilters, FilterOptions
from desguace_catalog.domain.pagination import Paging


@dataclass(frozen=True, slots=True)
class GetCatalogFilterOptionsRequest:
    selection: CatalogFilters
    paging: Paging


@dataclass(frozen=True, slots=True)
class GetCatalogFilterOptionsResponse:
    options: FilterOptions


class GetCatalogFilterOptions:
    """Cascading select options computed from one page of the catalog."""

    def __init__(self, loader: CatalogLoader) -> None:
        self._loader = loader

    async def execute(self, request: GetCatalogFilterOptionsRequest) -> GetCatalogFilterOptionsResponse:
        request.paging.validate()
        page = await self._loader.load_page(request.paging)
        return GetCatalogFilterOptionsResponse(options=filter_options(page.items, request.selection))
