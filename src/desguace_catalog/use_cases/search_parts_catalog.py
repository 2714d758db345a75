from __future__ import annotations

from dataclasses import dataclass

from desguace_catalog.catalog.filtering import (
    catalog_predicates,
    filter_catalog,
    filter_options,
    paginate_filtered,
)
from desguace_catalog.catalog.loader import CatalogLoader
from desguace_catalog.domain.catalog import CatalogFilters, CatalogItem
from desguace_catalog.domain.pagination import PageInfo, Paging


@dataclass(frozen=True, slots=True)
class SearchPartsCatalogRequest:
    filters: CatalogFilters
    paging: Paging


@dataclass(frozen=True, slots=True)
class SearchPartsCatalogResponse:
    items: list[CatalogItem]
    pagination: PageInfo


class SearchPartsCatalog:
    """
    Storefront part search with filters and pagination.

    Fetches one backend page of parts, converts it to catalog items and
    applies the active filters to that page, after the cascade reset of
    dependent selects. With no active filter the backend pagination is
    returned as is; otherwise ``total`` and ``total_pages`` are recomputed
    from the filtered items.
    """

    def __init__(self, loader: CatalogLoader) -> None:
        self._loader = loader

    async def execute(self, request: SearchPartsCatalogRequest) -> SearchPartsCatalogResponse:
        """
        Execute catalog search.

        Raises:
            PagingValidationError: If paging parameters are invalid
            FilterValidationError: If filter parameters are invalid
        """
        request.filters.validate()
        request.paging.validate()

        page = await self._loader.load_page(request.paging)

        # Dependent selects that fell out of their narrowed set are reset first.
        filters = filter_options(page.items, request.filters).selection

        if not catalog_predicates(filters):
            items = [item for item in page.items if item.stock > 0]
            return SearchPartsCatalogResponse(items=items, pagination=page.pagination)

        filtered = paginate_filtered(filter_catalog(page.items, filters), page.pagination)
        return SearchPartsCatalogResponse(items=filtered.items, pagination=filtered.pagination)
