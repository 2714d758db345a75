from fastapi import APIRouter, Depends, Path

from desguace_catalog.entrypoints.http.dependencies import (
    get_catalog_filter_options_use_case,
    get_catalog_part_use_case,
    get_search_catalog_use_case,
)
from desguace_catalog.entrypoints.http.dtos.catalog import (
    CatalogItemDTO,
    CatalogSearchQueryDTO,
    CatalogSearchResponseDTO,
    CatalogSelectionQueryDTO,
    FilterOptionsResponseDTO,
)
from desguace_catalog.entrypoints.http.error_responses import ErrorResponse
from desguace_catalog.entrypoints.http.mappers.catalog_mapper import CatalogMapper
from desguace_catalog.use_cases.get_catalog_filter_options import GetCatalogFilterOptions
from desguace_catalog.use_cases.get_catalog_part import GetCatalogPart, GetCatalogPartRequest
from desguace_catalog.use_cases.search_parts_catalog import SearchPartsCatalog

router = APIRouter(prefix="/catalog", tags=["Catalog"])


@router.get(
    "/parts",
    response_model=CatalogSearchResponseDTO,
    summary="Search the parts catalog",
    description="""
    One backend page of parts as storefront items, filtered on that page.

    ## Filters
    - All filters use AND semantics
    - marca/modelo/categoria/anio: exact match; `todas` or empty disables them
    - search: case-insensitive substring over name, description, category
      and additional data
    - precio_min/precio_max: inclusive range

    ## Pagination
    - Filtering only sees the requested backend page
    - With any filter active, `total` and `total_pages` describe the
      filtered items of that page

    ## Example
    ```
    GET /v1/catalog/parts?marca=Toyota&page=1&limit=15
    ```
    """,
    responses={
        422: {"model": ErrorResponse, "description": "Validation error"},
        503: {"model": ErrorResponse, "description": "Backend unavailable"},
    },
)
async def search_parts(
    query: CatalogSearchQueryDTO = Depends(),
    use_case: SearchPartsCatalog = Depends(get_search_catalog_use_case),
) -> CatalogSearchResponseDTO:
    """Search catalog endpoint following parse → execute → map → return pattern."""
    request = CatalogMapper.to_search_request(query)
    result = await use_case.execute(request)
    return CatalogMapper.to_search_response(result)


@router.get(
    "/parts/{part_id}",
    response_model=CatalogItemDTO,
    summary="Get one catalog item",
    responses={
        404: {"model": ErrorResponse, "description": "Part not found"},
        503: {"model": ErrorResponse, "description": "Backend unavailable"},
    },
)
async def get_part(
    part_id: int = Path(..., description="Part id", ge=1),
    use_case: GetCatalogPart = Depends(get_catalog_part_use_case),
) -> CatalogItemDTO:
    result = await use_case.execute(GetCatalogPartRequest(part_id=part_id))
    return CatalogMapper.to_item_response(result.item)


@router.get(
    "/filters",
    response_model=FilterOptionsResponseDTO,
    summary="Cascading filter options",
    description="""
    Options for the brand, model, category and year selects of one page.

    Models are narrowed by brand, categories by brand and model, years by
    brand, model and category. A selection that is no longer available is
    returned reset to `todas` in `selection`.
    """,
)
async def get_filter_options(
    query: CatalogSelectionQueryDTO = Depends(),
    use_case: GetCatalogFilterOptions = Depends(get_catalog_filter_options_use_case),
) -> FilterOptionsResponseDTO:
    result = await use_case.execute(CatalogMapper.to_options_request(query))
    return CatalogMapper.to_options_response(result.options)
