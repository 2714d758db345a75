from __future__ import annotations

from decimal import Decimal

from desguace_catalog.domain.catalog import ALL, CatalogFilters, CatalogItem, FilterOptions
from desguace_catalog.entrypoints.http.dtos.catalog import (
    CatalogItemDTO,
    CatalogSearchQueryDTO,
    CatalogSearchResponseDTO,
    CatalogSelectionDTO,
    CatalogSelectionQueryDTO,
    FilterOptionsResponseDTO,
)
from desguace_catalog.entrypoints.http.mappers.pagination_mapper import PaginationMapper
from desguace_catalog.entrypoints.http.mappers.photo_mapper import PhotoResponseMapper
from desguace_catalog.use_cases.get_catalog_filter_options import GetCatalogFilterOptionsRequest
from desguace_catalog.use_cases.search_parts_catalog import (
    SearchPartsCatalogRequest,
    SearchPartsCatalogResponse,
)


class CatalogMapper:
    """Maps between REST DTOs and domain models for the parts catalog."""

    @staticmethod
    def to_domain_filters(dto: CatalogSearchQueryDTO) -> CatalogFilters:
        """
        Converts query params to domain filters.

        Missing selects become ``ALL``; prices become ``Decimal``.
        """
        return CatalogFilters(
            search=dto.search,
            marca=dto.marca or ALL,
            modelo=dto.modelo or ALL,
            categoria=dto.categoria or ALL,
            anio=dto.anio or ALL,
            precio_min=Decimal(dto.precio_min) if dto.precio_min else None,
            precio_max=Decimal(dto.precio_max) if dto.precio_max else None,
        )

    @staticmethod
    def to_search_request(dto: CatalogSearchQueryDTO) -> SearchPartsCatalogRequest:
        return SearchPartsCatalogRequest(
            filters=CatalogMapper.to_domain_filters(dto),
            paging=PaginationMapper.to_domain_paging(dto),
        )

    @staticmethod
    def to_options_request(dto: CatalogSelectionQueryDTO) -> GetCatalogFilterOptionsRequest:
        return GetCatalogFilterOptionsRequest(
            selection=CatalogFilters(
                marca=dto.marca or ALL,
                modelo=dto.modelo or ALL,
                categoria=dto.categoria or ALL,
                anio=dto.anio or ALL,
            ),
            paging=PaginationMapper.to_domain_paging(dto),
        )

    @staticmethod
    def to_item_response(item: CatalogItem) -> CatalogItemDTO:
        """Converts a catalog item to its DTO; Decimal → str at the boundary."""
        return CatalogItemDTO(
            id=item.id,
            nombre=item.nombre,
            descripcion=item.descripcion,
            precio=str(item.precio),
            estado=item.estado,
            categoria=item.categoria,
            id_vehiculo=item.id_vehiculo,
            stock=item.stock,
            imagen_url=item.imagen_url,
            notas=item.notas,
            datos_adicionales=item.datos_adicionales,
            especificaciones=list(item.especificaciones),
            compatibilidad=list(item.compatibilidad),
            fotos=[PhotoResponseMapper.to_response(photo) for photo in item.fotos],
            foto_principal=(
                PhotoResponseMapper.to_response(item.foto_principal)
                if item.foto_principal is not None
                else None
            ),
        )

    @staticmethod
    def to_search_response(result: SearchPartsCatalogResponse) -> CatalogSearchResponseDTO:
        return CatalogSearchResponseDTO(
            items=[CatalogMapper.to_item_response(item) for item in result.items],
            pagination=PaginationMapper.to_response(result.pagination),
        )

    @staticmethod
    def to_options_response(options: FilterOptions) -> FilterOptionsResponseDTO:
        selection = options.selection
        return FilterOptionsResponseDTO(
            marcas=options.marcas,
            modelos=options.modelos,
            categorias=options.categorias,
            anios=options.anios,
            selection=CatalogSelectionDTO(
                marca=selection.marca,
                modelo=selection.modelo,
                categoria=selection.categoria,
                anio=selection.anio,
            ),
        )
