"""
Client-side filtering of already fetched pages.

Filtering only ever sees the current backend page. Pagination of a filtered
view is recomputed from the filtered items, never taken from the backend.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Callable, Iterable, Sequence

from desguace_catalog.domain.catalog import (
    ALL,
    CatalogFilters,
    CatalogItem,
    FilterOptions,
    VehicleFilters,
    is_active,
)
from desguace_catalog.domain.pagination import Page, PageInfo
from desguace_catalog.domain.vehicle import Vehicle

CatalogPredicate = Callable[[CatalogItem], bool]


# ==============================================================================
# Storefront catalog
# ==============================================================================


def _matches_search(term: str) -> CatalogPredicate:
    needle = term.lower()

    def predicate(item: CatalogItem) -> bool:
        if needle in item.nombre.lower():
            return True
        if needle in item.descripcion.lower():
            return True
        if needle in item.categoria.lower():
            return True
        return any(needle in str(value).lower() for value in item.datos_adicionales.values())

    return predicate


def _matches_brand(marca: str) -> CatalogPredicate:
    return lambda item: item.marca == marca


def _matches_model(modelo: str) -> CatalogPredicate:
    return lambda item: item.modelo == modelo


def _matches_category(categoria: str) -> CatalogPredicate:
    return lambda item: item.categoria == categoria


def _matches_year(anio: str) -> CatalogPredicate:
    return lambda item: item.anio == anio


def _matches_price(precio_min: Decimal | None, precio_max: Decimal | None) -> CatalogPredicate:
    def predicate(item: CatalogItem) -> bool:
        if precio_min is not None and item.precio < precio_min:
            return False
        if precio_max is not None and item.precio > precio_max:
            return False
        return True

    return predicate


def catalog_predicates(filters: CatalogFilters) -> list[CatalogPredicate]:
    """One predicate per active filter; inactive filters contribute nothing."""
    predicates: list[CatalogPredicate] = []
    if filters.search and filters.search.strip():
        predicates.append(_matches_search(filters.search.strip()))
    if is_active(filters.marca):
        predicates.append(_matches_brand(filters.marca))
    if is_active(filters.modelo):
        predicates.append(_matches_model(filters.modelo))
    if is_active(filters.categoria):
        predicates.append(_matches_category(filters.categoria))
    if is_active(filters.anio):
        predicates.append(_matches_year(filters.anio))
    if filters.precio_min is not None or filters.precio_max is not None:
        predicates.append(_matches_price(filters.precio_min, filters.precio_max))
    return predicates


def filter_catalog(items: Iterable[CatalogItem], filters: CatalogFilters) -> list[CatalogItem]:
    predicates = catalog_predicates(filters)
    return [
        item
        for item in items
        if item.stock > 0 and all(predicate(item) for predicate in predicates)
    ]


def paginate_filtered(items: list, pagination: PageInfo) -> Page:
    """
    Wrap a filtered subset with recomputed pagination.

    ``total`` is the number of filtered items and ``total_pages`` is
    ``ceil(total / limit)``; the page number is kept.
    """
    return Page(items=items, pagination=pagination.for_filtered(len(items)))


def filter_options(items: Sequence[CatalogItem], selection: CatalogFilters) -> FilterOptions:
    """
    Cascading option sets for the brand, model, category and year selects.

    Models come from items of the selected brand, categories from items of
    the selected brand and model, years from items of the selected brand,
    model and category. A dependent selection missing from its narrowed set
    is reset to ``ALL`` before the next level is computed.
    """
    marca, modelo = selection.marca, selection.modelo
    categoria, anio = selection.categoria, selection.anio

    marcas = sorted({item.marca for item in items if item.marca})

    by_brand = [item for item in items if not is_active(marca) or item.marca == marca]
    modelos = sorted({item.modelo for item in by_brand if item.modelo})
    if is_active(marca) and is_active(modelo) and modelo not in modelos:
        modelo = ALL

    by_model = [item for item in by_brand if not is_active(modelo) or item.modelo == modelo]
    categorias = sorted({item.categoria for item in by_model if item.categoria})
    if (is_active(marca) or is_active(modelo)) and is_active(categoria) and categoria not in categorias:
        categoria = ALL

    by_category = [item for item in by_model if not is_active(categoria) or item.categoria == categoria]
    anios = sorted({item.anio for item in by_category if item.anio}, key=_year_key, reverse=True)
    if (is_active(marca) or is_active(modelo) or is_active(categoria)) and is_active(anio) and anio not in anios:
        anio = ALL

    return FilterOptions(
        marcas=marcas,
        modelos=modelos,
        categorias=categorias,
        anios=anios,
        selection=CatalogFilters(
            search=selection.search,
            marca=marca,
            modelo=modelo,
            categoria=categoria,
            anio=anio,
            precio_min=selection.precio_min,
            precio_max=selection.precio_max,
        ),
    )


def _year_key(value: str) -> int:
    try:
        return int(value)
    except ValueError:
        return 0


# ==============================================================================
# Vehicles of origin
# ==============================================================================


def matches_vehicle(vehicle: Vehicle, filters: VehicleFilters) -> bool:
    if filters.marca and filters.marca.lower() not in vehicle.marca.lower():
        return False
    if filters.modelo and filters.modelo.lower() not in vehicle.modelo.lower():
        return False
    if filters.anio and vehicle.anio_fabricacion != filters.anio:
        return False
    if filters.combustible and vehicle.tipo_combustible.lower() != filters.combustible.lower():
        return False
    return True


def filter_vehicles(vehicles: Iterable[Vehicle], filters: VehicleFilters) -> list[Vehicle]:
    return [vehicle for vehicle in vehicles if matches_vehicle(vehicle, filters)]


def unique_brands(vehicles: Iterable[Vehicle]) -> list[str]:
    return sorted({vehicle.marca for vehicle in vehicles if vehicle.marca})


def unique_models(vehicles: Iterable[Vehicle], marca: str | None = None) -> list[str]:
    return sorted(
        {
            vehicle.modelo
            for vehicle in vehicles
            if vehicle.modelo and (not marca or vehicle.marca.lower() == marca.lower())
        }
    )


def unique_years(vehicles: Iterable[Vehicle]) -> list[int]:
    return sorted(
        {vehicle.anio_fabricacion for vehicle in vehicles if vehicle.anio_fabricacion},
        reverse=True,
    )


def unique_fuel_types(vehicles: Iterable[Vehicle]) -> list[str]:
    return sorted({vehicle.tipo_combustible for vehicle in vehicles if vehicle.tipo_combustible})
