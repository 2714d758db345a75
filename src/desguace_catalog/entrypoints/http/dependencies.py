"""
Dependency injection for FastAPI routes.

Key principle: the container (HTTP connection pool, mirror caches) lives on
``app.state`` for the lifetime of the process. Use cases are stateless and
built per request from the container's fetchers.
"""

from __future__ import annotations

from fastapi import Depends, Request

from desguace_catalog.container import AppContainer
from desguace_catalog.use_cases.delete_part import DeletePart
from desguace_catalog.use_cases.filter_origin_vehicles import FilterOriginVehicles
from desguace_catalog.use_cases.get_catalog_filter_options import GetCatalogFilterOptions
from desguace_catalog.use_cases.get_catalog_part import GetCatalogPart
from desguace_catalog.use_cases.get_origin_vehicle import GetOriginVehicle
from desguace_catalog.use_cases.get_origin_vehicles import GetOriginVehicles
from desguace_catalog.use_cases.search_parts_catalog import SearchPartsCatalog
from desguace_catalog.use_cases.set_principal_photo import SetPrincipalPhoto
from desguace_catalog.use_cases.upload_photo import UploadPhoto


def get_container(request: Request) -> AppContainer:
    """
    Returns the process-wide container created at application startup.

    Raises:
        RuntimeError: If the application was started without a container
    """
    container = getattr(request.app.state, "container", None)
    if container is None:
        raise RuntimeError("Application container is not initialized")
    return container


def get_search_catalog_use_case(container: AppContainer = Depends(get_container)) -> SearchPartsCatalog:
    return SearchPartsCatalog(loader=container.catalog_loader)


def get_catalog_part_use_case(container: AppContainer = Depends(get_container)) -> GetCatalogPart:
    return GetCatalogPart(loader=container.catalog_loader)


def get_catalog_filter_options_use_case(
    container: AppContainer = Depends(get_container),
) -> GetCatalogFilterOptions:
    return GetCatalogFilterOptions(loader=container.catalog_loader)


def get_origin_vehicles_use_case(container: AppContainer = Depends(get_container)) -> GetOriginVehicles:
    return GetOriginVehicles(vehicles=container.vehicles, enricher=container.enricher)


def get_filter_origin_vehicles_use_case(
    container: AppContainer = Depends(get_container),
) -> FilterOriginVehicles:
    return FilterOriginVehicles(vehicles=container.vehicles, enricher=container.enricher)


def get_origin_vehicle_use_case(container: AppContainer = Depends(get_container)) -> GetOriginVehicle:
    return GetOriginVehicle(enricher=container.enricher)


def get_delete_part_use_case(container: AppContainer = Depends(get_container)) -> DeletePart:
    return DeletePart(parts=container.parts, orders=container.orders)


def get_upload_photo_use_case(container: AppContainer = Depends(get_container)) -> UploadPhoto:
    return UploadPhoto(photos=container.photos)


def get_set_principal_photo_use_case(container: AppContainer = Depends(get_container)) -> SetPrincipalPhoto:
    return SetPrincipalPhoto(photos=container.photos)
