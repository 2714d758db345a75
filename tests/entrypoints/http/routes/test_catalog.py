"""
Test suite for the /v1/catalog routes.

Routes are exercised in isolation: use cases are replaced through
``app.dependency_overrides`` and only the HTTP contract is checked
(query parsing, mapping, status codes and error format).
"""

from __future__ import annotations

from datetime import UTC, datetime
from decimal import Decimal
from unittest.mock import AsyncMock, Mock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from desguace_catalog.domain.catalog import ALL, CatalogFilters, CatalogItem, FilterOptions
from desguace_catalog.domain.errors import BackendUnavailableError, NotFoundError
from desguace_catalog.domain.pagination import PageInfo, Paging
from desguace_catalog.domain.photo import Photo
from desguace_catalog.entrypoints.http.dependencies import (
    get_catalog_filter_options_use_case,
    get_catalog_part_use_case,
    get_search_catalog_use_case,
)
from desguace_catalog.entrypoints.http.exception_handlers import register_exception_handlers
from desguace_catalog.entrypoints.http.routes.catalog import router
from desguace_catalog.use_cases.get_catalog_filter_options import GetCatalogFilterOptionsResponse
from desguace_catalog.use_cases.get_catalog_part import GetCatalogPartRequest, GetCatalogPartResponse
from desguace_catalog.use_cases.search_parts_catalog import SearchPartsCatalogResponse


@pytest.fixture
def app() -> FastAPI:
    test_app = FastAPI()
    register_exception_handlers(test_app)
    test_app.include_router(router, prefix="/v1")
    return test_app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def use_case() -> Mock:
    mock = Mock()
    mock.execute = AsyncMock()
    return mock


@pytest.fixture
def catalog_item() -> CatalogItem:
    photo = Photo(id=100, url="/uploads/100.jpg", fecha_subida=datetime(2024, 1, 1, tzinfo=UTC), id_pieza=7, es_principal=True)
    return CatalogItem(
        id=7,
        nombre="Faro delantero",
        descripcion="Faro delantero",
        precio=Decimal("45.50"),
        estado="Usado",
        categoria="Faro",
        id_vehiculo=1,
        imagen_url=photo.url,
        datos_adicionales={"marca": "Toyota", "referencia": "REF-7"},
        especificaciones=("Estado: Usado",),
        compatibilidad=("Toyota Corolla 1.8",),
        fotos=(photo,),
        foto_principal=photo,
    )


# ==============================================================================
# GET /v1/catalog/parts
# ==============================================================================


def test_search_maps_query_to_request(app, client, use_case, catalog_item) -> None:
    use_case.execute.return_value = SearchPartsCatalogResponse(
        items=[catalog_item], pagination=PageInfo(page=2, limit=10, total=1, total_pages=1)
    )
    app.dependency_overrides[get_search_catalog_use_case] = lambda: use_case

    response = client.get(
        "/v1/catalog/parts",
        params={"marca": "Toyota", "search": "faro", "precio_min": "20", "precio_max": "99.90", "page": 2, "limit": 10},
    )

    assert response.status_code == 200
    request = use_case.execute.await_args.args[0]
    assert request.paging == Paging(page=2, limit=10)
    assert request.filters == CatalogFilters(
        search="faro",
        marca="Toyota",
        modelo=ALL,
        categoria=ALL,
        anio=ALL,
        precio_min=Decimal("20"),
        precio_max=Decimal("99.90"),
    )


def test_search_response_format(app, client, use_case, catalog_item) -> None:
    use_case.execute.return_value = SearchPartsCatalogResponse(
        items=[catalog_item], pagination=PageInfo(page=1, limit=15, total=1, total_pages=1)
    )
    app.dependency_overrides[get_search_catalog_use_case] = lambda: use_case

    body = client.get("/v1/catalog/parts").json()

    assert body["pagination"] == {"page": 1, "limit": 15, "total": 1, "total_pages": 1}
    item = body["items"][0]
    assert item["precio"] == "45.50"
    assert item["foto_principal"]["id"] == 100
    assert item["fotos"][0]["fecha_subida"] == "2024-01-01T00:00:00+00:00"
    assert item["datos_adicionales"]["referencia"] == "REF-7"


@pytest.mark.parametrize(
    "params",
    [{"page": 0}, {"limit": 0}, {"limit": 201}, {"precio_min": "abc"}, {"precio_max": "-5"}],
)
def test_search_rejects_invalid_query(app, client, use_case, params) -> None:
    app.dependency_overrides[get_search_catalog_use_case] = lambda: use_case

    response = client.get("/v1/catalog/parts", params=params)

    assert response.status_code == 422
    assert response.json()["code"] in ("VALIDATION_ERROR", "INVALID_VALUE")
    use_case.execute.assert_not_awaited()


def test_search_backend_down_is_503(app, client, use_case) -> None:
    use_case.execute.side_effect = BackendUnavailableError("Could not connect to the backend")
    app.dependency_overrides[get_search_catalog_use_case] = lambda: use_case

    response = client.get("/v1/catalog/parts")

    assert response.status_code == 503
    assert response.json() == {"detail": "Could not connect to the backend", "code": "BACKEND_UNAVAILABLE"}


# ==============================================================================
# GET /v1/catalog/parts/{part_id}
# ==============================================================================


def test_get_part(app, client, use_case, catalog_item) -> None:
    use_case.execute.return_value = GetCatalogPartResponse(item=catalog_item)
    app.dependency_overrides[get_catalog_part_use_case] = lambda: use_case

    response = client.get("/v1/catalog/parts/7")

    assert response.status_code == 200
    assert response.json()["nombre"] == "Faro delantero"
    use_case.execute.assert_awaited_once_with(GetCatalogPartRequest(part_id=7))


def test_get_part_not_found(app, client, use_case) -> None:
    use_case.execute.side_effect = NotFoundError("Pieza", "99")
    app.dependency_overrides[get_catalog_part_use_case] = lambda: use_case

    response = client.get("/v1/catalog/parts/99")

    assert response.status_code == 404
    assert response.json()["code"] == "NOT_FOUND"


def test_get_part_rejects_non_positive_id(app, client, use_case) -> None:
    app.dependency_overrides[get_catalog_part_use_case] = lambda: use_case

    assert client.get("/v1/catalog/parts/0").status_code == 422


# ==============================================================================
# GET /v1/catalog/filters
# ==============================================================================


def test_filter_options(app, client, use_case) -> None:
    use_case.execute.return_value = GetCatalogFilterOptionsResponse(
        options=FilterOptions(
            marcas=["Seat", "Toyota"],
            modelos=["Ibiza"],
            categorias=["Faro"],
            anios=["2012"],
            selection=CatalogFilters(marca="Seat", modelo=ALL),
        )
    )
    app.dependency_overrides[get_catalog_filter_options_use_case] = lambda: use_case

    response = client.get("/v1/catalog/filters", params={"marca": "Seat", "modelo": "Corolla"})

    assert response.status_code == 200
    body = response.json()
    assert body["modelos"] == ["Ibiza"]
    assert body["selection"] == {"marca": "Seat", "modelo": "todas", "categoria": "todas", "anio": "todas"}
    request = use_case.execute.await_args.args[0]
    assert request.selection.modelo == "Corolla"
    assert request.selection.categoria == ALL
