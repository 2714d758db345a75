"""Test suite for the /v1/parts and /v1/photos routes."""

from __future__ import annotations

from datetime import UTC, datetime
from unittest.mock import AsyncMock, Mock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from desguace_catalog.domain.errors import NotFoundError, PartLockedError, ValidationError
from desguace_catalog.domain.photo import Photo
from desguace_catalog.entrypoints.http.dependencies import (
    get_delete_part_use_case,
    get_set_principal_photo_use_case,
    get_upload_photo_use_case,
)
from desguace_catalog.entrypoints.http.exception_handlers import register_exception_handlers
from desguace_catalog.entrypoints.http.routes.parts import router as parts_router
from desguace_catalog.entrypoints.http.routes.photos import router as photos_router
from desguace_catalog.use_cases.delete_part import DeletePartRequest, DeletePartResponse
from desguace_catalog.use_cases.set_principal_photo import SetPrincipalPhotoRequest, SetPrincipalPhotoResponse
from desguace_catalog.use_cases.upload_photo import UploadPhotoResponse


@pytest.fixture
def use_case() -> Mock:
    mock = Mock()
    mock.execute = AsyncMock()
    return mock


@pytest.fixture
def app() -> FastAPI:
    test_app = FastAPI()
    register_exception_handlers(test_app)
    test_app.include_router(parts_router, prefix="/v1")
    test_app.include_router(photos_router, prefix="/v1")
    return test_app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def photo() -> Photo:
    return Photo(
        id=10,
        url="/uploads/piezas/7/faro.jpg",
        fecha_subida=datetime(2024, 5, 1, tzinfo=UTC),
        id_pieza=7,
        es_principal=True,
        nombre="faro.jpg",
    )


# ==============================================================================
# DELETE /v1/parts/{part_id}
# ==============================================================================


def test_delete_part(app, client, use_case) -> None:
    use_case.execute.return_value = DeletePartResponse(part_id=7)
    app.dependency_overrides[get_delete_part_use_case] = lambda: use_case

    response = client.delete("/v1/parts/7")

    assert response.status_code == 204
    assert response.content == b""
    use_case.execute.assert_awaited_once_with(DeletePartRequest(part_id=7))


def test_delete_locked_part_is_409(app, client, use_case) -> None:
    use_case.execute.side_effect = PartLockedError(7, [31])
    app.dependency_overrides[get_delete_part_use_case] = lambda: use_case

    response = client.delete("/v1/parts/7")

    assert response.status_code == 409
    assert response.json() == {
        "detail": "Part 7 is included in order 31 and cannot be deleted",
        "code": "PART_LOCKED",
    }


def test_delete_unknown_part_is_404(app, client, use_case) -> None:
    use_case.execute.side_effect = NotFoundError("piezas", "7")
    app.dependency_overrides[get_delete_part_use_case] = lambda: use_case

    assert client.delete("/v1/parts/7").status_code == 404


# ==============================================================================
# POST /v1/parts/{part_id}/photos
# ==============================================================================


def test_upload_photo(app, client, use_case, photo) -> None:
    use_case.execute.return_value = UploadPhotoResponse(photo=photo)
    app.dependency_overrides[get_upload_photo_use_case] = lambda: use_case

    response = client.post(
        "/v1/parts/7/photos",
        files={"foto": ("faro.jpg", b"\xff\xd8jpeg", "image/jpeg")},
        data={"descripcion": "Lado izquierdo", "es_principal": "true"},
    )

    assert response.status_code == 201
    assert response.json()["url"] == "/uploads/piezas/7/faro.jpg"
    request = use_case.execute.await_args.args[0]
    assert request.part_id == 7
    assert request.content == b"\xff\xd8jpeg"
    assert request.filename == "faro.jpg"
    assert request.content_type == "image/jpeg"
    assert request.descripcion == "Lado izquierdo"
    assert request.make_principal is True


def test_upload_without_file_is_422(app, client, use_case) -> None:
    app.dependency_overrides[get_upload_photo_use_case] = lambda: use_case

    response = client.post("/v1/parts/7/photos", data={"descripcion": "sin foto"})

    assert response.status_code == 422
    use_case.execute.assert_not_awaited()


def test_upload_invalid_file_reports_field_errors(app, client, use_case) -> None:
    use_case.execute.side_effect = ValidationError(
        errors=[{"field": "foto", "message": "Must be an image", "code": "INVALID_CONTENT_TYPE"}]
    )
    app.dependency_overrides[get_upload_photo_use_case] = lambda: use_case

    response = client.post("/v1/parts/7/photos", files={"foto": ("notas.pdf", b"%PDF", "application/pdf")})

    assert response.status_code == 422
    assert response.json()["errors"][0]["code"] == "INVALID_CONTENT_TYPE"


# ==============================================================================
# PUT /v1/photos/{photo_id}/principal
# ==============================================================================


def test_set_principal(app, client, use_case, photo) -> None:
    use_case.execute.return_value = SetPrincipalPhotoResponse(photo=photo)
    app.dependency_overrides[get_set_principal_photo_use_case] = lambda: use_case

    response = client.put("/v1/photos/10/principal")

    assert response.status_code == 200
    assert response.json()["es_principal"] is True
    use_case.execute.assert_awaited_once_with(SetPrincipalPhotoRequest(photo_id=10))


def test_set_principal_unknown_photo(app, client, use_case) -> None:
    use_case.execute.side_effect = NotFoundError("fotos", "10")
    app.dependency_overrides[get_set_principal_photo_use_case] = lambda: use_case

    assert client.put("/v1/photos/10/principal").status_code == 404
