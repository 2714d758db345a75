"""
Test suite for the entity joiner.

Verifies:
- Results stay aligned with the input regardless of completion order
- A failing item gets its fallback and does not fail the join
- Origin vehicle enrichment and publication into the vehicle mirror
"""

from __future__ import annotations

import asyncio
from datetime import UTC, datetime

import pytest

from desguace_catalog.domain.errors import BackendUnavailableError, NotFoundError
from desguace_catalog.domain.vehicle import PLACEHOLDER_IMAGE_URL
from desguace_catalog.joining.entity_joiner import (
    ENRICHMENT_KEY,
    join_related,
    photos_of_parts,
    vehicle_photos,
)


# ==============================================================================
# join_related
# ==============================================================================


async def test_join_preserves_input_order() -> None:
    async def slow_double(value: int) -> int:
        await asyncio.sleep(0.01 * (4 - value))
        return value * 2

    assert await join_related([1, 2, 3], slow_double, lambda value: -1) == [2, 4, 6]


async def test_join_uses_fallback_for_failing_items() -> None:
    async def fetch(value: int) -> str:
        if value == 2:
            raise BackendUnavailableError("down")
        return f"ok-{value}"

    result = await join_related([1, 2, 3], fetch, lambda value: f"fallback-{value}")

    assert result == ["ok-1", "fallback-2", "ok-3"]


async def test_join_of_nothing_is_empty() -> None:
    async def fetch(value: int) -> int:
        return value

    assert await join_related([], fetch, lambda value: 0) == []


# ==============================================================================
# Photos
# ==============================================================================


async def test_photos_of_parts_skips_failing_part(make_backend, make_part, make_photo) -> None:
    backend = make_backend(
        photos=[
            make_photo(1, id_pieza=10, fecha_subida=datetime(2024, 1, 1, tzinfo=UTC)),
            make_photo(2, id_pieza=20, fecha_subida=datetime(2024, 3, 1, tzinfo=UTC)),
            make_photo(3, id_pieza=30, fecha_subida=datetime(2024, 2, 1, tzinfo=UTC)),
        ]
    )
    backend.photo_gateway.failing_parts.add(20)

    photos = await photos_of_parts([make_part(10), make_part(20), make_part(30)], backend.photos)

    assert [photo.id for photo in photos] == [3, 1]


async def test_photos_of_parts_newest_first_and_limited(make_backend, make_part, make_photo) -> None:
    backend = make_backend(
        photos=[make_photo(i, id_pieza=10, fecha_subida=datetime(2024, i, 1, tzinfo=UTC)) for i in range(1, 6)]
    )

    photos = await photos_of_parts([make_part(10)], backend.photos, limit=3)

    assert [photo.id for photo in photos] == [5, 4, 3]


async def test_vehicle_photos_empty_when_parts_unavailable(make_backend) -> None:
    backend = make_backend()
    backend.part_gateway.fail_with = BackendUnavailableError("down")

    assert await vehicle_photos(1, backend.parts, backend.photos) == []


# ==============================================================================
# Origin vehicle enrichment
# ==============================================================================


async def test_enrich_counts_parts_and_uses_first_part_photo(
    make_backend, make_vehicle, make_part, make_photo
) -> None:
    backend = make_backend(
        vehicles=[make_vehicle(1), make_vehicle(2)],
        parts=[make_part(10, id_vehiculo=1), make_part(11, id_vehiculo=1)],
        photos=[make_photo(100, id_pieza=10, url="/img/faro.jpg")],
    )

    enriched = await backend.enricher.enrich(backend.vehicle_gateway.stored())

    assert [(origin.id, origin.num_piezas, origin.imagen_url) for origin in enriched] == [
        (1, 2, "/img/faro.jpg"),
        (2, 0, PLACEHOLDER_IMAGE_URL),
    ]


async def test_enrich_keeps_order_when_later_vehicle_finishes_first(
    make_backend, make_vehicle, make_part
) -> None:
    backend = make_backend(
        vehicles=[make_vehicle(1), make_vehicle(2), make_vehicle(3)],
        parts=[make_part(10, id_vehiculo=1)],
    )
    backend.part_gateway.delays = {1: 0.05, 2: 0.02}

    enriched = await backend.enricher.enrich(backend.vehicle_gateway.stored())

    assert [origin.id for origin in enriched] == [1, 2, 3]
    assert enriched[0].num_piezas == 1


async def test_enrich_failure_falls_back_to_bare_vehicle(
    make_backend, make_vehicle, make_part
) -> None:
    backend = make_backend(
        vehicles=[make_vehicle(1), make_vehicle(2)],
        parts=[make_part(10, id_vehiculo=1), make_part(20, id_vehiculo=2)],
    )
    backend.photo_gateway.failing_parts.add(10)

    enriched = await backend.enricher.enrich(backend.vehicle_gateway.stored())

    assert enriched[0].num_piezas == 0
    assert enriched[0].imagen_url == PLACEHOLDER_IMAGE_URL
    assert enriched[1].num_piezas == 1


async def test_enrich_detail_prefers_stored_image(make_backend, make_vehicle, make_part, make_photo) -> None:
    backend = make_backend(
        vehicles=[make_vehicle(1, datos_adicionales={"imagen_url": "/img/portada.jpg"})],
        parts=[make_part(10, id_vehiculo=1)],
        photos=[make_photo(100, id_pieza=10)],
    )

    detail = await backend.enricher.enrich_detail(1)

    assert detail.imagen_url == "/img/portada.jpg"
    assert [photo.id for photo in detail.imagenes] == [100]
    assert detail.num_piezas == 1


async def test_enrich_detail_falls_back_to_latest_photo(make_backend, make_vehicle, make_part, make_photo) -> None:
    backend = make_backend(
        vehicles=[make_vehicle(1)],
        parts=[make_part(10, id_vehiculo=1)],
        photos=[
            make_photo(100, id_pieza=10, fecha_subida=datetime(2024, 1, 1, tzinfo=UTC)),
            make_photo(101, id_pieza=10, url="/img/nueva.jpg", fecha_subida=datetime(2024, 6, 1, tzinfo=UTC)),
        ],
    )

    detail = await backend.enricher.enrich_detail(1)

    assert detail.imagen_url == "/img/nueva.jpg"


async def test_enrich_detail_without_parts_uses_placeholder(make_backend, make_vehicle) -> None:
    backend = make_backend(vehicles=[make_vehicle(1)])
    backend.part_gateway.fail_with = BackendUnavailableError("down")

    detail = await backend.enricher.enrich_detail(1)

    assert detail.num_piezas == 0
    assert detail.imagenes == ()
    assert detail.imagen_url == PLACEHOLDER_IMAGE_URL


async def test_enrich_detail_unknown_vehicle_raises(make_backend) -> None:
    with pytest.raises(NotFoundError):
        await make_backend().enricher.enrich_detail(404)


async def test_publish_notifies_vehicle_subscribers(make_backend, make_vehicle, make_part) -> None:
    backend = make_backend(
        vehicles=[make_vehicle(1, datos_adicionales={"color_interior": "negro"})],
        parts=[make_part(10, id_vehiculo=1)],
    )
    seen: list[int] = []
    backend.vehicles.cache.subscribe(lambda entity_id, entity: seen.append(entity_id))

    await backend.enricher.enrich_and_publish(backend.vehicle_gateway.stored())

    assert seen == [1]
    published = backend.vehicles.cache.get(1)
    assert published.datos_adicionales == {
        "color_interior": "negro",
        ENRICHMENT_KEY: {"num_piezas": 1, "imagen_url": PLACEHOLDER_IMAGE_URL},
    }


async def test_detail_after_list_still_uses_part_photos(make_backend, make_vehicle, make_part, make_photo) -> None:
    backend = make_backend(
        vehicles=[make_vehicle(1)],
        parts=[make_part(10, id_vehiculo=1), make_part(11, id_vehiculo=1)],
        photos=[make_photo(110, id_pieza=11, url="/img/real.jpg")],
    )

    listed = await backend.enricher.enrich_and_publish(backend.vehicle_gateway.stored())
    detail = await backend.enricher.enrich_detail(1)

    assert listed[0].imagen_url == PLACEHOLDER_IMAGE_URL
    assert detail.imagen_url == "/img/real.jpg"
    assert [photo.url for photo in detail.imagenes] == ["/img/real.jpg"]
