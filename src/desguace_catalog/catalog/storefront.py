"""Conversion of backend parts into storefront catalog items."""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Sequence

from desguace_catalog.domain.catalog import CatalogItem
from desguace_catalog.domain.part import Part, PartStatus
from desguace_catalog.domain.photo import Photo, principal_photo
from desguace_catalog.domain.vehicle import Vehicle

UNNAMED_PART = "Pieza sin nombre"
NOT_SPECIFIED = "No especificado"
DEFAULT_LOCATION = "Almacén principal"


def condition_label(part: Part) -> str:
    return "Nuevo" if part.estado is PartStatus.NUEVA else "Usado"


def vehicle_fields(vehicle: Vehicle | None) -> dict[str, Any]:
    if vehicle is None:
        return {}
    return {
        "marca": vehicle.marca,
        "modelo": vehicle.modelo,
        "version": vehicle.version,
        "anio": str(vehicle.anio_fabricacion) if vehicle.anio_fabricacion else "",
        "combustible": vehicle.tipo_combustible,
        "kilometraje": vehicle.kilometros,
        "color": vehicle.color,
        "bastidor": vehicle.vin,
        "matricula": vehicle.matricula,
    }


def merged_additional_data(part: Part, vehicle: Vehicle | None) -> dict[str, Any]:
    """
    Vehicle fields, overridden by the part's own JSON data, plus the
    reference under both ``referencia`` and ``codigo``.
    """
    reference = part.reference
    return {
        **vehicle_fields(vehicle),
        **part.additional_data(),
        "referencia": reference,
        "codigo": reference,
    }


def specifications(part: Part) -> tuple[str, ...]:
    return (
        f"Estado: {condition_label(part)}",
        f"Tipo: {part.tipo_pieza or NOT_SPECIFIED}",
        f"Ubicación: {part.ubicacion_almacen or DEFAULT_LOCATION}",
        f"Referencia: {part.reference}",
    )


def compatibility(vehicle: Vehicle | None) -> tuple[str, ...]:
    if vehicle is None:
        return ("Pieza universal", "Consultar compatibilidad específica")
    return (
        f"{vehicle.marca} {vehicle.modelo} {vehicle.version}",
        f"Año: {vehicle.anio_fabricacion or NOT_SPECIFIED}",
        f"Motor: {vehicle.tipo_combustible or NOT_SPECIFIED}",
    )


def to_catalog_item(
    part: Part,
    vehicle: Vehicle | None = None,
    photos: Sequence[Photo] = (),
) -> CatalogItem:
    """
    Build the storefront view of ``part``.

    ``vehicle`` is the part's vehicle of origin when known; ``photos`` are the
    part's photos (the principal one, or else the first, becomes the image).
    """
    principal = principal_photo(list(photos))
    return CatalogItem(
        id=part.id,
        nombre=part.descripcion or UNNAMED_PART,
        descripcion=part.descripcion,
        precio=part.precio_venta or part.precio_coste or Decimal("0"),
        estado=condition_label(part),
        categoria=part.tipo_pieza,
        id_vehiculo=part.id_vehiculo,
        stock=1,
        imagen_url=principal.url if principal is not None else "",
        notas=part.observaciones,
        datos_adicionales=merged_additional_data(part, vehicle),
        especificaciones=specifications(part),
        compatibilidad=compatibility(vehicle),
        fotos=tuple(photos),
        foto_principal=principal,
    )
