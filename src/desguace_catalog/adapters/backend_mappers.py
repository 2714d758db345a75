"""Mapping between the dismantling backend's JSON and domain entities."""

from __future__ import annotations

import json
from datetime import UTC, datetime
from decimal import Decimal, InvalidOperation
from typing import Any

from desguace_catalog.domain.client import Client, ClientType
from desguace_catalog.domain.errors import InvalidResponseError
from desguace_catalog.domain.order import Order, OrderStatus
from desguace_catalog.domain.part import Part, PartStatus
from desguace_catalog.domain.photo import Photo
from desguace_catalog.domain.vehicle import Vehicle, VehicleStatus

EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


def _decimal(value: Any) -> Decimal | None:
    if value is None or value == "":
        return None
    try:
        return Decimal(str(value))
    except InvalidOperation as exc:
        raise InvalidResponseError(f"Invalid decimal value: {value!r}") from exc


def _decimal_str(value: Decimal | None) -> str | None:
    return None if value is None else str(value)


def _datetime(value: Any) -> datetime:
    """Parse an ISO-8601 timestamp; naive values are taken as UTC."""
    if not value:
        return EPOCH
    if isinstance(value, datetime):
        parsed = value
    else:
        try:
            parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
        except ValueError as exc:
            raise InvalidResponseError(f"Invalid timestamp: {value!r}") from exc
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def _require(raw: dict[str, Any], key: str, resource: str) -> Any:
    if not isinstance(raw, dict) or raw.get(key) is None:
        raise InvalidResponseError(f"{resource} payload is missing '{key}'", resource=resource)
    return raw[key]


def _enum(enum_type: type, value: Any, resource: str) -> Any:
    try:
        return enum_type(value)
    except ValueError as exc:
        raise InvalidResponseError(
            f"Unknown {resource} estado: {value!r}", resource=resource
        ) from exc


class VehicleMapper:
    @staticmethod
    def to_domain(raw: dict[str, Any]) -> Vehicle:
        anio = raw.get("anio_fabricacion")
        return Vehicle(
            id=int(_require(raw, "id", "Vehiculo")),
            marca=raw.get("marca") or "",
            modelo=raw.get("modelo") or "",
            version=raw.get("version") or "",
            anio_fabricacion=int(anio) if anio not in (None, "") else None,
            tipo_combustible=raw.get("tipo_combustible") or "",
            kilometros=int(raw.get("kilometros") or 0),
            matricula=raw.get("matricula") or "",
            vin=raw.get("vin") or "",
            color=raw.get("color") or "",
            id_cliente=raw.get("id_cliente"),
            estado=_enum(VehicleStatus, raw.get("estado") or "activo", "Vehiculo"),
            datos_adicionales=raw.get("datos_adicionales") or {},
        )

    @staticmethod
    def to_payload(vehicle: Vehicle) -> dict[str, Any]:
        return {
            "id": vehicle.id,
            "marca": vehicle.marca,
            "modelo": vehicle.modelo,
            "version": vehicle.version,
            "anio_fabricacion": vehicle.anio_fabricacion,
            "tipo_combustible": vehicle.tipo_combustible,
            "kilometros": vehicle.kilometros,
            "matricula": vehicle.matricula,
            "vin": vehicle.vin,
            "color": vehicle.color,
            "id_cliente": vehicle.id_cliente,
            "estado": vehicle.estado.value,
            "datos_adicionales": vehicle.datos_adicionales,
        }

    @staticmethod
    def to_write_payload(data: dict[str, Any]) -> dict[str, Any]:
        """Create/update body; an unassigned client is sent as an explicit null."""
        payload = dict(data)
        payload.pop("id", None)
        if payload.get("id_cliente") is None:
            payload["id_cliente"] = None
        if isinstance(payload.get("estado"), VehicleStatus):
            payload["estado"] = payload["estado"].value
        return payload


class PartMapper:
    @staticmethod
    def to_domain(raw: dict[str, Any]) -> Part:
        datos = raw.get("datos_adicionales")
        if isinstance(datos, dict):
            # Some endpoints return the field already decoded
            datos = json.dumps(datos)
        return Part(
            id=int(_require(raw, "id", "Pieza")),
            id_vehiculo=raw.get("id_vehiculo"),
            tipo_pieza=raw.get("tipo_pieza") or "",
            descripcion=raw.get("descripcion") or "",
            estado=_enum(PartStatus, raw.get("estado") or "usada", "Pieza"),
            precio_venta=_decimal(raw.get("precio_venta")),
            precio_coste=_decimal(raw.get("precio_coste")),
            ubicacion_almacen=raw.get("ubicacion_almacen") or "",
            codigo_qr=raw.get("codigo_qr"),
            rfid=raw.get("rfid"),
            observaciones=raw.get("observaciones") or "",
            bloqueada_venta=bool(raw.get("bloqueada_venta", False)),
            datos_adicionales=datos,
        )

    @staticmethod
    def to_payload(part: Part) -> dict[str, Any]:
        return {
            "id": part.id,
            "id_vehiculo": part.id_vehiculo,
            "tipo_pieza": part.tipo_pieza,
            "descripcion": part.descripcion,
            "estado": part.estado.value,
            "precio_venta": _decimal_str(part.precio_venta),
            "precio_coste": _decimal_str(part.precio_coste),
            "ubicacion_almacen": part.ubicacion_almacen,
            "codigo_qr": part.codigo_qr,
            "rfid": part.rfid,
            "observaciones": part.observaciones,
            "bloqueada_venta": part.bloqueada_venta,
            "datos_adicionales": part.datos_adicionales,
        }


class PhotoMapper:
    @staticmethod
    def to_domain(raw: dict[str, Any]) -> Photo:
        return Photo(
            id=int(_require(raw, "id", "Foto")),
            url=raw.get("url") or "",
            fecha_subida=_datetime(raw.get("fecha_subida")),
            id_pieza=raw.get("id_pieza"),
            id_vehiculo=raw.get("id_vehiculo"),
            es_principal=bool(raw.get("es_principal", False)),
            nombre=raw.get("nombre") or "",
            descripcion=raw.get("descripcion"),
            tamanio=int(raw.get("tamanio") or 0),
            origen=raw.get("origen") or "manual",
        )

    @staticmethod
    def to_payload(photo: Photo) -> dict[str, Any]:
        return {
            "id": photo.id,
            "url": photo.url,
            "fecha_subida": photo.fecha_subida.isoformat(),
            "id_pieza": photo.id_pieza,
            "id_vehiculo": photo.id_vehiculo,
            "es_principal": photo.es_principal,
            "nombre": photo.nombre,
            "descripcion": photo.descripcion,
            "tamanio": photo.tamanio,
            "origen": photo.origen,
        }


class OrderMapper:
    @staticmethod
    def to_domain(raw: dict[str, Any]) -> Order:
        return Order(
            id=int(_require(raw, "id", "Pedido")),
            id_cliente=int(raw.get("id_cliente") or 0),
            id_pieza=int(_require(raw, "id_pieza", "Pedido")),
            estado=_enum(OrderStatus, raw.get("estado"), "Pedido"),
            total=_decimal(raw.get("total")) or Decimal("0"),
            tipo_venta=raw.get("tipo_venta") or "presencial",
            metodo_pago=raw.get("metodo_pago") or "",
        )

    @staticmethod
    def to_payload(order: Order) -> dict[str, Any]:
        return {
            "id": order.id,
            "id_cliente": order.id_cliente,
            "id_pieza": order.id_pieza,
            "estado": order.estado.value,
            "total": str(order.total),
            "tipo_venta": order.tipo_venta,
            "metodo_pago": order.metodo_pago,
        }


class ClientMapper:
    @staticmethod
    def to_domain(raw: dict[str, Any]) -> Client:
        return Client(
            id=int(_require(raw, "id", "Cliente")),
            tipo_cliente=_enum(ClientType, raw.get("tipo_cliente") or "particular", "Cliente"),
            nombre=raw.get("nombre") or "",
            apellidos=raw.get("apellidos") or "",
            dni_nif=raw.get("dni_nif") or "",
            razon_social=raw.get("razon_social"),
            cif=raw.get("cif"),
            email=raw.get("email") or "",
            telefono=raw.get("telefono") or "",
            acepta_comunicaciones=bool(raw.get("acepta_comunicaciones", False)),
        )

    @staticmethod
    def to_payload(client: Client) -> dict[str, Any]:
        return {
            "id": client.id,
            "tipo_cliente": client.tipo_cliente.value,
            "nombre": client.nombre,
            "apellidos": client.apellidos,
            "dni_nif": client.dni_nif,
            "razon_social": client.razon_social,
            "cif": client.cif,
            "email": client.email,
            "telefono": client.telefono,
            "acepta_comunicaciones": client.acepta_comunicaciones,
        }
