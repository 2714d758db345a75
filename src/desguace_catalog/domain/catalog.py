from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from desguace_catalog.domain.errors import ValidationError
from desguace_catalog.domain.photo import Photo


# Select values that mean "no filter".
ALL = "todas"
INACTIVE_SENTINELS = frozenset({"todas", "todos", ""})


class FilterValidationError(ValidationError):
    """Raised when filter parameters are invalid."""

    pass


def is_active(value: str | None) -> bool:
    return value is not None and value.strip() not in INACTIVE_SENTINELS


@dataclass(frozen=True, slots=True)
class CatalogItem:
    """A part as sold in the public storefront."""

    id: int
    nombre: str
    descripcion: str
    precio: Decimal
    estado: str
    categoria: str
    id_vehiculo: int | None = None
    stock: int = 1
    imagen_url: str = ""
    notas: str = ""
    datos_adicionales: dict[str, Any] = field(default_factory=dict)
    especificaciones: tuple[str, ...] = ()
    compatibilidad: tuple[str, ...] = ()
    fotos: tuple[Photo, ...] = ()
    foto_principal: Photo | None = None

    @property
    def anio(self) -> str | None:
        data = self.datos_adicionales
        for key in ("anio", "año", "anio_fabricacion", "año_fabricacion"):
            value = data.get(key)
            if value not in (None, ""):
                return str(value)
        return None

    @property
    def marca(self) -> str | None:
        value = self.datos_adicionales.get("marca")
        return str(value) if value else None

    @property
    def modelo(self) -> str | None:
        value = self.datos_adicionales.get("modelo")
        return str(value) if value else None


@dataclass(frozen=True, slots=True)
class CatalogFilters:
    search: str | None = None
    marca: str | None = ALL
    modelo: str | None = ALL
    categoria: str | None = ALL
    anio: str | None = ALL
    precio_min: Decimal | None = None
    precio_max: Decimal | None = None

    def validate(self) -> None:
        """
        Validate filter parameters.

        Raises:
            FilterValidationError: If filter parameters are invalid
        """
        if self.precio_min is not None and not isinstance(self.precio_min, Decimal):
            raise FilterValidationError("precio_min must be Decimal or None")
        if self.precio_max is not None and not isinstance(self.precio_max, Decimal):
            raise FilterValidationError("precio_max must be Decimal or None")
        if (
            self.precio_min is not None
            and self.precio_max is not None
            and self.precio_min > self.precio_max
        ):
            raise FilterValidationError("precio_min cannot be greater than precio_max")


@dataclass(frozen=True, slots=True)
class FilterOptions:
    """
    Cascading option sets for the storefront selects, plus the selection
    after dependent values that fell out of their narrowed set were reset.
    """

    marcas: list[str]
    modelos: list[str]
    categorias: list[str]
    anios: list[str]
    selection: CatalogFilters


@dataclass(frozen=True, slots=True)
class VehicleFilters:
    marca: str | None = None
    modelo: str | None = None
    anio: int | None = None
    combustible: str | None = None
