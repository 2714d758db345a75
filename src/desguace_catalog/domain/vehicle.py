from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from desguace_catalog.domain.photo import Photo


PLACEHOLDER_IMAGE_URL = "/assets/logo-kacum.svg"


class VehicleStatus(str, Enum):
    ACTIVO = "activo"
    PROCESANDO = "procesando"
    DESGUAZADO = "desguazado"
    BAJA = "baja"


@dataclass(frozen=True, slots=True)
class Vehicle:
    id: int
    marca: str
    modelo: str
    version: str = ""
    anio_fabricacion: int | None = None
    tipo_combustible: str = ""
    kilometros: int = 0
    matricula: str = ""
    vin: str = ""
    color: str = ""
    id_cliente: int | None = None
    estado: VehicleStatus = VehicleStatus.ACTIVO
    datos_adicionales: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class OriginVehicle:
    """
    Vehicle as shown in the "vehicles of origin" views.

    Carries the enrichment computed from the vehicle's parts: part count,
    display image and, for the detail view, the latest part photos.
    """

    vehicle: Vehicle
    num_piezas: int = 0
    imagen_url: str = PLACEHOLDER_IMAGE_URL
    imagenes: tuple[Photo, ...] = ()

    @property
    def id(self) -> int:
        return self.vehicle.id

    @property
    def bastidor(self) -> str:
        return self.vehicle.vin

    @property
    def kilometraje(self) -> int:
        return self.vehicle.kilometros
