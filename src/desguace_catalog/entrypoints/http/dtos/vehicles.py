from typing import Any

from pydantic import BaseModel, Field

from desguace_catalog.entrypoints.http.dtos.pagination import PaginationDTO, PagingQueryDTO
from desguace_catalog.entrypoints.http.dtos.photos import PhotoDTO


class OriginVehicleDTO(BaseModel):
    id: int
    marca: str
    modelo: str
    version: str
    anio_fabricacion: int | None = None
    tipo_combustible: str
    kilometros: int
    kilometraje: int
    matricula: str
    vin: str
    bastidor: str
    color: str
    estado: str
    id_cliente: int | None = None
    datos_adicionales: dict[str, Any]
    num_piezas: int
    imagen_url: str
    imagenes: list[PhotoDTO] = Field(default_factory=list)


class OriginVehiclesQueryDTO(PagingQueryDTO):
    """Query parameters for the vehicles of origin listing."""

    marca: str | None = Field(
        default=None,
        description="Brand (case-insensitive substring)",
        examples=["toy"],
    )
    modelo: str | None = Field(
        default=None,
        description="Model (case-insensitive substring)",
        examples=["corolla"],
    )
    anio: int | None = Field(
        default=None,
        description="Year of manufacture (exact)",
        examples=[2015],
        ge=1900,
    )
    combustible: str | None = Field(
        default=None,
        description="Fuel type (case-insensitive exact match)",
        examples=["Diesel"],
    )

    def has_filters(self) -> bool:
        return bool(self.marca or self.modelo or self.anio or self.combustible)


class VehicleFilterOptionsDTO(BaseModel):
    marcas: list[str]
    modelos: list[str]
    anios: list[int]
    combustibles: list[str]


class OriginVehiclesResponseDTO(BaseModel):
    vehicles: list[OriginVehicleDTO]
    pagination: PaginationDTO
    options: VehicleFilterOptionsDTO | None = None
