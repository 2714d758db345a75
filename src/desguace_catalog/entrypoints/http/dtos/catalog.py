from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from desguace_catalog.entrypoints.http.dtos.pagination import PaginationDTO, PagingQueryDTO
from desguace_catalog.entrypoints.http.dtos.photos import PhotoDTO

PRICE_PATTERN = r"^\d+(\.\d{1,2})?$"


class CatalogItemDTO(BaseModel):
    id: int
    nombre: str
    descripcion: str
    precio: str
    estado: str
    categoria: str
    id_vehiculo: int | None = None
    stock: int
    imagen_url: str
    notas: str
    datos_adicionales: dict[str, Any]
    especificaciones: list[str]
    compatibilidad: list[str]
    fotos: list[PhotoDTO]
    foto_principal: PhotoDTO | None = None


class CatalogSelectionQueryDTO(PagingQueryDTO):
    """Select values of the storefront filters. ``todas`` disables a select."""

    marca: str | None = Field(default=None, description="Vehicle brand (exact match)", examples=["Toyota"])
    modelo: str | None = Field(default=None, description="Vehicle model (exact match)", examples=["Corolla"])
    categoria: str | None = Field(default=None, description="Part type (exact match)", examples=["Motor"])
    anio: str | None = Field(default=None, description="Vehicle year (exact match)", examples=["2015"])


class CatalogSearchQueryDTO(CatalogSelectionQueryDTO):
    """Query parameters for searching the parts catalog."""

    search: str | None = Field(
        default=None,
        description="Free text matched against name, description, category and additional data",
        examples=["faro"],
    )
    precio_min: str | None = Field(
        default=None,
        description="Minimum price (inclusive, decimal as string)",
        examples=["20.00"],
        pattern=PRICE_PATTERN,
    )
    precio_max: str | None = Field(
        default=None,
        description="Maximum price (inclusive, decimal as string)",
        examples=["150.00"],
        pattern=PRICE_PATTERN,
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "search": "faro",
                "marca": "Toyota",
                "modelo": "todas",
                "precio_min": "20.00",
                "precio_max": "150.00",
                "page": 1,
                "limit": 15,
            }
        }
    )


class CatalogSearchResponseDTO(BaseModel):
    items: list[CatalogItemDTO]
    pagination: PaginationDTO


class CatalogSelectionDTO(BaseModel):
    marca: str | None
    modelo: str | None
    categoria: str | None
    anio: str | None


class FilterOptionsResponseDTO(BaseModel):
    marcas: list[str]
    modelos: list[str]
    categorias: list[str]
    anios: list[str]
    selection: CatalogSelectionDTO
