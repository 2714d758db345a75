from __future__ import annotations

from desguace_catalog.domain.catalog import VehicleFilters
from desguace_catalog.domain.vehicle import OriginVehicle
from desguace_catalog.entrypoints.http.dtos.vehicles import (
    OriginVehicleDTO,
    OriginVehiclesQueryDTO,
    OriginVehiclesResponseDTO,
    VehicleFilterOptionsDTO,
)
from desguace_catalog.entrypoints.http.mappers.pagination_mapper import PaginationMapper
from desguace_catalog.entrypoints.http.mappers.photo_mapper import PhotoResponseMapper
from desguace_catalog.use_cases.filter_origin_vehicles import (
    FilterOriginVehiclesRequest,
    FilterOriginVehiclesResponse,
)
from desguace_catalog.use_cases.get_origin_vehicles import (
    GetOriginVehiclesRequest,
    GetOriginVehiclesResponse,
)


class OriginVehicleMapper:
    """Maps between REST DTOs and domain models for the vehicles of origin views."""

    @staticmethod
    def to_list_request(dto: OriginVehiclesQueryDTO) -> GetOriginVehiclesRequest:
        return GetOriginVehiclesRequest(paging=PaginationMapper.to_domain_paging(dto))

    @staticmethod
    def to_filter_request(dto: OriginVehiclesQueryDTO) -> FilterOriginVehiclesRequest:
        return FilterOriginVehiclesRequest(
            filters=VehicleFilters(
                marca=dto.marca,
                modelo=dto.modelo,
                anio=dto.anio,
                combustible=dto.combustible,
            ),
            paging=PaginationMapper.to_domain_paging(dto),
        )

    @staticmethod
    def to_vehicle_response(origin: OriginVehicle) -> OriginVehicleDTO:
        vehicle = origin.vehicle
        return OriginVehicleDTO(
            id=vehicle.id,
            marca=vehicle.marca,
            modelo=vehicle.modelo,
            version=vehicle.version,
            anio_fabricacion=vehicle.anio_fabricacion,
            tipo_combustible=vehicle.tipo_combustible,
            kilometros=vehicle.kilometros,
            kilometraje=origin.kilometraje,
            matricula=vehicle.matricula,
            vin=vehicle.vin,
            bastidor=origin.bastidor,
            color=vehicle.color,
            estado=vehicle.estado.value,
            id_cliente=vehicle.id_cliente,
            datos_adicionales=vehicle.datos_adicionales,
            num_piezas=origin.num_piezas,
            imagen_url=origin.imagen_url,
            imagenes=[PhotoResponseMapper.to_response(photo) for photo in origin.imagenes],
        )

    @staticmethod
    def to_list_response(
        result: GetOriginVehiclesResponse | FilterOriginVehiclesResponse,
    ) -> OriginVehiclesResponseDTO:
        options = None
        if isinstance(result, FilterOriginVehiclesResponse):
            options = VehicleFilterOptionsDTO(
                marcas=result.options.marcas,
                modelos=result.options.modelos,
                anios=result.options.anios,
                combustibles=result.options.combustibles,
            )
        return OriginVehiclesResponseDTO(
            vehicles=[OriginVehicleMapper.to_vehicle_response(origin) for origin in result.vehicles],
            pagination=PaginationMapper.to_response(result.pagination),
            options=options,
        )
