from fastapi import APIRouter, Depends, Path

from desguace_catalog.entrypoints.http.dependencies import (
    get_filter_origin_vehicles_use_case,
    get_origin_vehicle_use_case,
    get_origin_vehicles_use_case,
)
from desguace_catalog.entrypoints.http.dtos.vehicles import (
    OriginVehicleDTO,
    OriginVehiclesQueryDTO,
    OriginVehiclesResponseDTO,
)
from desguace_catalog.entrypoints.http.error_responses import ErrorResponse
from desguace_catalog.entrypoints.http.mappers.vehicle_mapper import OriginVehicleMapper
from desguace_catalog.use_cases.filter_origin_vehicles import FilterOriginVehicles
from desguace_catalog.use_cases.get_origin_vehicle import GetOriginVehicle, GetOriginVehicleRequest
from desguace_catalog.use_cases.get_origin_vehicles import GetOriginVehicles

router = APIRouter(prefix="/vehicles", tags=["Vehicles"])


@router.get(
    "/origin",
    response_model=OriginVehiclesResponseDTO,
    summary="Vehicles of origin",
    description="""
    One page of vehicles with part count and display image.

    When any of `marca`, `modelo`, `anio` or `combustible` is given, the page
    is filtered (brand/model: case-insensitive substring, year: exact,
    fuel: case-insensitive exact), pagination is recomputed from the
    matching vehicles, and `options` lists the values available on the page.
    """,
    responses={
        422: {"model": ErrorResponse, "description": "Validation error"},
        503: {"model": ErrorResponse, "description": "Backend unavailable"},
    },
)
async def list_origin_vehicles(
    query: OriginVehiclesQueryDTO = Depends(),
    list_use_case: GetOriginVehicles = Depends(get_origin_vehicles_use_case),
    filter_use_case: FilterOriginVehicles = Depends(get_filter_origin_vehicles_use_case),
) -> OriginVehiclesResponseDTO:
    if query.has_filters():
        result = await filter_use_case.execute(OriginVehicleMapper.to_filter_request(query))
    else:
        result = await list_use_case.execute(OriginVehicleMapper.to_list_request(query))
    return OriginVehicleMapper.to_list_response(result)


@router.get(
    "/origin/{vehicle_id}",
    response_model=OriginVehicleDTO,
    summary="Vehicle of origin detail",
    responses={404: {"model": ErrorResponse, "description": "Vehicle not found"}},
)
async def get_origin_vehicle(
    vehicle_id: int = Path(..., description="Vehicle id", ge=1),
    use_case: GetOriginVehicle = Depends(get_origin_vehicle_use_case),
) -> OriginVehicleDTO:
    result = await use_case.execute(GetOriginVehicleRequest(vehicle_id=vehicle_id))
    return OriginVehicleMapper.to_vehicle_response(result.vehicle)
