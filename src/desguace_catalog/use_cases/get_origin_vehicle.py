from __future__ import annotations

from dataclasses import dataclass

from desguace_catalog.domain.errors import ValidationError
from desguace_catalog.domain.vehicle import OriginVehicle
from desguace_catalog.joining.entity_joiner import OriginVehicleEnricher


@dataclass(frozen=True, slots=True)
class GetOriginVehicleRequest:
    vehicle_id: int


@dataclass(frozen=True, slots=True)
class GetOriginVehicleResponse:
    vehicle: OriginVehicle


class GetOriginVehicle:
    """Detail of one vehicle of origin with its three latest part photos."""

    def __init__(self, enricher: OriginVehicleEnricher) -> None:
        self._enricher = enricher

    async def execute(self, request: GetOriginVehicleRequest) -> GetOriginVehicleResponse:
        """
        Raises:
            ValidationError: If vehicle_id is not positive
            NotFoundError: If the vehicle does not exist
        """
        if request.vehicle_id <= 0:
            raise ValidationError(
                errors=[{"field": "vehicle_id", "message": "Must be a positive integer", "code": "INVALID_ID"}]
            )
        vehicle = await self._enricher.enrich_detail(request.vehicle_id)
        return GetOriginVehicleResponse(vehicle=vehicle)
