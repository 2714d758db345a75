from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar

from desguace_catalog.domain.client import Client
from desguace_catalog.domain.order import Order
from desguace_catalog.domain.pagination import Page, Paging
from desguace_catalog.domain.part import Part
from desguace_catalog.domain.photo import Photo
from desguace_catalog.domain.vehicle import Vehicle

T = TypeVar("T")


class ResourceGateway(ABC, Generic[T]):
    """
    Port for one REST resource of the dismantling backend.

    Contract:
        - Inputs are validated by the caller (fetcher); gateways do not re-validate
        - Failures surface as DomainError subclasses (NotFoundError,
          BackendUnavailableError, InvalidResponseError, ...)
        - ``list`` returns pagination already normalized
    """

    resource: str

    @abstractmethod
    async def list(self, filters: dict[str, Any] | None = None, paging: Paging | None = None) -> Page[T]: ...

    @abstractmethod
    async def get(self, entity_id: int) -> T: ...

    @abstractmethod
    async def create(self, payload: dict[str, Any]) -> T: ...

    @abstractmethod
    async def update(self, entity_id: int, payload: dict[str, Any]) -> T: ...

    @abstractmethod
    async def delete(self, entity_id: int) -> None: ...


class VehicleGateway(ResourceGateway[Vehicle]):
    @abstractmethod
    async def list_by_client(self, client_id: int) -> list[Vehicle]: ...


class PartGateway(ResourceGateway[Part]):
    @abstractmethod
    async def list_by_vehicle(self, vehicle_id: int) -> list[Part]:
        """
        Parts belonging to a vehicle.

        The backend answers either a bare list or a paginated envelope;
        both are accepted.
        """
        ...


class PhotoGateway(ResourceGateway[Photo]):
    @abstractmethod
    async def list_by_part(self, part_id: int) -> list[Photo]: ...

    @abstractmethod
    async def upload(
        self,
        part_id: int,
        content: bytes,
        filename: str,
        content_type: str,
        fields: dict[str, str],
    ) -> Photo: ...

    @abstractmethod
    async def set_principal(self, photo_id: int) -> Photo: ...


class OrderGateway(ResourceGateway[Order]):
    @abstractmethod
    async def list_by_part(self, part_id: int) -> list[Order]: ...

    @abstractmethod
    async def list_by_client(self, client_id: int) -> list[Order]: ...


class ClientGateway(ResourceGateway[Client]):
    pass
