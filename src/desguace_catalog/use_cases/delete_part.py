"""Delete part use case."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from desguace_catalog.domain.errors import PartLockedError, ValidationError
from desguace_catalog.domain.order import locking_orders
from desguace_catalog.fetchers.entity_fetcher import OrderFetcher, PartFetcher

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DeletePartRequest:
    part_id: int


@dataclass(frozen=True, slots=True)
class DeletePartResponse:
    part_id: int


class DeletePart:
    """
    Use case for deleting a part from the inventory.

    Responsibilities:
    - Refuse the deletion while any open order (pendiente, pagado, enviado)
      references the part, without sending the delete request
    - Delegate the delete to the part fetcher, which updates the mirror
    """

    def __init__(self, parts: PartFetcher, orders: OrderFetcher) -> None:
        self._parts = parts
        self._orders = orders

    async def execute(self, request: DeletePartRequest) -> DeletePartResponse:
        """
        Execute the delete.

        Raises:
            ValidationError: If part_id is not positive
            PartLockedError: If an open order references the part
            NotFoundError: If the backend does not know the part
        """
        if request.part_id <= 0:
            raise ValidationError(
                errors=[{"field": "part_id", "message": "Must be a positive integer", "code": "INVALID_ID"}]
            )

        orders = await self._orders.list_by_part(request.part_id)
        blocking = locking_orders(orders, request.part_id)
        if blocking:
            logger.warning(
                "Part deletion blocked by open orders",
                extra={"part_id": request.part_id, "order_ids": [order.id for order in blocking]},
            )
            raise PartLockedError(request.part_id, [order.id for order in blocking])

        await self._parts.delete(request.part_id)
        return DeletePartResponse(part_id=request.part_id)
