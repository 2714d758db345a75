from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum


class OrderStatus(str, Enum):
    PENDIENTE = "pendiente"
    PAGADO = "pagado"
    ENVIADO = "enviado"
    ENTREGADO = "entregado"
    CANCELADO = "cancelado"
    DEVUELTO = "devuelto"


# Orders in these states no longer hold on to their part.
TERMINAL_STATUSES = frozenset(
    {OrderStatus.ENTREGADO, OrderStatus.CANCELADO, OrderStatus.DEVUELTO}
)


@dataclass(frozen=True, slots=True)
class Order:
    id: int
    id_cliente: int
    id_pieza: int
    estado: OrderStatus
    total: Decimal = Decimal("0")
    tipo_venta: str = "presencial"
    metodo_pago: str = ""

    @property
    def is_open(self) -> bool:
        return self.estado not in TERMINAL_STATUSES


def locking_orders(orders: list[Order], part_id: int) -> list[Order]:
    """Open orders that reference ``part_id`` and therefore block its deletion."""
    return [order for order in orders if order.id_pieza == part_id and order.is_open]
