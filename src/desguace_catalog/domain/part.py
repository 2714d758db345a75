from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)


class PartStatus(str, Enum):
    NUEVA = "nueva"
    USADA = "usada"
    DANADA = "dañada"
    EN_REVISION = "en_revision"


@dataclass(frozen=True, slots=True)
class Part:
    id: int
    tipo_pieza: str
    estado: PartStatus
    id_vehiculo: int | None = None
    descripcion: str = ""
    precio_venta: Decimal | None = None
    precio_coste: Decimal | None = None
    ubicacion_almacen: str = ""
    codigo_qr: str | None = None
    rfid: str | None = None
    observaciones: str = ""
    bloqueada_venta: bool = False
    datos_adicionales: str | None = None

    @property
    def reference(self) -> str:
        return self.codigo_qr or self.rfid or f"REF-{self.id}"

    def additional_data(self) -> dict[str, Any]:
        return parse_additional_data(self.datos_adicionales, part_id=self.id)


# Escaped control sequences that corrupt stored JSON when they are escaped twice.
_BAD_ESCAPES = re.compile(r"\\\\[nrt]|\\[nrt]")


def parse_additional_data(raw: str | dict[str, Any] | None, part_id: int | None = None) -> dict[str, Any]:
    """
    Decode a part's ``datos_adicionales`` field.

    Makes one repair attempt (stripping escaped newline, carriage return and
    tab sequences) when the first parse fails. Anything still unparseable, or
    any JSON value that is not an object, is treated as an empty mapping.
    """
    if raw is None or raw == "":
        return {}
    if isinstance(raw, dict):
        return dict(raw)

    try:
        parsed = json.loads(raw)
    except ValueError:
        try:
            parsed = json.loads(_BAD_ESCAPES.sub("", raw))
        except ValueError:
            logger.warning(
                "Unrecoverable datos_adicionales",
                extra={"part_id": part_id},
            )
            return {}
        logger.info("Recovered datos_adicionales after repair", extra={"part_id": part_id})

    if not isinstance(parsed, dict):
        return {}
    return parsed
