from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from desguace_catalog.domain.errors import ValidationError


class ClientType(str, Enum):
    PARTICULAR = "particular"
    EMPRESA = "empresa"


@dataclass(frozen=True, slots=True)
class Client:
    id: int
    tipo_cliente: ClientType
    nombre: str = ""
    apellidos: str = ""
    dni_nif: str = ""
    razon_social: str | None = None
    cif: str | None = None
    email: str = ""
    telefono: str = ""
    acepta_comunicaciones: bool = False

    def validate(self) -> None:
        """
        Check the identification fields required by the client type.

        Raises:
            ValidationError: If a field required for ``tipo_cliente`` is empty
        """
        errors: list[dict[str, str]] = []
        if self.tipo_cliente is ClientType.PARTICULAR:
            if not self.dni_nif:
                errors.append(
                    {"field": "dni_nif", "message": "Required for particular clients", "code": "REQUIRED"}
                )
        else:
            if not self.razon_social:
                errors.append(
                    {"field": "razon_social", "message": "Required for empresa clients", "code": "REQUIRED"}
                )
            if not self.cif:
                errors.append({"field": "cif", "message": "Required for empresa clients", "code": "REQUIRED"})

        if errors:
            raise ValidationError(errors=errors)
