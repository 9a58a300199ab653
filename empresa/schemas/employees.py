from __future__ import annotations
from dataclasses import dataclass, asdict
from typing import Mapping

PAYLOAD_FIELDS = ("name", "surname", "role", "email")

# Mismos límites que las columnas de employees
MAX_LENGTHS = {"dni": 32, "name": 120, "surname": 120, "role": 120, "email": 255}


@dataclass(frozen=True)
class EmployeeInput:
    """Datos de un empleado ya ligados desde el formulario."""
    dni: str
    name: str = ""
    surname: str = ""
    role: str = ""
    email: str = ""

    def to_dict(self) -> dict:
        return asdict(self)


def empty_employee() -> EmployeeInput:
    return EmployeeInput(dni="")


def validate_employee(data: Mapping) -> EmployeeInput:
    dni = (data.get("dni") or "").strip()
    if not dni:
        raise ValueError("DNI is required")
    fields = {k: (data.get(k) or "").strip() for k in PAYLOAD_FIELDS}
    for k, v in (("dni", dni), *fields.items()):
        if len(v) > MAX_LENGTHS[k]:
            raise ValueError(f"{k} too long (max {MAX_LENGTHS[k]})")
    return EmployeeInput(dni=dni, **fields)
