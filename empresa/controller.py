"""
Decisiones del CRUD de empleados.

El controlador no conoce Flask: devuelve un ``Render`` (vista + contexto) o un
``Redirect`` (destino lógico + parámetros) y, cuando corresponde, un
``Outcome`` de un solo uso que la capa HTTP convierte en ``flash()``.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional, Union

from empresa.errors import DuplicateKey, NotFound
from empresa.schemas.employees import EmployeeInput, empty_employee

log = logging.getLogger(__name__)

FORM_VIEW = "employees/form.html"
LIST_VIEW = "employees/list.html"

# Destinos lógicos de redirección
LIST = "list"
CREATE_FORM = "create_form"
EDIT_FORM = "edit_form"

SUCCESS = "success"
ERROR = "error"

MSG_DUPLICATE = "DNI already exists"
MSG_CREATED = "Employee created"
MSG_NOT_FOUND = "Employee not found"
MSG_MISSING_DNI = "DNI does not exist"
MSG_UPDATED = "Employee updated"
MSG_DELETED = "Employee deleted"


@dataclass(frozen=True)
class Outcome:
    kind: str
    text: str


@dataclass(frozen=True)
class Render:
    view: str
    context: dict = field(default_factory=dict)


@dataclass(frozen=True)
class Redirect:
    target: str
    params: dict = field(default_factory=dict)
    outcome: Optional[Outcome] = None


Result = Union[Render, Redirect]


def _to_list(text: str, kind: str = ERROR) -> Redirect:
    return Redirect(LIST, outcome=Outcome(kind, text))


class EmployeeController:
    """
    Reglas del ciclo de vida de un empleado.

    `service` expone exists_by_dni, get_by_dni, save, update,
    delete_if_exists y get_all.
    """

    def __init__(self, service):
        self.service = service

    def show_create_form(self) -> Render:
        return Render(FORM_VIEW, {"employee": empty_employee(), "mode": "create"})

    def create(self, employee: EmployeeInput) -> Redirect:
        if self.service.exists_by_dni(employee.dni):
            log.warning("[employees] create rejected, duplicate dni=%s", employee.dni)
            return Redirect(CREATE_FORM, outcome=Outcome(ERROR, MSG_DUPLICATE))
        try:
            self.service.save(employee)
        except DuplicateKey:
            # alta concurrente con el mismo DNI: la base la rechazó
            log.warning("[employees] create lost race, dni=%s", employee.dni)
            return Redirect(CREATE_FORM, outcome=Outcome(ERROR, MSG_DUPLICATE))
        return _to_list(MSG_CREATED, SUCCESS)

    def show_edit_form(self, dni: str) -> Result:
        employee = self.service.get_by_dni(dni)
        if employee is None:
            return _to_list(MSG_NOT_FOUND)
        return Render(FORM_VIEW, {"employee": employee, "mode": "edit"})

    def update(self, employee: EmployeeInput) -> Redirect:
        missing = Redirect(EDIT_FORM, {"dni": employee.dni}, Outcome(ERROR, MSG_MISSING_DNI))
        if not self.service.exists_by_dni(employee.dni):
            log.warning("[employees] update rejected, unknown dni=%s", employee.dni)
            return missing
        try:
            self.service.update(employee)
        except NotFound:
            return missing
        return _to_list(MSG_UPDATED, SUCCESS)

    def list(self) -> Render:
        return Render(LIST_VIEW, {"employees": list(self.service.get_all())})

    def search(self, dni: str) -> Result:
        dni = (dni or "").strip()
        employee = self.service.get_by_dni(dni) if dni else None
        if employee is None:
            return _to_list(MSG_NOT_FOUND)
        return Render(LIST_VIEW, {"employees": [employee]})

    def delete(self, dni: str) -> Redirect:
        if self.service.delete_if_exists(dni):
            return _to_list(MSG_DELETED, SUCCESS)
        return _to_list(MSG_NOT_FOUND)
