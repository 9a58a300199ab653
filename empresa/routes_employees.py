from __future__ import annotations
from flask import Blueprint, current_app, flash, redirect, render_template, request, url_for

from empresa import limiter
from empresa.controller import (
    CREATE_FORM, EDIT_FORM, LIST, EmployeeController, Redirect,
)
from empresa.errors import BadInput
from empresa.schemas.employees import validate_employee
from empresa.services import employees_service

# Se registra con url_prefix="/company" en create_app().
employees_bp = Blueprint("employees", __name__)

controller = EmployeeController(employees_service)

def _write_limit():
    return current_app.config["EMPRESA_WRITE_LIMIT"]

_ENDPOINTS = {
    LIST: "employees.list_employees",
    CREATE_FORM: "employees.create_form",
    EDIT_FORM: "employees.edit_form",
}

# mensaje = éxito, error = fallo (los lee la plantilla base)
_CATEGORIES = {"success": "mensaje", "error": "error"}


def _respond(result):
    if isinstance(result, Redirect):
        if result.outcome is not None:
            flash(result.outcome.text, _CATEGORIES[result.outcome.kind])
        return redirect(url_for(_ENDPOINTS[result.target], **result.params))
    return render_template(result.view, **result.context)


def _bind_employee():
    try:
        return validate_employee(request.form)
    except ValueError as e:
        raise BadInput(str(e))


@employees_bp.get("")
def list_employees():
    return _respond(controller.list())


@employees_bp.get("/crear")
def create_form():
    return _respond(controller.show_create_form())


@employees_bp.post("/crear")
@limiter.limit(_write_limit)
def create_employee():
    try:
        employee = _bind_employee()
    except BadInput as e:
        flash(str(e), "error")
        return redirect(url_for("employees.create_form"))
    return _respond(controller.create(employee))


@employees_bp.get("/editar/<path:dni>")
def edit_form(dni):
    return _respond(controller.show_edit_form(dni))


@employees_bp.post("/guardar")
@limiter.limit(_write_limit)
def update_employee():
    try:
        employee = _bind_employee()
    except BadInput as e:
        flash(str(e), "error")
        return redirect(url_for("employees.create_form"))
    return _respond(controller.update(employee))


@employees_bp.get("/buscar")
def search_employee():
    return _respond(controller.search(request.args.get("dni", "")))


@employees_bp.post("/eliminar/<path:dni>")
@limiter.limit(_write_limit)
def delete_employee(dni):
    return _respond(controller.delete(dni))
