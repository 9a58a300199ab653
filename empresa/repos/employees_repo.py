from __future__ import annotations
from typing import List, Optional

from sqlalchemy.exc import IntegrityError

from empresa.models import db, Employee
from empresa.errors import DuplicateKey, NotFound
from empresa.schemas.employees import EmployeeInput, PAYLOAD_FIELDS
from empresa.utils.db import retry_with_backoff


def _rollback(_exc=None):
    db.session.rollback()


def exists_by_dni(dni: str) -> bool:
    return db.session.get(Employee, dni) is not None


def get_by_dni(dni: str) -> Optional[Employee]:
    return db.session.get(Employee, dni)


def get_all() -> List[Employee]:
    return Employee.query.order_by(Employee.dni.asc()).all()


def save(data: EmployeeInput) -> Employee:
    def _tx():
        e = Employee(dni=data.dni, **{k: getattr(data, k) for k in PAYLOAD_FIELDS})
        db.session.add(e)
        db.session.commit()
        return e

    try:
        return retry_with_backoff(_tx, on_retry=_rollback)
    except IntegrityError as exc:
        db.session.rollback()
        raise DuplicateKey(data.dni) from exc


def update(data: EmployeeInput) -> Employee:
    def _tx():
        e = db.session.get(Employee, data.dni)
        if e is None:
            raise NotFound(data.dni)
        for k in PAYLOAD_FIELDS:
            setattr(e, k, getattr(data, k))
        db.session.commit()
        return e

    return retry_with_backoff(_tx, on_retry=_rollback)


def delete_if_exists(dni: str) -> bool:
    def _tx():
        n = Employee.query.filter_by(dni=dni).delete(synchronize_session=False)
        db.session.commit()
        return n > 0

    return retry_with_backoff(_tx, on_retry=_rollback)
