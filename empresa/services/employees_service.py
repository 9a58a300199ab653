import logging

from empresa.repos import employees_repo as repo

log = logging.getLogger(__name__)


def exists_by_dni(dni):
    return repo.exists_by_dni(dni)

def get_by_dni(dni):
    return repo.get_by_dni(dni)

def get_all():
    return repo.get_all()

def save(employee):
    repo.save(employee)
    log.info("[employees] created dni=%s", employee.dni)

def update(employee):
    repo.update(employee)
    log.info("[employees] updated dni=%s", employee.dni)

def delete_if_exists(dni):
    deleted = repo.delete_if_exists(dni)
    if deleted:
        log.info("[employees] deleted dni=%s", dni)
    return deleted
