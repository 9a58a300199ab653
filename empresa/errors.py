class DomainError(Exception):
    """Base de errores de dominio (negocio)."""

class NotFound(DomainError):
    """Empleado no encontrado para el DNI indicado."""

class DuplicateKey(DomainError):
    """Ya existe un empleado con ese DNI."""

class BadInput(DomainError):
    """Entrada inválida/valores fuera de contrato."""
