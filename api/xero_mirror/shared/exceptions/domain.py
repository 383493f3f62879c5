"""
Excepciones relacionadas con la lógica de dominio.
"""
from typing import Any

from xero_mirror.shared.exceptions.base import AppException


class DomainException(AppException):
    """Excepción base para errores de dominio."""

    def __init__(self, message: str, error_code: str = "DOMAIN_ERROR", details=None):
        super().__init__(
            message=message,
            status_code=400,
            error_code=error_code,
            details=details
        )


class EntityNotFoundException(DomainException):
    """Excepción cuando no se encuentra una entidad espejada."""

    def __init__(self, entity_name: str, entity_id: Any):
        super().__init__(
            message=f"{entity_name} con ID {entity_id} no encontrado",
            error_code="ENTITY_NOT_FOUND",
            details={"entity": entity_name, "id": str(entity_id)}
        )
        self.status_code = 404


class UnknownEntityTypeException(DomainException):
    """Excepción cuando se pide sincronizar un tipo de entidad no soportado."""

    def __init__(self, entity_type: str, valid_types: list[str]):
        super().__init__(
            message=f"Tipo de entidad '{entity_type}' no soportado",
            error_code="UNKNOWN_ENTITY_TYPE",
            details={
                "entity_type": entity_type,
                "valid_types": valid_types
            }
        )
        self.status_code = 404


class ValidationException(DomainException):
    """Excepción para errores de validación."""

    def __init__(self, message: str, field: str = None):
        details = {"field": field} if field else None
        super().__init__(
            message=message,
            error_code="VALIDATION_ERROR",
            details=details
        )
