"""
Excepciones del motor de sincronizacion.

Cada error queda acotado a un ciclo de un tipo de entidad: nunca es fatal
para el proceso.
"""
from typing import Any, Dict, Optional

from xero_mirror.shared.constants.sync_constants import SyncCycleState
from xero_mirror.shared.exceptions.base import AppException


class SyncError(AppException):
    """
    Excepcion base de un ciclo de sincronizacion.

    Args:
        message: Mensaje descriptivo
        entity_type: Tipo de entidad del ciclo ("invoices", ...)
        stage: Estado del ciclo en el que ocurrio el fallo
        status_code: Codigo HTTP para el camino on-demand
    """

    kind = "SyncError"

    def __init__(
        self,
        message: str,
        *,
        entity_type: Optional[str] = None,
        stage: Optional[SyncCycleState] = None,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.entity_type = entity_type
        self.stage = stage
        merged = {"entity_type": entity_type, "stage": stage.value if stage else None}
        merged.update(details or {})
        super().__init__(
            message=message,
            status_code=status_code,
            error_code=self.kind,
            details=merged,
        )


class FetchFailed(SyncError):
    """Error de transporte o error remoto al llamar a la API de Xero."""

    kind = "FetchFailed"

    def __init__(self, message: str, **kwargs: Any):
        kwargs.setdefault("stage", SyncCycleState.FETCHING)
        kwargs.setdefault("status_code", 502)
        super().__init__(message, **kwargs)


class InvalidRemoteShape(SyncError):
    """La respuesta no contiene el array esperado bajo la wrapper key."""

    kind = "InvalidRemoteShape"

    def __init__(self, message: str, **kwargs: Any):
        kwargs.setdefault("stage", SyncCycleState.VALIDATING)
        kwargs.setdefault("status_code", 502)
        super().__init__(message, **kwargs)


class NormalizationFault(SyncError):
    """Un registro no pudo mapearse. Se descarta solo ese registro."""

    kind = "NormalizationFault"

    def __init__(self, message: str, *, record_id: Optional[str] = None, **kwargs: Any):
        self.record_id = record_id
        kwargs.setdefault("stage", SyncCycleState.NORMALIZING)
        kwargs.setdefault("status_code", 422)
        kwargs.setdefault("details", {"record_id": record_id})
        super().__init__(message, **kwargs)


class PersistConflict(SyncError):
    """Violacion de unicidad del identificador remoto al insertar."""

    kind = "PersistConflict"

    def __init__(self, message: str, **kwargs: Any):
        kwargs.setdefault("stage", SyncCycleState.PERSISTING)
        kwargs.setdefault("status_code", 409)
        super().__init__(message, **kwargs)


class PersistFailed(SyncError):
    """Cualquier otro fallo del store durante la insercion masiva."""

    kind = "PersistFailed"

    def __init__(self, message: str, **kwargs: Any):
        kwargs.setdefault("stage", SyncCycleState.PERSISTING)
        kwargs.setdefault("status_code", 500)
        super().__init__(message, **kwargs)
