"""
DTOs del motor de sincronizacion.
Definen la respuesta del sync on-demand y del estado por entidad.
"""
from datetime import datetime
from typing import Dict, Optional

from pydantic import BaseModel, Field

from xero_mirror.shared.constants.sync_constants import SyncCycleState, SyncOutcome


class SyncResultDTO(BaseModel):
    """Resultado de un ciclo de sincronizacion on-demand."""

    status: int = Field(200, description="Codigo HTTP replicado en el cuerpo")
    success: bool
    message: str
    entity_type: str
    outcome: SyncOutcome
    fetched: int = Field(0, description="Registros recibidos de Xero")
    new_records: int = Field(0, description="Registros que no estaban espejados")
    inserted: int = Field(0, description="Registros insertados en el espejo")
    dropped: int = Field(0, description="Registros descartados por normalizacion")


class SyncErrorDTO(BaseModel):
    """Cuerpo de error de un ciclo on-demand fallido."""

    status: int
    success: bool = False
    message: str
    kind: str
    entity_type: Optional[str] = None
    stage: Optional[SyncCycleState] = None


class EntitySyncStatusDTO(BaseModel):
    """Estado del ultimo ciclo de un tipo de entidad (en memoria)."""

    entity_type: str
    state: SyncCycleState
    running: bool
    interval_seconds: float
    last_outcome: Optional[SyncOutcome] = None
    last_started_at: Optional[datetime] = None
    last_finished_at: Optional[datetime] = None
    last_inserted: Optional[int] = None
    last_error_kind: Optional[str] = None
    last_error_message: Optional[str] = None


class SyncStatusResponseDTO(BaseModel):
    """Estado de todos los ciclos."""

    status: int = 200
    success: bool = True
    scheduler_running: bool
    entities: Dict[str, EntitySyncStatusDTO]
