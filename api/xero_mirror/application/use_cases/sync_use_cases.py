"""
Casos de uso para la sincronizacion Xero -> espejo local.

Los ciclos (uno por tipo de entidad) los construye el startup de la app y se
comparten entre el timer y los endpoints: el guard de ciclo en curso aplica a
ambos caminos.
"""
from typing import Dict, Optional

from loguru import logger

from xero_mirror.application.dto.sync_dto import (
    EntitySyncStatusDTO,
    SyncResultDTO,
    SyncStatusResponseDTO,
)
from xero_mirror.infrastructure.external.xero_sync.scheduler import SyncScheduler
from xero_mirror.infrastructure.external.xero_sync.sync_service import EntitySyncCycle, SyncResult
from xero_mirror.shared.constants.sync_constants import SyncOutcome
from xero_mirror.shared.exceptions.domain import UnknownEntityTypeException


def _result_message(result: SyncResult) -> str:
    if result.outcome == SyncOutcome.INSERTED:
        return (
            f"Sincronizacion de {result.entity_type} completada: "
            f"{result.inserted} registro(s) insertado(s)"
        )
    if result.outcome == SyncOutcome.SKIPPED:
        return f"Ya hay una sincronizacion de {result.entity_type} en curso. Ciclo omitido."
    if result.outcome == SyncOutcome.CONFLICT:
        return (
            f"Conflicto de unicidad sincronizando {result.entity_type}. "
            "Los registros se reintentan en el proximo ciclo."
        )
    if result.dropped:
        return f"Sin registros validos nuevos en {result.entity_type} ({result.dropped} descartado(s))"
    return f"Sin registros nuevos en {result.entity_type}"


class SyncUseCases:
    """Sync on-demand y consulta de estado de los ciclos."""

    def __init__(
        self,
        cycles: Dict[str, EntitySyncCycle],
        scheduler: Optional[SyncScheduler] = None,
    ):
        self.cycles = cycles
        self.scheduler = scheduler

    def _get_cycle(self, entity_type: str) -> EntitySyncCycle:
        cycle = self.cycles.get(entity_type)
        if cycle is None:
            raise UnknownEntityTypeException(entity_type, sorted(self.cycles))
        return cycle

    async def run_sync(self, entity_type: str) -> SyncResultDTO:
        """
        Ejecuta un ciclo completo y espera su resultado.

        Raises:
            UnknownEntityTypeException: Si el tipo de entidad no existe
            SyncError: FetchFailed, InvalidRemoteShape o PersistFailed
        """
        cycle = self._get_cycle(entity_type)
        logger.info(f"Iniciando sincronizacion on-demand de {entity_type}")

        result = await cycle.run_once()

        return SyncResultDTO(
            success=True,
            message=_result_message(result),
            entity_type=result.entity_type,
            outcome=result.outcome,
            fetched=result.fetched,
            new_records=result.new_records,
            inserted=result.inserted,
            dropped=result.dropped,
        )

    def get_status(self) -> SyncStatusResponseDTO:
        """Estado del ultimo ciclo de cada tipo de entidad."""
        entities: Dict[str, EntitySyncStatusDTO] = {}
        for entity_type, cycle in self.cycles.items():
            last = cycle.last_result
            entities[entity_type] = EntitySyncStatusDTO(
                entity_type=entity_type,
                state=cycle.state,
                running=cycle.is_running,
                interval_seconds=cycle.config.interval_seconds,
                last_outcome=last.outcome if last else None,
                last_started_at=last.started_at if last else None,
                last_finished_at=last.finished_at if last else None,
                last_inserted=last.inserted if last else None,
                last_error_kind=last.error_kind if last else None,
                last_error_message=last.error_message if last else None,
            )

        return SyncStatusResponseDTO(
            scheduler_running=bool(self.scheduler and self.scheduler.running),
            entities=entities,
        )
