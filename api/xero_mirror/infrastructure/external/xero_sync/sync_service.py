"""
Ciclo de sincronizacion Xero -> espejo local (uno por tipo de entidad).

Diseño (resumen):
- Fetch de la coleccion completa en Xero
- Valida que el payload tenga un array bajo la wrapper key
- Scan completo de IDs ya espejados (sin cursor persistido)
- Filtra los registros nuevos (dedup por identificador remoto)
- Normaliza registro a registro; los mal formados se descartan y se loguean
- Insercion masiva del lote

Estados: IDLE -> FETCHING -> VALIDATING -> DEDUPING -> NORMALIZING -> PERSISTING -> IDLE,
con FAILED alcanzable desde cualquier paso. Un fallo solo termina ESE ciclo.

Politica de solapamiento:
- Si un ciclo de la misma entidad sigue en curso, el nuevo se omite (SKIPPED).
- Respaldo: el UNIQUE de remote_id convierte cualquier duplicado en
  PersistConflict, que se trata como resultado benigno.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict, Optional

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from xero_mirror.domain.entities.xero_entities import MirroredEntity
from xero_mirror.domain.repositories.mirror_store import IMirrorStore
from xero_mirror.shared.constants.sync_constants import SyncCycleState, SyncOutcome
from xero_mirror.shared.exceptions.sync import (
    InvalidRemoteShape,
    NormalizationFault,
    PersistConflict,
    SyncError,
)

from .dedup import filter_new_records
from .entity_mappings import ENTITY_CONFIGS
from .normalizer import normalize_record
from .sync_config import EntityTypeConfig
from .types import utc_now
from .xero_client import XeroApiConfig, XeroClient


@dataclass(frozen=True)
class SyncResult:
    """Resultado de un ciclo."""

    entity_type: str
    outcome: SyncOutcome
    fetched: int = 0
    new_records: int = 0
    inserted: int = 0
    dropped: int = 0
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None
    failed_stage: Optional[SyncCycleState] = None
    error_kind: Optional[str] = None
    error_message: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.outcome != SyncOutcome.FAILED


@dataclass
class _CycleCounters:
    fetched: int = 0
    new_records: int = 0
    dropped: int = 0


class EntitySyncCycle:
    """
    Orquestador del pipeline para un tipo de entidad.
    """

    def __init__(
        self,
        *,
        config: EntityTypeConfig,
        client: XeroClient,
        store: IMirrorStore,
    ) -> None:
        self._config = config
        self._client = client
        self._store = store
        self._lock = asyncio.Lock()
        self.state = SyncCycleState.IDLE
        self.last_result: Optional[SyncResult] = None

    @property
    def config(self) -> EntityTypeConfig:
        return self._config

    @property
    def entity_type(self) -> str:
        return self._config.entity_type

    @property
    def is_running(self) -> bool:
        return self._lock.locked()

    async def run_once(self) -> SyncResult:
        """
        Ejecuta un ciclo completo (camino on-demand).

        Raises:
            SyncError: FetchFailed, InvalidRemoteShape o PersistFailed
        """
        if self._lock.locked():
            logger.warning(f"[{self.entity_type}] Sync ya esta corriendo. Se omite este ciclo.")
            return SyncResult(
                entity_type=self.entity_type,
                outcome=SyncOutcome.SKIPPED,
                started_at=utc_now(),
                finished_at=utc_now(),
            )

        async with self._lock:
            started_at = utc_now()
            counters = _CycleCounters()
            try:
                result = await self._run(started_at, counters)
            except asyncio.CancelledError:
                logger.warning(f"[{self.entity_type}] Ciclo cancelado en '{self.state.value}'")
                self.last_result = SyncResult(
                    entity_type=self.entity_type,
                    outcome=SyncOutcome.FAILED,
                    fetched=counters.fetched,
                    new_records=counters.new_records,
                    dropped=counters.dropped,
                    started_at=started_at,
                    finished_at=utc_now(),
                    failed_stage=self.state,
                    error_kind="Cancelled",
                    error_message="Ciclo cancelado",
                )
                self.state = SyncCycleState.FAILED
                raise
            except Exception as e:
                failed_stage = self.state
                if isinstance(e, SyncError) and e.stage is not None:
                    failed_stage = e.stage
                self.state = SyncCycleState.FAILED
                self.last_result = SyncResult(
                    entity_type=self.entity_type,
                    outcome=SyncOutcome.FAILED,
                    fetched=counters.fetched,
                    new_records=counters.new_records,
                    dropped=counters.dropped,
                    started_at=started_at,
                    finished_at=utc_now(),
                    failed_stage=failed_stage,
                    error_kind=getattr(e, "kind", type(e).__name__),
                    error_message=str(e),
                )
                raise

            self.state = SyncCycleState.IDLE
            self.last_result = result
            return result

    async def run_safely(self) -> Optional[SyncResult]:
        """
        Ejecuta un ciclo sin propagar errores (camino del timer).

        Los fallos se loguean y quedan en last_result; nunca son "pegajosos":
        el siguiente tick arranca un ciclo nuevo desde IDLE.
        """
        try:
            return await self.run_once()
        except SyncError as e:
            stage = e.stage.value if e.stage else self.state.value
            logger.error(f"[{self.entity_type}] Ciclo fallido en '{stage}' ({e.kind}): {e.message}")
        except Exception as e:
            logger.exception(f"[{self.entity_type}] Error inesperado en ciclo de sync: {type(e).__name__}: {e}")
        return self.last_result

    async def _run(self, started_at: datetime, counters: _CycleCounters) -> SyncResult:
        config = self._config

        self.state = SyncCycleState.FETCHING
        logger.debug(f"[{config.entity_type}] Obteniendo {config.collection_path} desde Xero")
        payload = await self._client.fetch(config)

        self.state = SyncCycleState.VALIDATING
        records = self._validate_payload(payload)
        counters.fetched = len(records)

        self.state = SyncCycleState.DEDUPING
        existing_ids = await self._store.load_existing_ids(config)
        candidates = filter_new_records(existing_ids, records, config.id_field)
        counters.new_records = len(candidates)

        if not candidates:
            logger.info(f"[{config.entity_type}] No hay registros nuevos para guardar")
            return self._finish(SyncOutcome.NOOP, started_at, counters)

        self.state = SyncCycleState.NORMALIZING
        normalized = self._normalize_all(candidates, counters)
        if not normalized:
            logger.warning(
                f"[{config.entity_type}] Los {len(candidates)} registros nuevos fueron descartados por normalizacion"
            )
            return self._finish(SyncOutcome.NOOP, started_at, counters)

        self.state = SyncCycleState.PERSISTING
        try:
            inserted = await self._store.insert_many(config, normalized)
        except PersistConflict as e:
            # Esperable con ciclos solapados / otro proceso: el proximo ciclo
            # recalcula los faltantes desde cero.
            logger.warning(f"[{config.entity_type}] {e.message}. Lote descartado, se reintenta en el proximo ciclo.")
            return self._finish(SyncOutcome.CONFLICT, started_at, counters)

        logger.success(
            f"[{config.entity_type}] Sync completado. nuevos={len(candidates)}, "
            f"insertados={inserted}, descartados={counters.dropped}"
        )
        return self._finish(SyncOutcome.INSERTED, started_at, counters, inserted=inserted)

    def _validate_payload(self, payload: Any) -> list:
        wrapper_key = self._config.wrapper_key
        if not isinstance(payload, dict):
            raise InvalidRemoteShape(
                f"Formato invalido: se esperaba un objeto JSON con '{wrapper_key}'",
                entity_type=self.entity_type,
            )
        records = payload.get(wrapper_key)
        if not isinstance(records, list):
            raise InvalidRemoteShape(
                f"Formato invalido: {wrapper_key} deberia ser un array",
                entity_type=self.entity_type,
            )
        return records

    def _normalize_all(self, candidates: list, counters: _CycleCounters) -> list[MirroredEntity]:
        normalized: list[MirroredEntity] = []
        for raw in candidates:
            try:
                normalized.append(normalize_record(raw, config=self._config))
            except NormalizationFault as e:
                counters.dropped += 1
                logger.warning(f"[{self.entity_type}] Registro descartado: {e.message}")
        return normalized

    def _finish(
        self,
        outcome: SyncOutcome,
        started_at: datetime,
        counters: _CycleCounters,
        *,
        inserted: int = 0,
    ) -> SyncResult:
        return SyncResult(
            entity_type=self.entity_type,
            outcome=outcome,
            fetched=counters.fetched,
            new_records=counters.new_records,
            inserted=inserted,
            dropped=counters.dropped,
            started_at=started_at,
            finished_at=utc_now(),
        )


def build_sync_cycles(
    *,
    api_config: XeroApiConfig,
    session_factory: Callable[[], AsyncSession],
    intervals: Optional[Dict[str, float]] = None,
) -> Dict[str, EntitySyncCycle]:
    """
    Construye un ciclo por tipo de entidad, compartiendo cliente y store.

    Args:
        api_config: Configuracion explicita de Xero
        session_factory: Factory de sesiones async (AsyncSessionLocal)
        intervals: Periodo del timer por tipo de entidad (opcional)
    """
    from xero_mirror.infrastructure.repositories.mirror_repository import MirrorRepository

    client = XeroClient(api_config)
    store = MirrorRepository(session_factory)
    intervals = intervals or {}

    cycles: Dict[str, EntitySyncCycle] = {}
    for entity_type, config in ENTITY_CONFIGS.items():
        if entity_type in intervals:
            config = config.with_interval(intervals[entity_type])
        cycles[entity_type] = EntitySyncCycle(config=config, client=client, store=store)
    return cycles
