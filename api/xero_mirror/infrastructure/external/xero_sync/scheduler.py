"""
Timer de sincronizacion: un job de APScheduler por tipo de entidad.

El scheduler lo crea y lo detiene el ciclo de vida de la app (startup/shutdown),
nunca al importar el modulo.
"""

from __future__ import annotations

from typing import Dict, Iterable, Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger
from loguru import logger

from .sync_service import EntitySyncCycle

JOB_ID_PREFIX = "xero_sync_"


def job_id_for(entity_type: str) -> str:
    return f"{JOB_ID_PREFIX}{entity_type}"


class SyncScheduler:
    """
    Dispara `run_safely` de cada ciclo cada `interval_seconds`.

    Cada tick lanza un ciclo aunque el anterior siga corriendo: APScheduler
    permite varias instancias y es el guard del ciclo quien lo omite (SKIPPED).
    """

    def __init__(
        self,
        cycles: Iterable[EntitySyncCycle],
        *,
        scheduler: Optional[AsyncIOScheduler] = None,
        max_instances: int = 3,
    ) -> None:
        self._cycles: Dict[str, EntitySyncCycle] = {c.entity_type: c for c in cycles}
        self._scheduler = scheduler or AsyncIOScheduler(timezone="UTC")
        self._max_instances = max_instances

    @property
    def cycles(self) -> Dict[str, EntitySyncCycle]:
        return self._cycles

    @property
    def running(self) -> bool:
        return bool(self._scheduler.running)

    def start(self) -> None:
        """Registra un job por entidad y arranca el scheduler (idempotente)."""
        if self.running:
            logger.debug("Scheduler de sync ya estaba corriendo")
            return

        for entity_type, cycle in self._cycles.items():
            interval = cycle.config.interval_seconds
            self._scheduler.add_job(
                cycle.run_safely,
                trigger=IntervalTrigger(seconds=interval),
                id=job_id_for(entity_type),
                name=f"Xero sync: {entity_type}",
                replace_existing=True,
                max_instances=self._max_instances,
                coalesce=True,
            )
            logger.info(f"Sync programado: {entity_type} cada {interval}s")

        self._scheduler.start()
        logger.success(f"Scheduler de sync iniciado ({len(self._cycles)} entidades)")

    def stop(self) -> None:
        """Detiene el scheduler y cancela los ciclos en curso."""
        if not self.running:
            return
        self._scheduler.shutdown(wait=False)
        logger.info("Scheduler de sync detenido")
