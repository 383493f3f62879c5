"""
Dependencias para inyeccion de casos de uso.
"""
from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from xero_mirror.application.use_cases.mirror_query_use_cases import MirrorQueryUseCases
from xero_mirror.application.use_cases.sync_use_cases import SyncUseCases
from xero_mirror.infrastructure.database.session import get_db


def get_sync_use_cases(request: Request) -> SyncUseCases:
    """
    Dependencia para obtener los casos de uso de sincronizacion.

    Los ciclos y el scheduler viven en app.state (los crea el startup).

    Returns:
        SyncUseCases: Instancia con los ciclos compartidos con el timer
    """
    cycles = getattr(request.app.state, "sync_cycles", None) or {}
    scheduler = getattr(request.app.state, "scheduler", None)
    return SyncUseCases(cycles, scheduler)


async def get_mirror_query_use_cases(
    db: AsyncSession = Depends(get_db)
) -> MirrorQueryUseCases:
    """
    Dependencia para obtener los casos de uso de lectura del espejo.

    Args:
        db: Sesion de base de datos

    Returns:
        MirrorQueryUseCases: Instancia de casos de uso de lectura
    """
    return MirrorQueryUseCases(db)
