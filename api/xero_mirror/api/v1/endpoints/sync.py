"""
Endpoints para sincronizacion de Xero con el espejo local.
Permiten forzar un ciclo desde la UI y consultar el estado del timer.
"""
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from loguru import logger

from xero_mirror.api.v1.dependencies.use_case_deps import get_sync_use_cases
from xero_mirror.application.dto.sync_dto import SyncErrorDTO, SyncResultDTO, SyncStatusResponseDTO
from xero_mirror.application.use_cases.sync_use_cases import SyncUseCases
from xero_mirror.shared.exceptions.sync import SyncError


router = APIRouter(prefix="/sync", tags=["Sync"])


@router.get(
    "/status",
    response_model=SyncStatusResponseDTO,
    summary="Estado de la sincronizacion por tipo de entidad"
)
async def get_sync_status(
    use_cases: SyncUseCases = Depends(get_sync_use_cases),
) -> SyncStatusResponseDTO:
    """
    Retorna el estado del ultimo ciclo de cada entidad (en memoria, se pierde al reiniciar).
    """
    return use_cases.get_status()


@router.get(
    "/{entity_type}",
    response_model=SyncResultDTO,
    status_code=status.HTTP_200_OK,
    summary="Sincronizar un tipo de entidad desde Xero",
    responses={
        404: {"description": "Tipo de entidad no soportado"},
        500: {"model": SyncErrorDTO},
        502: {"model": SyncErrorDTO},
    },
)
async def sync_entity(
    entity_type: str,
    use_cases: SyncUseCases = Depends(get_sync_use_cases),
):
    """
    Ejecuta un ciclo completo (fetch -> dedup -> normalizacion -> insercion).

    - Si ya hay un ciclo en curso para la entidad, responde `skipped` sin llamar a Xero.
    - Un conflicto de unicidad se informa como `conflict` (no es un error).
    - Errores de Xero o de forma del payload: 502. Errores del store: 500.
    """
    try:
        return await use_cases.run_sync(entity_type)
    except SyncError as e:
        logger.error(f"Error en sincronizacion de {entity_type}: {e.kind}: {e.message}")
        body = SyncErrorDTO(
            status=e.status_code,
            message=e.message,
            kind=e.kind,
            entity_type=e.entity_type or entity_type,
            stage=e.stage,
        )
        return JSONResponse(status_code=e.status_code, content=body.model_dump(mode="json"))
