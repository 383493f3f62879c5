"""
Manejadores de eventos de inicio y cierre de la aplicacion.
"""
from typing import Callable
from fastapi import FastAPI
from loguru import logger

from xero_mirror.core.config import settings
from xero_mirror.infrastructure.database.session import AsyncSessionLocal, init_db, close_db
from xero_mirror.infrastructure.external.xero_sync.scheduler import SyncScheduler
from xero_mirror.infrastructure.external.xero_sync.sync_service import build_sync_cycles
from xero_mirror.infrastructure.external.xero_sync.xero_client import XeroApiConfig
from xero_mirror.shared.constants.sync_constants import EntityType


def startup_handler(app: FastAPI) -> Callable:
    """
    Manejador de eventos de inicio de la aplicacion.

    Args:
        app: Instancia de FastAPI

    Returns:
        Callable: Funcion asincrona de inicio
    """
    async def startup() -> None:
        """Inicializa recursos al inicio de la aplicacion."""
        try:
            logger.info(f"Iniciando {settings.APP_NAME} v{settings.APP_VERSION}")
            logger.info(f"Entorno: {settings.ENVIRONMENT}")

            # Validar configuracion critica
            _validate_config()

            # Configurar logging adicional
            logger.add(
                settings.LOG_FILE,
                rotation="500 MB",
                retention="10 days",
                level=settings.LOG_LEVEL
            )

            # Inicializar base de datos (crea tablas si no existen)
            await init_db()
            logger.info("Base de datos inicializada")

            # Ciclos de sync: compartidos entre el timer y los endpoints
            app.state.sync_cycles = _build_cycles()
            app.state.scheduler = None
            if settings.SYNC_ENABLED:
                scheduler = SyncScheduler(app.state.sync_cycles.values())
                scheduler.start()
                app.state.scheduler = scheduler
            else:
                logger.warning("SYNC_ENABLED=false: el timer de sincronizacion no se inicia")

            logger.success("Aplicacion iniciada correctamente")

            # Mostrar URLs disponibles
            _print_available_urls()

        except Exception as e:
            logger.error(f"Error durante startup: {e}")
            logger.exception("Detalle del error:")
            raise

    return startup


def _build_cycles():
    """Convierte Settings en configuracion explicita para el motor de sync."""
    api_config = XeroApiConfig(
        base_url=settings.XERO_BASE_URL,
        tenant_id=settings.XERO_TENANT_ID,
        bearer_token=settings.XERO_BEARER_TOKEN,
        timeout_s=settings.XERO_TIMEOUT_SECONDS,
    )
    intervals = {
        entity_type.value: settings.sync_interval_for(entity_type.value)
        for entity_type in EntityType
    }
    return build_sync_cycles(
        api_config=api_config,
        session_factory=AsyncSessionLocal,
        intervals=intervals,
    )


def _validate_config() -> None:
    """Valida que la configuracion critica este presente."""
    warnings = []

    if not settings.XERO_BEARER_TOKEN:
        warnings.append("XERO_BEARER_TOKEN no configurado - los fetch a Xero fallaran")
    if not settings.XERO_TENANT_ID:
        warnings.append("XERO_TENANT_ID no configurado - los fetch a Xero fallaran")

    # Mostrar advertencias
    for warning in warnings:
        logger.warning(f"CONFIG: {warning}")


def _print_available_urls() -> None:
    """Imprime las URLs disponibles de la aplicacion."""
    if settings.HOST == "0.0.0.0":
        access_host = "localhost"
    else:
        access_host = settings.HOST

    base_url = f"http://{access_host}:{settings.PORT}"

    logger.opt(colors=True).info("<bold><green>" + "=" * 80 + "</green></bold>")
    logger.opt(colors=True).info("<bold><green>URLS DISPONIBLES:</green></bold>")
    logger.opt(colors=True).info("<bold><green>" + "=" * 80 + "</green></bold>")
    logger.opt(colors=True).info(f"<cyan>  Swagger UI:  {base_url}/docs</cyan>")
    logger.opt(colors=True).info(f"<cyan>  Sync status: {base_url}/api/v1/sync/status</cyan>")
    logger.opt(colors=True).info(f"<cyan>  Health:      {base_url}/health</cyan>")
    logger.opt(colors=True).info("<bold><green>" + "=" * 80 + "</green></bold>")


def shutdown_handler(app: FastAPI) -> Callable:
    """
    Manejador de eventos de cierre de la aplicacion.

    Args:
        app: Instancia de FastAPI

    Returns:
        Callable: Funcion asincrona de cierre
    """
    async def shutdown() -> None:
        """Libera recursos al cerrar la aplicacion."""
        logger.info("Cerrando aplicacion...")

        # Detener timer de sync (cancela ciclos en curso)
        scheduler = getattr(app.state, "scheduler", None)
        if scheduler:
            scheduler.stop()

        # Cerrar conexiones de base de datos
        await close_db()
        logger.info("Conexiones de base de datos cerradas")

        logger.success("Aplicacion cerrada correctamente")

    return shutdown
