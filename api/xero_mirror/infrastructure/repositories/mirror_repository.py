"""
Implementacion del store del espejo sobre SQLAlchemy async.

Cada operacion abre su propia sesion: el motor de sync corre fuera del
ciclo request/response y no comparte sesiones entre ciclos.
"""
from datetime import datetime
from typing import Any, Callable, Dict, Sequence, Set

from loguru import logger
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from xero_mirror.domain.entities.xero_entities import MirroredEntity
from xero_mirror.domain.repositories.mirror_store import IMirrorStore
from xero_mirror.infrastructure.database.models import get_mirror_model
from xero_mirror.infrastructure.external.xero_sync.sync_config import EntityTypeConfig
from xero_mirror.infrastructure.external.xero_sync.types import ensure_utc
from xero_mirror.shared.constants.sync_constants import SyncCycleState
from xero_mirror.shared.exceptions.sync import PersistConflict, PersistFailed


def build_mirror_row(config: EntityTypeConfig, record: MirroredEntity) -> Dict[str, Any]:
    """
    Construye la fila a insertar: documento JSON + columnas promovidas.
    """
    row: Dict[str, Any] = {
        "remote_id": record.remote_id,
        "document": record.to_document(),
    }
    for column, attribute in config.index_fields.items():
        value = getattr(record, attribute, None)
        if isinstance(value, datetime):
            value = ensure_utc(value)
        elif value is not None:
            value = str(value)
        row[column] = value
    return row


class MirrorRepository(IMirrorStore):
    """Store de colecciones espejadas (una tabla por tipo de entidad)."""

    def __init__(self, session_factory: Callable[[], AsyncSession]):
        self._session_factory = session_factory

    async def load_existing_ids(self, config: EntityTypeConfig) -> Set[str]:
        model = get_mirror_model(config.entity_type)
        try:
            async with self._session_factory() as session:
                result = await session.execute(select(model.remote_id))
                return {str(remote_id) for remote_id in result.scalars().all()}
        except SQLAlchemyError as e:
            raise PersistFailed(
                f"No se pudieron leer los IDs espejados de {config.entity_type}: {e}",
                entity_type=config.entity_type,
                stage=SyncCycleState.DEDUPING,
            ) from e

    async def insert_many(self, config: EntityTypeConfig, records: Sequence[MirroredEntity]) -> int:
        if not records:
            return 0

        model = get_mirror_model(config.entity_type)
        rows = [model(**build_mirror_row(config, record)) for record in records]

        async with self._session_factory() as session:
            try:
                session.add_all(rows)
                await session.commit()
            except IntegrityError as e:
                await session.rollback()
                raise PersistConflict(
                    f"Conflicto de unicidad insertando {len(rows)} {config.entity_type}",
                    entity_type=config.entity_type,
                ) from e
            except SQLAlchemyError as e:
                await session.rollback()
                raise PersistFailed(
                    f"Error insertando {len(rows)} {config.entity_type}: {e}",
                    entity_type=config.entity_type,
                ) from e

        logger.debug(f"Insertados {len(rows)} registros en {model.__tablename__}")
        return len(rows)
