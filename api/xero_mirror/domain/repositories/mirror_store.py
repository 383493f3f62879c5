"""
Interfaz del store del espejo.
Define el contrato que debe cumplir cualquier implementacion.
"""
from abc import ABC, abstractmethod
from typing import Sequence, Set

from xero_mirror.domain.entities.xero_entities import MirroredEntity
from xero_mirror.infrastructure.external.xero_sync.sync_config import EntityTypeConfig


class IMirrorStore(ABC):
    """
    Interfaz del store de colecciones espejadas.
    Solo inserta: el motor nunca actualiza ni borra registros espejados.
    """

    @abstractmethod
    async def load_existing_ids(self, config: EntityTypeConfig) -> Set[str]:
        """
        Scan completo de los identificadores remotos ya espejados.

        Args:
            config: Configuracion del tipo de entidad

        Returns:
            Set[str]: IDs remotos presentes en el espejo
        """
        pass

    @abstractmethod
    async def insert_many(self, config: EntityTypeConfig, records: Sequence[MirroredEntity]) -> int:
        """
        Insercion masiva (todo o nada) de registros nuevos.

        Args:
            config: Configuracion del tipo de entidad
            records: Registros normalizados

        Returns:
            int: Cantidad de registros insertados

        Raises:
            PersistConflict: si algun identificador ya existe
            PersistFailed: ante cualquier otro fallo del store
        """
        pass
