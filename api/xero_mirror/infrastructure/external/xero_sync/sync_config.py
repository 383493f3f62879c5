"""
Configuracion del sync (mapeo Xero -> espejo local) por tipo de entidad.

Aqui se define, para cada tipo de entidad:
- path de la coleccion en la API de Xero
- wrapper key del payload ("Invoices", "Contacts", ...)
- campo identificador remoto
- mapeos de campos y transformaciones
- columnas promovidas para consultas (filtros / orden)
- periodo del timer

Este modulo no realiza I/O: solo define configuracion.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Dict, Type

from xero_mirror.domain.entities.xero_entities import MirroredEntity
from xero_mirror.shared.constants.sync_constants import DEFAULT_SYNC_INTERVAL_SECONDS

from .types import FieldMapping


@dataclass(frozen=True)
class EntityTypeConfig:
    """
    Descriptor estatico de un tipo de entidad.

    - keep_unmapped: si True, los campos remotos no mapeados se conservan en
      el bag `extra` del registro; si False, se descartan.
    - index_fields: columna promovida del store -> atributo del registro
      normalizado (p.ej. {"status": "status", "record_date": "date"}).
    """

    entity_type: str
    collection_path: str
    wrapper_key: str
    id_field: str
    entity_cls: Type[MirroredEntity]
    field_mappings: list[FieldMapping]
    keep_unmapped: bool = False
    index_fields: Dict[str, str] = field(default_factory=dict)
    interval_seconds: float = DEFAULT_SYNC_INTERVAL_SECONDS

    def with_interval(self, interval_seconds: float) -> "EntityTypeConfig":
        return replace(self, interval_seconds=interval_seconds)

    @property
    def mapped_source_keys(self) -> set[str]:
        return {m.top_level_key for m in self.field_mappings}
