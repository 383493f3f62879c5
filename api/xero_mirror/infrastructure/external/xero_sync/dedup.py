"""
Filtro de deduplicacion: que registros remotos aun no estan en el espejo.

Funcion pura, sin I/O. El conjunto de IDs existentes debe calcularse con un
scan completo de la coleccion inmediatamente antes de filtrar.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import AbstractSet, Any, Iterable, Optional

from .types import RawRecord


def record_identifier(record: Any, id_field: str) -> Optional[str]:
    """Retorna el identificador remoto del registro, o None si falta/vacio."""
    if not isinstance(record, Mapping):
        return None
    value = record.get(id_field)
    if value is None:
        return None
    value = str(value)
    return value if value.strip() else None


def filter_new_records(
    existing_ids: AbstractSet[str],
    candidates: Iterable[Any],
    id_field: str,
) -> list[RawRecord]:
    """
    Retorna los candidatos con identificador no vacio que no estan en existing_ids.

    Si el payload repite un identificador se conserva solo la primera aparicion;
    el UNIQUE de remote_id rechazaria el lote completo.
    El orden de salida respeta el orden de entrada.
    """
    new_records: list[RawRecord] = []
    seen: set[str] = set()
    for record in candidates:
        record_id = record_identifier(record, id_field)
        if record_id is None or record_id in existing_ids or record_id in seen:
            continue
        seen.add(record_id)
        new_records.append(record)
    return new_records
