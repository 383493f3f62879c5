"""
Tipos y utilidades puras para el pipeline Xero -> espejo.

Se mantienen libres de I/O para poder testearlos facilmente.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Mapping, Optional

RawRecord = Mapping[str, Any]

_MISSING = object()


def utc_now() -> datetime:
    """Retorna la hora actual en UTC, como datetime aware."""
    return datetime.now(timezone.utc)


def ensure_utc(dt: datetime) -> datetime:
    """
    Normaliza datetime a UTC (aware).

    Los datetimes naive se interpretan como UTC.
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def get_path(record: Any, path: str, default: Any = _MISSING) -> Any:
    """
    Lee un valor por ruta con puntos ("Invoice.Contact.ContactID").

    Si algun tramo no existe (o no es un dict) retorna `default`;
    sin default explicito retorna el sentinel interno `_MISSING`.
    """
    current = record
    for part in path.split("."):
        if not isinstance(current, Mapping) or part not in current:
            return default
        current = current[part]
    return current


def is_missing(value: Any) -> bool:
    return value is _MISSING


Transform = Callable[[Any], Any]


@dataclass(frozen=True)
class FieldMapping:
    """
    Define el mapeo de un campo Xero a un atributo del registro normalizado.

    - source_field: nombre (o ruta con puntos) del field en el payload de Xero
    - target_field: atributo del modelo tipado (snake_case)
    - transform: funcion opcional para transformar el valor antes de persistir
    - required: si True, el valor debe existir y no ser null (si falta se
      levanta NormalizationFault y el registro se descarta)
    """

    source_field: str
    target_field: str
    transform: Optional[Transform] = None
    required: bool = False

    @property
    def top_level_key(self) -> str:
        return self.source_field.split(".", 1)[0]
