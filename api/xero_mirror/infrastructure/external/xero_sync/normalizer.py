"""
Normalizador de registros: payload crudo de Xero -> entidad tipada.

Reglas:
- Cada FieldMapping decide como copiar, renombrar y transformar el valor.
- Campos opcionales ausentes quedan en None (registro parcial).
- Un campo requerido ausente, un transform que falla o un tipo invalido
  levantan NormalizationFault SOLO para ese registro.
"""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError

from xero_mirror.domain.entities.xero_entities import MirroredEntity
from xero_mirror.shared.constants.sync_constants import MAX_REMOTE_ID_LENGTH
from xero_mirror.shared.exceptions.sync import NormalizationFault

from .dedup import record_identifier
from .sync_config import EntityTypeConfig
from .types import RawRecord, get_path, is_missing


def normalize_record(raw: RawRecord, *, config: EntityTypeConfig) -> MirroredEntity:
    """
    Mapea un registro de Xero al modelo tipado del tipo de entidad.

    Raises:
        NormalizationFault: si el registro no se puede mapear
    """
    record_id = record_identifier(raw, config.id_field)
    if record_id is not None and len(record_id) > MAX_REMOTE_ID_LENGTH:
        raise NormalizationFault(
            f"Registro con {config.id_field} de {len(record_id)} caracteres (max {MAX_REMOTE_ID_LENGTH})",
            record_id=record_id[:MAX_REMOTE_ID_LENGTH],
            entity_type=config.entity_type,
        )
    values: dict[str, Any] = {}

    for m in config.field_mappings:
        value = get_path(raw, m.source_field)
        if is_missing(value) or value is None:
            if m.required:
                raise NormalizationFault(
                    f"Registro {record_id} no contiene field requerido '{m.source_field}'",
                    record_id=record_id,
                    entity_type=config.entity_type,
                )
            continue

        if m.transform is not None:
            try:
                value = m.transform(value)
            except Exception as e:
                raise NormalizationFault(
                    f"Registro {record_id}: no se pudo transformar '{m.source_field}': {e}",
                    record_id=record_id,
                    entity_type=config.entity_type,
                ) from e
        values[m.target_field] = value

    if config.keep_unmapped:
        mapped = config.mapped_source_keys
        values["extra"] = {k: v for k, v in raw.items() if k not in mapped}

    try:
        return config.entity_cls(**values)
    except ValidationError as e:
        raise NormalizationFault(
            f"Registro {record_id} con tipos invalidos: {e.error_count()} error(es)",
            record_id=record_id,
            entity_type=config.entity_type,
        ) from e
