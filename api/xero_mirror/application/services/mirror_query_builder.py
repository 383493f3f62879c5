"""
Construccion de consultas de lectura sobre las colecciones espejadas.

Cada coleccion declara un QueryFilterSpec:
- filtros por igualdad (query param -> columna promovida)
- columna de fecha para start_date / end_date y si los limites son inclusivos
- si una fecha invalida es un error (400) o simplemente se ignora
- orden (descendente) de los resultados
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional

from loguru import logger
from sqlalchemy import Select, select

from xero_mirror.shared.constants.sync_constants import EntityType
from xero_mirror.shared.exceptions.domain import ValidationException
from xero_mirror.shared.utils.datetime_utils import DateTimeUtils


@dataclass(frozen=True)
class QueryFilterSpec:
    """Filtros soportados por el listado de una coleccion espejada."""

    entity_type: str
    label: str
    equality_params: Dict[str, str] = field(default_factory=dict)
    date_column: Optional[str] = None
    inclusive_bounds: bool = True
    strict_dates: bool = True
    order_by_desc: Optional[str] = None


QUERY_SPECS: Dict[str, QueryFilterSpec] = {
    EntityType.ACCOUNTS.value: QueryFilterSpec(
        entity_type=EntityType.ACCOUNTS.value,
        label="Cuenta",
        equality_params={
            "account_status": "status",
            "account_type": "record_type",
            "account_class": "record_class",
        },
        date_column="updated_date_utc",
        inclusive_bounds=False,
        order_by_desc="updated_date_utc",
    ),
    EntityType.CONTACTS.value: QueryFilterSpec(
        entity_type=EntityType.CONTACTS.value,
        label="Contacto",
        equality_params={"contact_status": "status"},
        date_column="updated_date_utc",
    ),
    EntityType.INVOICES.value: QueryFilterSpec(
        entity_type=EntityType.INVOICES.value,
        label="Factura",
        equality_params={
            "invoice_type": "record_type",
            "invoice_status": "status",
            "line_amount_type": "line_amount_types",
        },
        date_column="record_date",
        order_by_desc="record_date",
    ),
    EntityType.PAYMENTS.value: QueryFilterSpec(
        entity_type=EntityType.PAYMENTS.value,
        label="Pago",
        equality_params={
            "payment_type": "record_type",
            "status": "status",
        },
        date_column="updated_date_utc",
    ),
    EntityType.PURCHASE_ORDERS.value: QueryFilterSpec(
        entity_type=EntityType.PURCHASE_ORDERS.value,
        label="Orden de compra",
        equality_params={"purchase_order_status": "status"},
        date_column="updated_date_utc",
    ),
    EntityType.BANK_TRANSACTIONS.value: QueryFilterSpec(
        entity_type=EntityType.BANK_TRANSACTIONS.value,
        label="Transaccion",
        equality_params={
            "status": "status",
            "type": "record_type",
        },
        date_column="record_date",
        strict_dates=False,
    ),
    EntityType.USERS.value: QueryFilterSpec(
        entity_type=EntityType.USERS.value,
        label="Usuario",
    ),
}


def get_query_spec(entity_type: str) -> QueryFilterSpec:
    return QUERY_SPECS[entity_type]


def _parse_date_param(spec: QueryFilterSpec, name: str, raw: Optional[str]):
    if not raw:
        return None
    parsed = DateTimeUtils.from_iso_string(raw)
    if parsed is None:
        if spec.strict_dates:
            raise ValidationException(f"Formato de fecha invalido en {name}: '{raw}'", field=name)
        logger.debug(f"[{spec.entity_type}] Se ignora {name} invalido: {raw}")
    return parsed


def build_mirror_query(model, spec: QueryFilterSpec, params: Mapping[str, Optional[str]]) -> Select:
    """
    Construye el SELECT del listado aplicando los filtros presentes en `params`.

    Los params vacios o ausentes no filtran.

    Raises:
        ValidationException: fecha invalida en una coleccion con fechas estrictas
    """
    stmt = select(model)

    for param, column in spec.equality_params.items():
        value = params.get(param)
        if value:
            stmt = stmt.where(getattr(model, column) == value)

    if spec.date_column:
        column = getattr(model, spec.date_column)
        start = _parse_date_param(spec, "start_date", params.get("start_date"))
        end = _parse_date_param(spec, "end_date", params.get("end_date"))
        if start is not None:
            stmt = stmt.where(column >= start if spec.inclusive_bounds else column > start)
        if end is not None:
            stmt = stmt.where(column <= end if spec.inclusive_bounds else column < end)

    if spec.order_by_desc:
        stmt = stmt.order_by(getattr(model, spec.order_by_desc).desc())
    else:
        stmt = stmt.order_by(model.id)

    return stmt
