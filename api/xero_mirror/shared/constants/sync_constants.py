"""
Constantes relacionadas con la sincronizacion Xero -> espejo local.
"""
from enum import Enum


class EntityType(str, Enum):
    """Tipos de entidad que se espejan desde Xero."""
    ACCOUNTS = "accounts"
    CONTACTS = "contacts"
    INVOICES = "invoices"
    PAYMENTS = "payments"
    PURCHASE_ORDERS = "purchase_orders"
    BANK_TRANSACTIONS = "bank_transactions"
    USERS = "users"


class SyncCycleState(str, Enum):
    """Estados de un ciclo de sincronizacion."""
    IDLE = "idle"
    FETCHING = "fetching"
    VALIDATING = "validating"
    DEDUPING = "deduping"
    NORMALIZING = "normalizing"
    PERSISTING = "persisting"
    FAILED = "failed"


class SyncOutcome(str, Enum):
    """Resultado observable de un ciclo."""
    INSERTED = "inserted"
    NOOP = "noop"  # nada nuevo que guardar
    SKIPPED = "skipped"  # otro ciclo de la misma entidad seguia en curso
    CONFLICT = "conflict"  # violacion de unicidad al insertar (benigna)
    FAILED = "failed"


# Periodo por defecto del timer (segundos)
DEFAULT_SYNC_INTERVAL_SECONDS = 30.0

# Largo maximo del identificador remoto (columna remote_id)
MAX_REMOTE_ID_LENGTH = 255
