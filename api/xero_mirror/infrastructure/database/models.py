"""
Modelos de base de datos (ORM) del espejo Xero.

Cada tipo de entidad tiene su tabla. El registro normalizado completo se guarda
como documento JSON (`document`); algunas columnas se promueven solo para
filtrar y ordenar en las consultas.
"""
from typing import Dict, Type

from sqlalchemy import Column, String, Integer, DateTime, JSON
from sqlalchemy.sql import func

from xero_mirror.infrastructure.database.session import Base
from xero_mirror.shared.constants.sync_constants import EntityType, MAX_REMOTE_ID_LENGTH


class MirrorRecordMixin:
    """
    Columnas comunes de una coleccion espejada.

    remote_id es UNIQUE: un insert duplicado (ciclos solapados, otro proceso)
    termina en IntegrityError y no en datos corruptos.
    """

    id = Column(Integer, primary_key=True, autoincrement=True)
    remote_id = Column(String(MAX_REMOTE_ID_LENGTH), nullable=False, unique=True, index=True)

    # Columnas promovidas (ver EntityTypeConfig.index_fields)
    status = Column(String(64), nullable=True, index=True)
    record_type = Column(String(64), nullable=True, index=True)
    record_class = Column(String(64), nullable=True)
    line_amount_types = Column(String(32), nullable=True)
    record_date = Column(DateTime(timezone=True), nullable=True, index=True)
    updated_date_utc = Column(DateTime(timezone=True), nullable=True, index=True)

    document = Column(JSON, nullable=False)
    synced_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return f"<{type(self).__name__}(id={self.id}, remote_id={self.remote_id})>"


class AccountMirrorModel(MirrorRecordMixin, Base):
    """Cuentas espejadas."""

    __tablename__ = "xero_accounts"


class ContactMirrorModel(MirrorRecordMixin, Base):
    """Contactos espejados."""

    __tablename__ = "xero_contacts"


class InvoiceMirrorModel(MirrorRecordMixin, Base):
    """Facturas espejadas."""

    __tablename__ = "xero_invoices"


class PaymentMirrorModel(MirrorRecordMixin, Base):
    """Pagos espejados."""

    __tablename__ = "xero_payments"


class PurchaseOrderMirrorModel(MirrorRecordMixin, Base):
    """Ordenes de compra espejadas."""

    __tablename__ = "xero_purchase_orders"


class BankTransactionMirrorModel(MirrorRecordMixin, Base):
    """Transacciones bancarias espejadas."""

    __tablename__ = "xero_bank_transactions"


class UserMirrorModel(MirrorRecordMixin, Base):
    """Usuarios de Xero espejados."""

    __tablename__ = "xero_users"


MIRROR_MODELS: Dict[str, Type[MirrorRecordMixin]] = {
    EntityType.ACCOUNTS.value: AccountMirrorModel,
    EntityType.CONTACTS.value: ContactMirrorModel,
    EntityType.INVOICES.value: InvoiceMirrorModel,
    EntityType.PAYMENTS.value: PaymentMirrorModel,
    EntityType.PURCHASE_ORDERS.value: PurchaseOrderMirrorModel,
    EntityType.BANK_TRANSACTIONS.value: BankTransactionMirrorModel,
    EntityType.USERS.value: UserMirrorModel,
}


def get_mirror_model(entity_type: str) -> Type[MirrorRecordMixin]:
    """Retorna el modelo ORM de la coleccion espejada del tipo de entidad."""
    return MIRROR_MODELS[entity_type]
