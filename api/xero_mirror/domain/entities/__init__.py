"""
Entidades del dominio.
"""
from xero_mirror.domain.entities.xero_entities import (
    MirroredEntity,
    Account,
    Contact,
    Invoice,
    Payment,
    PurchaseOrder,
    BankTransaction,
    RemoteUser,
)

__all__ = [
    "MirroredEntity",
    "Account",
    "Contact",
    "Invoice",
    "Payment",
    "PurchaseOrder",
    "BankTransaction",
    "RemoteUser",
]
