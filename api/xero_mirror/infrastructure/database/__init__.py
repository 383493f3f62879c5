"""
Configuracion de base de datos.

Importa todos los modelos para que se registren con Base
antes de crear las tablas.
"""
from xero_mirror.infrastructure.database.models import (
    AccountMirrorModel,
    ContactMirrorModel,
    InvoiceMirrorModel,
    PaymentMirrorModel,
    PurchaseOrderMirrorModel,
    BankTransactionMirrorModel,
    UserMirrorModel,
)
