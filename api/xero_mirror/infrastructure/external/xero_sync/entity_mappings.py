"""
Mapeos Xero -> espejo local por tipo de entidad.

Este es el punto recomendado para tener "control total" sobre:
- que campos de Xero se copian tal cual, cuales se renombran
- que campos pasan por el codec de fechas /Date(ms)/
- que sub-objetos anidados son obligatorios (si faltan, el registro se descarta)

Patron:
- Una funcion por entidad que retorna su EntityTypeConfig.
- ENTITY_CONFIGS agrupa todas, indexadas por tipo de entidad.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Dict, Iterable, Optional

from xero_mirror.domain.entities.xero_entities import (
    Account,
    BankTransaction,
    Contact,
    Invoice,
    Payment,
    PurchaseOrder,
    RemoteUser,
)
from xero_mirror.shared.constants.sync_constants import EntityType

from .date_codec import decode_xero_date
from .sync_config import EntityTypeConfig
from .types import FieldMapping


def _project(keys: Iterable[str]):
    """Transform que proyecta un sub-objeto a las keys indicadas."""
    keys = tuple(keys)

    def transform(value: Any) -> Dict[str, Any]:
        if not isinstance(value, Mapping):
            raise TypeError(f"Se esperaba un objeto, llego {type(value).__name__}")
        return {k: value.get(k) for k in keys}

    return transform


def _project_optional(keys: Iterable[str]):
    project = _project(keys)

    def transform(value: Any) -> Optional[Dict[str, Any]]:
        return project(value) if value else None

    return transform


def _project_each(keys: Iterable[str]):
    """Transform que proyecta cada elemento de un array de objetos."""
    project = _project(keys)

    def transform(value: Any) -> list[Dict[str, Any]]:
        if not isinstance(value, list):
            raise TypeError(f"Se esperaba un array, llego {type(value).__name__}")
        return [project(item) for item in value]

    return transform


def _date(source_field: str, target_field: str) -> FieldMapping:
    return FieldMapping(source_field=source_field, target_field=target_field, transform=decode_xero_date)


def _copy(source_field: str, target_field: str, *, required: bool = False) -> FieldMapping:
    return FieldMapping(source_field=source_field, target_field=target_field, required=required)


_NESTED_CONTACT_KEYS = (
    "ContactID",
    "Name",
    "Addresses",
    "Phones",
    "ContactGroups",
    "ContactPersons",
    "HasValidationErrors",
)

_PAYMENT_INVOICE_KEYS = (
    "Type",
    "InvoiceID",
    "InvoiceNumber",
    "Payments",
    "CreditNotes",
    "Prepayments",
    "Overpayments",
    "IsDiscounted",
    "InvoiceAddresses",
    "HasErrors",
    "InvoicePaymentServices",
    "LineItems",
    "CurrencyCode",
)

_PO_CONTACT_KEYS = (
    "ContactID",
    "ContactStatus",
    "Name",
    "FirstName",
    "LastName",
    "Addresses",
    "Phones",
    "DefaultCurrency",
    "HasValidationErrors",
)

_PO_LINE_ITEM_KEYS = (
    "Description",
    "UnitAmount",
    "TaxType",
    "TaxAmount",
    "LineAmount",
    "Tracking",
    "Quantity",
    "LineItemID",
)


def _payment_invoice(value: Any) -> Dict[str, Any]:
    """
    Proyecta la factura embebida en un pago.

    El contacto de la factura es obligatorio: sin el, el pago no es util
    para conciliacion y se descarta.
    """
    invoice = _project(_PAYMENT_INVOICE_KEYS)(value)
    contact = value.get("Contact")
    if not isinstance(contact, Mapping):
        raise KeyError("Invoice.Contact")
    invoice["Contact"] = _project(_NESTED_CONTACT_KEYS)(contact)
    return invoice


def accounts_config() -> EntityTypeConfig:
    return EntityTypeConfig(
        entity_type=EntityType.ACCOUNTS.value,
        collection_path="Accounts",
        wrapper_key="Accounts",
        id_field="AccountID",
        entity_cls=Account,
        keep_unmapped=True,
        field_mappings=[
            _copy("AccountID", "account_id", required=True),
            _copy("Code", "code"),
            _copy("Name", "name"),
            _copy("Type", "type"),
            _copy("TaxType", "tax_type"),
            _copy("Status", "status"),
            _copy("Class", "account_class"),
            _copy("Description", "description"),
            _copy("EnablePaymentsToAccount", "enable_payments_to_account"),
            _copy("ShowInExpenseClaims", "show_in_expense_claims"),
            _copy("BankAccountNumber", "bank_account_number"),
            _copy("BankAccountType", "bank_account_type"),
            _copy("CurrencyCode", "currency_code"),
            _copy("ReportingCode", "reporting_code"),
            _copy("ReportingCodeName", "reporting_code_name"),
            _copy("HasAttachments", "has_attachments"),
            _date("UpdatedDateUTC", "updated_date_utc"),
        ],
        index_fields={
            "status": "status",
            "record_type": "type",
            "record_class": "account_class",
            "updated_date_utc": "updated_date_utc",
        },
    )


def contacts_config() -> EntityTypeConfig:
    return EntityTypeConfig(
        entity_type=EntityType.CONTACTS.value,
        collection_path="Contacts",
        wrapper_key="Contacts",
        id_field="ContactID",
        entity_cls=Contact,
        field_mappings=[
            _copy("ContactID", "contact_id", required=True),
            _copy("ContactStatus", "contact_status"),
            _copy("Name", "name"),
            _copy("FirstName", "first_name"),
            _copy("LastName", "last_name"),
            _copy("EmailAddress", "email_address"),
            _copy("BankAccountDetails", "bank_account_details"),
            _copy("Addresses", "addresses"),
            _copy("Phones", "phones"),
            _date("UpdatedDateUTC", "updated_date_utc"),
            _copy("ContactGroups", "contact_groups"),
            _copy("IsSupplier", "is_supplier"),
            _copy("IsCustomer", "is_customer"),
            _copy("ContactPersons", "contact_persons"),
            _copy("HasAttachments", "has_attachments"),
            _copy("HasValidationErrors", "has_validation_errors"),
            _copy("Balances", "balances"),
            _copy("DefaultCurrency", "default_currency"),
        ],
        index_fields={
            "status": "contact_status",
            "updated_date_utc": "updated_date_utc",
        },
    )


def invoices_config() -> EntityTypeConfig:
    return EntityTypeConfig(
        entity_type=EntityType.INVOICES.value,
        collection_path="Invoices",
        wrapper_key="Invoices",
        id_field="InvoiceID",
        entity_cls=Invoice,
        keep_unmapped=True,
        field_mappings=[
            _copy("InvoiceID", "invoice_id", required=True),
            _copy("Type", "type"),
            _copy("InvoiceNumber", "invoice_number"),
            _copy("Reference", "reference"),
            _copy("Payments", "payments"),
            _copy("CreditNotes", "credit_notes"),
            _copy("Prepayments", "prepayments"),
            _copy("Overpayments", "overpayments"),
            _copy("AmountDue", "amount_due"),
            _copy("AmountPaid", "amount_paid"),
            _copy("AmountCredited", "amount_credited"),
            _copy("CurrencyRate", "currency_rate"),
            _copy("IsDiscounted", "is_discounted"),
            _copy("HasAttachments", "has_attachments"),
            _copy("InvoiceAddresses", "invoice_addresses"),
            _copy("HasErrors", "has_errors"),
            _copy("InvoicePaymentServices", "invoice_payment_services"),
            _copy("Contact", "contact"),
            _copy("DateString", "date_string"),
            _date("Date", "date"),
            _copy("DueDateString", "due_date_string"),
            _date("DueDate", "due_date"),
            _copy("Status", "status"),
            _copy("LineAmountTypes", "line_amount_types"),
            _copy("LineItems", "line_items"),
            _copy("SubTotal", "sub_total"),
            _copy("TotalTax", "total_tax"),
            _copy("Total", "total"),
            _date("UpdatedDateUTC", "updated_date_utc"),
            _copy("CurrencyCode", "currency_code"),
            _date("FullyPaidOnDate", "fully_paid_on_date"),
            _copy("BrandingThemeID", "branding_theme_id"),
        ],
        index_fields={
            "status": "status",
            "record_type": "type",
            "line_amount_types": "line_amount_types",
            "record_date": "date",
            "updated_date_utc": "updated_date_utc",
        },
    )


def payments_config() -> EntityTypeConfig:
    return EntityTypeConfig(
        entity_type=EntityType.PAYMENTS.value,
        collection_path="Payments",
        wrapper_key="Payments",
        id_field="PaymentID",
        entity_cls=Payment,
        field_mappings=[
            _copy("PaymentID", "payment_id", required=True),
            _date("Date", "date"),
            _copy("BankAmount", "bank_amount"),
            _copy("Amount", "amount"),
            _copy("Reference", "reference"),
            _copy("CurrencyRate", "currency_rate"),
            _copy("PaymentType", "payment_type"),
            _copy("Status", "status"),
            _date("UpdatedDateUTC", "updated_date_utc"),
            _copy("HasAccount", "has_account"),
            _copy("IsReconciled", "is_reconciled"),
            FieldMapping("Account", "account", transform=_project(("AccountID", "Code")), required=True),
            FieldMapping("Invoice", "invoice", transform=_payment_invoice, required=True),
            _copy("HasValidationErrors", "has_validation_errors"),
        ],
        index_fields={
            "status": "status",
            "record_type": "payment_type",
            "record_date": "date",
            "updated_date_utc": "updated_date_utc",
        },
    )


def purchase_orders_config() -> EntityTypeConfig:
    return EntityTypeConfig(
        entity_type=EntityType.PURCHASE_ORDERS.value,
        collection_path="PurchaseOrders",
        wrapper_key="PurchaseOrders",
        id_field="PurchaseOrderID",
        entity_cls=PurchaseOrder,
        field_mappings=[
            _copy("PurchaseOrderID", "purchase_order_id", required=True),
            _copy("PurchaseOrderNumber", "purchase_order_number"),
            _copy("DateString", "date_string"),
            _date("Date", "date"),
            _copy("DeliveryDateString", "delivery_date_string"),
            _date("DeliveryDate", "delivery_date"),
            _copy("DeliveryAddress", "delivery_address"),
            _copy("AttentionTo", "attention_to"),
            _copy("Telephone", "telephone"),
            _copy("DeliveryInstructions", "delivery_instructions"),
            _copy("HasErrors", "has_errors"),
            _copy("IsDiscounted", "is_discounted"),
            _copy("Reference", "reference"),
            _copy("Type", "type"),
            _copy("CurrencyRate", "currency_rate"),
            _copy("CurrencyCode", "currency_code"),
            FieldMapping("Contact", "contact", transform=_project_optional(_PO_CONTACT_KEYS)),
            _copy("BrandingThemeID", "branding_theme_id"),
            _copy("Status", "status"),
            _copy("LineAmountTypes", "line_amount_types"),
            FieldMapping("LineItems", "line_items", transform=_project_each(_PO_LINE_ITEM_KEYS), required=True),
            _copy("SubTotal", "sub_total"),
            _copy("TotalTax", "total_tax"),
            _copy("Total", "total"),
            _date("UpdatedDateUTC", "updated_date_utc"),
            _copy("HasAttachments", "has_attachments"),
        ],
        index_fields={
            "status": "status",
            "record_type": "type",
            "record_date": "date",
            "updated_date_utc": "updated_date_utc",
        },
    )


def bank_transactions_config() -> EntityTypeConfig:
    return EntityTypeConfig(
        entity_type=EntityType.BANK_TRANSACTIONS.value,
        collection_path="BankTransactions",
        wrapper_key="BankTransactions",
        id_field="BankTransactionID",
        entity_cls=BankTransaction,
        keep_unmapped=True,
        field_mappings=[
            _copy("BankTransactionID", "bank_transaction_id", required=True),
            _copy("BankAccount", "bank_account"),
            _copy("Type", "type"),
            _copy("Reference", "reference"),
            _copy("IsReconciled", "is_reconciled"),
            _copy("HasAttachments", "has_attachments"),
            _copy("Contact", "contact"),
            _copy("DateString", "date_string"),
            _date("Date", "date"),
            _copy("Status", "status"),
            _copy("LineAmountTypes", "line_amount_types"),
            _copy("LineItems", "line_items"),
            _copy("SubTotal", "sub_total"),
            _copy("TotalTax", "total_tax"),
            _copy("Total", "total"),
            _date("UpdatedDateUTC", "updated_date_utc"),
            _copy("CurrencyCode", "currency_code"),
        ],
        index_fields={
            "status": "status",
            "record_type": "type",
            "line_amount_types": "line_amount_types",
            "record_date": "date",
            "updated_date_utc": "updated_date_utc",
        },
    )


def users_config() -> EntityTypeConfig:
    return EntityTypeConfig(
        entity_type=EntityType.USERS.value,
        collection_path="Users",
        wrapper_key="Users",
        id_field="GlobalUserID",
        entity_cls=RemoteUser,
        field_mappings=[
            _copy("GlobalUserID", "global_user_id", required=True),
            _copy("UserID", "user_id"),
            _copy("EmailAddress", "email_address"),
            _copy("FirstName", "first_name"),
            _copy("LastName", "last_name"),
            _date("UpdatedDateUTC", "updated_date_utc"),
            _copy("IsSubscriber", "is_subscriber"),
            _copy("OrganisationRole", "organisation_role"),
        ],
        index_fields={
            "status": "organisation_role",
            "updated_date_utc": "updated_date_utc",
        },
    )


ENTITY_CONFIGS: Dict[str, EntityTypeConfig] = {
    cfg.entity_type: cfg
    for cfg in (
        accounts_config(),
        contacts_config(),
        invoices_config(),
        payments_config(),
        purchase_orders_config(),
        bank_transactions_config(),
        users_config(),
    )
}


def get_entity_config(entity_type: str, *, interval_seconds: Optional[float] = None) -> EntityTypeConfig:
    """
    Retorna la configuracion de sync para el tipo de entidad indicado.

    Raises:
        KeyError: si el tipo de entidad no esta configurado
    """
    config = ENTITY_CONFIGS[entity_type]
    if interval_seconds is not None:
        config = config.with_interval(interval_seconds)
    return config
