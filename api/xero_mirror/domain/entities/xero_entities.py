"""
Entidades de dominio espejadas desde Xero.

Cada entidad lista explicitamente los campos reconocidos (atributo snake_case,
alias con el nombre PascalCase de Xero) y un unico bag `extra` para los campos
remotos no reconocidos. Los sub-objetos anidados (direcciones, telefonos,
line items, referencias a contacto/cuenta/factura) se guardan como estructuras
opacas: no se re-valida su forma interna.
"""
from datetime import datetime
from typing import Any, ClassVar, Dict, List, Optional

from pydantic import BaseModel, Field


class MirroredEntity(BaseModel):
    """Base comun de los registros normalizados."""

    id_attribute: ClassVar[str] = ""

    extra: Dict[str, Any] = Field(default_factory=dict, description="Campos remotos no reconocidos")

    class Config:
        populate_by_name = True
        extra = "forbid"

    @property
    def remote_id(self) -> str:
        return getattr(self, self.id_attribute)

    def to_document(self) -> Dict[str, Any]:
        """
        Serializa a documento JSON con los nombres de Xero.

        Los campos reconocidos tienen prioridad sobre los del bag `extra`.
        """
        document = dict(self.extra)
        document.update(self.model_dump(mode="json", by_alias=True, exclude={"extra"}))
        return document


class Account(MirroredEntity):
    """Cuenta del plan de cuentas."""

    id_attribute: ClassVar[str] = "account_id"

    account_id: str = Field(..., alias="AccountID")
    code: Optional[str] = Field(None, alias="Code")
    name: Optional[str] = Field(None, alias="Name")
    type: Optional[str] = Field(None, alias="Type")
    tax_type: Optional[str] = Field(None, alias="TaxType")
    status: Optional[str] = Field(None, alias="Status")
    account_class: Optional[str] = Field(None, alias="Class")
    description: Optional[str] = Field(None, alias="Description")
    enable_payments_to_account: Optional[bool] = Field(None, alias="EnablePaymentsToAccount")
    show_in_expense_claims: Optional[bool] = Field(None, alias="ShowInExpenseClaims")
    bank_account_number: Optional[str] = Field(None, alias="BankAccountNumber")
    bank_account_type: Optional[str] = Field(None, alias="BankAccountType")
    currency_code: Optional[str] = Field(None, alias="CurrencyCode")
    reporting_code: Optional[str] = Field(None, alias="ReportingCode")
    reporting_code_name: Optional[str] = Field(None, alias="ReportingCodeName")
    has_attachments: Optional[bool] = Field(None, alias="HasAttachments")
    updated_date_utc: Optional[datetime] = Field(None, alias="UpdatedDateUTC")


class Contact(MirroredEntity):
    """Contacto (cliente y/o proveedor)."""

    id_attribute: ClassVar[str] = "contact_id"

    contact_id: str = Field(..., alias="ContactID")
    contact_status: Optional[str] = Field(None, alias="ContactStatus")
    name: Optional[str] = Field(None, alias="Name")
    first_name: Optional[str] = Field(None, alias="FirstName")
    last_name: Optional[str] = Field(None, alias="LastName")
    email_address: Optional[str] = Field(None, alias="EmailAddress")
    bank_account_details: Optional[str] = Field(None, alias="BankAccountDetails")
    addresses: Optional[List[Any]] = Field(None, alias="Addresses")
    phones: Optional[List[Any]] = Field(None, alias="Phones")
    updated_date_utc: Optional[datetime] = Field(None, alias="UpdatedDateUTC")
    contact_groups: Optional[List[Any]] = Field(None, alias="ContactGroups")
    is_supplier: Optional[bool] = Field(None, alias="IsSupplier")
    is_customer: Optional[bool] = Field(None, alias="IsCustomer")
    contact_persons: Optional[List[Any]] = Field(None, alias="ContactPersons")
    has_attachments: Optional[bool] = Field(None, alias="HasAttachments")
    has_validation_errors: Optional[bool] = Field(None, alias="HasValidationErrors")
    balances: Optional[Dict[str, Any]] = Field(None, alias="Balances")
    default_currency: Optional[str] = Field(None, alias="DefaultCurrency")


class Invoice(MirroredEntity):
    """Factura de venta (ACCREC) o de compra (ACCPAY)."""

    id_attribute: ClassVar[str] = "invoice_id"

    invoice_id: str = Field(..., alias="InvoiceID")
    type: Optional[str] = Field(None, alias="Type")
    invoice_number: Optional[str] = Field(None, alias="InvoiceNumber")
    reference: Optional[str] = Field(None, alias="Reference")
    payments: Optional[List[Any]] = Field(None, alias="Payments")
    credit_notes: Optional[List[Any]] = Field(None, alias="CreditNotes")
    prepayments: Optional[List[Any]] = Field(None, alias="Prepayments")
    overpayments: Optional[List[Any]] = Field(None, alias="Overpayments")
    amount_due: Optional[float] = Field(None, alias="AmountDue")
    amount_paid: Optional[float] = Field(None, alias="AmountPaid")
    amount_credited: Optional[float] = Field(None, alias="AmountCredited")
    currency_rate: Optional[float] = Field(None, alias="CurrencyRate")
    is_discounted: Optional[bool] = Field(None, alias="IsDiscounted")
    has_attachments: Optional[bool] = Field(None, alias="HasAttachments")
    invoice_addresses: Optional[List[Any]] = Field(None, alias="InvoiceAddresses")
    has_errors: Optional[bool] = Field(None, alias="HasErrors")
    invoice_payment_services: Optional[List[Any]] = Field(None, alias="InvoicePaymentServices")
    contact: Optional[Dict[str, Any]] = Field(None, alias="Contact")
    date_string: Optional[str] = Field(None, alias="DateString")
    date: Optional[datetime] = Field(None, alias="Date")
    due_date_string: Optional[str] = Field(None, alias="DueDateString")
    due_date: Optional[datetime] = Field(None, alias="DueDate")
    status: Optional[str] = Field(None, alias="Status")
    line_amount_types: Optional[str] = Field(None, alias="LineAmountTypes")
    line_items: Optional[List[Any]] = Field(None, alias="LineItems")
    sub_total: Optional[float] = Field(None, alias="SubTotal")
    total_tax: Optional[float] = Field(None, alias="TotalTax")
    total: Optional[float] = Field(None, alias="Total")
    updated_date_utc: Optional[datetime] = Field(None, alias="UpdatedDateUTC")
    currency_code: Optional[str] = Field(None, alias="CurrencyCode")
    fully_paid_on_date: Optional[datetime] = Field(None, alias="FullyPaidOnDate")
    branding_theme_id: Optional[str] = Field(None, alias="BrandingThemeID")


class Payment(MirroredEntity):
    """Pago aplicado a una factura."""

    id_attribute: ClassVar[str] = "payment_id"

    payment_id: str = Field(..., alias="PaymentID")
    date: Optional[datetime] = Field(None, alias="Date")
    bank_amount: Optional[float] = Field(None, alias="BankAmount")
    amount: Optional[float] = Field(None, alias="Amount")
    reference: Optional[str] = Field(None, alias="Reference")
    currency_rate: Optional[float] = Field(None, alias="CurrencyRate")
    payment_type: Optional[str] = Field(None, alias="PaymentType")
    status: Optional[str] = Field(None, alias="Status")
    updated_date_utc: Optional[datetime] = Field(None, alias="UpdatedDateUTC")
    has_account: Optional[bool] = Field(None, alias="HasAccount")
    is_reconciled: Optional[bool] = Field(None, alias="IsReconciled")
    account: Dict[str, Any] = Field(..., alias="Account")
    invoice: Dict[str, Any] = Field(..., alias="Invoice")
    has_validation_errors: Optional[bool] = Field(None, alias="HasValidationErrors")


class PurchaseOrder(MirroredEntity):
    """Orden de compra."""

    id_attribute: ClassVar[str] = "purchase_order_id"

    purchase_order_id: str = Field(..., alias="PurchaseOrderID")
    purchase_order_number: Optional[str] = Field(None, alias="PurchaseOrderNumber")
    date_string: Optional[str] = Field(None, alias="DateString")
    date: Optional[datetime] = Field(None, alias="Date")
    delivery_date_string: Optional[str] = Field(None, alias="DeliveryDateString")
    delivery_date: Optional[datetime] = Field(None, alias="DeliveryDate")
    delivery_address: Optional[str] = Field(None, alias="DeliveryAddress")
    attention_to: Optional[str] = Field(None, alias="AttentionTo")
    telephone: Optional[str] = Field(None, alias="Telephone")
    delivery_instructions: Optional[str] = Field(None, alias="DeliveryInstructions")
    has_errors: Optional[bool] = Field(None, alias="HasErrors")
    is_discounted: Optional[bool] = Field(None, alias="IsDiscounted")
    reference: Optional[str] = Field(None, alias="Reference")
    type: Optional[str] = Field(None, alias="Type")
    currency_rate: Optional[float] = Field(None, alias="CurrencyRate")
    currency_code: Optional[str] = Field(None, alias="CurrencyCode")
    contact: Optional[Dict[str, Any]] = Field(None, alias="Contact")
    branding_theme_id: Optional[str] = Field(None, alias="BrandingThemeID")
    status: Optional[str] = Field(None, alias="Status")
    line_amount_types: Optional[str] = Field(None, alias="LineAmountTypes")
    line_items: List[Dict[str, Any]] = Field(..., alias="LineItems")
    sub_total: Optional[float] = Field(None, alias="SubTotal")
    total_tax: Optional[float] = Field(None, alias="TotalTax")
    total: Optional[float] = Field(None, alias="Total")
    updated_date_utc: Optional[datetime] = Field(None, alias="UpdatedDateUTC")
    has_attachments: Optional[bool] = Field(None, alias="HasAttachments")


class BankTransaction(MirroredEntity):
    """Transaccion bancaria (SPEND / RECEIVE / transferencias)."""

    id_attribute: ClassVar[str] = "bank_transaction_id"

    bank_transaction_id: str = Field(..., alias="BankTransactionID")
    bank_account: Optional[Dict[str, Any]] = Field(None, alias="BankAccount")
    type: Optional[str] = Field(None, alias="Type")
    reference: Optional[str] = Field(None, alias="Reference")
    is_reconciled: Optional[bool] = Field(None, alias="IsReconciled")
    has_attachments: Optional[bool] = Field(None, alias="HasAttachments")
    contact: Optional[Dict[str, Any]] = Field(None, alias="Contact")
    date_string: Optional[str] = Field(None, alias="DateString")
    date: Optional[datetime] = Field(None, alias="Date")
    status: Optional[str] = Field(None, alias="Status")
    line_amount_types: Optional[str] = Field(None, alias="LineAmountTypes")
    line_items: Optional[List[Any]] = Field(None, alias="LineItems")
    sub_total: Optional[float] = Field(None, alias="SubTotal")
    total_tax: Optional[float] = Field(None, alias="TotalTax")
    total: Optional[float] = Field(None, alias="Total")
    updated_date_utc: Optional[datetime] = Field(None, alias="UpdatedDateUTC")
    currency_code: Optional[str] = Field(None, alias="CurrencyCode")


class RemoteUser(MirroredEntity):
    """Usuario de la organizacion en Xero (no confundir con usuarios locales)."""

    id_attribute: ClassVar[str] = "global_user_id"

    global_user_id: str = Field(..., alias="GlobalUserID")
    user_id: Optional[str] = Field(None, alias="UserID")
    email_address: Optional[str] = Field(None, alias="EmailAddress")
    first_name: Optional[str] = Field(None, alias="FirstName")
    last_name: Optional[str] = Field(None, alias="LastName")
    updated_date_utc: Optional[datetime] = Field(None, alias="UpdatedDateUTC")
    is_subscriber: Optional[bool] = Field(None, alias="IsSubscriber")
    organisation_role: Optional[str] = Field(None, alias="OrganisationRole")
