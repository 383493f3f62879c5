"""
Endpoints de lectura de las colecciones espejadas desde Xero.

Sirven los datos desde el store local: nunca llaman a Xero.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query

from xero_mirror.api.v1.dependencies.use_case_deps import get_mirror_query_use_cases
from xero_mirror.application.dto.mirror_dto import BankDetailsResponseDTO, MirrorResponseDTO
from xero_mirror.application.use_cases.mirror_query_use_cases import MirrorQueryUseCases
from xero_mirror.shared.constants.sync_constants import EntityType


accounts_router = APIRouter(prefix="/accounts", tags=["Accounts"])
contacts_router = APIRouter(prefix="/contacts", tags=["Contacts"])
invoices_router = APIRouter(prefix="/invoices", tags=["Invoices"])
payments_router = APIRouter(prefix="/payments", tags=["Payments"])
purchase_orders_router = APIRouter(prefix="/purchase-orders", tags=["Purchase Orders"])
transactions_router = APIRouter(prefix="/transactions", tags=["Transactions"])
users_router = APIRouter(prefix="/users", tags=["Users"])

_START_DATE = "Fecha desde (ISO 8601)"
_END_DATE = "Fecha hasta (ISO 8601)"


@accounts_router.get("", response_model=MirrorResponseDTO, summary="Listar cuentas")
async def list_accounts(
    account_status: Optional[str] = Query(None, description="Status de la cuenta (ACTIVE, ARCHIVED)"),
    account_type: Optional[str] = Query(None, description="Tipo de cuenta (BANK, REVENUE, ...)"),
    account_class: Optional[str] = Query(None, description="Clase (ASSET, EXPENSE, ...)"),
    start_date: Optional[str] = Query(None, description=f"{_START_DATE}, exclusiva, sobre UpdatedDateUTC"),
    end_date: Optional[str] = Query(None, description=f"{_END_DATE}, exclusiva, sobre UpdatedDateUTC"),
    use_cases: MirrorQueryUseCases = Depends(get_mirror_query_use_cases),
) -> MirrorResponseDTO:
    """Cuentas ordenadas por UpdatedDateUTC descendente."""
    return await use_cases.list_collection(EntityType.ACCOUNTS.value, {
        "account_status": account_status,
        "account_type": account_type,
        "account_class": account_class,
        "start_date": start_date,
        "end_date": end_date,
    })


@contacts_router.get("", response_model=MirrorResponseDTO, summary="Listar contactos")
async def list_contacts(
    contact_status: Optional[str] = Query(None, description="Status del contacto"),
    start_date: Optional[str] = Query(None, description=f"{_START_DATE} sobre UpdatedDateUTC"),
    end_date: Optional[str] = Query(None, description=f"{_END_DATE} sobre UpdatedDateUTC"),
    use_cases: MirrorQueryUseCases = Depends(get_mirror_query_use_cases),
) -> MirrorResponseDTO:
    return await use_cases.list_collection(EntityType.CONTACTS.value, {
        "contact_status": contact_status,
        "start_date": start_date,
        "end_date": end_date,
    })


@invoices_router.get("", response_model=MirrorResponseDTO, summary="Listar facturas")
async def list_invoices(
    invoice_type: Optional[str] = Query(None, description="ACCREC / ACCPAY"),
    invoice_status: Optional[str] = Query(None, description="DRAFT, AUTHORISED, PAID, ..."),
    line_amount_type: Optional[str] = Query(None, description="Exclusive / Inclusive / NoTax"),
    start_date: Optional[str] = Query(None, description=f"{_START_DATE} sobre Date"),
    end_date: Optional[str] = Query(None, description=f"{_END_DATE} sobre Date"),
    use_cases: MirrorQueryUseCases = Depends(get_mirror_query_use_cases),
) -> MirrorResponseDTO:
    """Facturas ordenadas por Date descendente."""
    return await use_cases.list_collection(EntityType.INVOICES.value, {
        "invoice_type": invoice_type,
        "invoice_status": invoice_status,
        "line_amount_type": line_amount_type,
        "start_date": start_date,
        "end_date": end_date,
    })


@invoices_router.get("/{invoice_id}", response_model=MirrorResponseDTO, summary="Detalle de factura")
async def get_invoice(
    invoice_id: str,
    use_cases: MirrorQueryUseCases = Depends(get_mirror_query_use_cases),
) -> MirrorResponseDTO:
    return await use_cases.get_detail(EntityType.INVOICES.value, invoice_id)


@payments_router.get("", response_model=MirrorResponseDTO, summary="Listar pagos")
async def list_payments(
    payment_type: Optional[str] = Query(None, description="ACCRECPAYMENT, ACCPAYPAYMENT, ..."),
    status: Optional[str] = Query(None, description="AUTHORISED / DELETED"),
    start_date: Optional[str] = Query(None, description=f"{_START_DATE} sobre UpdatedDateUTC"),
    end_date: Optional[str] = Query(None, description=f"{_END_DATE} sobre UpdatedDateUTC"),
    use_cases: MirrorQueryUseCases = Depends(get_mirror_query_use_cases),
) -> MirrorResponseDTO:
    return await use_cases.list_collection(EntityType.PAYMENTS.value, {
        "payment_type": payment_type,
        "status": status,
        "start_date": start_date,
        "end_date": end_date,
    })


@purchase_orders_router.get("", response_model=MirrorResponseDTO, summary="Listar ordenes de compra")
async def list_purchase_orders(
    purchase_order_status: Optional[str] = Query(None, description="DRAFT, SUBMITTED, AUTHORISED, BILLED"),
    start_date: Optional[str] = Query(None, description=f"{_START_DATE} sobre UpdatedDateUTC"),
    end_date: Optional[str] = Query(None, description=f"{_END_DATE} sobre UpdatedDateUTC"),
    use_cases: MirrorQueryUseCases = Depends(get_mirror_query_use_cases),
) -> MirrorResponseDTO:
    return await use_cases.list_collection(EntityType.PURCHASE_ORDERS.value, {
        "purchase_order_status": purchase_order_status,
        "start_date": start_date,
        "end_date": end_date,
    })


@transactions_router.get("", response_model=MirrorResponseDTO, summary="Listar transacciones bancarias")
async def list_transactions(
    status: Optional[str] = Query(None, description="AUTHORISED / DELETED"),
    type: Optional[str] = Query(None, description="SPEND / RECEIVE / ..."),
    start_date: Optional[str] = Query(None, description=f"{_START_DATE} sobre Date (si es invalida se ignora)"),
    end_date: Optional[str] = Query(None, description=f"{_END_DATE} sobre Date (si es invalida se ignora)"),
    use_cases: MirrorQueryUseCases = Depends(get_mirror_query_use_cases),
) -> MirrorResponseDTO:
    return await use_cases.list_collection(EntityType.BANK_TRANSACTIONS.value, {
        "status": status,
        "type": type,
        "start_date": start_date,
        "end_date": end_date,
    })


# Debe registrarse antes de /{transaction_id}
@transactions_router.get(
    "/bank-details",
    response_model=BankDetailsResponseDTO,
    summary="Cuentas bancarias unicas de las transacciones"
)
async def list_bank_details(
    use_cases: MirrorQueryUseCases = Depends(get_mirror_query_use_cases),
) -> BankDetailsResponseDTO:
    return await use_cases.bank_details()


@transactions_router.get("/{transaction_id}", response_model=MirrorResponseDTO, summary="Detalle de transaccion")
async def get_transaction(
    transaction_id: str,
    use_cases: MirrorQueryUseCases = Depends(get_mirror_query_use_cases),
) -> MirrorResponseDTO:
    return await use_cases.get_detail(EntityType.BANK_TRANSACTIONS.value, transaction_id)


@users_router.get("", response_model=MirrorResponseDTO, summary="Listar usuarios de Xero")
async def list_users(
    use_cases: MirrorQueryUseCases = Depends(get_mirror_query_use_cases),
) -> MirrorResponseDTO:
    return await use_cases.list_collection(EntityType.USERS.value)


routers = [
    accounts_router,
    contacts_router,
    invoices_router,
    payments_router,
    purchase_orders_router,
    transactions_router,
    users_router,
]
