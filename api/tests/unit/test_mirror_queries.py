"""
Tests de lectura de las colecciones espejadas.

Se siembran documentos en SQLite (a traves del store real) y se consultan:
- directamente con build_mirror_query / MirrorQueryRepository
- via HTTP con get_db sobreescrito
"""
from __future__ import annotations

from datetime import datetime, timezone

import pytest
from httpx import ASGITransport, AsyncClient

from xero_mirror.application.services.mirror_query_builder import build_mirror_query, get_query_spec
from xero_mirror.infrastructure.database.models import AccountMirrorModel
from xero_mirror.infrastructure.database.session import get_db
from xero_mirror.infrastructure.external.xero_sync.entity_mappings import get_entity_config
from xero_mirror.infrastructure.external.xero_sync.normalizer import normalize_record
from xero_mirror.infrastructure.repositories.mirror_query_repository import MirrorQueryRepository
from xero_mirror.infrastructure.repositories.mirror_repository import MirrorRepository
from xero_mirror.shared.exceptions.domain import ValidationException


def _xero_date(year: int, month: int, day: int) -> str:
    millis = int(datetime(year, month, day, tzinfo=timezone.utc).timestamp() * 1000)
    return f"/Date({millis}+0000)/"


async def _seed(session_factory, entity_type: str, raws: list[dict]) -> None:
    config = get_entity_config(entity_type)
    records = [normalize_record(raw, config=config) for raw in raws]
    await MirrorRepository(session_factory).insert_many(config, records)


@pytest.fixture
async def seeded(session_factory):
    await _seed(session_factory, "accounts", [
        {"AccountID": "acc-1", "Status": "ACTIVE", "Type": "BANK", "Class": "ASSET",
         "UpdatedDateUTC": _xero_date(2024, 1, 10)},
        {"AccountID": "acc-2", "Status": "ACTIVE", "Type": "REVENUE", "Class": "REVENUE",
         "UpdatedDateUTC": _xero_date(2024, 2, 10)},
        {"AccountID": "acc-3", "Status": "ARCHIVED", "Type": "BANK", "Class": "ASSET",
         "UpdatedDateUTC": _xero_date(2024, 3, 10)},
    ])
    await _seed(session_factory, "contacts", [
        {"ContactID": f"c-{m}", "ContactStatus": "ACTIVE", "UpdatedDateUTC": _xero_date(2024, m, 10)}
        for m in (1, 2, 3)
    ])
    await _seed(session_factory, "invoices", [
        {"InvoiceID": "inv-1", "Type": "ACCREC", "Status": "PAID", "LineAmountTypes": "Exclusive",
         "Date": _xero_date(2024, 1, 5)},
        {"InvoiceID": "inv-2", "Type": "ACCPAY", "Status": "AUTHORISED", "LineAmountTypes": "Inclusive",
         "Date": _xero_date(2024, 2, 5)},
    ])
    await _seed(session_factory, "bank_transactions", [
        {"BankTransactionID": "bt-1", "Type": "SPEND", "Status": "AUTHORISED", "Date": _xero_date(2024, 1, 1),
         "BankAccount": {"AccountID": "bank-1", "Name": "Cuenta corriente"}},
        {"BankTransactionID": "bt-2", "Type": "RECEIVE", "Status": "AUTHORISED", "Date": _xero_date(2024, 1, 2),
         "BankAccount": {"AccountID": "bank-2", "Name": "Ahorros"}},
        {"BankTransactionID": "bt-3", "Type": "SPEND", "Status": "DELETED", "Date": _xero_date(2024, 1, 3),
         "BankAccount": {"AccountID": "bank-1", "Name": "Cuenta corriente"}},
        {"BankTransactionID": "bt-4", "Type": "SPEND", "Status": "AUTHORISED", "Date": _xero_date(2024, 1, 4),
         "BankAccount": {"AccountID": "bank-3"}},
    ])
    await _seed(session_factory, "users", [
        {"GlobalUserID": "u-1", "EmailAddress": "a@test.com", "OrganisationRole": "ADMIN"},
    ])
    return session_factory


def _ids(documents: list[dict], id_field: str) -> list[str]:
    return [d[id_field] for d in documents]


@pytest.mark.asyncio
async def test_accounts_are_sorted_by_updated_date_desc(seeded):
    async with seeded() as session:
        docs = await MirrorQueryRepository(session).list_documents("accounts")
    assert _ids(docs, "AccountID") == ["acc-3", "acc-2", "acc-1"]


@pytest.mark.asyncio
async def test_accounts_equality_filters(seeded):
    async with seeded() as session:
        docs = await MirrorQueryRepository(session).list_documents(
            "accounts", {"account_status": "ACTIVE", "account_type": "BANK"}
        )
    assert _ids(docs, "AccountID") == ["acc-1"]


@pytest.mark.asyncio
async def test_accounts_date_bounds_are_exclusive(seeded):
    async with seeded() as session:
        docs = await MirrorQueryRepository(session).list_documents(
            "accounts", {"start_date": "2024-01-10", "end_date": "2024-03-10"}
        )
    assert _ids(docs, "AccountID") == ["acc-2"]


@pytest.mark.asyncio
async def test_contacts_date_bounds_are_inclusive(seeded):
    async with seeded() as session:
        docs = await MirrorQueryRepository(session).list_documents(
            "contacts", {"start_date": "2024-01-10", "end_date": "2024-03-10T00:00:00Z"}
        )
    assert sorted(_ids(docs, "ContactID")) == ["c-1", "c-2", "c-3"]


@pytest.mark.asyncio
async def test_invoices_filter_on_date_and_sort_desc(seeded):
    async with seeded() as session:
        repo = MirrorQueryRepository(session)
        all_docs = await repo.list_documents("invoices")
        filtered = await repo.list_documents("invoices", {"start_date": "2024-02-01"})
        by_type = await repo.list_documents("invoices", {"invoice_type": "ACCREC", "line_amount_type": "Exclusive"})

    assert _ids(all_docs, "InvoiceID") == ["inv-2", "inv-1"]
    assert _ids(filtered, "InvoiceID") == ["inv-2"]
    assert _ids(by_type, "InvoiceID") == ["inv-1"]


def test_invalid_date_is_rejected_on_strict_collections():
    with pytest.raises(ValidationException) as exc_info:
        build_mirror_query(AccountMirrorModel, get_query_spec("accounts"), {"start_date": "ayer"})
    assert exc_info.value.details == {"field": "start_date"}


@pytest.mark.asyncio
async def test_invalid_date_is_ignored_on_transactions(seeded):
    async with seeded() as session:
        docs = await MirrorQueryRepository(session).list_documents(
            "bank_transactions", {"start_date": "no-es-fecha", "status": "AUTHORISED"}
        )
    assert sorted(_ids(docs, "BankTransactionID")) == ["bt-1", "bt-2", "bt-4"]


@pytest.mark.asyncio
async def test_bank_details_are_unique_and_complete(seeded):
    async with seeded() as session:
        details = await MirrorQueryRepository(session).list_bank_details()
    assert details == [
        {"Name": "Cuenta corriente", "AccountID": "bank-1"},
        {"Name": "Ahorros", "AccountID": "bank-2"},
    ]


@pytest.fixture
def app_with_db(seeded):
    """App FastAPI con get_db apuntando a la base sembrada."""
    from main import create_application

    async def _override_db():
        async with seeded() as session:
            yield session

    app = create_application()
    app.dependency_overrides[get_db] = _override_db
    yield app
    app.dependency_overrides.clear()


async def _get(app, url: str, **params):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        return await client.get(url, params=params)


@pytest.mark.asyncio
async def test_list_endpoint_envelope(app_with_db):
    response = await _get(app_with_db, "/api/v1/accounts", account_class="ASSET")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == 200
    assert body["success"] is True
    assert _ids(body["data"], "AccountID") == ["acc-3", "acc-1"]
    assert body["message"]


@pytest.mark.asyncio
async def test_list_endpoint_rejects_invalid_date(app_with_db):
    response = await _get(app_with_db, "/api/v1/payments", end_date="31/12/2024")

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["error"] == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_invoice_detail_endpoint(app_with_db):
    found = await _get(app_with_db, "/api/v1/invoices/inv-2")
    missing = await _get(app_with_db, "/api/v1/invoices/no-existe")

    assert found.status_code == 200
    assert found.json()["data"]["InvoiceID"] == "inv-2"
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_transaction_routes(app_with_db):
    bank_details = await _get(app_with_db, "/api/v1/transactions/bank-details")
    detail = await _get(app_with_db, "/api/v1/transactions/bt-3")
    listing = await _get(app_with_db, "/api/v1/transactions", type="SPEND")

    assert bank_details.status_code == 200
    assert len(bank_details.json()["data"]) == 2
    assert detail.json()["data"]["Status"] == "DELETED"
    assert sorted(_ids(listing.json()["data"], "BankTransactionID")) == ["bt-1", "bt-3", "bt-4"]


@pytest.mark.asyncio
async def test_users_and_empty_collections(app_with_db):
    users = await _get(app_with_db, "/api/v1/users")
    orders = await _get(app_with_db, "/api/v1/purchase-orders")

    assert _ids(users.json()["data"], "GlobalUserID") == ["u-1"]
    assert orders.json()["data"] == []
