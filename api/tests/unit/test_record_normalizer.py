"""
Tests del normalizador de registros Xero -> entidad tipada.

Cubre:
- copia/renombre de campos y decodificacion de fechas
- bag `extra` solo para entidades que conservan campos no mapeados
- campos requeridos (incluye sub-objetos anidados)
- aislamiento de fallos: un registro malo no afecta al resto
"""
from datetime import datetime, timezone

import pytest

from xero_mirror.domain.entities.xero_entities import Account, Contact, Payment
from xero_mirror.infrastructure.external.xero_sync.entity_mappings import get_entity_config
from xero_mirror.infrastructure.external.xero_sync.normalizer import normalize_record
from xero_mirror.shared.exceptions.sync import NormalizationFault


def _payment(payment_id: str, *, with_contact: bool = True) -> dict:
    invoice = {"InvoiceID": f"inv-{payment_id}", "InvoiceNumber": "INV-1", "Type": "ACCREC"}
    if with_contact:
        invoice["Contact"] = {"ContactID": "c-1", "Name": "ACME", "Extra": "ignorado"}
    return {
        "PaymentID": payment_id,
        "Date": "/Date(1627884000000+0000)/",
        "Amount": 100.5,
        "Status": "AUTHORISED",
        "PaymentType": "ACCRECPAYMENT",
        "Account": {"AccountID": "acc-1", "Code": "090", "Name": "no se copia"},
        "Invoice": invoice,
        "CampoDesconocido": "se descarta",
    }


def test_account_keeps_unmapped_fields_in_extra():
    config = get_entity_config("accounts")
    raw = {
        "AccountID": "acc-1",
        "Code": "200",
        "Class": "REVENUE",
        "UpdatedDateUTC": "/Date(1627884000000+0000)/",
        "AddToWatchlist": False,
    }

    record = normalize_record(raw, config=config)

    assert isinstance(record, Account)
    assert record.remote_id == "acc-1"
    assert record.account_class == "REVENUE"
    assert record.updated_date_utc == datetime(2021, 8, 2, 6, 0, tzinfo=timezone.utc)
    assert record.extra == {"AddToWatchlist": False}


def test_account_document_uses_xero_names():
    config = get_entity_config("accounts")
    record = normalize_record({"AccountID": "acc-1", "Class": "ASSET", "Foo": 1}, config=config)

    document = record.to_document()

    assert document["AccountID"] == "acc-1"
    assert document["Class"] == "ASSET"
    assert document["Foo"] == 1
    assert "extra" not in document


def test_contact_drops_unmapped_fields():
    config = get_entity_config("contacts")
    raw = {"ContactID": "c-1", "Name": "ACME", "Website": "https://acme.test"}

    record = normalize_record(raw, config=config)

    assert isinstance(record, Contact)
    assert record.name == "ACME"
    assert record.extra == {}
    assert "Website" not in record.to_document()


def test_optional_missing_fields_are_none():
    config = get_entity_config("contacts")
    record = normalize_record({"ContactID": "c-1"}, config=config)
    assert record.email_address is None
    assert record.updated_date_utc is None


def test_payment_projects_nested_objects():
    config = get_entity_config("payments")

    record = normalize_record(_payment("p-1"), config=config)

    assert isinstance(record, Payment)
    assert record.account == {"AccountID": "acc-1", "Code": "090"}
    assert record.invoice["InvoiceID"] == "inv-p-1"
    assert record.invoice["Contact"]["ContactID"] == "c-1"
    assert "Extra" not in record.invoice["Contact"]
    assert record.date == datetime(2021, 8, 2, 6, 0, tzinfo=timezone.utc)


def test_payment_without_invoice_contact_is_a_fault():
    config = get_entity_config("payments")

    with pytest.raises(NormalizationFault) as exc_info:
        normalize_record(_payment("p-1", with_contact=False), config=config)

    assert exc_info.value.record_id == "p-1"
    assert exc_info.value.__cause__ is not None


def test_payment_without_account_is_a_fault():
    config = get_entity_config("payments")
    raw = _payment("p-1")
    del raw["Account"]

    with pytest.raises(NormalizationFault):
        normalize_record(raw, config=config)


def test_purchase_order_requires_line_items():
    config = get_entity_config("purchase_orders")

    with pytest.raises(NormalizationFault):
        normalize_record({"PurchaseOrderID": "po-1", "Status": "DRAFT"}, config=config)


def test_purchase_order_line_items_must_be_an_array():
    config = get_entity_config("purchase_orders")

    with pytest.raises(NormalizationFault):
        normalize_record({"PurchaseOrderID": "po-1", "LineItems": "no"}, config=config)


def test_purchase_order_dates_are_decoded():
    config = get_entity_config("purchase_orders")
    raw = {
        "PurchaseOrderID": "po-1",
        "Date": "/Date(0+0000)/",
        "DeliveryDate": "/Date(86400000+0000)/",
        "LineItems": [{"Description": "Papel", "Quantity": 2, "Otro": "x"}],
    }

    record = normalize_record(raw, config=config)

    assert record.date == datetime(1970, 1, 1, tzinfo=timezone.utc)
    assert record.delivery_date == datetime(1970, 1, 2, tzinfo=timezone.utc)
    assert record.line_items[0]["Description"] == "Papel"
    assert "Otro" not in record.line_items[0]


def test_invalid_type_is_a_fault():
    config = get_entity_config("invoices")

    with pytest.raises(NormalizationFault):
        normalize_record({"InvoiceID": "i-1", "Total": "no es numero"}, config=config)


def test_one_malformed_record_does_not_affect_the_rest():
    config = get_entity_config("payments")
    batch = [
        _payment("p-1"),
        _payment("p-2"),
        _payment("p-3", with_contact=False),
        _payment("p-4"),
        _payment("p-5"),
    ]

    normalized = []
    faults = []
    for raw in batch:
        try:
            normalized.append(normalize_record(raw, config=config))
        except NormalizationFault as e:
            faults.append(e.record_id)

    assert [r.remote_id for r in normalized] == ["p-1", "p-2", "p-4", "p-5"]
    assert faults == ["p-3"]


def test_identifier_longer_than_column_is_a_fault():
    config = get_entity_config("invoices")

    with pytest.raises(NormalizationFault) as exc_info:
        normalize_record({"InvoiceID": "x" * 300}, config=config)

    assert exc_info.value.entity_type == "invoices"
    assert len(exc_info.value.record_id) == 255
