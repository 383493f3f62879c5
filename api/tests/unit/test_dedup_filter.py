"""
Tests del filtro de deduplicacion.
"""
from xero_mirror.infrastructure.external.xero_sync.dedup import filter_new_records, record_identifier


def test_keeps_only_records_not_already_mirrored():
    candidates = [{"InvoiceID": "a"}, {"InvoiceID": "b"}, {"InvoiceID": "c"}]

    result = filter_new_records({"b"}, candidates, "InvoiceID")

    assert [r["InvoiceID"] for r in result] == ["a", "c"]


def test_preserves_input_order():
    candidates = [{"ContactID": x} for x in ["z", "m", "a", "q"]]

    result = filter_new_records(set(), candidates, "ContactID")

    assert [r["ContactID"] for r in result] == ["z", "m", "a", "q"]


def test_drops_records_without_identifier():
    candidates = [
        {"AccountID": ""},
        {"AccountID": "   "},
        {"AccountID": None},
        {"Name": "sin id"},
        "no es un objeto",
        {"AccountID": "ok"},
    ]

    result = filter_new_records(set(), candidates, "AccountID")

    assert result == [{"AccountID": "ok"}]


def test_all_existing_returns_empty():
    candidates = [{"PaymentID": "1"}, {"PaymentID": "2"}]
    assert filter_new_records({"1", "2"}, candidates, "PaymentID") == []


def test_record_identifier_stringifies_values():
    assert record_identifier({"UserID": 42}, "UserID") == "42"
    assert record_identifier(None, "UserID") is None


def test_repeated_identifier_keeps_first_occurrence():
    candidates = [
        {"InvoiceID": "a", "Total": 1},
        {"InvoiceID": "b"},
        {"InvoiceID": "a", "Total": 2},
    ]

    result = filter_new_records(set(), candidates, "InvoiceID")

    assert result == [{"InvoiceID": "a", "Total": 1}, {"InvoiceID": "b"}]
