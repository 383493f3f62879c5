"""
Tests del codec de fechas /Date(ms[+-hhmm])/ de Xero.
"""
from datetime import datetime, timezone

import pytest

from xero_mirror.infrastructure.external.xero_sync.date_codec import decode_xero_date


def test_decodes_millisecond_epoch_with_offset():
    result = decode_xero_date("/Date(1627884000000+0000)/")
    assert result == datetime(2021, 8, 2, 6, 0, tzinfo=timezone.utc)
    assert result.tzinfo is not None


def test_decodes_without_offset():
    assert decode_xero_date("/Date(0)/") == datetime(1970, 1, 1, tzinfo=timezone.utc)


def test_offset_does_not_shift_the_instant():
    plain = decode_xero_date("/Date(1627884000000)/")
    with_positive = decode_xero_date("/Date(1627884000000+1300)/")
    with_negative = decode_xero_date("/Date(1627884000000-0500)/")
    assert plain == with_positive == with_negative


def test_keeps_milliseconds():
    result = decode_xero_date("/Date(1627884000123+0000)/")
    assert result.microsecond == 123000


@pytest.mark.parametrize(
    "raw",
    [None, "", "   ", "2021-08-02T06:00:00", "/Date(abc)/", "/Date(12+00)/", "Date(123)", 1627884000000, {"x": 1}],
)
def test_invalid_input_returns_none(raw):
    assert decode_xero_date(raw) is None


def test_tolerates_surrounding_whitespace():
    assert decode_xero_date("  /Date(0+0000)/ ") == datetime(1970, 1, 1, tzinfo=timezone.utc)
