"""
Tests for the utility helpers.

Covers:
- Record id minting (base36 suffix)
- Loose (coercing) equality and filter criteria matching
- Leading-number quantity parsing
- The 32-bit demo password hash
- Date and number formatting helpers
"""

import math
import re
from datetime import date

import pytest

from core.utils.helpers import (
    current_month,
    format_number,
    half_up,
    iso_from_ms,
    js_string,
    loose_equals,
    matches_criteria,
    mint_record_id,
    parse_date,
    parse_float,
    simple_hash,
    string_to_number,
    to_amount,
    to_base36,
)


# =============================================================================
# RECORD IDS
# =============================================================================


def test_to_base36():
    assert to_base36(0) == "0"
    assert to_base36(35) == "z"
    assert to_base36(36) == "10"
    assert to_base36(5, width=3) == "005"


def test_to_base36_rejects_negative():
    with pytest.raises(ValueError):
        to_base36(-1)


def test_mint_record_id_shape():
    """Ids are epoch milliseconds followed by 8 base36 characters"""
    record_id = mint_record_id()
    assert re.fullmatch(r"\d{13}[0-9a-z]{8}", record_id)


def test_mint_record_id_is_unique_in_practice():
    ids = {mint_record_id() for _ in range(500)}
    assert len(ids) == 500


# =============================================================================
# LOOSE EQUALITY
# =============================================================================


@pytest.mark.parametrize(
    "a,b,expected",
    [
        (1, "1", True),
        ("1.0", 1, True),
        (100, "100", True),
        (True, 1, True),
        (True, "1", True),
        (False, 0, True),
        (False, "", True),
        ("abc", "abc", True),
        ("abc", "ABC", False),
        ("abc", 0, False),
        (None, None, True),
        (None, 0, False),
        (None, "", False),
        (0, "", True),
        ([1], "1", True),
        ("0x10", 16, True),
    ],
)
def test_loose_equals(a, b, expected):
    assert loose_equals(a, b) is expected
    assert loose_equals(b, a) is expected


def test_loose_equals_containers_compare_by_identity():
    payload = {"a": 1}
    assert loose_equals(payload, payload)
    assert not loose_equals({"a": 1}, {"a": 1})
    assert not loose_equals([1, 2], [1, 2])


def test_string_to_number():
    assert string_to_number("  42 ") == 42.0
    assert string_to_number("") == 0.0
    assert string_to_number("-Infinity") == -math.inf
    assert math.isnan(string_to_number("12abc"))


def test_js_string():
    assert js_string(3.0) == "3"
    assert js_string(True) == "true"
    assert js_string([1, "a", None]) == "1,a,"
    assert js_string({"a": 1}) == "[object Object]"


def test_matches_criteria_requires_every_field():
    record = {"id": "1", "month": "2026-03", "purchased": True, "price": 120}
    assert matches_criteria(record, {"month": "2026-03", "purchased": True})
    assert matches_criteria(record, {"price": "120"})
    assert not matches_criteria(record, {"month": "2026-04"})


def test_matches_criteria_missing_field_never_matches():
    """A missing field is not the same as a null one"""
    assert not matches_criteria({"id": "1"}, {"notes": None})
    assert matches_criteria({"id": "1", "notes": None}, {"notes": None})


def test_matches_criteria_empty_criteria_match_all():
    assert matches_criteria({"id": "1"}, {})
    assert matches_criteria({"id": "1"}, None)


# =============================================================================
# NUMBERS
# =============================================================================


@pytest.mark.parametrize(
    "value,expected",
    [
        ("2 packets", 2.0),
        ("500g", 500.0),
        (".5kg", 0.5),
        ("  3.25 kg", 3.25),
        (7, 7.0),
        ("abc", None),
        ("", None),
        (None, None),
        (True, None),
    ],
)
def test_parse_float(value, expected):
    assert parse_float(value) == expected


def test_to_amount():
    assert to_amount(120) == 120.0
    assert to_amount("80") == 80.0
    assert to_amount("n/a") == 0.0
    assert to_amount(None) == 0.0


def test_half_up_and_format_number():
    assert half_up(2.5) == 3
    assert half_up(2.49) == 2
    assert format_number(3.0) == "3"
    assert format_number(2.5) == "2.5"


# =============================================================================
# DATES
# =============================================================================


def test_current_month():
    assert current_month(date(2026, 3, 18)) == "2026-03"
    assert re.fullmatch(r"\d{4}-\d{2}", current_month())


def test_parse_date():
    assert parse_date("2026-03-18") == date(2026, 3, 18)
    assert parse_date("2026-03-18T10:00:00Z") == date(2026, 3, 18)
    assert parse_date("not a date") is None
    assert parse_date(None) is None


def test_iso_from_ms():
    assert iso_from_ms(0) == "1970-01-01T00:00:00.000Z"
    assert iso_from_ms(1500) == "1970-01-01T00:00:01.500Z"


# =============================================================================
# DEMO PASSWORD HASH
# =============================================================================


def test_simple_hash_known_values():
    assert simple_hash("") == "0"
    assert simple_hash("a") == "97"
    assert simple_hash("abc") == "96354"


def test_simple_hash_wraps_to_signed_32_bit():
    digest = int(simple_hash("a fairly long password that overflows"))
    assert -(2 ** 31) <= digest < 2 ** 31


def test_simple_hash_is_deterministic():
    assert simple_hash("demo123!") == simple_hash("demo123!")
    assert simple_hash("demo123!") != simple_hash("demo123?")
