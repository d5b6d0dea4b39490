"""
MealTrack utility functions
"""

from __future__ import annotations
import math
import re
import secrets
import time
from datetime import date, datetime, timezone
from typing import Any, Optional


# Record ids

_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"
_ID_SUFFIX_LEN = 8


def to_base36(n: int, width: int = 0) -> str:
    if n < 0:
        raise ValueError("negative numbers are not supported")
    digits = []
    while n:
        n, r = divmod(n, 36)
        digits.append(_BASE36[r])
    s = "".join(reversed(digits)) or "0"
    return s.rjust(width, "0")


def now_ms() -> int:
    """Current epoch time in milliseconds."""
    return int(time.time() * 1000)


def mint_record_id() -> str:
    """
    Mint a record id: epoch milliseconds followed by 8 random base36 chars.

    The random suffix gives 36**8 (about 2.8e12) values per millisecond.
    """
    return f"{now_ms()}{to_base36(secrets.randbelow(36 ** _ID_SUFFIX_LEN), _ID_SUFFIX_LEN)}"


# Loose (coercing) equality used by filter criteria

_NUMERIC_RE = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")
_INFINITY = {"Infinity": math.inf, "+Infinity": math.inf, "-Infinity": -math.inf}


def _is_number(v: Any) -> bool:
    return isinstance(v, (int, float)) and not isinstance(v, bool)


def string_to_number(s: str) -> float:
    """Numeric value of a string under loose-equality rules (NaN if not numeric)."""
    s = s.strip()
    if s == "":
        return 0.0
    if s in _INFINITY:
        return _INFINITY[s]
    if _NUMERIC_RE.match(s):
        return float(s)
    lowered = s.lower()
    for prefix, base in (("0x", 16), ("0o", 8), ("0b", 2)):
        if lowered.startswith(prefix):
            try:
                return float(int(s[2:], base))
            except ValueError:
                return math.nan
    return math.nan


def js_string(v: Any) -> str:
    """String form of a JSON value as the loose comparison sees it."""
    if v is None:
        return ""
    if isinstance(v, bool):
        return "true" if v else "false"
    if _is_number(v):
        if isinstance(v, float):
            if math.isnan(v):
                return "NaN"
            if math.isinf(v):
                return "Infinity" if v > 0 else "-Infinity"
            if v.is_integer():
                return str(int(v))
        return str(v)
    if isinstance(v, list):
        return ",".join(js_string(x) for x in v)
    if isinstance(v, dict):
        return "[object Object]"
    return str(v)


def loose_equals(a: Any, b: Any) -> bool:
    """
    Compare two JSON values with coercing equality.

    - null only equals null
    - booleans compare as 1/0
    - number vs string compares numerically (non-numeric strings never match)
    - two containers are equal only when they are the same object
    - a container vs a primitive compares through the container's string form
    """
    if a is None or b is None:
        return a is None and b is None

    if isinstance(a, bool):
        a = int(a)
    if isinstance(b, bool):
        b = int(b)

    a_container = isinstance(a, (list, dict))
    b_container = isinstance(b, (list, dict))
    if a_container and b_container:
        return a is b
    if a_container:
        a = js_string(a)
    if b_container:
        b = js_string(b)

    if _is_number(a) and _is_number(b):
        return a == b
    if isinstance(a, str) and isinstance(b, str):
        return a == b
    if _is_number(a) and isinstance(b, str):
        return a == string_to_number(b)
    if isinstance(a, str) and _is_number(b):
        return string_to_number(a) == b
    return a == b


def matches_criteria(record: dict, criteria: Optional[dict]) -> bool:
    """True when every criterion field is present on the record and loosely equal."""
    for key, expected in (criteria or {}).items():
        if key not in record:
            return False
        if not loose_equals(record[key], expected):
            return False
    return True


# Numbers

_FLOAT_PREFIX_RE = re.compile(r"^\s*([+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?)")


def parse_float(value: Any) -> Optional[float]:
    """
    Leading-number parse of a quantity like ``"2 packets"`` or ``"500g"``.

    Returns None when no number can be read.
    """
    if value is None or isinstance(value, bool):
        return None
    if _is_number(value):
        return float(value)
    m = _FLOAT_PREFIX_RE.match(str(value))
    if not m:
        return None
    return float(m.group(1))


def to_amount(value: Any) -> float:
    """Numeric amount of a price/cost field; missing or non-numeric counts as 0."""
    if _is_number(value):
        return float(value)
    if isinstance(value, str):
        n = string_to_number(value)
        return 0.0 if math.isnan(n) else n
    return 0.0


def half_up(x: float) -> int:
    """Round half away from zero for positive values (display rounding)."""
    return int(math.floor(x + 0.5))


def format_number(x: float) -> str:
    """Render ``3.0`` as ``"3"`` and ``2.5`` as ``"2.5"``."""
    return str(int(x)) if float(x).is_integer() else str(x)


# Dates

def current_month(today: Optional[date] = None) -> str:
    """``YYYY-MM`` of ``today`` (defaults to the current UTC date)."""
    today = today or datetime.now(timezone.utc).date()
    return today.strftime("%Y-%m")


def parse_date(value: Any) -> Optional[date]:
    """Parse the date part of an ISO string; None for missing or malformed values."""
    if not value or not isinstance(value, str):
        return None
    try:
        return date.fromisoformat(value[:10])
    except ValueError:
        return None


def format_clock_time(value: Any) -> str:
    """
    Render a ``HH:MM`` setting on a 12-hour clock.

    Example:
        >>> format_clock_time("13:05")
        '1:05 PM'
    """
    if not value or not isinstance(value, str) or ":" not in value:
        return ""
    hours, minutes = value.split(":", 1)
    try:
        hour = int(hours)
    except ValueError:
        return value
    suffix = "PM" if hour >= 12 else "AM"
    return f"{hour - 12 if hour > 12 else hour}:{minutes} {suffix}"


# Passwords

def simple_hash(value: str) -> str:
    """
    32-bit rolling string hash (``h = h * 31 + code_unit``), as a decimal string.

    NOT a password hashing primitive: no salt, trivially reversible by brute
    force. Kept because the seeded demo account digests use it.
    """
    h = 0
    data = value.encode("utf-16-le")
    for i in range(0, len(data), 2):
        code_unit = data[i] | (data[i + 1] << 8)
        h = (h * 31 + code_unit) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    return str(h)


def iso_from_ms(ms: int) -> str:
    """ISO-8601 UTC timestamp (``...Z``) of an epoch-milliseconds value."""
    dt = datetime.fromtimestamp(ms / 1000, tz=timezone.utc)
    return dt.isoformat(timespec="milliseconds").replace("+00:00", "Z")
