from __future__ import annotations

import math
from datetime import date, datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Union

Number = Union[int, float]


def coerce_number(value: Any) -> Number:
    """Best-effort numeric value of a raw store field.

    Anything missing, non-numeric, NaN or infinite counts as 0. Integral values
    come back as ``int`` so currency units stay whole.
    """
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return _normalize_float(value)
    if isinstance(value, Decimal):
        if not value.is_finite():
            return 0
        return _normalize_float(float(value))
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0
        try:
            return int(text)
        except ValueError:
            pass
        try:
            return _normalize_float(float(Decimal(text)))
        except (InvalidOperation, ValueError):
            return 0
    return 0


def _normalize_float(value: float) -> Number:
    if not math.isfinite(value):
        return 0
    if value.is_integer():
        return int(value)
    return value


def round_half_up(value: float) -> int:
    # ratios of huge finite inputs can overflow to inf
    if not math.isfinite(value):
        return 0
    return int(math.floor(value + 0.5))


def percent(part: Number, whole: Number) -> int:
    """Rounded ``part / whole * 100``; 0 when ``whole`` is 0."""
    if whole == 0:
        return 0
    return round_half_up(part / whole * 100)


def signed_percent(delta: Number, base: Number) -> int:
    """Variance expressed as a percentage of ``base``; 0 when ``base`` is 0."""
    if base == 0:
        return 0
    return round_half_up(delta / base * 100)


def clamp_percent(value: Number) -> int:
    return int(max(0, min(100, value)))


def ratio(numerator: Number, denominator: Number) -> int:
    if denominator == 0:
        return 0
    return round_half_up(numerator / denominator)


def has_text(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def as_text_list(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value] if value.strip() else []
    try:
        items = list(value)
    except TypeError:
        return []
    return [item for item in items if has_text(item)]


def coerce_date(value: Any) -> date | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
        except ValueError:
            pass
        try:
            return date.fromisoformat(text[:10])
        except ValueError:
            return None
    return None


def sort_timestamp(value: Any) -> float | None:
    """Comparable POSIX timestamp for dates, datetimes and ISO strings."""
    if isinstance(value, str):
        text = value.strip()
        try:
            value = datetime.fromisoformat(text.replace("Z", "+00:00"))
        except ValueError:
            value = coerce_date(text)
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.timestamp()
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc).timestamp()
    return None


def format_amount(value: Number) -> str:
    if isinstance(value, float):
        return f"{value:,.2f}"
    return f"{value:,}"


__all__ = [
    "Number",
    "coerce_number",
    "round_half_up",
    "percent",
    "signed_percent",
    "clamp_percent",
    "ratio",
    "has_text",
    "as_text_list",
    "coerce_date",
    "sort_timestamp",
    "format_amount",
]
