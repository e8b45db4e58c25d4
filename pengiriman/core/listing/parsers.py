from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any

from pengiriman.core.errors import ParseError


def is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def parse_text(value: Any) -> str:
    if isinstance(value, (dict, list, tuple, set, bool)):
        raise ParseError(f"expected text, got {type(value).__name__}")
    text = str(value).strip()
    if not text:
        raise ParseError("empty text")
    return text


def _with_next_day(day: date) -> date:
    # The day filter is a [day, day + 1) range.
    if day >= date.max:
        raise ParseError(f"date {day.isoformat()} has no following day")
    return day


def parse_date(value: Any) -> date:
    """
    Calendar day named by the value. Accepts `YYYY-MM-DD`, ISO datetimes
    (with or without offset, `Z` included) and the `YYYY-MM-DD HH:MM:SS` form
    the grid date filter sends. The day is taken as written; no timezone
    conversion is applied.
    """
    if isinstance(value, datetime):
        return _with_next_day(value.date())
    if isinstance(value, date):
        return _with_next_day(value)
    if not isinstance(value, str):
        raise ParseError(f"expected date string, got {type(value).__name__}")
    text = value.strip()
    if text.endswith("Z") or text.endswith("z"):
        text = text[:-1] + "+00:00"
    try:
        day = datetime.fromisoformat(text).date()
    except ValueError:
        try:
            day = date.fromisoformat(text[:10])
        except ValueError as exc:
            raise ParseError(f"invalid date {value!r}") from exc
    return _with_next_day(day)


def parse_decimal(value: Any) -> Decimal:
    if isinstance(value, bool):
        raise ParseError("expected number, got bool")
    if isinstance(value, float):
        value = repr(value)
    try:
        number = Decimal(str(value).strip())
    except (InvalidOperation, ValueError) as exc:
        raise ParseError(f"invalid number {value!r}") from exc
    if not number.is_finite():
        raise ParseError(f"non-finite number {value!r}")
    return number


def parse_int(value: Any, default: int) -> int:
    """Integer pagination value, or `default` when absent or non-numeric."""
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else default
    try:
        return int(str(value).strip())
    except ValueError:
        return default
