"""Shared utilities for validation and normalization."""

from __future__ import annotations

from datetime import date, datetime, tzinfo
from decimal import Decimal, InvalidOperation
from typing import Any

from .const import APPLICATION_STATUSES
from .exceptions import ValidationError

_ZERO = Decimal("0")


def parse_amount(value: Any) -> Decimal:
    """Parse a fee or amount, defaulting to zero for anything unusable.

    Accepts numbers and numeric strings such as ``"10.00"``; ``None``, booleans,
    blank or malformed strings and non-finite values all yield ``Decimal("0")``.
    """
    if value is None or isinstance(value, bool):
        return _ZERO
    if isinstance(value, Decimal):
        parsed = value
    elif isinstance(value, int | float):
        parsed = Decimal(str(value))
    elif isinstance(value, str):
        stripped = value.strip()
        if not stripped:
            return _ZERO
        try:
            parsed = Decimal(stripped)
        except InvalidOperation:
            return _ZERO
    else:
        return _ZERO
    if not parsed.is_finite():
        return _ZERO
    return parsed


def parse_optional_amount(value: Any) -> Decimal | None:
    if value is None:
        return None
    if isinstance(value, str) and not value.strip():
        return None
    return parse_amount(value)


def normalize_status(value: Any) -> str:
    if not isinstance(value, str):
        return ""
    return value.strip().lower()


def is_known_status(value: Any) -> bool:
    return normalize_status(value) in APPLICATION_STATUSES


def to_local_date(value: date | datetime | str, tz: tzinfo | None = None) -> date:
    """Return the calendar day of ``value``, dropping any time of day.

    Aware datetimes are converted to ``tz`` (system local time when omitted)
    before the day is taken; naive datetimes are assumed to be local already.
    Raises ``ValidationError`` for anything that is not a recognizable date.
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(tz)
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        raise ValidationError("Date must be a date, datetime or non-empty ISO string.")
    raw = value.strip()
    if len(raw) == 10:
        try:
            return date.fromisoformat(raw)
        except ValueError as exc:
            raise ValidationError("Date is not a valid ISO 8601 value.") from exc
    if raw.endswith("Z"):
        raw = f"{raw[:-1]}+00:00"
    try:
        parsed = datetime.fromisoformat(raw)
    except ValueError as exc:
        raise ValidationError("Date is not a valid ISO 8601 value.") from exc
    return to_local_date(parsed, tz)


def parse_optional_date(value: Any, tz: tzinfo | None = None) -> date | None:
    """Lenient variant of ``to_local_date`` for record fields."""
    if value is None:
        return None
    try:
        return to_local_date(value, tz)
    except ValidationError:
        return None


def parse_optional_datetime(value: Any) -> datetime | None:
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    raw = value.strip()
    if raw.endswith("Z"):
        raw = f"{raw[:-1]}+00:00"
    try:
        return datetime.fromisoformat(raw)
    except ValueError:
        return None


def month_key(value: date) -> str:
    return f"{value.month}/{value.year}"


def parse_month_key(key: str) -> tuple[int, int]:
    """Return ``(year, month)`` for an ``M/YYYY`` key."""
    month, _, year = key.partition("/")
    return int(year), int(month)
