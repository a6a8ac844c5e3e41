"""Map raw API records (camelCase JSON) to library models."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from datetime import date
from typing import Any, TypeVar

from .const import TEMPLATE_BLACKOUT_REASON
from .exceptions import ApiError
from .models import (
    Application,
    AvailabilityWindow,
    BlackoutRule,
    Invoice,
    Location,
    Park,
    Permit,
    PermitTemplate,
)
from .util import (
    normalize_status,
    parse_amount,
    parse_optional_amount,
    parse_optional_date,
    parse_optional_datetime,
)

_LOGGER = logging.getLogger(__name__)

T = TypeVar("T")


def map_list(data: Any, mapper: Callable[[dict[str, Any]], T], label: str) -> list[T]:
    if data is None:
        return []
    if not isinstance(data, list):
        raise ApiError(f"API response included invalid {label}.")
    return [mapper(item) for item in data if isinstance(item, dict)]


def map_application(data: Any) -> Application:
    if not isinstance(data, dict):
        raise ApiError("API response included invalid application data.")
    return Application(
        id=_coerce_id(data.get("id"), "application id"),
        status=normalize_status(data.get("status")),
        is_paid=data.get("isPaid") is True,
        application_fee=parse_optional_amount(data.get("applicationFee")),
        permit_fee=parse_optional_amount(data.get("permitFee")),
        permit_fee_payment_status=_optional_text(data.get("permitFeePaymentStatus")),
        event_date=parse_optional_date(data.get("eventDate")),
        event_title=_optional_text(data.get("eventTitle")),
        event_description=_optional_text(data.get("eventDescription")),
        park_id=_optional_id(data.get("parkId")),
        location_id=_optional_id(data.get("locationId")),
        event_dates=_map_event_dates(data.get("eventDates")),
        location_fee=parse_optional_amount(data.get("locationFee")),
        created_at=parse_optional_datetime(data.get("createdAt")),
    )


def map_invoice(data: Any) -> Invoice:
    if not isinstance(data, dict):
        raise ApiError("API response included invalid invoice data.")
    paid = data.get("isPaid")
    return Invoice(
        id=_coerce_id(data.get("id"), "invoice id"),
        amount=parse_amount(data.get("amount")),
        status=normalize_status(data.get("status")),
        application_id=_optional_id(data.get("applicationId")),
        permit_id=_optional_id(data.get("permitId")),
        issue_date=parse_optional_date(data.get("issueDate")),
        due_date=parse_optional_date(data.get("dueDate")),
        invoice_number=_optional_text(data.get("invoiceNumber")),
        paid=paid if isinstance(paid, bool) else None,
    )


def map_permit(data: Any) -> Permit:
    if not isinstance(data, dict):
        raise ApiError("API response included invalid permit data.")
    return Permit(
        id=_coerce_id(data.get("id"), "permit id"),
        status=normalize_status(data.get("status")),
        park_id=_optional_id(data.get("parkId")),
        permit_number=_optional_text(data.get("permitNumber")),
        location=_optional_text(data.get("location")),
    )


def map_park(data: Any) -> Park:
    if not isinstance(data, dict):
        raise ApiError("API response included invalid park data.")
    days = _date_list(data.get("blackoutDays"))
    return Park(
        id=_coerce_id(data.get("id"), "park id"),
        name=_optional_text(data.get("name")) or "",
        location=_optional_text(data.get("location")) or "",
        status=normalize_status(data.get("status")) or "active",
        blackout_days=tuple(days),
    )


def map_permit_template(data: Any) -> PermitTemplate:
    """Map a template; the full form payload may be nested under ``templateData``."""
    if not isinstance(data, dict):
        raise ApiError("API response included invalid permit template data.")
    body = data.get("templateData")
    if isinstance(body, str):
        body = _load_json(body)
    if not isinstance(body, dict):
        body = data
    name = _optional_text(body.get("name")) or _optional_text(data.get("permitType")) or ""
    park_id = _optional_id(data.get("parkId"))
    if park_id is None:
        park_id = _optional_id(body.get("parkId"))
    raw_locations = body.get("locations")
    locations = map_list(raw_locations, map_location, "template locations")
    return PermitTemplate(
        id=_coerce_id(data.get("id"), "permit template id"),
        name=name,
        park_id=park_id,
        locations=tuple(locations),
        application_fee=parse_optional_amount(body.get("applicationFee")),
        permit_fee=parse_optional_amount(body.get("permitFee")),
    )


def map_location(data: dict[str, Any]) -> Location:
    rules = [rule for rule in _map_blackout_rules(data.get("blackoutRules")) if rule is not None]
    rules.extend(
        BlackoutRule(start_date=day, reason=TEMPLATE_BLACKOUT_REASON)
        for day in _date_list(data.get("blackoutDates"))
    )
    windows = [window for window in _map_windows(data.get("availableDates")) if window is not None]
    return Location(
        name=_optional_text(data.get("name")) or "",
        id=_optional_id(data.get("id")),
        description=_optional_text(data.get("description")),
        blackout_rules=tuple(rules),
        available_dates=tuple(windows),
    )


def map_blackout_rule(data: Any) -> BlackoutRule | None:
    """Return ``None`` for rules without a usable start date."""
    if not isinstance(data, dict):
        return None
    start = parse_optional_date(data.get("startDate"))
    if start is None:
        _LOGGER.debug("Dropping blackout rule without a valid start date")
        return None
    rule = BlackoutRule(
        start_date=start,
        end_date=parse_optional_date(data.get("endDate")),
        reason=_optional_text(data.get("reason")) or "",
    )
    if rule.is_inverted:
        _LOGGER.debug(
            "Blackout rule %s..%s is inverted, treating it as a single day",
            rule.start_date,
            rule.end_date,
        )
    return rule


def _map_blackout_rules(raw: Any) -> list[BlackoutRule | None]:
    if not isinstance(raw, list):
        return []
    return [map_blackout_rule(item) for item in raw]


def _map_windows(raw: Any) -> list[AvailabilityWindow | None]:
    if not isinstance(raw, list):
        return []
    return [_map_window(item) for item in raw]


def _map_window(data: Any) -> AvailabilityWindow | None:
    if not isinstance(data, dict):
        return None
    start = parse_optional_date(data.get("startDate"))
    if start is None:
        return None
    end = None if data.get("hasNoEndDate") is True else parse_optional_date(data.get("endDate"))
    return AvailabilityWindow(
        start_date=start,
        end_date=end,
        repeat_weekly=data.get("repeatWeekly") is True,
    )


def _map_event_dates(raw: Any) -> tuple[date, ...]:
    if isinstance(raw, str):
        raw = _load_json(raw)
    return tuple(sorted(_date_list(raw)))


def _date_list(raw: Any) -> list[date]:
    if not isinstance(raw, list):
        return []
    days: list[date] = []
    for item in raw:
        day = parse_optional_date(item)
        if day is not None:
            days.append(day)
    return days


def _load_json(raw: str) -> Any:
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return None


def _coerce_id(value: Any, field: str) -> int:
    coerced = _optional_id(value)
    if coerced is None:
        raise ApiError(f"API response missing {field}.")
    return coerced


def _optional_id(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        stripped = value.strip()
        if stripped.isdigit():
            return int(stripped)
    return None


def _optional_text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None
