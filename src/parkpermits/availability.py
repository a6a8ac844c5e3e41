"""Blackout conflict checks for park locations."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import date, datetime, timedelta, tzinfo

from .const import PARK_BLACKOUT_REASON
from .exceptions import ValidationError
from .models import (
    AvailabilityWindow,
    BlackoutRule,
    Conflict,
    ConflictResult,
    Location,
    Park,
    PermitTemplate,
)
from .util import to_local_date

def rule_covers(rule: BlackoutRule, day: date) -> bool:
    return rule.start_date <= day <= rule.effective_end


def find_conflicts(
    candidate: date | datetime | str,
    locations: Iterable[Location],
    *,
    park_name: str = "",
    tz: tzinfo | None = None,
) -> ConflictResult:
    """Return every blackout rule covering ``candidate`` across ``locations``.

    Overlapping rules are all reported. Raises ``ValidationError`` when the
    candidate cannot be read as a date.
    """
    day = to_local_date(candidate, tz)
    conflicts: list[Conflict] = []
    for location in locations:
        for rule in location.blackout_rules:
            if rule_covers(rule, day):
                conflicts.append(
                    Conflict(
                        park_name=park_name,
                        location_name=location.name,
                        reason=rule.reason,
                        rule=rule,
                    )
                )
    return ConflictResult(day=day, conflicts=tuple(conflicts))


def find_conflicts_for_range(
    start: date | datetime | str,
    end: date | datetime | str,
    locations: Iterable[Location],
    *,
    park_name: str = "",
    tz: tzinfo | None = None,
) -> list[ConflictResult]:
    """Check each day from ``start`` to ``end`` inclusive, one result per day."""
    first = to_local_date(start, tz)
    last = to_local_date(end, tz)
    if last < first:
        raise ValidationError("Range end must not be before its start.")
    location_list = list(locations)
    results: list[ConflictResult] = []
    day = first
    while day <= last:
        results.append(find_conflicts(day, location_list, park_name=park_name))
        day += timedelta(days=1)
    return results


def park_locations(park: Park, templates: Iterable[PermitTemplate]) -> list[Location]:
    """Collect the locations a park's templates define, plus its park-wide blackout days."""
    locations: list[Location] = []
    for template in templates:
        if template.park_id == park.id:
            locations.extend(template.locations)
    if park.blackout_days:
        rules = tuple(
            BlackoutRule(start_date=day, reason=PARK_BLACKOUT_REASON) for day in park.blackout_days
        )
        locations.append(Location(name=park.name, blackout_rules=rules))
    return locations


def find_conflicts_for_park(
    candidate: date | datetime | str,
    park: Park,
    templates: Iterable[PermitTemplate],
    *,
    tz: tzinfo | None = None,
) -> ConflictResult:
    return find_conflicts(candidate, park_locations(park, templates), park_name=park.name, tz=tz)


def window_covers(window: AvailabilityWindow, day: date) -> bool:
    if day < window.start_date:
        return False
    if window.end_date is None:
        if window.repeat_weekly:
            return day.weekday() == window.start_date.weekday()
        return True
    return day <= window.end_date


def is_date_available(
    candidate: date | datetime | str,
    location: Location,
    *,
    tz: tzinfo | None = None,
) -> bool:
    """Whether a location can be booked on ``candidate``.

    Blackout rules always win. A location without availability windows is open
    on every other day.
    """
    day = to_local_date(candidate, tz)
    if any(rule_covers(rule, day) for rule in location.blackout_rules):
        return False
    windows: Sequence[AvailabilityWindow] = location.available_dates
    if not windows:
        return True
    return any(window_covers(window, day) for window in windows)
