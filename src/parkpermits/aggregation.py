"""Grouping and summing helpers for reports and dashboard cards."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from datetime import date
from decimal import Decimal
from typing import Any, TypeVar

from .const import INVOICE_STATUS_PENDING, STATUS_APPROVED, STATUS_PENDING
from .models import Application, Bucket, DashboardStats, Invoice, Permit
from .status import resolve_all
from .util import month_key, normalize_status, parse_amount, parse_month_key

T = TypeVar("T")


def group_by(items: Iterable[T], key_fn: Callable[[T], Any]) -> list[Bucket]:
    """Count items per key, in order of each key's first occurrence."""
    counts: dict[Any, int] = {}
    for item in items:
        key = key_fn(item)
        counts[key] = counts.get(key, 0) + 1
    return [Bucket(name=str(key), value=value) for key, value in counts.items()]


def sum_by(
    items: Iterable[T],
    key_fn: Callable[[T], Any],
    amount_fn: Callable[[T], Any],
) -> list[Bucket]:
    """Sum amounts per key, in order of each key's first occurrence."""
    totals: dict[Any, Decimal] = {}
    for item in items:
        key = key_fn(item)
        totals[key] = totals.get(key, Decimal("0")) + parse_amount(amount_fn(item))
    return [Bucket(name=str(key), value=value) for key, value in totals.items()]


def _issue_date(invoice: Invoice) -> date | None:
    return invoice.issue_date


def revenue_by_month(
    invoices: Iterable[Invoice],
    date_fn: Callable[[Invoice], date | None] = _issue_date,
) -> list[Bucket]:
    """Sum invoice amounts into ``M/YYYY`` buckets, sorted chronologically."""
    dated = [(invoice, date_fn(invoice)) for invoice in invoices]
    buckets = sum_by(
        [(invoice, day) for invoice, day in dated if day is not None],
        lambda pair: month_key(pair[1]),
        lambda pair: pair[0].amount,
    )
    return sorted(buckets, key=lambda bucket: parse_month_key(bucket.name))


def revenue_by_park(
    invoices: Iterable[Invoice],
    permits: Iterable[Permit],
    park_names: Mapping[int, str],
) -> list[Bucket]:
    """Sum invoice amounts per park name; invoices without a known park are skipped."""
    permit_parks = {permit.id: permit.park_id for permit in permits}
    named: list[tuple[str, Invoice]] = []
    for invoice in invoices:
        park_id = permit_parks.get(invoice.permit_id) if invoice.permit_id is not None else None
        if park_id is None or park_id not in park_names:
            continue
        named.append((park_names[park_id], invoice))
    return sum_by(named, lambda pair: pair[0], lambda pair: pair[1].amount)


def count_by_status(
    applications: Iterable[Application],
    invoices: Iterable[Invoice] = (),
) -> list[Bucket]:
    return group_by(resolve_all(applications, invoices), lambda pair: pair[1].value)


def invoice_for(application: Application, invoices: Iterable[Invoice]) -> Invoice | None:
    for invoice in invoices:
        if invoice.application_id == application.id:
            return invoice
    return None


def dashboard_stats(permits: Iterable[Permit], invoices: Iterable[Invoice]) -> DashboardStats:
    permit_list = list(permits)
    invoice_list = list(invoices)
    permit_statuses = [normalize_status(permit.status) for permit in permit_list]
    return DashboardStats(
        active_permits=permit_statuses.count(STATUS_APPROVED),
        pending_permits=permit_statuses.count(STATUS_PENDING),
        total_invoices=len(invoice_list),
        pending_invoices=sum(
            1 for invoice in invoice_list if normalize_status(invoice.status) == INVOICE_STATUS_PENDING
        ),
        revenue=sum(
            (parse_amount(invoice.amount) for invoice in invoice_list if invoice.is_paid),
            Decimal("0"),
        ),
    )
