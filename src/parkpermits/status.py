"""Derive a single display status and payment totals for applications.

Review state and payment state are independent in the stored records: an
application carries a review ``status``, an ``is_paid`` flag for the
application fee, and a permit-fee payment status set by invoicing. Every view
(dashboard cards, calendar, tables, reports) resolves them through this module
instead of combining the raw fields itself.

Statuses are recomputed on every call; nothing here caches or writes back.
"""

from __future__ import annotations

from collections.abc import Iterable
from decimal import Decimal
from enum import StrEnum

from .const import (
    FEE_TYPE_APPLICATION,
    FEE_TYPE_LOCATION,
    FEE_TYPE_PERMIT,
    PAYMENT_STATUS_PAID,
    STATUS_APPROVED,
    STATUS_DISAPPROVED,
    STATUS_PENDING,
)
from .models import Application, Invoice, PaymentLine
from .util import normalize_status, parse_amount


class DerivedStatus(StrEnum):
    UNPAID_PENDING = "unpaid-pending"
    AWAITING_REVIEW = "awaiting-review"
    APPROVED = "approved"
    DISAPPROVED = "disapproved"
    PAID_APPROVED = "paid-approved"
    INVOICE_PENDING = "invoice-pending"
    UNKNOWN = "unknown"


# First label is the primary one. "Waiting on Approval" is the calendar
# filter's name for the same state the dashboard calls "Awaiting Review".
STATUS_LABELS: dict[DerivedStatus, tuple[str, ...]] = {
    DerivedStatus.UNPAID_PENDING: ("Unpaid Application",),
    DerivedStatus.AWAITING_REVIEW: ("Awaiting Review", "Waiting on Approval"),
    DerivedStatus.APPROVED: ("Awaiting Invoice",),
    DerivedStatus.DISAPPROVED: ("Disapproved",),
    DerivedStatus.PAID_APPROVED: ("Invoice Paid",),
    DerivedStatus.INVOICE_PENDING: ("Invoice Pending",),
    DerivedStatus.UNKNOWN: ("Unknown",),
}


def resolve_status(application: Application, invoice: Invoice | None = None) -> DerivedStatus:
    """Return the display status for ``application``.

    ``invoice`` must be the invoice whose ``application_id`` matches the
    application, or ``None`` when no invoice has been generated yet.
    """
    status = normalize_status(application.status)
    if status == STATUS_APPROVED:
        if invoice is None:
            return DerivedStatus.APPROVED
        if invoice.is_paid:
            return DerivedStatus.PAID_APPROVED
        return DerivedStatus.INVOICE_PENDING
    if status == STATUS_DISAPPROVED:
        return DerivedStatus.DISAPPROVED
    if status == STATUS_PENDING:
        if application.is_paid:
            return DerivedStatus.AWAITING_REVIEW
        return DerivedStatus.UNPAID_PENDING
    return DerivedStatus.UNKNOWN


def resolve_all(
    applications: Iterable[Application],
    invoices: Iterable[Invoice] = (),
) -> list[tuple[Application, DerivedStatus]]:
    """Resolve a batch, matching each application to its invoice by id."""
    by_application: dict[int, Invoice] = {}
    for invoice in invoices:
        if invoice.application_id is not None:
            by_application.setdefault(invoice.application_id, invoice)
    return [
        (application, resolve_status(application, by_application.get(application.id)))
        for application in applications
    ]


def permit_fee_paid(application: Application) -> bool:
    return normalize_status(application.permit_fee_payment_status) == PAYMENT_STATUS_PAID


def paid_amount(application: Application) -> Decimal:
    total = Decimal("0")
    if application.is_paid:
        total += parse_amount(application.application_fee)
    if permit_fee_paid(application):
        total += parse_amount(application.permit_fee)
    return total


def payment_lines(application: Application, invoice: Invoice | None = None) -> list[PaymentLine]:
    lines: list[PaymentLine] = []
    application_fee = parse_amount(application.application_fee)
    if application_fee > 0:
        lines.append(PaymentLine(FEE_TYPE_APPLICATION, application_fee, application.is_paid))
    permit_fee = parse_amount(application.permit_fee)
    if permit_fee > 0:
        paid = permit_fee_paid(application) or (invoice is not None and invoice.is_paid)
        lines.append(PaymentLine(FEE_TYPE_PERMIT, permit_fee, paid))
    location_fee = parse_amount(application.location_fee)
    if location_fee > 0:
        # Location fees cannot be collected yet.
        lines.append(PaymentLine(FEE_TYPE_LOCATION, location_fee, False))
    return lines


def is_fully_paid(application: Application, invoice: Invoice | None = None) -> bool:
    lines = payment_lines(application, invoice)
    return bool(lines) and all(line.paid for line in lines)


def status_label(status: DerivedStatus) -> str:
    return STATUS_LABELS[status][0]


def status_aliases(status: DerivedStatus) -> tuple[str, ...]:
    return STATUS_LABELS[status]


def status_from_label(label: str) -> DerivedStatus | None:
    """Map any display label (including aliases) back to its status."""
    wanted = label.strip().lower()
    for status, labels in STATUS_LABELS.items():
        if any(candidate.lower() == wanted for candidate in labels):
            return status
    return None
