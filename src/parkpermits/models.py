"""Public data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal

from .const import PAYMENT_STATUS_PAID


@dataclass(frozen=True, slots=True)
class Application:
    id: int
    status: str
    is_paid: bool = False
    application_fee: Decimal | None = None
    permit_fee: Decimal | None = None
    permit_fee_payment_status: str | None = None
    event_date: date | None = None
    event_title: str | None = None
    event_description: str | None = None
    park_id: int | None = None
    location_id: int | None = None
    event_dates: tuple[date, ...] = ()
    location_fee: Decimal | None = None
    created_at: datetime | None = None


@dataclass(frozen=True, slots=True)
class Invoice:
    id: int
    amount: Decimal
    status: str
    application_id: int | None = None
    permit_id: int | None = None
    issue_date: date | None = None
    due_date: date | None = None
    invoice_number: str | None = None
    paid: bool | None = None

    @property
    def is_paid(self) -> bool:
        if self.paid is not None:
            return self.paid
        return self.status.strip().lower() == PAYMENT_STATUS_PAID


@dataclass(frozen=True, slots=True)
class Permit:
    id: int
    status: str
    park_id: int | None = None
    permit_number: str | None = None
    location: str | None = None


@dataclass(frozen=True, slots=True)
class BlackoutRule:
    start_date: date
    end_date: date | None = None
    reason: str = ""

    @property
    def is_inverted(self) -> bool:
        return self.end_date is not None and self.end_date < self.start_date

    @property
    def effective_end(self) -> date:
        """Last blacked-out day; single-day when the end is absent or before the start."""
        if self.end_date is None or self.is_inverted:
            return self.start_date
        return self.end_date


@dataclass(frozen=True, slots=True)
class AvailabilityWindow:
    start_date: date
    end_date: date | None = None
    repeat_weekly: bool = False


@dataclass(frozen=True, slots=True)
class Location:
    name: str
    id: int | None = None
    description: str | None = None
    blackout_rules: tuple[BlackoutRule, ...] = ()
    available_dates: tuple[AvailabilityWindow, ...] = ()


@dataclass(frozen=True, slots=True)
class PermitTemplate:
    id: int
    name: str
    park_id: int | None = None
    locations: tuple[Location, ...] = ()
    application_fee: Decimal | None = None
    permit_fee: Decimal | None = None


@dataclass(frozen=True, slots=True)
class Park:
    id: int
    name: str
    location: str = ""
    status: str = "active"
    blackout_days: tuple[date, ...] = ()


@dataclass(frozen=True, slots=True)
class Conflict:
    park_name: str
    location_name: str
    reason: str
    rule: BlackoutRule


@dataclass(frozen=True, slots=True)
class ConflictResult:
    day: date
    conflicts: tuple[Conflict, ...] = ()

    @property
    def is_clear(self) -> bool:
        return not self.conflicts

    @property
    def reasons(self) -> list[str]:
        return [conflict.reason for conflict in self.conflicts]


@dataclass(frozen=True, slots=True)
class PaymentLine:
    fee_type: str
    amount: Decimal
    paid: bool


@dataclass(frozen=True, slots=True)
class Bucket:
    name: str
    value: int | Decimal


@dataclass(frozen=True, slots=True)
class DashboardStats:
    active_permits: int
    pending_permits: int
    total_invoices: int
    pending_invoices: int
    revenue: Decimal


@dataclass(frozen=True, slots=True)
class Snapshot:
    applications: list[Application] = field(default_factory=list)
    invoices: list[Invoice] = field(default_factory=list)
    parks: list[Park] = field(default_factory=list)
    templates: list[PermitTemplate] = field(default_factory=list)
    permits: list[Permit] = field(default_factory=list)
