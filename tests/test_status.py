from decimal import Decimal

import pytest

from parkpermits.models import Application, Invoice
from parkpermits.status import (
    DerivedStatus,
    is_fully_paid,
    paid_amount,
    payment_lines,
    resolve_all,
    resolve_status,
    status_aliases,
    status_from_label,
    status_label,
)


def _application(status: str = "pending", id: int = 1, **kwargs) -> Application:
    return Application(id=id, status=status, **kwargs)


def _invoice(*, paid: bool, application_id: int = 1) -> Invoice:
    return Invoice(
        id=10,
        amount=Decimal("25"),
        status="paid" if paid else "pending",
        application_id=application_id,
    )


@pytest.mark.parametrize("is_paid", [True, False])
@pytest.mark.parametrize("invoice_paid", [None, True, False])
def test_disapproved_ignores_payment_state(is_paid: bool, invoice_paid: bool | None) -> None:
    invoice = None if invoice_paid is None else _invoice(paid=invoice_paid)
    application = _application("disapproved", is_paid=is_paid, permit_fee_payment_status="paid")
    assert resolve_status(application, invoice) is DerivedStatus.DISAPPROVED


def test_pending_depends_only_on_application_fee() -> None:
    assert resolve_status(_application(is_paid=True)) is DerivedStatus.AWAITING_REVIEW
    assert resolve_status(_application(is_paid=False)) is DerivedStatus.UNPAID_PENDING
    assert (
        resolve_status(_application(is_paid=False), _invoice(paid=True))
        is DerivedStatus.UNPAID_PENDING
    )


def test_approved_follows_invoice_state() -> None:
    application = _application("approved", is_paid=True)
    assert resolve_status(application) is DerivedStatus.APPROVED
    assert resolve_status(application, _invoice(paid=False)) is DerivedStatus.INVOICE_PENDING
    assert resolve_status(application, _invoice(paid=True)) is DerivedStatus.PAID_APPROVED


def test_explicit_invoice_flag_wins_over_status() -> None:
    invoice = Invoice(id=1, amount=Decimal("5"), status="pending", application_id=1, paid=True)
    assert resolve_status(_application("approved"), invoice) is DerivedStatus.PAID_APPROVED


def test_status_is_case_insensitive() -> None:
    assert resolve_status(_application(" APPROVED ")) is DerivedStatus.APPROVED
    assert resolve_status(_application("Pending", is_paid=True)) is DerivedStatus.AWAITING_REVIEW


@pytest.mark.parametrize("status", ["", "cancelled", "completed", "rejected"])
def test_unrecognized_status_is_unknown(status: str) -> None:
    assert resolve_status(_application(status, is_paid=True)) is DerivedStatus.UNKNOWN


def test_status_walk_through_lifecycle() -> None:
    steps = [
        (_application(is_paid=False), None, DerivedStatus.UNPAID_PENDING),
        (_application(is_paid=True), None, DerivedStatus.AWAITING_REVIEW),
        (_application("approved", is_paid=True), None, DerivedStatus.APPROVED),
        (_application("approved", is_paid=True), _invoice(paid=False), DerivedStatus.INVOICE_PENDING),
        (_application("approved", is_paid=True), _invoice(paid=True), DerivedStatus.PAID_APPROVED),
    ]
    for application, invoice, expected in steps:
        assert resolve_status(application, invoice) is expected


def test_resolve_all_matches_invoices_by_application_id() -> None:
    applications = [
        _application("approved", id=1),
        _application("approved", id=2),
        _application("pending", id=3, is_paid=True),
    ]
    invoices = [_invoice(paid=True, application_id=2)]
    resolved = resolve_all(applications, invoices)
    assert [status for _, status in resolved] == [
        DerivedStatus.APPROVED,
        DerivedStatus.PAID_APPROVED,
        DerivedStatus.AWAITING_REVIEW,
    ]
    assert [application.id for application, _ in resolved] == [1, 2, 3]


def test_paid_amount_zero_when_nothing_paid() -> None:
    application = _application(
        is_paid=False,
        application_fee=Decimal("10"),
        permit_fee=Decimal("25"),
        permit_fee_payment_status=None,
    )
    assert paid_amount(application) == Decimal("0")


def test_paid_amount_parses_string_fees() -> None:
    application = _application(
        is_paid=True,
        application_fee="10.00",  # type: ignore[arg-type]
        permit_fee=25,  # type: ignore[arg-type]
        permit_fee_payment_status="paid",
    )
    assert paid_amount(application) == Decimal("35")


def test_paid_amount_tolerates_malformed_fees() -> None:
    application = _application(
        is_paid=True,
        application_fee="ten dollars",  # type: ignore[arg-type]
        permit_fee="12.5",  # type: ignore[arg-type]
        permit_fee_payment_status="PAID",
    )
    assert paid_amount(application) == Decimal("12.5")


def test_payment_lines_cover_positive_fees_only() -> None:
    application = _application(
        is_paid=True,
        application_fee=Decimal("10"),
        permit_fee=Decimal("0"),
        location_fee=Decimal("5"),
    )
    lines = payment_lines(application)
    assert [(line.fee_type, line.paid) for line in lines] == [
        ("Application Fee", True),
        ("Location Fee", False),
    ]


def test_is_fully_paid_uses_invoice_for_permit_fee() -> None:
    application = _application(
        "approved",
        is_paid=True,
        application_fee=Decimal("10"),
        permit_fee=Decimal("25"),
    )
    assert is_fully_paid(application) is False
    assert is_fully_paid(application, _invoice(paid=True)) is True


def test_is_fully_paid_requires_some_fee() -> None:
    assert is_fully_paid(_application("approved", is_paid=True)) is False


def test_awaiting_review_labels_are_aliases() -> None:
    assert status_label(DerivedStatus.AWAITING_REVIEW) == "Awaiting Review"
    assert "Waiting on Approval" in status_aliases(DerivedStatus.AWAITING_REVIEW)
    assert status_from_label("waiting on approval") is DerivedStatus.AWAITING_REVIEW
    assert status_from_label("Awaiting Review") is DerivedStatus.AWAITING_REVIEW
    assert status_from_label("nonsense") is None


def test_every_status_has_a_label() -> None:
    for status in DerivedStatus:
        assert status_label(status)
