from __future__ import annotations

from dataclasses import replace
from datetime import date

from finboard.models.domain import InstallmentStatus
from finboard.services.errors import InvalidTransitionError
from finboard.services.records import InstallmentRecord

PAYABLE_FROM = (InstallmentStatus.open, InstallmentStatus.overdue)


def mark_installment_paid(installment: InstallmentRecord, *, paid_date: date) -> InstallmentRecord:
    if installment.status not in PAYABLE_FROM:
        raise InvalidTransitionError(
            "installment",
            installment.status.value,
            InstallmentStatus.paid.value,
            [s.value for s in PAYABLE_FROM],
        )
    return replace(installment, status=InstallmentStatus.paid, paid_date=paid_date)


def mark_installment_unpaid(installment: InstallmentRecord, *, today: date) -> InstallmentRecord:
    """Undo a payment; the status falls back to overdue when the due date has passed."""

    if installment.status != InstallmentStatus.paid:
        raise InvalidTransitionError(
            "installment",
            installment.status.value,
            InstallmentStatus.open.value,
            [InstallmentStatus.paid.value],
        )
    status = InstallmentStatus.overdue if installment.due_date < today else InstallmentStatus.open
    return replace(installment, status=status, paid_date=None)


def stale_status(installment: InstallmentRecord, *, today: date) -> bool:
    """True when an open installment is past due but not yet stored as overdue."""

    return installment.status == InstallmentStatus.open and installment.due_date < today
