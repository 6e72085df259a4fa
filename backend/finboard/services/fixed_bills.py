"""Recurring ("fixed") bill derivations and the installment payment state machine.

Stored states are ``open`` and ``paid``. ``overdue`` is never written; it is
projected on read from the due date, like contract installments.

    open/overdue --pay-->  paid    value = original_value - discount
    paid        --reopen-> open    value = original_value, discount cleared
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, replace
from datetime import date
from decimal import Decimal
from typing import Iterable, List, Optional, Sequence, Tuple

from finboard.core.money import ZERO, sum_money, to_money
from finboard.models.domain import InstallmentStatus
from finboard.services.dates import DateFilter
from finboard.services.errors import InvalidTransitionError
from finboard.services.records import FixedBillInstallmentRecord, FixedBillRecord

PAYABLE_FROM = (InstallmentStatus.open, InstallmentStatus.overdue)
REOPENABLE_FROM = (InstallmentStatus.paid,)


def is_fixed_bill_installment_overdue(installment: FixedBillInstallmentRecord, today: date) -> bool:
    return installment.status != InstallmentStatus.paid and installment.due_date < today


def projected_status(installment: FixedBillInstallmentRecord, today: date) -> InstallmentStatus:
    if is_fixed_bill_installment_overdue(installment, today):
        return InstallmentStatus.overdue
    return installment.status


def pay_fixed_bill_installment(
    installment: FixedBillInstallmentRecord,
    *,
    paid_date: date,
    payment_method: str,
    discount: Optional[Decimal] = None,
    notes: Optional[str] = None,
) -> FixedBillInstallmentRecord:
    if installment.status not in PAYABLE_FROM:
        raise InvalidTransitionError(
            "fixed_bill_installment",
            installment.status.value,
            InstallmentStatus.paid.value,
            [s.value for s in PAYABLE_FROM],
        )

    original = to_money(
        installment.original_value if installment.original_value is not None else installment.value
    )
    discount_value = to_money(discount)
    if discount_value < 0 or discount_value > original:
        raise ValueError("discount must be between 0 and the installment value")

    return replace(
        installment,
        status=InstallmentStatus.paid,
        paid_date=paid_date,
        payment_method=payment_method,
        discount=discount_value,
        original_value=original,
        value=original - discount_value,
        notes=notes,
    )


def reopen_fixed_bill_installment(
    installment: FixedBillInstallmentRecord,
) -> FixedBillInstallmentRecord:
    if installment.status not in REOPENABLE_FROM:
        raise InvalidTransitionError(
            "fixed_bill_installment",
            installment.status.value,
            InstallmentStatus.open.value,
            [s.value for s in REOPENABLE_FROM],
        )

    if installment.original_value is not None:
        restored = to_money(installment.original_value)
    else:
        restored = to_money(installment.value) + to_money(installment.discount)

    return replace(
        installment,
        status=InstallmentStatus.open,
        value=restored,
        discount=ZERO,
        paid_date=None,
        payment_method=None,
    )


@dataclass(frozen=True)
class FixedBillSummary:
    bill: FixedBillRecord
    installments: Tuple[FixedBillInstallmentRecord, ...]
    total_paid: Decimal
    total_pending: Decimal
    total_discount: Decimal
    next_due_date: Optional[date]
    overdue_count: int


@dataclass(frozen=True)
class FixedBillTotals:
    bills: int = 0
    total_paid: Decimal = ZERO
    total_pending: Decimal = ZERO
    total_discount: Decimal = ZERO
    overdue_count: int = 0


def summarize_fixed_bills(
    bills: Sequence[FixedBillRecord],
    installments: Iterable[FixedBillInstallmentRecord],
    *,
    today: date,
    date_filter: Optional[DateFilter] = None,
) -> List[FixedBillSummary]:
    """Per-bill totals, optionally restricted to installments due in a period.

    With an active filter, bills left with no installments are dropped; without
    one every bill is listed, including bills that have no installments yet.
    """

    date_filter = date_filter or DateFilter()
    by_bill: dict[str, List[FixedBillInstallmentRecord]] = defaultdict(list)
    for installment in installments:
        if date_filter.matches(installment.due_date):
            by_bill[installment.fixed_bill_id].append(installment)

    out: List[FixedBillSummary] = []
    for bill in bills:
        rows = sorted(by_bill.get(bill.id, []), key=lambda i: i.installment_number)
        if date_filter.is_active and not rows:
            continue
        paid = [i for i in rows if i.status == InstallmentStatus.paid]
        pending = [i for i in rows if i.status != InstallmentStatus.paid]
        out.append(
            FixedBillSummary(
                bill=bill,
                installments=tuple(rows),
                total_paid=sum_money(i.value for i in paid),
                total_pending=sum_money(i.value for i in pending),
                total_discount=sum_money(i.discount for i in rows),
                next_due_date=min((i.due_date for i in pending), default=None),
                overdue_count=sum(1 for i in pending if i.due_date < today),
            )
        )
    return out


def total_fixed_bills(summaries: Iterable[FixedBillSummary]) -> FixedBillTotals:
    items = list(summaries)
    return FixedBillTotals(
        bills=len(items),
        total_paid=sum_money(s.total_paid for s in items),
        total_pending=sum_money(s.total_pending for s in items),
        total_discount=sum_money(s.total_discount for s in items),
        overdue_count=sum(s.overdue_count for s in items),
    )
