from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import List, Optional

from finboard.core.money import split_evenly, to_money
from finboard.services.dates import add_months


@dataclass(frozen=True)
class ScheduledInstallment:
    installment_number: int
    total_installments: int
    value: Decimal
    due_date: date


@dataclass(frozen=True)
class ScheduledPayment:
    amount: Decimal
    payment_date: date
    description: Optional[str]
    first: bool


def contract_installment_schedule(
    total_value: Decimal,
    total_installments: int,
    payment_day: int,
    start: date,
) -> List[ScheduledInstallment]:
    """Monthly installments on ``payment_day``, the first one in the month after ``start``."""

    if total_installments < 1:
        raise ValueError("total_installments must be >= 1")
    if not 1 <= payment_day <= 31:
        raise ValueError("payment_day must be between 1 and 31")

    values = split_evenly(to_money(total_value), total_installments)
    return [
        ScheduledInstallment(
            installment_number=n,
            total_installments=total_installments,
            value=values[n - 1],
            due_date=add_months(start, n, day=payment_day),
        )
        for n in range(1, total_installments + 1)
    ]


def fixed_bill_installment_schedule(
    total_value: Decimal,
    total_installments: int,
    start_date: date,
) -> List[ScheduledInstallment]:
    """Monthly installments starting on ``start_date`` itself."""

    if total_installments < 1:
        raise ValueError("total_installments must be >= 1")

    values = split_evenly(to_money(total_value), total_installments)
    return [
        ScheduledInstallment(
            installment_number=i + 1,
            total_installments=total_installments,
            value=values[i],
            due_date=add_months(start_date, i),
        )
        for i in range(total_installments)
    ]


def employee_payment_schedule(
    amount: Decimal,
    payment_date: date,
    installments: int = 1,
    description: Optional[str] = None,
) -> List[ScheduledPayment]:
    """Repeat a payment monthly; each one carries the full amount.

    Multi-month runs get a ``(i/n)`` suffix on the description.
    """

    if installments < 1:
        raise ValueError("installments must be >= 1")

    out: List[ScheduledPayment] = []
    for i in range(installments):
        text = description
        if installments > 1:
            text = f"{description or ''} ({i + 1}/{installments})".strip()
        out.append(
            ScheduledPayment(
                amount=to_money(amount),
                payment_date=add_months(payment_date, i),
                description=text,
                first=i == 0,
            )
        )
    return out
