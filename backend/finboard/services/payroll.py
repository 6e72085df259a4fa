from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date
from decimal import Decimal
from typing import Iterable, List, Optional

from finboard.core.money import ZERO, sum_money
from finboard.models.domain import SettlementStatus
from finboard.services.dates import DateFilter
from finboard.services.records import CommissionRecord, EmployeePaymentRecord, EmployeeRecord


@dataclass(frozen=True)
class PayrollKpis:
    active_employees: int = 0
    total_salaries: Decimal = ZERO
    total_payments: Decimal = ZERO
    payments_this_month: Decimal = ZERO
    total_paid: Decimal = ZERO
    total_pending: Decimal = ZERO


@dataclass(frozen=True)
class CommissionKpis:
    total_commissions: int = 0
    pending_commissions: int = 0
    paid_commissions: int = 0
    total_value: Decimal = ZERO
    pending_value: Decimal = ZERO
    paid_value: Decimal = ZERO


def filter_payments(
    payments: Iterable[EmployeePaymentRecord], date_filter: Optional[DateFilter] = None
) -> List[EmployeePaymentRecord]:
    """Payments matching the filter, newest first."""

    date_filter = date_filter or DateFilter()
    rows = [p for p in payments if date_filter.matches(p.payment_date)]
    rows.sort(key=lambda p: p.payment_date, reverse=True)
    return rows


def filter_commissions(
    commissions: Iterable[CommissionRecord], date_filter: Optional[DateFilter] = None
) -> List[CommissionRecord]:
    date_filter = date_filter or DateFilter()
    rows = [c for c in commissions if date_filter.matches(c.commission_date)]
    rows.sort(key=lambda c: c.commission_date, reverse=True)
    return rows


def build_payroll_kpis(
    employees: Optional[Iterable[EmployeeRecord]],
    payments: Optional[Iterable[EmployeePaymentRecord]],
    *,
    today: date,
) -> PayrollKpis:
    if employees is None or payments is None:
        return PayrollKpis()

    employees = list(employees)
    payments = list(payments)
    this_month = [
        p for p in payments if p.payment_date.year == today.year and p.payment_date.month == today.month
    ]
    return PayrollKpis(
        active_employees=sum(1 for e in employees if e.active),
        total_salaries=sum_money(e.salary for e in employees),
        total_payments=sum_money(p.amount for p in payments),
        payments_this_month=sum_money(p.amount for p in this_month),
        total_paid=sum_money(p.amount for p in payments if p.status == SettlementStatus.paid),
        total_pending=sum_money(p.amount for p in payments if p.status != SettlementStatus.paid),
    )


def build_commission_kpis(commissions: Optional[Iterable[CommissionRecord]]) -> CommissionKpis:
    if commissions is None:
        return CommissionKpis()

    rows = list(commissions)
    pending = [c for c in rows if c.status == SettlementStatus.pending]
    paid = [c for c in rows if c.status == SettlementStatus.paid]
    return CommissionKpis(
        total_commissions=len(rows),
        pending_commissions=len(pending),
        paid_commissions=len(paid),
        total_value=sum_money(c.amount for c in rows),
        pending_value=sum_money(c.amount for c in pending),
        paid_value=sum_money(c.amount for c in paid),
    )


def toggle_commission_status(commission: CommissionRecord, *, today: date) -> CommissionRecord:
    """pending -> paid stamps today's date; paid -> pending clears it."""

    if commission.status == SettlementStatus.paid:
        return replace(commission, status=SettlementStatus.pending, paid_date=None)
    return replace(commission, status=SettlementStatus.paid, paid_date=today)
