from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import List

from finboard.core.money import ZERO, sum_money
from finboard.models.domain import InstallmentStatus
from finboard.services.records import PortfolioSnapshot, TenantScope


@dataclass(frozen=True)
class RevenueSlice:
    label: str
    value: Decimal


@dataclass(frozen=True)
class RevenueBreakdown:
    received: Decimal = ZERO
    received_count: int = 0
    open: Decimal = ZERO
    open_count: int = 0
    overdue: Decimal = ZERO
    overdue_count: int = 0
    slices: List[RevenueSlice] = field(default_factory=list)

    @property
    def receivable(self) -> Decimal:
        return self.open + self.overdue

    @property
    def receivable_count(self) -> int:
        return self.open_count + self.overdue_count

    @property
    def grand_total(self) -> Decimal:
        return self.received + self.receivable

    @property
    def total_count(self) -> int:
        return self.received_count + self.receivable_count


def build_revenue_breakdown(snapshot: PortfolioSnapshot, scope: TenantScope) -> RevenueBreakdown:
    if not snapshot.is_ready:
        return RevenueBreakdown()

    by_status = {s: [] for s in InstallmentStatus}
    for installment in snapshot.scoped(scope).installments:
        by_status[installment.status].append(installment.value)

    received = sum_money(by_status[InstallmentStatus.paid])
    open_ = sum_money(by_status[InstallmentStatus.open])
    overdue = sum_money(by_status[InstallmentStatus.overdue])

    slices = [
        RevenueSlice(label, value)
        for label, value in (("received", received), ("open", open_), ("overdue", overdue))
        if value > 0
    ]

    return RevenueBreakdown(
        received=received,
        received_count=len(by_status[InstallmentStatus.paid]),
        open=open_,
        open_count=len(by_status[InstallmentStatus.open]),
        overdue=overdue,
        overdue_count=len(by_status[InstallmentStatus.overdue]),
        slices=slices,
    )
