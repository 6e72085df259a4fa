from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import List

from finboard.core.money import ZERO, round_half_up, to_money
from finboard.models.domain import InstallmentStatus
from finboard.services.dates import days_overdue
from finboard.services.records import PortfolioSnapshot, TenantScope

# Row order is part of the contract: consumers render a fixed 3-row table.
BUCKET_ORDER = (InstallmentStatus.overdue, InstallmentStatus.open, InstallmentStatus.paid)


@dataclass(frozen=True)
class StatusSummary:
    status: InstallmentStatus
    count: int
    total_value: Decimal
    avg_days_overdue: int


def build_status_crosstab(snapshot: PortfolioSnapshot, scope: TenantScope) -> List[StatusSummary]:
    counts = {s: 0 for s in BUCKET_ORDER}
    totals = {s: ZERO for s in BUCKET_ORDER}
    overdue_days_total = 0

    if snapshot.is_ready:
        snapshot = snapshot.scoped(scope)
        for installment in snapshot.installments:
            counts[installment.status] += 1
            totals[installment.status] += to_money(installment.value)
            if installment.status == InstallmentStatus.overdue:
                overdue_days_total += days_overdue(installment.due_date, scope.today)

    overdue_count = counts[InstallmentStatus.overdue]
    avg_overdue = 0
    if overdue_count:
        avg_overdue = round_half_up(Decimal(overdue_days_total) / Decimal(overdue_count))

    return [
        StatusSummary(
            status=status,
            count=counts[status],
            total_value=totals[status],
            avg_days_overdue=avg_overdue if status == InstallmentStatus.overdue else 0,
        )
        for status in BUCKET_ORDER
    ]
