from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from finboard.core.money import ZERO, sum_money
from finboard.models.domain import InstallmentStatus
from finboard.services.collections import overdue_installments
from finboard.services.records import PortfolioSnapshot, TenantScope


@dataclass(frozen=True)
class DashboardKpis:
    total_clients: int = 0
    total_open_value: Decimal = ZERO
    total_overdue_value: Decimal = ZERO
    clients_with_overdue: int = 0


def build_dashboard_kpis(snapshot: PortfolioSnapshot, scope: TenantScope) -> DashboardKpis:
    """Headline tiles. All zeros until clients, contracts and installments are loaded."""

    if not snapshot.is_ready:
        return DashboardKpis()

    scoped = snapshot.scoped(scope)
    client_ids = {c.id for c in scoped.clients}
    contract_ids = {k.id for k in scoped.contracts if k.client_id in client_ids}
    # Value tiles only cover installments owned by a loaded client.
    installments = [i for i in scoped.installments if i.contract_id in contract_ids]

    open_value = sum_money(i.value for i in installments if i.status != InstallmentStatus.paid)
    overdue_value = sum_money(i.value for i in installments if i.status == InstallmentStatus.overdue)

    # Client ids come from the owning contract; rows without a contract carry none.
    overdue_clients = {
        row.client_id for row in overdue_installments(scoped, scope) if row.client_id is not None
    }

    return DashboardKpis(
        total_clients=len(scoped.clients),
        total_open_value=open_value,
        total_overdue_value=overdue_value,
        clients_with_overdue=len(overdue_clients),
    )
