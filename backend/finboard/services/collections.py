from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from finboard.config import settings
from finboard.models.domain import InstallmentStatus
from finboard.services.dates import days_overdue
from finboard.services.records import InstallmentRecord, PortfolioSnapshot, TenantScope


@dataclass(frozen=True)
class OverdueInstallment:
    installment: InstallmentRecord
    client_id: Optional[str]
    client_name: str
    days_overdue: int


@dataclass(frozen=True)
class UpcomingInstallment:
    installment: InstallmentRecord
    client_id: Optional[str]
    client_name: str


class _ClientResolver:
    def __init__(self, snapshot: PortfolioSnapshot, placeholder: str):
        self._contract_client = {c.id: c.client_id for c in snapshot.contracts}
        self._client_names = {c.id: c.name for c in snapshot.clients}
        self._placeholder = placeholder

    def resolve(self, installment: InstallmentRecord) -> tuple[Optional[str], str]:
        client_id = self._contract_client.get(installment.contract_id)
        if client_id is None:
            return None, self._placeholder
        return client_id, self._client_names.get(client_id, self._placeholder)


def overdue_installments(
    snapshot: PortfolioSnapshot,
    scope: TenantScope,
    *,
    placeholder: Optional[str] = None,
) -> List[OverdueInstallment]:
    """Installments stored as overdue, oldest due date first.

    ``days_overdue`` is recomputed from the due date against ``scope.today``;
    the stored status only says *that* it is late, not by how much.
    """

    if not snapshot.is_ready:
        return []
    snapshot = snapshot.scoped(scope)
    resolver = _ClientResolver(snapshot, placeholder or settings.unknown_client_name)

    rows = [i for i in snapshot.installments if i.status == InstallmentStatus.overdue]
    rows.sort(key=lambda i: i.due_date)

    out: List[OverdueInstallment] = []
    for installment in rows:
        client_id, client_name = resolver.resolve(installment)
        out.append(
            OverdueInstallment(
                installment=installment,
                client_id=client_id,
                client_name=client_name,
                days_overdue=days_overdue(installment.due_date, scope.today),
            )
        )
    return out


def upcoming_installments(
    snapshot: PortfolioSnapshot,
    scope: TenantScope,
    *,
    placeholder: Optional[str] = None,
) -> List[UpcomingInstallment]:
    """Unpaid installments due today or later, soonest first."""

    if not snapshot.is_ready:
        return []
    snapshot = snapshot.scoped(scope)
    resolver = _ClientResolver(snapshot, placeholder or settings.unknown_client_name)

    rows = [
        i
        for i in snapshot.installments
        if i.status != InstallmentStatus.paid and i.due_date >= scope.today
    ]
    rows.sort(key=lambda i: i.due_date)

    out: List[UpcomingInstallment] = []
    for installment in rows:
        client_id, client_name = resolver.resolve(installment)
        out.append(
            UpcomingInstallment(installment=installment, client_id=client_id, client_name=client_name)
        )
    return out
