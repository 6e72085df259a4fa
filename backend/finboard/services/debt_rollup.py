from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Iterable, List, Optional, Tuple

from finboard.core.money import ZERO, sum_money
from finboard.models.domain import InstallmentStatus
from finboard.services.records import (
    ClientRecord,
    ContractRecord,
    InstallmentRecord,
    PortfolioSnapshot,
    TenantScope,
)

logger = logging.getLogger("finboard.debt_rollup")


@dataclass(frozen=True)
class ClientDebtRollup:
    client: ClientRecord
    contract: ContractRecord
    installments: Tuple[InstallmentRecord, ...]
    total_debt: Decimal
    overdue_count: int
    oldest_overdue: Optional[date]


def _rollup_for(
    client: ClientRecord,
    contract: ContractRecord,
    installments: List[InstallmentRecord],
) -> ClientDebtRollup:
    unpaid = [i for i in installments if i.status != InstallmentStatus.paid]
    overdue = [i for i in installments if i.status == InstallmentStatus.overdue]
    return ClientDebtRollup(
        client=client,
        contract=contract,
        installments=tuple(installments),
        total_debt=sum_money(i.value for i in unpaid) if unpaid else ZERO,
        overdue_count=len(overdue),
        oldest_overdue=min((i.due_date for i in overdue), default=None),
    )


def build_client_debt_rollups(
    snapshot: PortfolioSnapshot, scope: TenantScope
) -> List[ClientDebtRollup]:
    """One debt summary per (client, contract) pair, largest debt first.

    Clients without contracts yield nothing. Installments pointing at a
    contract outside the snapshot cannot be attributed and are skipped.
    The sort is stable: equal debts keep client order, then contract order.
    """

    if not snapshot.is_ready:
        return []
    snapshot = snapshot.scoped(scope)

    contracts_by_client: dict[str, List[ContractRecord]] = defaultdict(list)
    for contract in snapshot.contracts:
        contracts_by_client[contract.client_id].append(contract)

    installments_by_contract: dict[str, List[InstallmentRecord]] = defaultdict(list)
    for installment in snapshot.installments:
        installments_by_contract[installment.contract_id].append(installment)

    rows: List[ClientDebtRollup] = []
    for client in snapshot.clients:
        for contract in contracts_by_client.get(client.id, []):
            rows.append(_rollup_for(client, contract, installments_by_contract.get(contract.id, [])))

    rows.sort(key=lambda r: r.total_debt, reverse=True)
    return rows


def filter_rollups(rollups: Iterable[ClientDebtRollup], term: Optional[str]) -> List[ClientDebtRollup]:
    """Case-insensitive search over client name, document, email and phone."""

    items = list(rollups)
    needle = (term or "").strip().lower()
    if not needle:
        return items

    def _hit(r: ClientDebtRollup) -> bool:
        fields = (r.client.name, r.client.document, r.client.email, r.client.phone)
        return any(needle in f.lower() for f in fields if f)

    return [r for r in items if _hit(r)]


def count_orphan_installments(snapshot: PortfolioSnapshot) -> int:
    """Installments whose contract, or whose contract's client, is missing."""

    if not snapshot.is_ready:
        return 0
    client_ids = {c.id for c in snapshot.clients}
    contract_client = {c.id: c.client_id for c in snapshot.contracts}
    orphans = 0
    for installment in snapshot.installments:
        client_id = contract_client.get(installment.contract_id)
        if client_id is None or client_id not in client_ids:
            orphans += 1
    if orphans:
        logger.warning(
            "orphan_installments",
            extra={"orphans": orphans, "installments": len(snapshot.installments)},
        )
    return orphans
