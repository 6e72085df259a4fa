"""Immutable point-in-time records the derivation functions work on.

Rows are copied out of the ORM into frozen dataclasses before any derivation
runs, so derivations can neither mutate a session-bound object nor trigger a
lazy load. A collection set to ``None`` on a snapshot means "not loaded yet";
an empty tuple means "loaded, zero rows".
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Optional, Tuple

from finboard.models.domain import InstallmentStatus, PaymentType, SettlementStatus


@dataclass(frozen=True)
class TenantScope:
    """Explicit derivation context: which company, and which day is "today"."""

    company_id: Optional[str] = None
    today: date = field(default_factory=date.today)


@dataclass(frozen=True)
class ClientRecord:
    id: str
    name: str
    company_id: Optional[str] = None
    document: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    entry_date: Optional[date] = None
    exit_date: Optional[date] = None


@dataclass(frozen=True)
class ContractRecord:
    id: str
    client_id: str
    total_value: Decimal
    start_date: date
    description: Optional[str] = None


@dataclass(frozen=True)
class InstallmentRecord:
    id: str
    contract_id: str
    installment_number: int
    total_installments: int
    value: Decimal
    due_date: date
    status: InstallmentStatus
    paid_date: Optional[date] = None
    payment_method: Optional[str] = None


@dataclass(frozen=True)
class EmployeeRecord:
    id: str
    name: str
    salary: Decimal
    hire_date: date
    active: bool = True
    role: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None


@dataclass(frozen=True)
class EmployeePaymentRecord:
    id: str
    employee_id: str
    amount: Decimal
    payment_date: date
    payment_type: PaymentType = PaymentType.salary
    status: SettlementStatus = SettlementStatus.pending
    description: Optional[str] = None


@dataclass(frozen=True)
class CommissionRecord:
    id: str
    employee_id: str
    amount: Decimal
    commission_date: date
    status: SettlementStatus = SettlementStatus.pending
    installment_id: Optional[str] = None
    percentage: Optional[Decimal] = None
    paid_date: Optional[date] = None
    description: Optional[str] = None


@dataclass(frozen=True)
class FixedBillRecord:
    id: str
    name: str
    total_value: Decimal
    total_installments: int
    start_date: date
    description: Optional[str] = None
    company_id: Optional[str] = None


@dataclass(frozen=True)
class FixedBillInstallmentRecord:
    id: str
    fixed_bill_id: str
    installment_number: int
    value: Decimal
    due_date: date
    status: InstallmentStatus = InstallmentStatus.open
    original_value: Optional[Decimal] = None
    paid_date: Optional[date] = None
    payment_method: Optional[str] = None
    discount: Optional[Decimal] = None
    notes: Optional[str] = None


@dataclass(frozen=True)
class PortfolioSnapshot:
    clients: Optional[Tuple[ClientRecord, ...]] = None
    contracts: Optional[Tuple[ContractRecord, ...]] = None
    installments: Optional[Tuple[InstallmentRecord, ...]] = None

    @property
    def is_ready(self) -> bool:
        return (
            self.clients is not None
            and self.contracts is not None
            and self.installments is not None
        )

    def scoped(self, scope: TenantScope) -> "PortfolioSnapshot":
        """Restrict the snapshot to one company.

        Only clients carry a company id; contracts follow their client and
        installments follow their contract. Without a company id on the scope
        the snapshot is returned as is, orphans included.
        """

        if not scope.company_id or not self.is_ready:
            return self

        clients = tuple(c for c in self.clients if c.company_id == scope.company_id)
        client_ids = {c.id for c in clients}
        contracts = tuple(c for c in self.contracts if c.client_id in client_ids)
        contract_ids = {c.id for c in contracts}
        installments = tuple(i for i in self.installments if i.contract_id in contract_ids)
        return PortfolioSnapshot(clients=clients, contracts=contracts, installments=installments)
