from datetime import date
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict

from finboard.models.domain import InstallmentStatus
from finboard.schemas.clients import InstallmentRead


class _FromRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class ClientMini(_FromRecord):
    id: str
    name: str
    company_id: Optional[str] = None
    document: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None


class ContractMini(_FromRecord):
    id: str
    client_id: str
    total_value: Decimal
    start_date: date
    description: Optional[str] = None


class ClientDebtRead(_FromRecord):
    client: ClientMini
    contract: ContractMini
    installments: List[InstallmentRead]
    total_debt: Decimal
    overdue_count: int
    oldest_overdue: Optional[date] = None


class OverdueInstallmentRead(_FromRecord):
    installment: InstallmentRead
    client_id: Optional[str] = None
    client_name: str
    days_overdue: int


class UpcomingInstallmentRead(_FromRecord):
    installment: InstallmentRead
    client_id: Optional[str] = None
    client_name: str


class StatusSummaryRead(_FromRecord):
    status: InstallmentStatus
    count: int
    total_value: Decimal
    avg_days_overdue: int


class DashboardKpisRead(_FromRecord):
    total_clients: int
    total_open_value: Decimal
    total_overdue_value: Decimal
    clients_with_overdue: int


class RevenueSliceRead(_FromRecord):
    label: str
    value: Decimal


class RevenueRead(_FromRecord):
    received: Decimal
    received_count: int
    open: Decimal
    open_count: int
    overdue: Decimal
    overdue_count: int
    receivable: Decimal
    receivable_count: int
    grand_total: Decimal
    total_count: int
    slices: List[RevenueSliceRead]


class DataQualityRead(BaseModel):
    orphan_installments: int = 0


class DashboardSummaryRead(BaseModel):
    as_of: date
    company_id: Optional[str] = None
    kpis: DashboardKpisRead
    debts: List[ClientDebtRead]
    overdue: List[OverdueInstallmentRead]
    upcoming: List[UpcomingInstallmentRead]
    status_summary: List[StatusSummaryRead]
    revenue: RevenueRead
    data_quality: DataQualityRead
