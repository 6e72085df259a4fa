from finboard.schemas.auth import Token, TokenPayload
from finboard.schemas.clients import (
    ClientCreate,
    ClientDetailRead,
    ClientRead,
    ClientUpdate,
    ContractRead,
    InstallmentPay,
    InstallmentRead,
)
from finboard.schemas.companies import CompanyCreate, CompanyRead, CompanyUpdate
from finboard.schemas.dashboard import (
    ClientDebtRead,
    DashboardKpisRead,
    DashboardSummaryRead,
    DataQualityRead,
    OverdueInstallmentRead,
    RevenueRead,
    StatusSummaryRead,
    UpcomingInstallmentRead,
)
from finboard.schemas.fixed_bills import (
    FixedBillCreate,
    FixedBillInstallmentPay,
    FixedBillInstallmentRead,
    FixedBillListRead,
    FixedBillRead,
    FixedBillSummaryRead,
    FixedBillTotalsRead,
)
from finboard.schemas.payroll import (
    CommissionCreate,
    CommissionKpisRead,
    CommissionRead,
    EmployeeCreate,
    EmployeePaymentCreate,
    EmployeePaymentRead,
    EmployeeRead,
    PayrollKpisRead,
)
from finboard.schemas.users import RoleRead, UserCreate, UserRead

__all__ = [
    "ClientCreate",
    "ClientDebtRead",
    "ClientDetailRead",
    "ClientRead",
    "ClientUpdate",
    "CommissionCreate",
    "CommissionKpisRead",
    "CommissionRead",
    "CompanyCreate",
    "CompanyRead",
    "CompanyUpdate",
    "ContractRead",
    "DashboardKpisRead",
    "DashboardSummaryRead",
    "DataQualityRead",
    "EmployeeCreate",
    "EmployeePaymentCreate",
    "EmployeePaymentRead",
    "EmployeeRead",
    "FixedBillCreate",
    "FixedBillInstallmentPay",
    "FixedBillInstallmentRead",
    "FixedBillListRead",
    "FixedBillRead",
    "FixedBillSummaryRead",
    "FixedBillTotalsRead",
    "InstallmentPay",
    "InstallmentRead",
    "OverdueInstallmentRead",
    "PayrollKpisRead",
    "RevenueRead",
    "RoleRead",
    "StatusSummaryRead",
    "Token",
    "TokenPayload",
    "UpcomingInstallmentRead",
    "UserCreate",
    "UserRead",
]
