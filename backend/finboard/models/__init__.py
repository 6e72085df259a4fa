from finboard.models.domain import (
    Client,
    Commission,
    Company,
    Contract,
    Employee,
    EmployeePayment,
    FixedBill,
    FixedBillInstallment,
    Installment,
    InstallmentStatus,
    PaymentMethod,
    PaymentType,
    Role,
    RoleName,
    SettlementStatus,
    User,
)

__all__ = [
    "Client",
    "Commission",
    "Company",
    "Contract",
    "Employee",
    "EmployeePayment",
    "FixedBill",
    "FixedBillInstallment",
    "Installment",
    "InstallmentStatus",
    "PaymentMethod",
    "PaymentType",
    "Role",
    "RoleName",
    "SettlementStatus",
    "User",
]
