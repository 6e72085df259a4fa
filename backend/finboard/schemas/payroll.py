from datetime import date
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from finboard.models.domain import PaymentType, SettlementStatus


class EmployeeCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    role: Optional[str] = Field(None, max_length=128)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=32)
    salary: Decimal = Field(Decimal("0"), ge=0, max_digits=14, decimal_places=2)
    hire_date: date
    active: bool = True


class EmployeeRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    role: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    salary: Decimal
    hire_date: date
    active: bool


class EmployeePaymentCreate(BaseModel):
    employee_id: str
    amount: Decimal = Field(..., gt=0, max_digits=14, decimal_places=2)
    payment_date: date
    payment_type: PaymentType = PaymentType.salary
    status: SettlementStatus = SettlementStatus.pending
    # Repeat monthly; every repetition carries the full amount.
    installments: int = Field(1, ge=1, le=60)
    description: Optional[str] = None


class EmployeePaymentRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    employee_id: str
    amount: Decimal
    payment_date: date
    payment_type: PaymentType
    status: SettlementStatus
    description: Optional[str] = None


class PayrollKpisRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    active_employees: int
    total_salaries: Decimal
    total_payments: Decimal
    payments_this_month: Decimal
    total_paid: Decimal
    total_pending: Decimal


class CommissionCreate(BaseModel):
    employee_id: str
    amount: Decimal = Field(..., gt=0, max_digits=14, decimal_places=2)
    percentage: Optional[Decimal] = Field(None, ge=0, le=100, max_digits=5, decimal_places=2)
    commission_date: date
    installment_id: Optional[str] = None
    description: Optional[str] = None


class CommissionRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    employee_id: str
    installment_id: Optional[str] = None
    amount: Decimal
    percentage: Optional[Decimal] = None
    commission_date: date
    status: SettlementStatus
    paid_date: Optional[date] = None
    description: Optional[str] = None


class CommissionKpisRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total_commissions: int
    pending_commissions: int
    paid_commissions: int
    total_value: Decimal
    pending_value: Decimal
    paid_value: Decimal
