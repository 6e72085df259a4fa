from datetime import date
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from finboard.models.domain import InstallmentStatus, PaymentMethod


class FixedBillCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    total_value: Decimal = Field(..., gt=0, max_digits=14, decimal_places=2)
    total_installments: int = Field(..., ge=1, le=360)
    start_date: date
    company_id: Optional[str] = None


class FixedBillRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: Optional[str] = None
    total_value: Decimal
    total_installments: int
    start_date: date
    company_id: Optional[str] = None


class FixedBillInstallmentRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    fixed_bill_id: str
    installment_number: int
    value: Decimal
    original_value: Optional[Decimal] = None
    due_date: date
    status: InstallmentStatus
    # Stored status with overdue projected from the due date.
    effective_status: Optional[InstallmentStatus] = None
    paid_date: Optional[date] = None
    payment_method: Optional[str] = None
    discount: Optional[Decimal] = None
    notes: Optional[str] = None


class FixedBillSummaryRead(BaseModel):
    bill: FixedBillRead
    installments: List[FixedBillInstallmentRead]
    total_paid: Decimal
    total_pending: Decimal
    total_discount: Decimal
    next_due_date: Optional[date] = None
    overdue_count: int


class FixedBillTotalsRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    bills: int
    total_paid: Decimal
    total_pending: Decimal
    total_discount: Decimal
    overdue_count: int


class FixedBillListRead(BaseModel):
    items: List[FixedBillSummaryRead]
    totals: FixedBillTotalsRead


class FixedBillInstallmentPay(BaseModel):
    paid_date: Optional[date] = None
    payment_method: PaymentMethod = PaymentMethod.pix
    discount: Decimal = Field(Decimal("0"), ge=0, max_digits=14, decimal_places=2)
    notes: Optional[str] = None
