from datetime import date
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator, model_validator

from finboard.models.domain import InstallmentStatus, PaymentMethod


class InstallmentRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    contract_id: str
    installment_number: int
    total_installments: int
    value: Decimal
    due_date: date
    status: InstallmentStatus
    paid_date: Optional[date] = None
    payment_method: Optional[str] = None


class ContractRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    client_id: str
    total_value: Decimal
    start_date: date
    description: Optional[str] = None
    installments: List[InstallmentRead] = []


class ClientBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    document: Optional[str] = Field(None, max_length=32)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=32)
    company_id: Optional[str] = None


class ClientCreate(ClientBase):
    """A new client together with its contract terms."""

    total_value: Decimal = Field(..., gt=0, max_digits=14, decimal_places=2)
    total_installments: int = Field(..., ge=1, le=360)
    payment_day: int = Field(..., ge=1, le=31)
    start_date: date
    description: Optional[str] = None


class ClientUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    document: Optional[str] = Field(None, max_length=32)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=32)
    company_id: Optional[str] = None
    entry_date: Optional[date] = None
    exit_date: Optional[date] = None

    @field_validator("name")
    @classmethod
    def _name_not_null(cls, v):
        # Omit the key to keep the current name; null would clear a required column.
        if v is None:
            raise ValueError("name cannot be null")
        return v

    @model_validator(mode="after")
    def _exit_after_entry(self):
        if self.entry_date and self.exit_date and self.exit_date < self.entry_date:
            raise ValueError("exit_date must be on or after entry_date")
        return self


class ClientRead(ClientBase):
    model_config = ConfigDict(from_attributes=True)

    id: str
    email: Optional[str] = None
    entry_date: Optional[date] = None
    exit_date: Optional[date] = None


class ClientDetailRead(ClientRead):
    contracts: List[ContractRead] = []


class InstallmentPay(BaseModel):
    paid_date: Optional[date] = None
    payment_method: Optional[PaymentMethod] = None
