import uuid
from datetime import date, datetime
from decimal import Decimal
from enum import Enum as PyEnum

from sqlalchemy import (
    Boolean,
    Date,
    DateTime,
    Enum,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
    event,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from finboard.database import Base

MONEY = Numeric(14, 2, asdecimal=True)


def _uuid() -> str:
    return str(uuid.uuid4())


class RoleName(PyEnum):
    admin = "admin"
    financeiro = "financeiro"
    comercial = "comercial"
    auditoria = "auditoria"


class InstallmentStatus(PyEnum):
    open = "open"
    paid = "paid"
    overdue = "overdue"


class PaymentType(PyEnum):
    salary = "salary"
    bonus = "bonus"
    advance = "advance"


class SettlementStatus(PyEnum):
    """Two-state status shared by commissions and employee payments."""

    pending = "pending"
    paid = "paid"


class PaymentMethod(PyEnum):
    pix = "pix"
    boleto = "boleto"
    cartao_credito = "cartao_credito"
    cartao_debito = "cartao_debito"
    dinheiro = "dinheiro"
    transferencia = "transferencia"
    debito_automatico = "debito_automatico"


class Role(Base):
    __tablename__ = "roles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[RoleName] = mapped_column(
        Enum(RoleName, native_enum=False), unique=True, nullable=False
    )
    description: Mapped[str | None] = mapped_column(String(255))

    users = relationship("User", back_populates="role")


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)
    role_id: Mapped[int] = mapped_column(ForeignKey("roles.id"), nullable=False)
    active: Mapped[bool] = mapped_column(Boolean, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    role = relationship("Role", back_populates="users", lazy="joined")


class Company(Base):
    __tablename__ = "companies"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    cnpj: Mapped[str] = mapped_column(String(32), nullable=False, unique=True)
    state: Mapped[str] = mapped_column(String(8), nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )


class Client(Base):
    __tablename__ = "clients"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    company_id: Mapped[str | None] = mapped_column(
        ForeignKey("companies.id", ondelete="SET NULL"), nullable=True, index=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    document: Mapped[str | None] = mapped_column(String(32))
    email: Mapped[str | None] = mapped_column(String(255))
    phone: Mapped[str | None] = mapped_column(String(32))
    entry_date: Mapped[date | None] = mapped_column(Date)
    exit_date: Mapped[date | None] = mapped_column(Date)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    contracts = relationship(
        "Contract", back_populates="client", cascade="all, delete-orphan", passive_deletes=True
    )


class Contract(Base):
    __tablename__ = "contracts"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    client_id: Mapped[str] = mapped_column(
        ForeignKey("clients.id", ondelete="CASCADE"), nullable=False, index=True
    )
    description: Mapped[str | None] = mapped_column(Text)
    total_value: Mapped[Decimal] = mapped_column(MONEY, nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    client = relationship("Client", back_populates="contracts")
    installments = relationship(
        "Installment",
        back_populates="contract",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Installment.installment_number",
    )


class Installment(Base):
    __tablename__ = "installments"
    __table_args__ = (
        UniqueConstraint("contract_id", "installment_number", name="uq_installments_contract_number"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    contract_id: Mapped[str] = mapped_column(
        ForeignKey("contracts.id", ondelete="CASCADE"), nullable=False, index=True
    )
    installment_number: Mapped[int] = mapped_column(Integer, nullable=False)
    total_installments: Mapped[int] = mapped_column(Integer, nullable=False)
    value: Mapped[Decimal] = mapped_column(MONEY, nullable=False)
    due_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    paid_date: Mapped[date | None] = mapped_column(Date)
    status: Mapped[InstallmentStatus] = mapped_column(
        Enum(InstallmentStatus, native_enum=False),
        nullable=False,
        default=InstallmentStatus.open,
        index=True,
    )
    expected_end_date: Mapped[date | None] = mapped_column(Date)
    payment_method: Mapped[str | None] = mapped_column(String(32))
    gross_value: Mapped[Decimal | None] = mapped_column(MONEY)
    net_value: Mapped[Decimal | None] = mapped_column(MONEY)
    boleto_fee: Mapped[Decimal | None] = mapped_column(MONEY)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    contract = relationship("Contract", back_populates="installments")

    def _validate_invariants(self) -> None:
        if self.installment_number is None or self.total_installments is None:
            raise ValueError("Installment numbering is required")
        if not 1 <= int(self.installment_number) <= int(self.total_installments):
            raise ValueError("Installment.installment_number must be in [1, total_installments]")
        if self.status == InstallmentStatus.paid and self.paid_date is None:
            raise ValueError("Installment.paid_date is required when status=paid")


@event.listens_for(Installment, "before_insert")
def _installment_before_insert(_mapper, _connection, target: Installment):
    target._validate_invariants()


@event.listens_for(Installment, "before_update")
def _installment_before_update(_mapper, _connection, target: Installment):
    target._validate_invariants()


class Employee(Base):
    __tablename__ = "employees"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    role: Mapped[str | None] = mapped_column(String(128))
    email: Mapped[str | None] = mapped_column(String(255))
    phone: Mapped[str | None] = mapped_column(String(32))
    salary: Mapped[Decimal] = mapped_column(MONEY, nullable=False, default=Decimal("0"))
    hire_date: Mapped[date] = mapped_column(Date, nullable=False)
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    payments = relationship(
        "EmployeePayment", back_populates="employee", cascade="all, delete-orphan", passive_deletes=True
    )
    commissions = relationship(
        "Commission", back_populates="employee", cascade="all, delete-orphan", passive_deletes=True
    )


class EmployeePayment(Base):
    __tablename__ = "employee_payments"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    employee_id: Mapped[str] = mapped_column(
        ForeignKey("employees.id", ondelete="CASCADE"), nullable=False, index=True
    )
    amount: Mapped[Decimal] = mapped_column(MONEY, nullable=False)
    payment_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    payment_type: Mapped[PaymentType] = mapped_column(
        Enum(PaymentType, native_enum=False), nullable=False, default=PaymentType.salary
    )
    status: Mapped[SettlementStatus] = mapped_column(
        Enum(SettlementStatus, native_enum=False), nullable=False, default=SettlementStatus.pending
    )
    description: Mapped[str | None] = mapped_column(Text)
    receipt_url: Mapped[str | None] = mapped_column(String(512))
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    employee = relationship("Employee", back_populates="payments")


class Commission(Base):
    __tablename__ = "commissions"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    employee_id: Mapped[str] = mapped_column(
        ForeignKey("employees.id", ondelete="CASCADE"), nullable=False, index=True
    )
    installment_id: Mapped[str | None] = mapped_column(
        ForeignKey("installments.id", ondelete="SET NULL"), nullable=True
    )
    amount: Mapped[Decimal] = mapped_column(MONEY, nullable=False)
    percentage: Mapped[Decimal | None] = mapped_column(Numeric(5, 2, asdecimal=True))
    commission_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    status: Mapped[SettlementStatus] = mapped_column(
        Enum(SettlementStatus, native_enum=False), nullable=False, default=SettlementStatus.pending
    )
    paid_date: Mapped[date | None] = mapped_column(Date)
    description: Mapped[str | None] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    employee = relationship("Employee", back_populates="commissions")


class FixedBill(Base):
    __tablename__ = "fixed_bills"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    company_id: Mapped[str | None] = mapped_column(
        ForeignKey("companies.id", ondelete="SET NULL"), nullable=True, index=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    description: Mapped[str | None] = mapped_column(Text)
    total_value: Mapped[Decimal] = mapped_column(MONEY, nullable=False)
    total_installments: Mapped[int] = mapped_column(Integer, nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    installments = relationship(
        "FixedBillInstallment",
        back_populates="fixed_bill",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="FixedBillInstallment.installment_number",
    )


class FixedBillInstallment(Base):
    __tablename__ = "fixed_bill_installments"
    __table_args__ = (
        UniqueConstraint(
            "fixed_bill_id", "installment_number", name="uq_fixed_bill_installments_bill_number"
        ),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    fixed_bill_id: Mapped[str] = mapped_column(
        ForeignKey("fixed_bills.id", ondelete="CASCADE"), nullable=False, index=True
    )
    installment_number: Mapped[int] = mapped_column(Integer, nullable=False)
    value: Mapped[Decimal] = mapped_column(MONEY, nullable=False)
    original_value: Mapped[Decimal | None] = mapped_column(MONEY)
    due_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    paid_date: Mapped[date | None] = mapped_column(Date)
    # Stored status is only ever open or paid; overdue is projected at read time.
    status: Mapped[str] = mapped_column(String(16), nullable=False, default=InstallmentStatus.open.value)
    payment_method: Mapped[str | None] = mapped_column(String(32))
    discount: Mapped[Decimal | None] = mapped_column(MONEY, default=Decimal("0"))
    notes: Mapped[str | None] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    fixed_bill = relationship("FixedBill", back_populates="installments")

    @validates("status")
    def _validate_status(self, _key, value: str | InstallmentStatus | None):
        if value is None:
            return InstallmentStatus.open.value
        if isinstance(value, InstallmentStatus):
            value = value.value
        if value not in {InstallmentStatus.open.value, InstallmentStatus.paid.value}:
            raise ValueError(f"Invalid fixed bill installment status: {value}")
        return value
