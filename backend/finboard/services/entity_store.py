"""Read side: copy ORM rows into immutable records.

Every loader returns fully materialized tuples so the derivations in this
package never touch a live session.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from finboard import models
from finboard.core.money import to_money
from finboard.models.domain import InstallmentStatus
from finboard.services.records import (
    ClientRecord,
    CommissionRecord,
    ContractRecord,
    EmployeePaymentRecord,
    EmployeeRecord,
    FixedBillInstallmentRecord,
    FixedBillRecord,
    InstallmentRecord,
    PortfolioSnapshot,
    TenantScope,
)


def client_record(row: models.Client) -> ClientRecord:
    return ClientRecord(
        id=row.id,
        name=row.name,
        company_id=row.company_id,
        document=row.document,
        email=row.email,
        phone=row.phone,
        entry_date=row.entry_date,
        exit_date=row.exit_date,
    )


def contract_record(row: models.Contract) -> ContractRecord:
    return ContractRecord(
        id=row.id,
        client_id=row.client_id,
        total_value=to_money(row.total_value),
        start_date=row.start_date,
        description=row.description,
    )


def installment_record(row: models.Installment) -> InstallmentRecord:
    return InstallmentRecord(
        id=row.id,
        contract_id=row.contract_id,
        installment_number=row.installment_number,
        total_installments=row.total_installments,
        value=to_money(row.value),
        due_date=row.due_date,
        status=row.status,
        paid_date=row.paid_date,
        payment_method=row.payment_method,
    )


def employee_record(row: models.Employee) -> EmployeeRecord:
    return EmployeeRecord(
        id=row.id,
        name=row.name,
        salary=to_money(row.salary),
        hire_date=row.hire_date,
        active=bool(row.active),
        role=row.role,
        email=row.email,
        phone=row.phone,
    )


def employee_payment_record(row: models.EmployeePayment) -> EmployeePaymentRecord:
    return EmployeePaymentRecord(
        id=row.id,
        employee_id=row.employee_id,
        amount=to_money(row.amount),
        payment_date=row.payment_date,
        payment_type=row.payment_type,
        status=row.status,
        description=row.description,
    )


def commission_record(row: models.Commission) -> CommissionRecord:
    return CommissionRecord(
        id=row.id,
        employee_id=row.employee_id,
        amount=to_money(row.amount),
        commission_date=row.commission_date,
        status=row.status,
        installment_id=row.installment_id,
        percentage=row.percentage,
        paid_date=row.paid_date,
        description=row.description,
    )


def fixed_bill_record(row: models.FixedBill) -> FixedBillRecord:
    return FixedBillRecord(
        id=row.id,
        name=row.name,
        total_value=to_money(row.total_value),
        total_installments=row.total_installments,
        start_date=row.start_date,
        description=row.description,
        company_id=row.company_id,
    )


def fixed_bill_installment_record(row: models.FixedBillInstallment) -> FixedBillInstallmentRecord:
    return FixedBillInstallmentRecord(
        id=row.id,
        fixed_bill_id=row.fixed_bill_id,
        installment_number=row.installment_number,
        value=to_money(row.value),
        due_date=row.due_date,
        status=InstallmentStatus(row.status),
        original_value=to_money(row.original_value) if row.original_value is not None else None,
        paid_date=row.paid_date,
        payment_method=row.payment_method,
        discount=to_money(row.discount),
        notes=row.notes,
    )


def load_portfolio_snapshot(db: Session) -> PortfolioSnapshot:
    """Load every client, contract and installment.

    Clients come back ordered by name; that order is the tie-break for the
    debt rollup. Tenant filtering happens on the snapshot, not in SQL, so
    orphaned rows stay visible to the unscoped views.
    """

    clients = db.query(models.Client).order_by(models.Client.name.asc(), models.Client.id.asc()).all()
    contracts = (
        db.query(models.Contract)
        .order_by(models.Contract.created_at.asc(), models.Contract.id.asc())
        .all()
    )
    installments = (
        db.query(models.Installment)
        .order_by(models.Installment.due_date.asc(), models.Installment.installment_number.asc())
        .all()
    )
    return PortfolioSnapshot(
        clients=tuple(client_record(c) for c in clients),
        contracts=tuple(contract_record(c) for c in contracts),
        installments=tuple(installment_record(i) for i in installments),
    )


def load_fixed_bills(
    db: Session, scope: TenantScope
) -> Tuple[List[FixedBillRecord], List[FixedBillInstallmentRecord]]:
    query = db.query(models.FixedBill)
    if scope.company_id:
        query = query.filter(models.FixedBill.company_id == scope.company_id)
    bills = query.order_by(models.FixedBill.name.asc(), models.FixedBill.id.asc()).all()

    bill_ids = [b.id for b in bills]
    rows: List[models.FixedBillInstallment] = []
    if bill_ids:
        rows = (
            db.query(models.FixedBillInstallment)
            .filter(models.FixedBillInstallment.fixed_bill_id.in_(bill_ids))
            .order_by(models.FixedBillInstallment.due_date.asc())
            .all()
        )
    return [fixed_bill_record(b) for b in bills], [fixed_bill_installment_record(r) for r in rows]


def load_employees(db: Session, *, active_only: bool = False) -> List[EmployeeRecord]:
    query = db.query(models.Employee)
    if active_only:
        query = query.filter(models.Employee.active.is_(True))
    return [employee_record(e) for e in query.order_by(models.Employee.name.asc()).all()]


def load_employee_payments(
    db: Session, *, employee_id: Optional[str] = None
) -> List[EmployeePaymentRecord]:
    query = db.query(models.EmployeePayment)
    if employee_id:
        query = query.filter(models.EmployeePayment.employee_id == employee_id)
    rows = query.order_by(models.EmployeePayment.payment_date.desc()).all()
    return [employee_payment_record(p) for p in rows]


def load_commissions(db: Session, *, employee_id: Optional[str] = None) -> List[CommissionRecord]:
    query = db.query(models.Commission)
    if employee_id:
        query = query.filter(models.Commission.employee_id == employee_id)
    rows = query.order_by(models.Commission.commission_date.desc()).all()
    return [commission_record(c) for c in rows]
