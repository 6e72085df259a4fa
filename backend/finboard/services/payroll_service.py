from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from typing import List

from sqlalchemy.orm import Session

from finboard import models
from finboard.models.domain import PaymentType, SettlementStatus
from finboard.services.entity_store import commission_record
from finboard.services.errors import EntityNotFoundError
from finboard.services.payroll import toggle_commission_status
from finboard.services.schedules import employee_payment_schedule

logger = logging.getLogger("finboard.payroll")


def _get_employee(db: Session, employee_id: str) -> models.Employee:
    employee = db.get(models.Employee, employee_id)
    if not employee:
        raise EntityNotFoundError("employee", employee_id)
    return employee


def create_employee(
    *,
    db: Session,
    name: str,
    salary: Decimal,
    hire_date: date,
    role: str | None = None,
    email: str | None = None,
    phone: str | None = None,
    active: bool = True,
) -> models.Employee:
    employee = models.Employee(
        name=name,
        salary=salary,
        hire_date=hire_date,
        role=role,
        email=email,
        phone=phone,
        active=active,
    )
    db.add(employee)
    db.commit()
    db.refresh(employee)
    return employee


def delete_employee(*, db: Session, employee_id: str) -> None:
    employee = _get_employee(db, employee_id)
    db.delete(employee)
    db.commit()
    logger.info("employee_deleted", extra={"employee_id": employee_id})


def register_payments(
    *,
    db: Session,
    employee_id: str,
    amount: Decimal,
    payment_date: date,
    payment_type: PaymentType = PaymentType.salary,
    status: SettlementStatus = SettlementStatus.pending,
    installments: int = 1,
    description: str | None = None,
) -> List[models.EmployeePayment]:
    """Record a payment, optionally repeated monthly.

    Only the first payment of a run takes ``status``; the later ones are
    scheduled and start as pending.
    """

    _get_employee(db, employee_id)
    rows = [
        models.EmployeePayment(
            employee_id=employee_id,
            amount=item.amount,
            payment_date=item.payment_date,
            payment_type=payment_type,
            status=status if item.first else SettlementStatus.pending,
            description=item.description,
        )
        for item in employee_payment_schedule(amount, payment_date, installments, description)
    ]
    db.add_all(rows)
    db.commit()
    for row in rows:
        db.refresh(row)
    logger.info("employee_payments_registered", extra={"employee_id": employee_id, "count": len(rows)})
    return rows


def create_commission(
    *,
    db: Session,
    employee_id: str,
    amount: Decimal,
    commission_date: date,
    percentage: Decimal | None = None,
    installment_id: str | None = None,
    description: str | None = None,
) -> models.Commission:
    _get_employee(db, employee_id)
    if installment_id and not db.get(models.Installment, installment_id):
        raise EntityNotFoundError("installment", installment_id)

    commission = models.Commission(
        employee_id=employee_id,
        amount=amount,
        commission_date=commission_date,
        percentage=percentage,
        installment_id=installment_id,
        description=description,
        status=SettlementStatus.pending,
    )
    db.add(commission)
    db.commit()
    db.refresh(commission)
    return commission


def toggle_commission(*, db: Session, commission_id: str, today: date) -> models.Commission:
    row = db.get(models.Commission, commission_id)
    if not row:
        raise EntityNotFoundError("commission", commission_id)

    toggled = toggle_commission_status(commission_record(row), today=today)
    row.status = toggled.status
    row.paid_date = toggled.paid_date
    db.commit()
    db.refresh(row)
    logger.info(
        "commission_toggled",
        extra={"commission_id": commission_id, "status": toggled.status.value},
    )
    return row
