from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal

from sqlalchemy.orm import Session

from finboard import models
from finboard.core.money import ZERO
from finboard.services.entity_store import fixed_bill_installment_record
from finboard.services.errors import EntityNotFoundError
from finboard.services.fixed_bills import pay_fixed_bill_installment, reopen_fixed_bill_installment
from finboard.services.records import FixedBillInstallmentRecord
from finboard.services.schedules import fixed_bill_installment_schedule

logger = logging.getLogger("finboard.fixed_bills")

DEFAULT_PAYMENT_METHOD = models.PaymentMethod.pix.value


def create_fixed_bill(
    *,
    db: Session,
    name: str,
    total_value: Decimal,
    total_installments: int,
    start_date: date,
    description: str | None = None,
    company_id: str | None = None,
) -> models.FixedBill:
    if company_id and not db.get(models.Company, company_id):
        raise EntityNotFoundError("company", company_id)

    schedule = fixed_bill_installment_schedule(total_value, total_installments, start_date)
    bill = models.FixedBill(
        name=name,
        description=description,
        total_value=total_value,
        total_installments=total_installments,
        start_date=start_date,
        company_id=company_id,
    )
    for item in schedule:
        bill.installments.append(
            models.FixedBillInstallment(
                installment_number=item.installment_number,
                value=item.value,
                original_value=item.value,
                due_date=item.due_date,
                status=models.InstallmentStatus.open,
                discount=ZERO,
            )
        )

    db.add(bill)
    db.commit()
    db.refresh(bill)
    logger.info("fixed_bill_created", extra={"fixed_bill_id": bill.id, "installments": len(schedule)})
    return bill


def delete_fixed_bill(*, db: Session, fixed_bill_id: str) -> None:
    bill = db.get(models.FixedBill, fixed_bill_id)
    if not bill:
        raise EntityNotFoundError("fixed_bill", fixed_bill_id)
    db.delete(bill)
    db.commit()
    logger.info("fixed_bill_deleted", extra={"fixed_bill_id": fixed_bill_id})


def _get_installment(db: Session, installment_id: str) -> models.FixedBillInstallment:
    row = db.get(models.FixedBillInstallment, installment_id)
    if not row:
        raise EntityNotFoundError("fixed_bill_installment", installment_id)
    return row


def _apply(row: models.FixedBillInstallment, record: FixedBillInstallmentRecord) -> None:
    row.status = record.status
    row.value = record.value
    row.original_value = record.original_value
    row.discount = record.discount
    row.paid_date = record.paid_date
    row.payment_method = record.payment_method
    row.notes = record.notes


def pay_installment(
    *,
    db: Session,
    installment_id: str,
    paid_date: date,
    payment_method: str = DEFAULT_PAYMENT_METHOD,
    discount: Decimal | None = None,
    notes: str | None = None,
) -> FixedBillInstallmentRecord:
    row = _get_installment(db, installment_id)
    paid = pay_fixed_bill_installment(
        fixed_bill_installment_record(row),
        paid_date=paid_date,
        payment_method=payment_method,
        discount=discount,
        notes=notes,
    )
    _apply(row, paid)
    db.commit()
    db.refresh(row)
    logger.info(
        "fixed_bill_installment_paid",
        extra={"installment_id": installment_id, "discount": str(paid.discount)},
    )
    return fixed_bill_installment_record(row)


def reopen_installment(*, db: Session, installment_id: str) -> FixedBillInstallmentRecord:
    row = _get_installment(db, installment_id)
    reopened = reopen_fixed_bill_installment(fixed_bill_installment_record(row))
    _apply(row, reopened)
    db.commit()
    db.refresh(row)
    logger.info("fixed_bill_installment_reopened", extra={"installment_id": installment_id})
    return fixed_bill_installment_record(row)
