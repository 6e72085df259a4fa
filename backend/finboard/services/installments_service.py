from __future__ import annotations

import logging
from datetime import date

from sqlalchemy.orm import Session

from finboard import models
from finboard.models.domain import InstallmentStatus
from finboard.services.entity_store import installment_record
from finboard.services.errors import EntityNotFoundError
from finboard.services.installment_transitions import mark_installment_paid, mark_installment_unpaid

logger = logging.getLogger("finboard.installments")


def _get(db: Session, installment_id: str) -> models.Installment:
    row = db.get(models.Installment, installment_id)
    if not row:
        raise EntityNotFoundError("installment", installment_id)
    return row


def pay_installment(
    *,
    db: Session,
    installment_id: str,
    paid_date: date,
    payment_method: str | None = None,
) -> models.Installment:
    row = _get(db, installment_id)
    paid = mark_installment_paid(installment_record(row), paid_date=paid_date)

    row.status = paid.status
    row.paid_date = paid.paid_date
    if payment_method:
        row.payment_method = payment_method
    db.commit()
    db.refresh(row)
    logger.info("installment_paid", extra={"installment_id": installment_id})
    return row


def unpay_installment(*, db: Session, installment_id: str, today: date) -> models.Installment:
    row = _get(db, installment_id)
    reverted = mark_installment_unpaid(installment_record(row), today=today)

    row.status = reverted.status
    row.paid_date = None
    db.commit()
    db.refresh(row)
    logger.info(
        "installment_unpaid",
        extra={"installment_id": installment_id, "status": reverted.status.value},
    )
    return row


def refresh_overdue_statuses(db: Session, today: date) -> int:
    """Store ``overdue`` on open installments whose due date has passed.

    Returns the number of rows updated.
    """

    updated = (
        db.query(models.Installment)
        .filter(models.Installment.status == InstallmentStatus.open)
        .filter(models.Installment.due_date < today)
        .update({"status": InstallmentStatus.overdue}, synchronize_session=False)
    )
    db.commit()
    logger.info("overdue_refresh", extra={"updated": int(updated or 0), "today": today.isoformat()})
    return int(updated or 0)
