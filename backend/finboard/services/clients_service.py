from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from typing import Any

from sqlalchemy.orm import Session

from finboard import models
from finboard.models.domain import InstallmentStatus
from finboard.services.errors import EntityNotFoundError
from finboard.services.schedules import contract_installment_schedule

logger = logging.getLogger("finboard.clients")

_UPDATABLE_FIELDS = {"name", "document", "email", "phone", "entry_date", "exit_date", "company_id"}


def register_client(
    *,
    db: Session,
    name: str,
    total_value: Decimal,
    total_installments: int,
    payment_day: int,
    start_date: date,
    today: date,
    company_id: str | None = None,
    document: str | None = None,
    email: str | None = None,
    phone: str | None = None,
    description: str | None = None,
) -> models.Client:
    """Create a client, its contract and the monthly installment schedule in one write.

    Installments already past due on ``today`` are stored as overdue.
    """

    if company_id and not db.get(models.Company, company_id):
        raise EntityNotFoundError("company", company_id)

    schedule = contract_installment_schedule(total_value, total_installments, payment_day, start_date)

    client = models.Client(
        name=name,
        company_id=company_id,
        document=document,
        email=email,
        phone=phone,
        entry_date=start_date,
    )
    contract = models.Contract(
        total_value=total_value,
        start_date=start_date,
        description=description,
    )
    client.contracts.append(contract)
    for item in schedule:
        contract.installments.append(
            models.Installment(
                installment_number=item.installment_number,
                total_installments=item.total_installments,
                value=item.value,
                due_date=item.due_date,
                status=InstallmentStatus.overdue if item.due_date < today else InstallmentStatus.open,
                expected_end_date=schedule[-1].due_date,
            )
        )

    db.add(client)
    db.commit()
    db.refresh(client)
    logger.info(
        "client_registered",
        extra={"client_id": client.id, "installments": len(schedule), "company_id": company_id},
    )
    return client


def update_client(*, db: Session, client_id: str, changes: dict[str, Any]) -> models.Client:
    client = db.get(models.Client, client_id)
    if not client:
        raise EntityNotFoundError("client", client_id)

    company_id = changes.get("company_id")
    if company_id and not db.get(models.Company, company_id):
        raise EntityNotFoundError("company", company_id)

    entry_date = changes.get("entry_date", client.entry_date)
    exit_date = changes.get("exit_date", client.exit_date)
    if entry_date and exit_date and exit_date < entry_date:
        raise ValueError("exit_date must be on or after entry_date")

    for key, value in changes.items():
        if key in _UPDATABLE_FIELDS:
            setattr(client, key, value)
    db.commit()
    db.refresh(client)
    return client


def delete_client(*, db: Session, client_id: str) -> None:
    """Delete a client together with its contracts and installments."""

    client = db.get(models.Client, client_id)
    if not client:
        raise EntityNotFoundError("client", client_id)
    db.delete(client)
    db.commit()
    logger.info("client_deleted", extra={"client_id": client_id})
