from dataclasses import asdict
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from finboard import models
from finboard.api.deps import get_tenant_scope, get_today, require_reader, require_writer
from finboard.api.errors import http_error_for
from finboard.database import get_db
from finboard.schemas import (
    FixedBillCreate,
    FixedBillInstallmentPay,
    FixedBillInstallmentRead,
    FixedBillListRead,
    FixedBillRead,
    FixedBillSummaryRead,
    FixedBillTotalsRead,
)
from finboard.services import fixed_bills_service
from finboard.services.dates import DateFilter
from finboard.services.entity_store import load_fixed_bills
from finboard.services.errors import FinboardError
from finboard.services.fixed_bills import projected_status, summarize_fixed_bills, total_fixed_bills
from finboard.services.records import FixedBillInstallmentRecord, TenantScope

router = APIRouter(prefix="/fixed-bills", tags=["fixed-bills"])


def _installment_read(record: FixedBillInstallmentRecord, today: date) -> FixedBillInstallmentRead:
    return FixedBillInstallmentRead(**asdict(record), effective_status=projected_status(record, today))


@router.get("", response_model=FixedBillListRead)
def list_fixed_bills(
    year: Optional[int] = Query(None, ge=1900, le=9999),
    month: Optional[int] = Query(None, ge=1, le=12),
    day: Optional[int] = Query(None, ge=1, le=31),
    scope: TenantScope = Depends(get_tenant_scope),
    db: Session = Depends(get_db),
    current_user: models.User = Depends(require_reader),
):
    bills, installments = load_fixed_bills(db, scope)
    summaries = summarize_fixed_bills(
        bills, installments, today=scope.today, date_filter=DateFilter(year, month, day)
    )
    items = [
        FixedBillSummaryRead(
            bill=FixedBillRead.model_validate(s.bill),
            installments=[_installment_read(i, scope.today) for i in s.installments],
            total_paid=s.total_paid,
            total_pending=s.total_pending,
            total_discount=s.total_discount,
            next_due_date=s.next_due_date,
            overdue_count=s.overdue_count,
        )
        for s in summaries
    ]
    return FixedBillListRead(
        items=items, totals=FixedBillTotalsRead.model_validate(total_fixed_bills(summaries))
    )


@router.post("", response_model=FixedBillRead, status_code=status.HTTP_201_CREATED)
def create_fixed_bill(
    payload: FixedBillCreate,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(require_writer),
):
    try:
        return fixed_bills_service.create_fixed_bill(db=db, **payload.model_dump())
    except (FinboardError, ValueError) as exc:
        raise http_error_for(exc) from exc


@router.delete("/{fixed_bill_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_fixed_bill(
    fixed_bill_id: str,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(require_writer),
):
    try:
        fixed_bills_service.delete_fixed_bill(db=db, fixed_bill_id=fixed_bill_id)
    except FinboardError as exc:
        raise http_error_for(exc) from exc


@router.post("/installments/{installment_id}/pay", response_model=FixedBillInstallmentRead)
def pay_fixed_bill_installment(
    installment_id: str,
    payload: FixedBillInstallmentPay | None = None,
    today: date = Depends(get_today),
    db: Session = Depends(get_db),
    current_user: models.User = Depends(require_writer),
):
    payload = payload or FixedBillInstallmentPay()
    try:
        record = fixed_bills_service.pay_installment(
            db=db,
            installment_id=installment_id,
            paid_date=payload.paid_date or today,
            payment_method=payload.payment_method.value,
            discount=payload.discount,
            notes=payload.notes,
        )
    except (FinboardError, ValueError) as exc:
        raise http_error_for(exc) from exc
    return _installment_read(record, today)


@router.post("/installments/{installment_id}/reopen", response_model=FixedBillInstallmentRead)
def reopen_fixed_bill_installment(
    installment_id: str,
    today: date = Depends(get_today),
    db: Session = Depends(get_db),
    current_user: models.User = Depends(require_writer),
):
    try:
        record = fixed_bills_service.reopen_installment(db=db, installment_id=installment_id)
    except FinboardError as exc:
        raise http_error_for(exc) from exc
    return _installment_read(record, today)
