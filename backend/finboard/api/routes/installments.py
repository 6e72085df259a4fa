from datetime import date

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from finboard import models
from finboard.api.deps import get_today, require_writer
from finboard.api.errors import http_error_for
from finboard.database import get_db
from finboard.schemas import InstallmentPay, InstallmentRead
from finboard.services import installments_service
from finboard.services.errors import FinboardError

router = APIRouter(prefix="/installments", tags=["installments"])


@router.post("/refresh-overdue")
def refresh_overdue(
    today: date = Depends(get_today),
    db: Session = Depends(get_db),
    current_user: models.User = Depends(require_writer),
):
    updated = installments_service.refresh_overdue_statuses(db, today)
    return {"updated": updated, "as_of": today}


@router.post("/{installment_id}/pay", response_model=InstallmentRead)
def pay_installment(
    installment_id: str,
    payload: InstallmentPay | None = None,
    today: date = Depends(get_today),
    db: Session = Depends(get_db),
    current_user: models.User = Depends(require_writer),
):
    payload = payload or InstallmentPay()
    try:
        return installments_service.pay_installment(
            db=db,
            installment_id=installment_id,
            paid_date=payload.paid_date or today,
            payment_method=payload.payment_method.value if payload.payment_method else None,
        )
    except FinboardError as exc:
        raise http_error_for(exc) from exc


@router.post("/{installment_id}/unpay", response_model=InstallmentRead)
def unpay_installment(
    installment_id: str,
    today: date = Depends(get_today),
    db: Session = Depends(get_db),
    current_user: models.User = Depends(require_writer),
):
    try:
        return installments_service.unpay_installment(
            db=db, installment_id=installment_id, today=today
        )
    except FinboardError as exc:
        raise http_error_for(exc) from exc
