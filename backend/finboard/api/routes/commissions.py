from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from finboard import models
from finboard.api.deps import get_today, require_reader, require_writer
from finboard.api.errors import http_error_for
from finboard.database import get_db
from finboard.schemas import CommissionCreate, CommissionKpisRead, CommissionRead
from finboard.services import payroll_service
from finboard.services.dates import DateFilter
from finboard.services.entity_store import load_commissions
from finboard.services.errors import FinboardError
from finboard.services.payroll import build_commission_kpis, filter_commissions

router = APIRouter(prefix="/commissions", tags=["commissions"])


@router.get("", response_model=List[CommissionRead])
def list_commissions(
    employee_id: Optional[str] = Query(None),
    year: Optional[int] = Query(None, ge=1900, le=9999),
    month: Optional[int] = Query(None, ge=1, le=12),
    day: Optional[int] = Query(None, ge=1, le=31),
    db: Session = Depends(get_db),
    current_user: models.User = Depends(require_reader),
):
    commissions = load_commissions(db, employee_id=employee_id)
    return filter_commissions(commissions, DateFilter(year, month, day))


@router.get("/kpis", response_model=CommissionKpisRead)
def commission_kpis(
    employee_id: Optional[str] = Query(None),
    db: Session = Depends(get_db),
    current_user: models.User = Depends(require_reader),
):
    return build_commission_kpis(load_commissions(db, employee_id=employee_id))


@router.post("", response_model=CommissionRead, status_code=status.HTTP_201_CREATED)
def create_commission(
    payload: CommissionCreate,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(require_writer),
):
    try:
        return payroll_service.create_commission(db=db, **payload.model_dump())
    except FinboardError as exc:
        raise http_error_for(exc) from exc


@router.post("/{commission_id}/toggle", response_model=CommissionRead)
def toggle_commission(
    commission_id: str,
    today: date = Depends(get_today),
    db: Session = Depends(get_db),
    current_user: models.User = Depends(require_writer),
):
    try:
        return payroll_service.toggle_commission(db=db, commission_id=commission_id, today=today)
    except FinboardError as exc:
        raise http_error_for(exc) from exc
