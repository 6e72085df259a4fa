from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from finboard import models
from finboard.api.deps import get_today, require_reader, require_writer
from finboard.api.errors import http_error_for
from finboard.database import get_db
from finboard.schemas import (
    EmployeeCreate,
    EmployeePaymentCreate,
    EmployeePaymentRead,
    EmployeeRead,
    PayrollKpisRead,
)
from finboard.services import payroll_service
from finboard.services.dates import DateFilter
from finboard.services.entity_store import load_employee_payments, load_employees
from finboard.services.errors import FinboardError
from finboard.services.payroll import build_payroll_kpis, filter_payments

router = APIRouter(prefix="/employees", tags=["employees"])


@router.get("", response_model=List[EmployeeRead])
def list_employees(
    active_only: bool = Query(False),
    db: Session = Depends(get_db),
    current_user: models.User = Depends(require_reader),
):
    return load_employees(db, active_only=active_only)


@router.post("", response_model=EmployeeRead, status_code=status.HTTP_201_CREATED)
def create_employee(
    payload: EmployeeCreate,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(require_writer),
):
    return payroll_service.create_employee(db=db, **payload.model_dump())


@router.get("/payments", response_model=List[EmployeePaymentRead])
def list_payments(
    employee_id: Optional[str] = Query(None),
    year: Optional[int] = Query(None, ge=1900, le=9999),
    month: Optional[int] = Query(None, ge=1, le=12),
    day: Optional[int] = Query(None, ge=1, le=31),
    db: Session = Depends(get_db),
    current_user: models.User = Depends(require_reader),
):
    payments = load_employee_payments(db, employee_id=employee_id)
    return filter_payments(payments, DateFilter(year, month, day))


@router.post(
    "/payments", response_model=List[EmployeePaymentRead], status_code=status.HTTP_201_CREATED
)
def create_payments(
    payload: EmployeePaymentCreate,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(require_writer),
):
    try:
        return payroll_service.register_payments(db=db, **payload.model_dump())
    except (FinboardError, ValueError) as exc:
        raise http_error_for(exc) from exc


@router.get("/kpis", response_model=PayrollKpisRead)
def payroll_kpis(
    today: date = Depends(get_today),
    db: Session = Depends(get_db),
    current_user: models.User = Depends(require_reader),
):
    return build_payroll_kpis(load_employees(db), load_employee_payments(db), today=today)


@router.delete("/{employee_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_employee(
    employee_id: str,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(require_writer),
):
    try:
        payroll_service.delete_employee(db=db, employee_id=employee_id)
    except FinboardError as exc:
        raise http_error_for(exc) from exc
