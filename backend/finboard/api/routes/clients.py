from datetime import date
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import or_
from sqlalchemy.orm import Session, selectinload

from finboard import models
from finboard.api.deps import get_today, require_reader, require_writer
from finboard.api.errors import http_error_for
from finboard.database import get_db
from finboard.schemas import ClientCreate, ClientDetailRead, ClientRead, ClientUpdate
from finboard.services import clients_service
from finboard.services.errors import FinboardError

router = APIRouter(prefix="/clients", tags=["clients"])


@router.get("", response_model=List[ClientRead])
def list_clients(
    q: str | None = Query(None, description="Search by name, document, e-mail or phone."),
    company_id: str | None = Query(None),
    limit: int = Query(200, ge=1, le=1000),
    db: Session = Depends(get_db),
    current_user: models.User = Depends(require_reader),
):
    query = db.query(models.Client)
    if company_id:
        query = query.filter(models.Client.company_id == company_id)
    if q and q.strip():
        like_any = f"%{q.strip()}%"
        query = query.filter(
            or_(
                models.Client.name.ilike(like_any),
                models.Client.document.ilike(like_any),
                models.Client.email.ilike(like_any),
                models.Client.phone.ilike(like_any),
            )
        )
    return query.order_by(models.Client.name.asc()).limit(limit).all()


@router.get("/{client_id}", response_model=ClientDetailRead)
def get_client(
    client_id: str,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(require_reader),
):
    client = (
        db.query(models.Client)
        .options(selectinload(models.Client.contracts).selectinload(models.Contract.installments))
        .filter(models.Client.id == client_id)
        .first()
    )
    if not client:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Client not found")
    return client


@router.post("", response_model=ClientDetailRead, status_code=status.HTTP_201_CREATED)
def create_client(
    payload: ClientCreate,
    today: date = Depends(get_today),
    db: Session = Depends(get_db),
    current_user: models.User = Depends(require_writer),
):
    try:
        return clients_service.register_client(db=db, today=today, **payload.model_dump())
    except (FinboardError, ValueError) as exc:
        raise http_error_for(exc) from exc


@router.patch("/{client_id}", response_model=ClientRead)
def update_client(
    client_id: str,
    payload: ClientUpdate,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(require_writer),
):
    try:
        return clients_service.update_client(
            db=db, client_id=client_id, changes=payload.model_dump(exclude_unset=True)
        )
    except (FinboardError, ValueError) as exc:
        raise http_error_for(exc) from exc


@router.delete("/{client_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_client(
    client_id: str,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(require_writer),
):
    try:
        clients_service.delete_client(db=db, client_id=client_id)
    except FinboardError as exc:
        raise http_error_for(exc) from exc
