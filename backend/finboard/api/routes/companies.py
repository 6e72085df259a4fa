from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from finboard import models
from finboard.api.deps import require_reader, require_writer
from finboard.database import get_db
from finboard.schemas import CompanyCreate, CompanyRead

router = APIRouter(prefix="/companies", tags=["companies"])


@router.get("", response_model=List[CompanyRead])
def list_companies(
    db: Session = Depends(get_db),
    current_user: models.User = Depends(require_reader),
):
    return db.query(models.Company).order_by(models.Company.name.asc()).all()


@router.post("", response_model=CompanyRead, status_code=status.HTTP_201_CREATED)
def create_company(
    payload: CompanyCreate,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(require_writer),
):
    if db.query(models.Company).filter(models.Company.cnpj == payload.cnpj).first():
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="CNPJ already registered")
    company = models.Company(**payload.model_dump())
    db.add(company)
    db.commit()
    db.refresh(company)
    return company
