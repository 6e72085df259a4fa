import logging

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from finboard import models
from finboard.api.deps import get_current_user
from finboard.core.security import create_access_token_for_subject, hash_password, verify_password
from finboard.database import get_db
from finboard.schemas import Token, UserCreate, UserRead

router = APIRouter(prefix="/auth", tags=["auth"])
logger = logging.getLogger("finboard.auth")


@router.post("/token", response_model=Token)
def login_for_access_token(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db),
):
    try:
        user = db.query(models.User).filter(models.User.email == form_data.username).first()
    except SQLAlchemyError:
        logger.exception("auth_login_db_error", extra={"email": form_data.username})
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Database unavailable or not initialised. Try again shortly.",
        )
    if not user or not verify_password(form_data.password, user.hashed_password):
        logger.info("auth_login_failed", extra={"email": form_data.username})
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Incorrect email or password"
        )
    if not user.active:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Inactive user")

    logger.info("auth_login_success", extra={"user_id": user.id})
    return Token(access_token=create_access_token_for_subject(user.email))


@router.get("/me")
def read_current_user(current_user: models.User = Depends(get_current_user)):
    return {
        "id": current_user.id,
        "email": current_user.email,
        "name": current_user.name,
        "role": current_user.role.name if current_user.role else None,
    }


@router.post("/signup", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def signup(payload: UserCreate, db: Session = Depends(get_db)):
    if db.query(models.User).filter(models.User.email == payload.email).first():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Email already registered"
        )

    # Public signup never grants privileges; other roles are assigned out of band.
    if payload.role != models.RoleName.comercial:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Role assignment is not allowed via signup",
        )

    role = db.query(models.Role).filter(models.Role.name == models.RoleName.comercial).first()
    if not role:
        role = models.Role(name=models.RoleName.comercial, description="comercial")
        db.add(role)
        db.flush()

    user = models.User(
        email=payload.email,
        name=payload.name,
        hashed_password=hash_password(payload.password),
        role_id=role.id,
        active=True,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("auth_signup", extra={"user_id": user.id})
    return user
