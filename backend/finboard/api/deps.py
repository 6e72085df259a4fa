from datetime import date
from typing import Callable, Optional

from fastapi import Depends, HTTPException, Query, Request, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from finboard.config import settings
from finboard.core.security import decode_access_token_subject
from finboard.database import get_db
from finboard.models import RoleName, User
from finboard.services.records import TenantScope


def _token_url() -> str:
    if settings.api_prefix:
        prefix = settings.api_prefix.rstrip("/")
        return f"{prefix}/auth/token"
    return "/auth/token"


oauth2_scheme = OAuth2PasswordBearer(tokenUrl=_token_url())
oauth2_optional = OAuth2PasswordBearer(tokenUrl=_token_url(), auto_error=False)

_DB_DEP = Depends(get_db)
_TOKEN_OPT_DEP = Depends(oauth2_optional)


def get_current_user(
    db: Session = _DB_DEP,
    token: Optional[str] = _TOKEN_OPT_DEP,
) -> User:
    if not token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")

    subject = decode_access_token_subject(token)
    if not subject:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    user = db.query(User).filter(User.email == subject, User.active.is_(True)).first()
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found or inactive",
        )
    return user


def get_current_user_optional(
    db: Session = _DB_DEP,
    token: Optional[str] = _TOKEN_OPT_DEP,
) -> Optional[User]:
    if not token:
        return None
    try:
        return get_current_user(db=db, token=token)
    except HTTPException:
        return None


_CURRENT_USER_OPT_DEP = Depends(get_current_user_optional)


def _role_value(user: User) -> str:
    role = getattr(getattr(user, "role", None), "name", None)
    if isinstance(role, RoleName):
        return role.value
    return str(role) if role is not None else ""


def require_roles(*roles: RoleName) -> Callable:
    """Dependency factory; with no roles any authenticated user passes."""

    _CURRENT_USER_DEP = Depends(get_current_user)
    allowed = {r.value if isinstance(r, RoleName) else str(r) for r in roles}

    def dependency(user: User = _CURRENT_USER_DEP) -> User:
        if not roles:
            return user
        user_role = _role_value(user)
        # Admin has access to everything
        if user_role == RoleName.admin.value:
            return user
        if user_role not in allowed:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Insufficient role")
        return user

    return dependency


require_reader = require_roles()
require_writer = require_roles(RoleName.admin, RoleName.financeiro)

_SAFE_METHODS = {"GET", "HEAD", "OPTIONS"}


def enforce_auditoria_readonly(
    request: Request,
    user: Optional[User] = _CURRENT_USER_OPT_DEP,
) -> None:
    """Auditoria is globally read-only, whatever a route's own role list says."""

    if not user or not user.role:
        return
    if user.role.name != RoleName.auditoria:
        return
    if request.method.upper() in _SAFE_METHODS:
        return
    raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Auditoria is read-only")


def get_tenant_scope(
    company_id: Optional[str] = Query(None, description="Restrict to one company."),
    as_of: Optional[date] = Query(None, description="Reference date; defaults to today."),
) -> TenantScope:
    return TenantScope(company_id=company_id or None, today=as_of or date.today())


def get_today(
    as_of: Optional[date] = Query(None, description="Reference date; defaults to today."),
) -> date:
    return as_of or date.today()
