import logging

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import OperationalError

from finboard import models
from finboard.api.deps import enforce_auditoria_readonly
from finboard.api.router import api_router
from finboard.config import settings
from finboard.core.observability import global_exception_handler, request_logging_middleware
from finboard.core.security import hash_password
from finboard.database import SessionLocal

api_prefix = (
    settings.api_prefix
    if settings.api_prefix.startswith("/")
    else f"/{settings.api_prefix}"
    if settings.api_prefix
    else ""
)

logger = logging.getLogger("finboard")
logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s %(message)s")

app = FastAPI(
    title=settings.app_name,
    version=settings.build_version or "0.1.0",
    docs_url="/docs" if settings.enable_docs else None,
    redoc_url="/redoc" if settings.enable_docs else None,
    openapi_url=(f"{api_prefix}/openapi.json" if api_prefix else "/openapi.json")
    if settings.enable_docs
    else None,
    dependencies=[Depends(enforce_auditoria_readonly)],
)

# Expose logger for middleware without creating circular imports.
app.state.logger = logger

app.add_exception_handler(Exception, global_exception_handler)
app.middleware("http")(request_logging_middleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix=api_prefix)


def _seed_dev_users() -> None:
    env = str(settings.environment or "dev").lower()
    if env in {"prod", "production", "test"}:
        return

    db = SessionLocal()
    try:
        for role_name in models.RoleName:
            role = db.query(models.Role).filter(models.Role.name == role_name).first()
            if not role:
                db.add(models.Role(name=role_name, description=role_name.value))
        db.flush()

        def ensure_user(email: str, name: str, role_name: models.RoleName) -> None:
            if db.query(models.User).filter(models.User.email == email).first():
                return
            role = db.query(models.Role).filter(models.Role.name == role_name).first()
            db.add(
                models.User(
                    email=email,
                    name=name,
                    hashed_password=hash_password("123"),
                    role_id=role.id,
                    active=True,
                )
            )

        ensure_user("admin@finboard.local", "Admin", models.RoleName.admin)
        ensure_user("financeiro@finboard.local", "Financeiro", models.RoleName.financeiro)
        ensure_user("auditoria@finboard.local", "Auditoria", models.RoleName.auditoria)
        db.commit()
    except OperationalError as e:
        # Tables missing until migrations run; don't block startup.
        logger.warning("dev_user_seed_failed", extra={"error": str(e)})
        db.rollback()
    finally:
        db.close()


@app.on_event("startup")
def _startup() -> None:
    logger.info(
        "runtime_config",
        extra={"environment": settings.environment, "api_prefix": api_prefix},
    )
    _seed_dev_users()


@app.get("/", tags=["meta"])
def root():
    docs_path = (
        (f"{api_prefix}/openapi.json" if api_prefix else "/openapi.json")
        if settings.enable_docs
        else None
    )
    return {"message": settings.app_name, "docs": docs_path}
