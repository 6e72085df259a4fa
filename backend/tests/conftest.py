# ruff: noqa: E402

import os

# Set before any finboard import so settings pick them up.
os.environ.setdefault("SECRET_KEY", "test-secret-key-1234567890")
os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("API_V1_STR", "/api")

from datetime import date
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from finboard import models
from finboard.api import deps
from finboard.database import Base
from finboard.main import app
from finboard.models.domain import InstallmentStatus
from finboard.services.records import (
    ClientRecord,
    ContractRecord,
    InstallmentRecord,
    PortfolioSnapshot,
    TenantScope,
)

TODAY = date(2024, 6, 15)


class StubUser:
    def __init__(self, role_name: models.RoleName):
        self.id = 1
        self.email = f"{role_name.value}@test.com"
        self.name = role_name.value
        self.active = True
        self.role = type("Role", (), {"name": role_name})()


@pytest.fixture(autouse=True)
def _restore_dependency_overrides():
    original = dict(app.dependency_overrides)
    try:
        yield
    finally:
        app.dependency_overrides = original


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )

    @event.listens_for(engine, "connect")
    def _enable_foreign_keys(dbapi_connection, _record):
        dbapi_connection.execute("PRAGMA foreign_keys=ON")

    Base.metadata.create_all(bind=engine)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine, future=True)
    try:
        yield factory
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def db_session(session_factory):
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def api(session_factory):
    """TestClient bound to a fresh database, acting as a financeiro user.

    Call ``api.as_role(RoleName.x)`` to switch the acting user.
    """

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[deps.get_db] = override_get_db

    def as_role(role_name: models.RoleName) -> None:
        user = StubUser(role_name)
        app.dependency_overrides[deps.get_current_user] = lambda: user
        app.dependency_overrides[deps.get_current_user_optional] = lambda: user

    client = TestClient(app)
    client.as_role = as_role
    as_role(models.RoleName.financeiro)
    return client


# Record builders for the derivation tests.


def client_rec(client_id: str, name: str | None = None, **kw) -> ClientRecord:
    return ClientRecord(id=client_id, name=name or client_id.title(), **kw)


def contract_rec(contract_id: str, client_id: str, total: str = "0", **kw) -> ContractRecord:
    return ContractRecord(
        id=contract_id,
        client_id=client_id,
        total_value=Decimal(total),
        start_date=kw.pop("start_date", date(2024, 1, 1)),
        **kw,
    )


def inst_rec(
    inst_id: str,
    contract_id: str,
    value: str,
    due: date,
    status: InstallmentStatus = InstallmentStatus.open,
    number: int = 1,
    total: int = 1,
    **kw,
) -> InstallmentRecord:
    return InstallmentRecord(
        id=inst_id,
        contract_id=contract_id,
        installment_number=number,
        total_installments=total,
        value=Decimal(value),
        due_date=due,
        status=status,
        **kw,
    )


def snapshot(clients=(), contracts=(), installments=()) -> PortfolioSnapshot:
    return PortfolioSnapshot(
        clients=tuple(clients), contracts=tuple(contracts), installments=tuple(installments)
    )


def scope(company_id: str | None = None, today: date = TODAY) -> TenantScope:
    return TenantScope(company_id=company_id, today=today)
