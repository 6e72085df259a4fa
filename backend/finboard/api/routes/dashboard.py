"""Dashboard read models.

Every view is derived from one in-memory snapshot of clients, contracts and
installments, filtered by the request's tenant scope.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from finboard import models
from finboard.api.deps import get_tenant_scope, require_reader
from finboard.database import get_db
from finboard.schemas import (
    ClientDebtRead,
    DashboardKpisRead,
    DashboardSummaryRead,
    DataQualityRead,
    OverdueInstallmentRead,
    RevenueRead,
    StatusSummaryRead,
    UpcomingInstallmentRead,
)
from finboard.services.collections import overdue_installments, upcoming_installments
from finboard.services.debt_rollup import (
    build_client_debt_rollups,
    count_orphan_installments,
    filter_rollups,
)
from finboard.services.entity_store import load_portfolio_snapshot
from finboard.services.kpis import build_dashboard_kpis
from finboard.services.records import TenantScope
from finboard.services.revenue import build_revenue_breakdown
from finboard.services.status_crosstab import build_status_crosstab

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/kpis", response_model=DashboardKpisRead)
def dashboard_kpis(
    scope: TenantScope = Depends(get_tenant_scope),
    db: Session = Depends(get_db),
    current_user: models.User = Depends(require_reader),
):
    return build_dashboard_kpis(load_portfolio_snapshot(db), scope)


@router.get("/debts", response_model=List[ClientDebtRead])
def client_debts(
    q: Optional[str] = Query(None, description="Search by name, document, e-mail or phone."),
    scope: TenantScope = Depends(get_tenant_scope),
    db: Session = Depends(get_db),
    current_user: models.User = Depends(require_reader),
):
    rollups = build_client_debt_rollups(load_portfolio_snapshot(db), scope)
    return filter_rollups(rollups, q)


@router.get("/overdue", response_model=List[OverdueInstallmentRead])
def overdue(
    scope: TenantScope = Depends(get_tenant_scope),
    db: Session = Depends(get_db),
    current_user: models.User = Depends(require_reader),
):
    return overdue_installments(load_portfolio_snapshot(db), scope)


@router.get("/upcoming", response_model=List[UpcomingInstallmentRead])
def upcoming(
    scope: TenantScope = Depends(get_tenant_scope),
    db: Session = Depends(get_db),
    current_user: models.User = Depends(require_reader),
):
    return upcoming_installments(load_portfolio_snapshot(db), scope)


@router.get("/status-summary", response_model=List[StatusSummaryRead])
def status_summary(
    scope: TenantScope = Depends(get_tenant_scope),
    db: Session = Depends(get_db),
    current_user: models.User = Depends(require_reader),
):
    return build_status_crosstab(load_portfolio_snapshot(db), scope)


@router.get("/revenue", response_model=RevenueRead)
def revenue(
    scope: TenantScope = Depends(get_tenant_scope),
    db: Session = Depends(get_db),
    current_user: models.User = Depends(require_reader),
):
    # Validate here: the computed totals are properties, which asdict() would drop.
    return RevenueRead.model_validate(build_revenue_breakdown(load_portfolio_snapshot(db), scope))


@router.get("/summary", response_model=DashboardSummaryRead)
def summary(
    scope: TenantScope = Depends(get_tenant_scope),
    db: Session = Depends(get_db),
    current_user: models.User = Depends(require_reader),
):
    snapshot = load_portfolio_snapshot(db)
    return DashboardSummaryRead(
        as_of=scope.today,
        company_id=scope.company_id,
        kpis=DashboardKpisRead.model_validate(build_dashboard_kpis(snapshot, scope)),
        debts=[ClientDebtRead.model_validate(r) for r in build_client_debt_rollups(snapshot, scope)],
        overdue=[OverdueInstallmentRead.model_validate(r) for r in overdue_installments(snapshot, scope)],
        upcoming=[
            UpcomingInstallmentRead.model_validate(r) for r in upcoming_installments(snapshot, scope)
        ],
        status_summary=[
            StatusSummaryRead.model_validate(r) for r in build_status_crosstab(snapshot, scope)
        ],
        revenue=RevenueRead.model_validate(build_revenue_breakdown(snapshot, scope)),
        data_quality=DataQualityRead(orphan_installments=count_orphan_installments(snapshot)),
    )
