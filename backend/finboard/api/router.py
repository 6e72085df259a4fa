from fastapi import APIRouter

from finboard.api.routes import (
    auth,
    clients,
    commissions,
    companies,
    dashboard,
    employees,
    fixed_bills,
    health,
    installments,
)

api_router = APIRouter()
api_router.include_router(health.router)
api_router.include_router(auth.router)
api_router.include_router(companies.router)
api_router.include_router(clients.router)
api_router.include_router(installments.router)
api_router.include_router(dashboard.router)
api_router.include_router(fixed_bills.router)
api_router.include_router(employees.router)
api_router.include_router(commissions.router)
