from finboard.services import (
    clients_service,
    fixed_bills_service,
    installments_service,
    payroll_service,
)
from finboard.services.errors import EntityNotFoundError, FinboardError, InvalidTransitionError

__all__ = [
    "EntityNotFoundError",
    "FinboardError",
    "InvalidTransitionError",
    "clients_service",
    "fixed_bills_service",
    "installments_service",
    "payroll_service",
]
