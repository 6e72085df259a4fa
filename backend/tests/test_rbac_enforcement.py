import pytest
from fastapi import HTTPException

from finboard import models
from finboard.api import deps
from finboard.main import app

CLIENT = {
    "name": "Eva",
    "total_value": "100.00",
    "total_installments": 1,
    "payment_day": 5,
    "start_date": "2024-01-01",
}


@pytest.mark.parametrize("role", [models.RoleName.comercial, models.RoleName.auditoria])
def test_non_finance_roles_cannot_write(api, role):
    api.as_role(role)

    assert api.post("/api/clients", json=CLIENT).status_code == 403
    assert api.post("/api/installments/refresh-overdue").status_code == 403
    assert api.get("/api/clients").status_code == 200


def test_admin_can_write(api):
    api.as_role(models.RoleName.admin)

    assert api.post("/api/clients", json=CLIENT).status_code == 201


def test_auditoria_is_read_only_even_where_roles_would_allow():
    user = type("User", (), {"role": type("Role", (), {"name": models.RoleName.auditoria})()})()
    request = type("Request", (), {"method": "POST"})()

    with pytest.raises(HTTPException) as exc:
        deps.enforce_auditoria_readonly(request, user)
    assert exc.value.status_code == 403

    get_request = type("Request", (), {"method": "GET"})()
    assert deps.enforce_auditoria_readonly(get_request, user) is None


def test_unauthenticated_requests_are_rejected(api):
    app.dependency_overrides.pop(deps.get_current_user, None)
    app.dependency_overrides.pop(deps.get_current_user_optional, None)

    assert api.get("/api/dashboard/kpis").status_code == 401
    resp = api.get("/api/dashboard/kpis", headers={"Authorization": "Bearer not-a-token"})
    assert resp.status_code == 401
