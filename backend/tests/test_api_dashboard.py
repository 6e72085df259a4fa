from decimal import Decimal

from finboard import models


def _register(api, **overrides):
    payload = {
        "name": "Ana",
        "email": "ana@example.com",
        "total_value": "1200.00",
        "total_installments": 3,
        "payment_day": 10,
        "start_date": "2024-01-20",
    }
    payload.update(overrides)
    resp = api.post("/api/clients?as_of=2024-03-15", json=payload)
    assert resp.status_code == 201, resp.text
    return resp.json()


def _installments(client_json):
    return client_json["contracts"][0]["installments"]


def test_dashboard_views_for_one_client(api):
    client = _register(api)
    first = _installments(client)[0]
    assert api.post(f"/api/installments/{first['id']}/pay?as_of=2024-03-15").status_code == 200

    debts = api.get("/api/dashboard/debts", params={"as_of": "2024-03-15"}).json()
    assert len(debts) == 1
    assert Decimal(debts[0]["total_debt"]) == Decimal("800")
    assert debts[0]["overdue_count"] == 1
    assert debts[0]["oldest_overdue"] == "2024-03-10"

    kpis = api.get("/api/dashboard/kpis", params={"as_of": "2024-03-15"}).json()
    assert kpis["total_clients"] == 1
    assert Decimal(kpis["total_open_value"]) == Decimal("800")
    assert Decimal(kpis["total_overdue_value"]) == Decimal("400")
    assert kpis["clients_with_overdue"] == 1

    buckets = api.get("/api/dashboard/status-summary", params={"as_of": "2024-03-15"}).json()
    assert [b["status"] for b in buckets] == ["overdue", "open", "paid"]
    assert buckets[0]["count"] == 1
    assert buckets[0]["avg_days_overdue"] == 5

    overdue = api.get("/api/dashboard/overdue", params={"as_of": "2024-03-15"}).json()
    assert [(o["client_name"], o["days_overdue"]) for o in overdue] == [("Ana", 5)]

    upcoming = api.get("/api/dashboard/upcoming", params={"as_of": "2024-03-15"}).json()
    assert [u["installment"]["due_date"] for u in upcoming] == ["2024-04-10"]


def test_debts_search(api):
    _register(api, name="Ana", email="ana@example.com")
    _register(api, name="Bruno", email="bruno@example.com", total_value="300.00")

    hits = api.get("/api/dashboard/debts", params={"q": "BRU", "as_of": "2024-03-15"}).json()

    assert [h["client"]["name"] for h in hits] == ["Bruno"]


def test_company_scope(api):
    company = api.post(
        "/api/companies", json={"name": "Acme", "cnpj": "12345678000199", "state": "sp"}
    ).json()
    assert company["state"] == "SP"
    _register(api, name="Scoped", company_id=company["id"])
    _register(api, name="Other")

    kpis = api.get(
        "/api/dashboard/kpis", params={"company_id": company["id"], "as_of": "2024-03-15"}
    ).json()
    assert kpis["total_clients"] == 1

    everything = api.get("/api/dashboard/kpis", params={"as_of": "2024-03-15"}).json()
    assert everything["total_clients"] == 2


def test_summary_bundles_every_view(api):
    _register(api)

    summary = api.get("/api/dashboard/summary", params={"as_of": "2024-03-15"}).json()

    assert summary["as_of"] == "2024-03-15"
    assert summary["kpis"]["total_clients"] == 1
    assert len(summary["debts"]) == 1
    assert len(summary["status_summary"]) == 3
    assert Decimal(summary["revenue"]["grand_total"]) == Decimal("1200")
    assert summary["data_quality"] == {"orphan_installments": 0}


def test_empty_dashboard(api):
    kpis = api.get("/api/dashboard/kpis").json()
    assert kpis["total_clients"] == 0
    assert Decimal(kpis["total_open_value"]) == 0

    buckets = api.get("/api/dashboard/status-summary").json()
    assert [b["count"] for b in buckets] == [0, 0, 0]


def test_dashboard_is_readable_by_any_role(api):
    api.as_role(models.RoleName.comercial)
    assert api.get("/api/dashboard/revenue").status_code == 200
