from decimal import Decimal


def _employee(api, **overrides):
    payload = {"name": "Ana", "role": "Analyst", "salary": "3000.00", "hire_date": "2023-02-01"}
    payload.update(overrides)
    resp = api.post("/api/employees", json=payload)
    assert resp.status_code == 201, resp.text
    return resp.json()


def test_multi_month_payment_run(api):
    employee = _employee(api)

    resp = api.post(
        "/api/employees/payments",
        json={
            "employee_id": employee["id"],
            "amount": "500.00",
            "payment_date": "2024-06-05",
            "payment_type": "bonus",
            "status": "paid",
            "installments": 3,
            "description": "Retention bonus",
        },
    )
    assert resp.status_code == 201, resp.text
    rows = resp.json()

    assert [r["description"] for r in rows] == [
        "Retention bonus (1/3)",
        "Retention bonus (2/3)",
        "Retention bonus (3/3)",
    ]
    assert [r["status"] for r in rows] == ["paid", "pending", "pending"]
    assert [r["payment_date"] for r in rows] == ["2024-06-05", "2024-07-05", "2024-08-05"]

    june = api.get("/api/employees/payments", params={"year": 2024, "month": 6}).json()
    assert len(june) == 1

    kpis = api.get("/api/employees/kpis", params={"as_of": "2024-06-20"}).json()
    assert kpis["active_employees"] == 1
    assert Decimal(kpis["total_salaries"]) == Decimal("3000")
    assert Decimal(kpis["total_payments"]) == Decimal("1500")
    assert Decimal(kpis["payments_this_month"]) == Decimal("500")
    assert Decimal(kpis["total_pending"]) == Decimal("1000")


def test_payment_for_unknown_employee_is_404(api):
    resp = api.post(
        "/api/employees/payments",
        json={"employee_id": "nope", "amount": "1.00", "payment_date": "2024-06-05"},
    )
    assert resp.status_code == 404


def test_commission_toggle(api):
    employee = _employee(api)
    created = api.post(
        "/api/commissions",
        json={
            "employee_id": employee["id"],
            "amount": "120.00",
            "percentage": "5.00",
            "commission_date": "2024-06-01",
        },
    ).json()
    assert created["status"] == "pending"

    paid = api.post(f"/api/commissions/{created['id']}/toggle", params={"as_of": "2024-06-10"})
    assert paid.json()["status"] == "paid"
    assert paid.json()["paid_date"] == "2024-06-10"

    kpis = api.get("/api/commissions/kpis").json()
    assert (kpis["paid_commissions"], kpis["pending_commissions"]) == (1, 0)
    assert Decimal(kpis["paid_value"]) == Decimal("120")

    back = api.post(f"/api/commissions/{created['id']}/toggle").json()
    assert back["status"] == "pending"
    assert back["paid_date"] is None

    assert api.post("/api/commissions/nope/toggle").status_code == 404


def test_delete_employee_removes_payments_and_commissions(api):
    employee = _employee(api)
    api.post(
        "/api/employees/payments",
        json={"employee_id": employee["id"], "amount": "10.00", "payment_date": "2024-06-05"},
    )
    api.post(
        "/api/commissions",
        json={"employee_id": employee["id"], "amount": "10.00", "commission_date": "2024-06-05"},
    )

    assert api.delete(f"/api/employees/{employee['id']}").status_code == 204
    assert api.get("/api/employees").json() == []
    assert api.get("/api/employees/payments").json() == []
    assert api.get("/api/commissions").json() == []
