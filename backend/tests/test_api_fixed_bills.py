from decimal import Decimal

BILL = {
    "name": "Office rent",
    "total_value": "1500.00",
    "total_installments": 3,
    "start_date": "2024-05-10",
}


def _create(api, **overrides):
    resp = api.post("/api/fixed-bills", json={**BILL, **overrides})
    assert resp.status_code == 201, resp.text
    return resp.json()


def _list(api, **params):
    resp = api.get("/api/fixed-bills", params={"as_of": "2024-06-15", **params})
    assert resp.status_code == 200, resp.text
    return resp.json()


def test_create_and_list_with_projected_overdue(api):
    _create(api)

    body = _list(api)

    (item,) = body["items"]
    installments = item["installments"]
    assert [i["due_date"] for i in installments] == ["2024-05-10", "2024-06-10", "2024-07-10"]
    assert {i["status"] for i in installments} == {"open"}
    assert [i["effective_status"] for i in installments] == ["overdue", "overdue", "open"]
    assert item["overdue_count"] == 2
    assert Decimal(item["total_pending"]) == Decimal("1500")
    assert body["totals"]["bills"] == 1


def test_pay_with_discount_then_reopen(api):
    _create(api)
    first = _list(api)["items"][0]["installments"][0]

    paid = api.post(
        f"/api/fixed-bills/installments/{first['id']}/pay",
        params={"as_of": "2024-06-15"},
        json={"discount": "50.00", "payment_method": "boleto", "notes": "early"},
    )
    assert paid.status_code == 200, paid.text
    paid = paid.json()
    assert paid["status"] == "paid"
    assert paid["effective_status"] == "paid"
    assert Decimal(paid["value"]) == Decimal("450")
    assert Decimal(paid["discount"]) == Decimal("50")
    assert paid["paid_date"] == "2024-06-15"

    totals = _list(api)["totals"]
    assert Decimal(totals["total_paid"]) == Decimal("450")
    assert Decimal(totals["total_discount"]) == Decimal("50")

    reopened = api.post(f"/api/fixed-bills/installments/{first['id']}/reopen").json()
    assert reopened["status"] == "open"
    assert Decimal(reopened["value"]) == Decimal("500")
    assert Decimal(reopened["discount"]) == 0
    assert reopened["paid_date"] is None


def test_invalid_fixed_bill_transitions(api):
    _create(api)
    first = _list(api)["items"][0]["installments"][0]
    url = f"/api/fixed-bills/installments/{first['id']}"

    assert api.post(f"{url}/reopen").status_code == 409
    assert api.post(f"{url}/pay", json={"discount": "900.00"}).status_code == 400
    assert api.post(f"{url}/pay").status_code == 200
    assert api.post(f"{url}/pay").status_code == 409
    assert api.post("/api/fixed-bills/installments/nope/pay").status_code == 404


def test_month_filter_drops_bills_without_matching_installments(api):
    _create(api)
    _create(api, name="Software", total_installments=1, start_date="2024-09-01", total_value="99.90")

    assert len(_list(api)["items"]) == 2
    june = _list(api, year=2024, month=6)
    assert [i["bill"]["name"] for i in june["items"]] == ["Office rent"]
    assert [i["due_date"] for i in june["items"][0]["installments"]] == ["2024-06-10"]


def test_delete_fixed_bill(api):
    bill = _create(api)

    assert api.delete(f"/api/fixed-bills/{bill['id']}").status_code == 204
    assert _list(api)["items"] == []
    assert api.delete(f"/api/fixed-bills/{bill['id']}").status_code == 404
