from datetime import timedelta
from decimal import Decimal

from conftest import TODAY, client_rec, contract_rec, inst_rec, scope, snapshot

from finboard.models.domain import InstallmentStatus
from finboard.services.collections import overdue_installments, upcoming_installments
from finboard.services.dates import days_overdue
from finboard.services.records import PortfolioSnapshot

PAID = InstallmentStatus.paid
OPEN = InstallmentStatus.open
OVERDUE = InstallmentStatus.overdue


def test_days_overdue_is_zero_on_due_date_and_grows_daily():
    due = TODAY
    assert days_overdue(due, TODAY) == 0
    assert days_overdue(due, TODAY + timedelta(days=1)) == 1
    assert days_overdue(due, TODAY - timedelta(days=5)) == 0

    previous = 0
    for offset in range(0, 60):
        current = days_overdue(due, TODAY + timedelta(days=offset))
        assert current >= previous
        previous = current


def test_overdue_list_sorted_by_due_date_with_client_names():
    snap = snapshot(
        clients=[client_rec("c1", "Ana"), client_rec("c2", "Bruno")],
        contracts=[contract_rec("k1", "c1"), contract_rec("k2", "c2")],
        installments=[
            inst_rec("late", "k1", "100", TODAY - timedelta(days=3), OVERDUE),
            inst_rec("later", "k2", "100", TODAY - timedelta(days=30), OVERDUE),
            inst_rec("fine", "k2", "100", TODAY - timedelta(days=30), PAID),
            inst_rec("stale-open", "k2", "100", TODAY - timedelta(days=30), OPEN),
        ],
    )

    rows = overdue_installments(snap, scope())

    assert [r.installment.id for r in rows] == ["later", "late"]
    assert [r.client_name for r in rows] == ["Bruno", "Ana"]
    assert [r.days_overdue for r in rows] == [30, 3]


def test_overdue_uses_placeholder_for_unresolvable_rows():
    snap = snapshot(
        clients=[],
        contracts=[contract_rec("k1", "gone")],
        installments=[
            inst_rec("a", "k1", "10", TODAY - timedelta(days=1), OVERDUE),
            inst_rec("b", "nowhere", "10", TODAY - timedelta(days=2), OVERDUE),
        ],
    )

    rows = overdue_installments(snap, scope(), placeholder="Desconhecido")

    assert [(r.client_id, r.client_name) for r in rows] == [
        (None, "Desconhecido"),
        ("gone", "Desconhecido"),
    ]


def test_overdue_default_placeholder_comes_from_settings():
    snap = snapshot(
        installments=[inst_rec("a", "nowhere", "10", TODAY - timedelta(days=1), OVERDUE)]
    )

    (row,) = overdue_installments(snap, scope())

    assert row.client_name == "unknown"


def test_upcoming_includes_open_due_today_but_not_paid_due_today():
    snap = snapshot(
        clients=[client_rec("c1")],
        contracts=[contract_rec("k1", "c1")],
        installments=[
            inst_rec("paid-today", "k1", "10", TODAY, PAID, paid_date=TODAY),
            inst_rec("open-today", "k1", "10", TODAY, OPEN),
            inst_rec("open-next", "k1", "10", TODAY + timedelta(days=10), OPEN),
            inst_rec("open-past", "k1", "10", TODAY - timedelta(days=1), OPEN),
        ],
    )

    rows = upcoming_installments(snap, scope())

    assert [r.installment.id for r in rows] == ["open-today", "open-next"]
    assert rows[0].installment.value == Decimal("10")


def test_collections_empty_until_loaded():
    partial = PortfolioSnapshot(clients=(), contracts=(), installments=None)

    assert overdue_installments(partial, scope()) == []
    assert upcoming_installments(partial, scope()) == []
