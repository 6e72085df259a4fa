from datetime import timedelta
from decimal import Decimal

from conftest import TODAY, client_rec, contract_rec, inst_rec, scope, snapshot

from finboard.models.domain import InstallmentStatus
from finboard.services.kpis import DashboardKpis, build_dashboard_kpis
from finboard.services.records import PortfolioSnapshot
from finboard.services.revenue import build_revenue_breakdown

PAID = InstallmentStatus.paid
OPEN = InstallmentStatus.open
OVERDUE = InstallmentStatus.overdue


def _portfolio():
    past = TODAY - timedelta(days=5)
    return snapshot(
        clients=[
            client_rec("a", company_id="co1"),
            client_rec("b", company_id="co1"),
            client_rec("c", company_id="co2"),
        ],
        contracts=[contract_rec("ka", "a"), contract_rec("kb", "b"), contract_rec("kc", "c")],
        installments=[
            inst_rec("a1", "ka", "100", past, OVERDUE, 1, 2),
            inst_rec("a2", "ka", "100", past, OVERDUE, 2, 2),
            inst_rec("b1", "kb", "40", TODAY, OPEN),
            inst_rec("c1", "kc", "70", past, OVERDUE),
            inst_rec("c2", "kc", "999", past, PAID, paid_date=past),
        ],
    )


def test_kpis_are_zero_until_everything_is_loaded():
    partial = PortfolioSnapshot(clients=(client_rec("a"),), contracts=(), installments=None)

    assert build_dashboard_kpis(partial, scope()) == DashboardKpis()


def test_kpis_over_whole_portfolio():
    kpis = build_dashboard_kpis(_portfolio(), scope())

    assert kpis.total_clients == 3
    assert kpis.total_open_value == Decimal("310.00")
    assert kpis.total_overdue_value == Decimal("270.00")
    assert kpis.clients_with_overdue == 2


def test_kpis_for_one_company():
    kpis = build_dashboard_kpis(_portfolio(), scope(company_id="co1"))

    assert kpis.total_clients == 2
    assert kpis.total_open_value == Decimal("240.00")
    assert kpis.total_overdue_value == Decimal("200.00")
    assert kpis.clients_with_overdue == 1


def test_overdue_client_counted_even_when_client_row_is_missing():
    snap = snapshot(
        clients=[],
        contracts=[contract_rec("k", "ghost")],
        installments=[inst_rec("i", "k", "10", TODAY - timedelta(days=1), OVERDUE)],
    )

    assert build_dashboard_kpis(snap, scope()).clients_with_overdue == 1


def test_revenue_breakdown_totals_and_slices():
    revenue = build_revenue_breakdown(_portfolio(), scope())

    assert revenue.received == Decimal("999.00")
    assert revenue.open == Decimal("40.00")
    assert revenue.overdue == Decimal("270.00")
    assert revenue.receivable == Decimal("310.00")
    assert revenue.grand_total == Decimal("1309.00")
    assert revenue.total_count == 5
    assert [s.label for s in revenue.slices] == ["received", "open", "overdue"]


def test_revenue_omits_empty_slices():
    snap = snapshot(installments=[inst_rec("i", "k", "10", TODAY, OPEN)])

    revenue = build_revenue_breakdown(snap, scope())

    assert [s.label for s in revenue.slices] == ["open"]
    assert revenue.received_count == 0


def test_value_tiles_ignore_installments_without_a_known_client():
    past = TODAY - timedelta(days=3)
    snap = snapshot(
        clients=[client_rec("a")],
        contracts=[contract_rec("ka", "a"), contract_rec("kg", "ghost")],
        installments=[
            inst_rec("a1", "ka", "50", past, OVERDUE),
            inst_rec("orphan", "missing", "999", past, OVERDUE),
            inst_rec("g1", "kg", "400", TODAY, OPEN),
        ],
    )

    kpis = build_dashboard_kpis(snap, scope())

    assert kpis.total_overdue_value == Decimal("50.00")
    assert kpis.total_open_value == Decimal("50.00")
    assert kpis.clients_with_overdue == 1
