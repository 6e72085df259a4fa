from datetime import date, timedelta
from decimal import Decimal

import pytest
from conftest import TODAY, inst_rec

from finboard.core.money import split_evenly, to_money
from finboard.models.domain import InstallmentStatus
from finboard.services.dates import DateFilter, add_months
from finboard.services.errors import InvalidTransitionError
from finboard.services.installment_transitions import mark_installment_paid, mark_installment_unpaid
from finboard.services.schedules import (
    contract_installment_schedule,
    employee_payment_schedule,
    fixed_bill_installment_schedule,
)


def test_to_money_rounds_half_up_and_handles_floats():
    assert to_money(0.1) == Decimal("0.10")
    assert to_money("2.345") == Decimal("2.35")
    assert to_money(None) == Decimal("0.00")


def test_split_evenly_puts_remainder_on_last_part():
    parts = split_evenly(Decimal("100"), 3)

    assert parts == [Decimal("33.33"), Decimal("33.33"), Decimal("33.34")]
    assert sum(parts) == Decimal("100.00")
    with pytest.raises(ValueError):
        split_evenly(Decimal("1"), 0)


def test_add_months_clamps_day_to_month_length():
    assert add_months(date(2024, 1, 31), 1) == date(2024, 2, 29)
    assert add_months(date(2024, 11, 15), 3, day=31) == date(2025, 2, 28)


def test_date_filter_components():
    d = date(2024, 6, 15)
    assert DateFilter().matches(d)
    assert not DateFilter().is_active
    assert DateFilter(year=2024, month=6).matches(d)
    assert not DateFilter(year=2024, month=7).matches(d)
    assert DateFilter(day=15).matches(d)
    assert not DateFilter(year=2023).matches(d)


def test_contract_schedule_starts_month_after_start_on_payment_day():
    schedule = contract_installment_schedule(Decimal("1000"), 3, 31, date(2024, 1, 20))

    assert [s.due_date for s in schedule] == [date(2024, 2, 29), date(2024, 3, 31), date(2024, 4, 30)]
    assert [s.installment_number for s in schedule] == [1, 2, 3]
    assert {s.total_installments for s in schedule} == {3}
    assert sum(s.value for s in schedule) == Decimal("1000.00")


def test_contract_schedule_validates_inputs():
    with pytest.raises(ValueError):
        contract_installment_schedule(Decimal("10"), 0, 10, TODAY)
    with pytest.raises(ValueError):
        contract_installment_schedule(Decimal("10"), 1, 32, TODAY)


def test_fixed_bill_schedule_starts_on_start_date():
    schedule = fixed_bill_installment_schedule(Decimal("300"), 3, date(2024, 1, 31))

    assert [s.due_date for s in schedule] == [date(2024, 1, 31), date(2024, 2, 29), date(2024, 3, 31)]
    assert [s.value for s in schedule] == [Decimal("100.00")] * 3


def test_employee_payment_schedule_suffixes_and_first_flag():
    rows = employee_payment_schedule(Decimal("250"), date(2024, 1, 5), 3, "Bonus")

    assert [r.description for r in rows] == ["Bonus (1/3)", "Bonus (2/3)", "Bonus (3/3)"]
    assert [r.first for r in rows] == [True, False, False]
    assert {r.amount for r in rows} == {Decimal("250.00")}
    assert rows[2].payment_date == date(2024, 3, 5)

    (single,) = employee_payment_schedule(Decimal("10"), date(2024, 1, 5), 1, "Salary")
    assert single.description == "Salary"


def test_mark_paid_and_unpaid():
    past_due = inst_rec("i", "k", "10", TODAY - timedelta(days=1), InstallmentStatus.overdue)

    paid = mark_installment_paid(past_due, paid_date=TODAY)
    assert paid.status == InstallmentStatus.paid
    assert paid.paid_date == TODAY

    assert mark_installment_unpaid(paid, today=TODAY).status == InstallmentStatus.overdue
    future = mark_installment_paid(
        inst_rec("j", "k", "10", TODAY, InstallmentStatus.open), paid_date=TODAY
    )
    reverted = mark_installment_unpaid(future, today=TODAY)
    assert reverted.status == InstallmentStatus.open
    assert reverted.paid_date is None


def test_invalid_installment_transitions():
    open_ = inst_rec("i", "k", "10", TODAY, InstallmentStatus.open)
    with pytest.raises(InvalidTransitionError):
        mark_installment_unpaid(open_, today=TODAY)
    paid = mark_installment_paid(open_, paid_date=TODAY)
    with pytest.raises(InvalidTransitionError):
        mark_installment_paid(paid, paid_date=TODAY)
