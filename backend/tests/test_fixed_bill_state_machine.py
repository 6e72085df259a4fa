from datetime import date, timedelta
from decimal import Decimal

import pytest
from conftest import TODAY

from finboard.models.domain import InstallmentStatus
from finboard.services.dates import DateFilter
from finboard.services.errors import InvalidTransitionError
from finboard.services.fixed_bills import (
    pay_fixed_bill_installment,
    projected_status,
    reopen_fixed_bill_installment,
    summarize_fixed_bills,
    total_fixed_bills,
)
from finboard.services.records import FixedBillInstallmentRecord, FixedBillRecord


def _installment(**kw) -> FixedBillInstallmentRecord:
    defaults = dict(
        id="fi1",
        fixed_bill_id="fb1",
        installment_number=1,
        value=Decimal("500.00"),
        original_value=Decimal("500.00"),
        due_date=TODAY,
        discount=Decimal("0.00"),
    )
    defaults.update(kw)
    return FixedBillInstallmentRecord(**defaults)


def test_pay_applies_discount_and_keeps_original_value():
    paid = pay_fixed_bill_installment(
        _installment(), paid_date=TODAY, payment_method="pix", discount=Decimal("50")
    )

    assert paid.status == InstallmentStatus.paid
    assert paid.value == Decimal("450.00")
    assert paid.original_value == Decimal("500.00")
    assert paid.discount == Decimal("50.00")
    assert paid.paid_date == TODAY
    assert paid.payment_method == "pix"


def test_pay_then_reopen_restores_value_and_clears_discount():
    before = _installment()

    paid = pay_fixed_bill_installment(
        before, paid_date=TODAY, payment_method="boleto", discount=Decimal("75.50")
    )
    reopened = reopen_fixed_bill_installment(paid)

    assert reopened.status == InstallmentStatus.open
    assert reopened.value == before.value
    assert not reopened.discount
    assert reopened.paid_date is None
    assert reopened.payment_method is None


def test_reopen_without_original_value_adds_discount_back():
    paid = _installment(
        status=InstallmentStatus.paid,
        value=Decimal("90.00"),
        original_value=None,
        discount=Decimal("10.00"),
        paid_date=TODAY,
    )

    assert reopen_fixed_bill_installment(paid).value == Decimal("100.00")


def test_pay_is_allowed_from_overdue_projection():
    late = _installment(due_date=TODAY - timedelta(days=3))
    assert projected_status(late, TODAY) == InstallmentStatus.overdue

    paid = pay_fixed_bill_installment(
        _installment(status=InstallmentStatus.overdue), paid_date=TODAY, payment_method="pix"
    )
    assert paid.status == InstallmentStatus.paid


def test_paying_twice_is_rejected():
    paid = pay_fixed_bill_installment(_installment(), paid_date=TODAY, payment_method="pix")

    with pytest.raises(InvalidTransitionError) as exc:
        pay_fixed_bill_installment(paid, paid_date=TODAY, payment_method="pix")

    assert exc.value.current == "paid"
    assert exc.value.allowed_from == ["open", "overdue"]


def test_reopening_an_open_installment_is_rejected():
    with pytest.raises(InvalidTransitionError):
        reopen_fixed_bill_installment(_installment())


@pytest.mark.parametrize("discount", [Decimal("-1"), Decimal("500.01")])
def test_discount_must_fit_the_installment(discount):
    with pytest.raises(ValueError):
        pay_fixed_bill_installment(
            _installment(), paid_date=TODAY, payment_method="pix", discount=discount
        )


def test_summaries_and_totals():
    bill = FixedBillRecord(
        id="fb1",
        name="Rent",
        total_value=Decimal("1500"),
        total_installments=3,
        start_date=date(2024, 5, 1),
    )
    empty_bill = FixedBillRecord(
        id="fb2",
        name="Unused",
        total_value=Decimal("10"),
        total_installments=1,
        start_date=date(2024, 5, 1),
    )
    installments = [
        _installment(
            id="a",
            due_date=date(2024, 5, 1),
            status=InstallmentStatus.paid,
            value=Decimal("480"),
            discount=Decimal("20"),
            paid_date=date(2024, 5, 1),
        ),
        _installment(id="b", installment_number=2, due_date=date(2024, 6, 1)),
        _installment(id="c", installment_number=3, due_date=date(2024, 7, 1)),
    ]

    summaries = summarize_fixed_bills([bill, empty_bill], installments, today=TODAY)

    assert [s.bill.id for s in summaries] == ["fb1", "fb2"]
    rent = summaries[0]
    assert rent.total_paid == Decimal("480.00")
    assert rent.total_pending == Decimal("1000.00")
    assert rent.total_discount == Decimal("20.00")
    assert rent.next_due_date == date(2024, 6, 1)
    assert rent.overdue_count == 1

    totals = total_fixed_bills(summaries)
    assert totals.bills == 2
    assert totals.total_pending == Decimal("1000.00")
    assert totals.overdue_count == 1

    june = summarize_fixed_bills(
        [bill, empty_bill], installments, today=TODAY, date_filter=DateFilter(2024, 6)
    )
    assert [s.bill.id for s in june] == ["fb1"]
    assert [i.id for i in june[0].installments] == ["b"]
