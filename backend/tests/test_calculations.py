# Overview: Pytest coverage for booking derived fields and report aggregation.

"""
Calculation Tests

Pure arithmetic over plain records; no database or app context needed.
"""

from datetime import date, datetime
from types import SimpleNamespace

from sindbad import calculations
from sindbad.calculations import RecordSnapshot, report_figures


DAY = date(2026, 1, 15)
OTHER_DAY = date(2026, 1, 16)


def make_booking(total, deposit, is_paid=False, created_at=None, customer_id="c1"):
    booking = SimpleNamespace(
        customer_id=customer_id,
        total_amount_cents=total,
        visa_deposit_cents=deposit,
        is_paid=is_paid,
        remaining_amount_cents=None,
        created_at=created_at or datetime(2026, 1, 15, 9, 30),
    )
    calculations.apply_derived_fields(booking)
    return booking


def make_expense(amount, day):
    return SimpleNamespace(amount_cents=amount, date=day)


def make_debt(amount, debt_type, is_paid=False):
    return SimpleNamespace(amount_cents=amount, type=debt_type, is_paid=is_paid, date=DAY)


class TestDerivedFields:
    def test_unpaid_remaining_is_total_minus_deposit(self):
        booking = make_booking(10000, 2000)
        assert booking.remaining_amount_cents == 8000

    def test_toggle_paid_zeroes_then_restores_remaining(self):
        booking = make_booking(10000, 2000)

        calculations.toggle_paid(booking)
        assert booking.is_paid is True
        assert booking.remaining_amount_cents == 0

        calculations.toggle_paid(booking)
        assert booking.is_paid is False
        assert booking.remaining_amount_cents == 8000

    def test_full_deposit_leaves_nothing_remaining(self):
        assert calculations.compute_remaining_cents(5000, 5000, False) == 0

    def test_paid_booking_has_no_remaining(self):
        assert calculations.compute_remaining_cents(5000, 1000, True) == 0


class TestAggregation:
    def test_daily_expense_total_filters_by_day(self):
        snapshot = RecordSnapshot(expenses=[make_expense(500, DAY), make_expense(300, OTHER_DAY)])

        assert calculations.daily_expense_total(snapshot, DAY) == 500
        assert calculations.daily_expense_total(snapshot, OTHER_DAY) == 300
        assert calculations.total_expenses(snapshot) == 800

    def test_receivables_and_payables_exclude_paid_debts(self):
        snapshot = RecordSnapshot(debts=[
            make_debt(1000, "receivable"),
            make_debt(400, "payable"),
            make_debt(200, "receivable", is_paid=True),
        ])

        assert calculations.total_receivables(snapshot) == 1000
        assert calculations.total_payables(snapshot) == 400

    def test_income_counts_deposit_until_paid(self):
        unpaid = make_booking(10000, 2000)
        paid = make_booking(6000, 1000, is_paid=True)
        snapshot = RecordSnapshot(bookings=[unpaid, paid])

        assert calculations.booking_income_cents(unpaid) == 2000
        assert calculations.booking_income_cents(paid) == 6000
        assert calculations.total_income(snapshot) == 8000
        assert calculations.remaining_payments(snapshot) == 8000

    def test_daily_income_only_counts_bookings_created_that_day(self):
        snapshot = RecordSnapshot(
            bookings=[
                make_booking(10000, 2000, created_at=datetime(2026, 1, 15, 23, 59)),
                make_booking(3000, 3000, created_at=datetime(2026, 1, 16, 0, 1)),
            ],
            expenses=[make_expense(500, DAY)],
        )

        assert calculations.daily_income(snapshot, DAY) == 2000
        assert calculations.daily_profit(snapshot, DAY) == 1500
        assert calculations.daily_profit(snapshot, OTHER_DAY) == 3000

    def test_net_profit_can_go_negative(self):
        snapshot = RecordSnapshot(
            bookings=[make_booking(1000, 100)],
            expenses=[make_expense(700, DAY)],
        )
        assert calculations.net_profit(snapshot) == -600

    def test_empty_snapshot_reports_zeroes(self):
        figures = report_figures(RecordSnapshot(), DAY)
        assert set(figures.values()) == {0}

    def test_customer_name_lookup(self):
        snapshot = RecordSnapshot(customers=[SimpleNamespace(id="c1", full_name="أحمد")])
        assert snapshot.customer_name("c1") == "أحمد"
        assert snapshot.customer_name("missing") is None

    def test_customer_name_resolves_every_booking(self):
        customers = [SimpleNamespace(id=f"c{i}", full_name=f"name-{i}") for i in range(50)]
        snapshot = RecordSnapshot(
            customers=customers,
            bookings=[make_booking(1000, 0, customer_id=f"c{i}") for i in range(50)],
        )

        names = [snapshot.customer_name(b.customer_id) for b in snapshot.bookings]
        assert names == [f"name-{i}" for i in range(50)]
        assert snapshot.customer_name("c99") is None
