# Overview: Service-layer operations for reporting; loads account snapshots and builds report payloads.

from __future__ import annotations

from datetime import date

from sindbad.calculations import (
    RecordSnapshot,
    booking_income_cents,
    bookings_on,
    expenses_on,
    report_figures,
    total_payables,
    total_receivables,
)
from sindbad.extensions import db
from sindbad.models import Booking, Customer, Debt, Expense
from sindbad.time_utils import parse_iso_date, to_iso_date, today

RECENT_BOOKINGS_LIMIT = 5


class ReportError(Exception):
    """Raised when report generation fails."""
    pass


def parse_report_date(value: str | None) -> date:
    """Reporting day from a query string; defaults to today (UTC)."""
    if not value or not value.strip():
        return today()
    try:
        return parse_iso_date(value)
    except ValueError:
        raise ReportError("date must be YYYY-MM-DD")


def load_snapshot(account_id: str) -> RecordSnapshot:
    """
    Read the account's current records.

    No caching: every report call starts from a fresh read, so figures
    reflect the last committed write.
    """
    return RecordSnapshot(
        customers=db.session.query(Customer).filter_by(account_id=account_id).all(),
        bookings=db.session.query(Booking).filter_by(account_id=account_id)
        .order_by(Booking.created_at.desc()).all(),
        expenses=db.session.query(Expense).filter_by(account_id=account_id)
        .order_by(Expense.date.desc()).all(),
        debts=db.session.query(Debt).filter_by(account_id=account_id)
        .order_by(Debt.date.desc()).all(),
    )


def booking_line(snapshot: RecordSnapshot, booking) -> dict:
    return {
        "id": booking.id,
        "customer": snapshot.customer_name(booking.customer_id),
        "program": booking.program_name,
        "total_amount_cents": booking.total_amount_cents,
        "visa_deposit_cents": booking.visa_deposit_cents,
        "remaining_amount_cents": booking.remaining_amount_cents,
        "is_paid": booking.is_paid,
        "income_cents": booking_income_cents(booking),
    }


def daily_report(*, account_id: str, day: date) -> dict:
    snapshot = load_snapshot(account_id)
    figures = report_figures(snapshot, day)

    return {
        "date": to_iso_date(day),
        "daily_income_cents": figures["daily_income_cents"],
        "daily_expenses_cents": figures["daily_expenses_cents"],
        "daily_profit_cents": figures["daily_profit_cents"],
        "bookings": [booking_line(snapshot, b) for b in bookings_on(snapshot, day)],
        "expenses": [e.to_dict() for e in expenses_on(snapshot, day)],
    }


def summary_report(*, account_id: str) -> dict:
    snapshot = load_snapshot(account_id)
    figures = report_figures(snapshot, today())

    return {
        "total_income_cents": figures["total_income_cents"],
        "total_expenses_cents": figures["total_expenses_cents"],
        "net_profit_cents": figures["net_profit_cents"],
        "remaining_payments_cents": figures["remaining_payments_cents"],
        "total_receivables_cents": figures["total_receivables_cents"],
        "total_payables_cents": figures["total_payables_cents"],
    }


def dashboard(*, account_id: str) -> dict:
    snapshot = load_snapshot(account_id)
    figures = report_figures(snapshot, today())
    paid = sum(1 for b in snapshot.bookings if b.is_paid)

    return {
        "total_customers": len(snapshot.customers),
        "total_bookings": len(snapshot.bookings),
        "paid_bookings": paid,
        "unpaid_bookings": len(snapshot.bookings) - paid,
        "total_income_cents": figures["total_income_cents"],
        "total_expenses_cents": figures["total_expenses_cents"],
        "net_profit_cents": figures["net_profit_cents"],
        "recent_bookings": [
            booking_line(snapshot, b) for b in snapshot.bookings[:RECENT_BOOKINGS_LIMIT]
        ],
    }


def debt_summary_for(snapshot: RecordSnapshot) -> dict:
    receivables = total_receivables(snapshot)
    payables = total_payables(snapshot)
    return {
        "total_receivables_cents": receivables,
        "total_payables_cents": payables,
        "net_position_cents": receivables - payables,
        "open_debts": sum(1 for d in snapshot.debts if not d.is_paid),
    }


def debt_summary(*, account_id: str) -> dict:
    return debt_summary_for(load_snapshot(account_id))
