# Overview: Pure booking derived-field rules and financial aggregation over record snapshots.

"""
Financial arithmetic for the agency.

Nothing in this module touches the database. Functions accept booking,
expense and debt objects by attribute (ORM rows or the plain records built
by the report importer) so the same figures can be recomputed from any
snapshot.

Income policy:
- The visa deposit always counts as realized income.
- The remaining balance (total - deposit) counts only once is_paid is true.

All amounts are integer minor units.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Iterable, Optional

from sindbad.constants import DEBT_PAYABLE, DEBT_RECEIVABLE


# ---------------------------------------------------------------------------
# Derived fields
# ---------------------------------------------------------------------------

def compute_remaining_cents(total_amount_cents: int, visa_deposit_cents: int, is_paid: bool) -> int:
    """Remaining balance: 0 once paid, otherwise total - deposit (never below 0)."""
    if is_paid:
        return 0
    return max(0, (total_amount_cents or 0) - (visa_deposit_cents or 0))


def apply_derived_fields(booking) -> None:
    booking.remaining_amount_cents = compute_remaining_cents(
        booking.total_amount_cents,
        booking.visa_deposit_cents,
        booking.is_paid,
    )


def toggle_paid(booking) -> None:
    """
    Flip is_paid and recompute remaining_amount_cents.

    Becoming paid zeroes the remainder; becoming unpaid restores
    total - deposit, so two toggles return the booking to where it started.
    """
    booking.is_paid = not booking.is_paid
    apply_derived_fields(booking)


# ---------------------------------------------------------------------------
# Snapshots
# ---------------------------------------------------------------------------

@dataclass
class RecordSnapshot:
    """Point-in-time view of one account's records used for reporting."""
    customers: list = field(default_factory=list)
    bookings: list = field(default_factory=list)
    expenses: list = field(default_factory=list)
    debts: list = field(default_factory=list)
    _names: Optional[dict] = field(default=None, init=False, repr=False, compare=False)

    def customer_name(self, customer_id: str) -> Optional[str]:
        # Built on first lookup; snapshots are not mutated after loading
        if self._names is None:
            self._names = {c.id: c.full_name for c in self.customers}
        return self._names.get(customer_id)


def day_of(value: Any) -> Optional[date]:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    return value


def bookings_on(snapshot: RecordSnapshot, day: Optional[date]) -> list:
    """Bookings created on the given calendar day (all bookings when day is None)."""
    if day is None:
        return list(snapshot.bookings)
    return [b for b in snapshot.bookings if day_of(b.created_at) == day]


def expenses_on(snapshot: RecordSnapshot, day: Optional[date]) -> list:
    if day is None:
        return list(snapshot.expenses)
    return [e for e in snapshot.expenses if day_of(e.date) == day]


# ---------------------------------------------------------------------------
# Aggregates
# ---------------------------------------------------------------------------

def booking_income_cents(booking) -> int:
    deposit = booking.visa_deposit_cents or 0
    if booking.is_paid:
        return deposit + ((booking.total_amount_cents or 0) - deposit)
    return deposit


def income_cents(bookings: Iterable) -> int:
    return sum(booking_income_cents(b) for b in bookings)


def expense_total_cents(expenses: Iterable) -> int:
    return sum(e.amount_cents or 0 for e in expenses)


def daily_income(snapshot: RecordSnapshot, day: date) -> int:
    return income_cents(bookings_on(snapshot, day))


def daily_expense_total(snapshot: RecordSnapshot, day: date) -> int:
    return expense_total_cents(expenses_on(snapshot, day))


def daily_profit(snapshot: RecordSnapshot, day: date) -> int:
    return daily_income(snapshot, day) - daily_expense_total(snapshot, day)


def total_income(snapshot: RecordSnapshot) -> int:
    return income_cents(snapshot.bookings)


def total_expenses(snapshot: RecordSnapshot) -> int:
    return expense_total_cents(snapshot.expenses)


def net_profit(snapshot: RecordSnapshot) -> int:
    return total_income(snapshot) - total_expenses(snapshot)


def remaining_payments(snapshot: RecordSnapshot) -> int:
    """Outstanding customer balances: remaining amount over unpaid bookings."""
    return sum(b.remaining_amount_cents or 0 for b in snapshot.bookings if not b.is_paid)


def _open_debt_total(snapshot: RecordSnapshot, debt_type: str) -> int:
    return sum(
        d.amount_cents or 0
        for d in snapshot.debts
        if d.type == debt_type and not d.is_paid
    )


def total_receivables(snapshot: RecordSnapshot) -> int:
    return _open_debt_total(snapshot, DEBT_RECEIVABLE)


def total_payables(snapshot: RecordSnapshot) -> int:
    return _open_debt_total(snapshot, DEBT_PAYABLE)


def report_figures(snapshot: RecordSnapshot, day: date) -> dict:
    """Every headline figure for one reporting day plus the all-time totals."""
    return {
        "daily_income_cents": daily_income(snapshot, day),
        "daily_expenses_cents": daily_expense_total(snapshot, day),
        "daily_profit_cents": daily_profit(snapshot, day),
        "total_income_cents": total_income(snapshot),
        "total_expenses_cents": total_expenses(snapshot),
        "net_profit_cents": net_profit(snapshot),
        "remaining_payments_cents": remaining_payments(snapshot),
        "total_receivables_cents": total_receivables(snapshot),
        "total_payables_cents": total_payables(snapshot),
    }
