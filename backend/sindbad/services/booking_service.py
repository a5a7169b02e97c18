# Overview: Service-layer operations for bookings; encapsulates business logic and database work.

"""
Booking Service

INVARIANT (checked on every write):
- is_paid == False  ->  remaining_amount_cents == total_amount_cents - visa_deposit_cents
- is_paid == True   ->  remaining_amount_cents == 0

remaining_amount_cents is never accepted from clients. It is recomputed
from the base fields and flushed in the same transaction as they are, so
the two can never diverge, even when the write fails halfway.
"""

from flask import current_app
from sqlalchemy import or_

from ..calculations import apply_derived_fields, toggle_paid
from ..constants import TRAVEL_DIRECTIONS
from ..extensions import db
from ..models import Booking, Customer
from ..validation import (
    ModelValidationPolicy,
    NotFoundError,
    enforce_rules_amounts,
    enforce_rules_booking,
    merged_values,
    validate_payload,
)
from .concurrency import atomic, lock_for_update
from .customer_service import get_customer


class BookingNotFoundError(NotFoundError):
    """Raised when a booking is not found for the account."""
    pass


BOOKING_POLICY = ModelValidationPolicy(
    writable_fields={
        "customer_id", "program_name",
        "total_amount_cents", "visa_deposit_cents", "is_paid",
        "travel_direction", "from_location", "to_location", "departure_date",
    },
    required_on_create={"customer_id", "program_name", "total_amount_cents"},
    choices={"travel_direction": TRAVEL_DIRECTIONS},
    min_lengths={"program_name": 2},
)

AMOUNT_FIELDS = ("total_amount_cents", "visa_deposit_cents")


def _validate(data: dict, *, booking: Booking | None) -> dict:
    patch = validate_payload(
        model=Booking, payload=data, policy=BOOKING_POLICY, partial=booking is not None
    )
    enforce_rules_amounts(patch, AMOUNT_FIELDS)
    enforce_rules_booking(merged_values(booking, patch, AMOUNT_FIELDS))
    return patch


def create_booking(*, account_id: str, data: dict) -> Booking:
    """
    Create a booking for an existing customer of the account.

    Raises:
        ValidationError: bad input, including deposit > total
        CustomerNotFoundError: customer_id does not belong to the account
    """
    patch = _validate(data, booking=None)

    with atomic():
        get_customer(account_id, patch["customer_id"])
        booking = Booking(account_id=account_id, **patch)
        if booking.visa_deposit_cents is None:
            booking.visa_deposit_cents = 0
        if booking.is_paid is None:
            booking.is_paid = False
        apply_derived_fields(booking)
        db.session.add(booking)
    return booking


def get_booking(account_id: str, booking_id: str) -> Booking:
    booking = db.session.query(Booking).filter_by(id=booking_id, account_id=account_id).first()
    if not booking:
        raise BookingNotFoundError(f"Booking {booking_id} not found")
    return booking


def list_bookings(
    account_id: str,
    *,
    search: str | None = None,
    customer_id: str | None = None,
    is_paid: bool | None = None,
) -> list[Booking]:
    """Newest first; search matches customer name or program name."""
    query = db.session.query(Booking).join(Customer, Booking.customer_id == Customer.id).filter(
        Booking.account_id == account_id,
    )
    if customer_id:
        query = query.filter(Booking.customer_id == customer_id)
    if is_paid is not None:
        query = query.filter(Booking.is_paid.is_(is_paid))
    if search:
        term = f"%{search.strip()}%"
        query = query.filter(or_(Customer.full_name.ilike(term), Booking.program_name.ilike(term)))
    return query.order_by(Booking.created_at.desc()).all()


def update_booking(*, account_id: str, booking_id: str, data: dict) -> Booking:
    with atomic():
        booking = get_booking(account_id, booking_id)
        patch = _validate(data, booking=booking)
        if "customer_id" in patch:
            get_customer(account_id, patch["customer_id"])
        for key, value in patch.items():
            setattr(booking, key, value)
        apply_derived_fields(booking)
    return booking


def toggle_payment_status(*, account_id: str, booking_id: str) -> Booking:
    """
    Flip is_paid and recompute the remaining balance in one transaction.

    Raises:
        BookingNotFoundError: the booking no longer exists (e.g. deleted elsewhere)
    """
    with atomic():
        booking = lock_for_update(
            db.session.query(Booking).filter_by(id=booking_id, account_id=account_id)
        ).first()
        if not booking:
            raise BookingNotFoundError(f"Booking {booking_id} not found")
        toggle_paid(booking)

    current_app.logger.info(
        "Booking %s marked %s (remaining %d)",
        booking.id, "paid" if booking.is_paid else "unpaid", booking.remaining_amount_cents,
    )
    return booking


def delete_booking(*, account_id: str, booking_id: str) -> None:
    with atomic():
        booking = get_booking(account_id, booking_id)
        db.session.delete(booking)
