# Overview: Service-layer operations for customers; encapsulates business logic and database work.

"""
Customer Service

Customers own bookings and visas. Deleting a customer cascade-deletes both
in the same transaction, so no booking or visa can outlive its customer.
"""

from flask import current_app
from sqlalchemy import or_

from ..constants import CUSTOMER_VISA_STATUSES
from ..extensions import db
from ..models import Customer
from ..validation import (
    ModelValidationPolicy,
    NotFoundError,
    validate_payload,
)
from .concurrency import atomic


class CustomerNotFoundError(NotFoundError):
    """Raised when a customer is not found for the account."""
    pass


CUSTOMER_POLICY = ModelValidationPolicy(
    writable_fields={
        "full_name", "phone_number", "national_id", "address",
        "program_name", "visa_status", "notes",
    },
    required_on_create={"full_name", "phone_number", "national_id"},
    choices={"visa_status": CUSTOMER_VISA_STATUSES},
    min_lengths={"full_name": 2, "phone_number": 10, "national_id": 5},
)


def create_customer(*, account_id: str, data: dict) -> Customer:
    patch = validate_payload(model=Customer, payload=data, policy=CUSTOMER_POLICY, partial=False)

    with atomic():
        customer = Customer(account_id=account_id, **patch)
        db.session.add(customer)
    return customer


def get_customer(account_id: str, customer_id: str) -> Customer:
    customer = db.session.query(Customer).filter_by(id=customer_id, account_id=account_id).first()
    if not customer:
        raise CustomerNotFoundError(f"Customer {customer_id} not found")
    return customer


def list_customers(account_id: str, *, search: str | None = None) -> list[Customer]:
    """Newest first; search matches name (case-insensitive), phone or national id."""
    query = db.session.query(Customer).filter(Customer.account_id == account_id)
    if search:
        term = f"%{search.strip()}%"
        query = query.filter(
            or_(
                Customer.full_name.ilike(term),
                Customer.phone_number.like(term),
                Customer.national_id.like(term),
            )
        )
    return query.order_by(Customer.created_at.desc()).all()


def update_customer(*, account_id: str, customer_id: str, data: dict) -> Customer:
    patch = validate_payload(model=Customer, payload=data, policy=CUSTOMER_POLICY, partial=True)

    with atomic():
        customer = get_customer(account_id, customer_id)
        for key, value in patch.items():
            setattr(customer, key, value)
    return customer


def delete_customer(*, account_id: str, customer_id: str) -> dict:
    """
    Delete a customer together with its bookings and visas.

    Returns counts of the removed dependents.
    """
    with atomic():
        customer = get_customer(account_id, customer_id)
        removed = {
            "bookings": len(customer.bookings),
            "visas": len(customer.visas),
        }
        db.session.delete(customer)

    current_app.logger.info(
        "Deleted customer %s with %d bookings and %d visas",
        customer_id, removed["bookings"], removed["visas"],
    )
    return removed
