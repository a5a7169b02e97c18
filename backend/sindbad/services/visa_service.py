# Overview: Service-layer operations for visas; encapsulates business logic and database work.

from sqlalchemy import or_

from ..constants import EGYPT_TO_SAUDI, TRAVEL_DIRECTIONS, VISA_STATUSES
from ..extensions import db
from ..models import Customer, Visa
from ..time_utils import today
from ..validation import (
    ModelValidationPolicy,
    NotFoundError,
    enforce_rules_route,
    enforce_rules_visa_dates,
    merged_values,
    validate_payload,
)
from .concurrency import atomic
from .customer_service import get_customer


class VisaNotFoundError(NotFoundError):
    """Raised when a visa is not found for the account."""
    pass


VISA_POLICY = ModelValidationPolicy(
    writable_fields={
        "customer_id", "visa_number",
        "issue_date", "expiry_date", "departure_date", "booking_date",
        "status", "travel_direction", "from_location", "to_location",
    },
    required_on_create={"customer_id", "visa_number", "issue_date", "expiry_date", "departure_date"},
    choices={"status": VISA_STATUSES, "travel_direction": TRAVEL_DIRECTIONS},
)

RULE_FIELDS = ("travel_direction", "from_location", "to_location", "issue_date", "expiry_date")


def _validate(data: dict, *, visa: Visa | None) -> dict:
    patch = validate_payload(model=Visa, payload=data, policy=VISA_POLICY, partial=visa is not None)
    values = merged_values(visa, patch, RULE_FIELDS)
    if values["travel_direction"] is None:
        values["travel_direction"] = EGYPT_TO_SAUDI
    enforce_rules_route(values)
    enforce_rules_visa_dates(values)
    return patch


def create_visa(*, account_id: str, data: dict) -> Visa:
    patch = _validate(data, visa=None)
    if patch.get("booking_date") is None:
        patch["booking_date"] = today()

    with atomic():
        get_customer(account_id, patch["customer_id"])
        visa = Visa(account_id=account_id, **patch)
        db.session.add(visa)
    return visa


def get_visa(account_id: str, visa_id: str) -> Visa:
    visa = db.session.query(Visa).filter_by(id=visa_id, account_id=account_id).first()
    if not visa:
        raise VisaNotFoundError(f"Visa {visa_id} not found")
    return visa


def list_visas(
    account_id: str,
    *,
    search: str | None = None,
    customer_id: str | None = None,
    status: str | None = None,
) -> list[Visa]:
    """Newest first; search matches customer name or visa number."""
    query = db.session.query(Visa).join(Customer, Visa.customer_id == Customer.id).filter(
        Visa.account_id == account_id,
    )
    if customer_id:
        query = query.filter(Visa.customer_id == customer_id)
    if status:
        query = query.filter(Visa.status == status)
    if search:
        term = f"%{search.strip()}%"
        query = query.filter(or_(Customer.full_name.ilike(term), Visa.visa_number.ilike(term)))
    return query.order_by(Visa.created_at.desc()).all()


def update_visa(*, account_id: str, visa_id: str, data: dict) -> Visa:
    with atomic():
        visa = get_visa(account_id, visa_id)
        patch = _validate(data, visa=visa)
        if "customer_id" in patch:
            get_customer(account_id, patch["customer_id"])
        for key, value in patch.items():
            setattr(visa, key, value)
    return visa


def delete_visa(*, account_id: str, visa_id: str) -> None:
    with atomic():
        visa = get_visa(account_id, visa_id)
        db.session.delete(visa)
