# Overview: Service-layer operations for debts; encapsulates business logic and database work.

"""
Debt Service

receivable = owed to the agency, payable = owed by the agency.
Paying a debt is a flag flip; paid debts stay on record but drop out of
the open receivable/payable totals.
"""

from datetime import date

from flask import current_app

from ..constants import DEBT_TYPES
from ..extensions import db
from ..models import Debt
from ..validation import (
    ModelValidationPolicy,
    NotFoundError,
    enforce_rules_amounts,
    validate_payload,
)
from .concurrency import atomic, lock_for_update


class DebtNotFoundError(NotFoundError):
    """Raised when a debt is not found for the account."""
    pass


DEBT_POLICY = ModelValidationPolicy(
    writable_fields={"person_name", "amount_cents", "type", "description", "date", "is_paid"},
    required_on_create={"person_name", "amount_cents", "type", "date"},
    choices={"type": DEBT_TYPES},
)


def create_debt(*, account_id: str, data: dict) -> Debt:
    patch = validate_payload(model=Debt, payload=data, policy=DEBT_POLICY, partial=False)
    enforce_rules_amounts(patch, ("amount_cents",))

    with atomic():
        debt = Debt(account_id=account_id, **patch)
        db.session.add(debt)
    return debt


def get_debt(account_id: str, debt_id: str) -> Debt:
    debt = db.session.query(Debt).filter_by(id=debt_id, account_id=account_id).first()
    if not debt:
        raise DebtNotFoundError(f"Debt {debt_id} not found")
    return debt


def list_debts(
    account_id: str,
    *,
    debt_type: str | None = None,
    is_paid: bool | None = None,
    on_date: date | None = None,
) -> list[Debt]:
    query = db.session.query(Debt).filter(Debt.account_id == account_id)
    if debt_type:
        query = query.filter(Debt.type == debt_type)
    if is_paid is not None:
        query = query.filter(Debt.is_paid.is_(is_paid))
    if on_date:
        query = query.filter(Debt.date == on_date)
    return query.order_by(Debt.date.desc(), Debt.created_at.desc()).all()


def update_debt(*, account_id: str, debt_id: str, data: dict) -> Debt:
    patch = validate_payload(model=Debt, payload=data, policy=DEBT_POLICY, partial=True)
    enforce_rules_amounts(patch, ("amount_cents",))

    with atomic():
        debt = get_debt(account_id, debt_id)
        for key, value in patch.items():
            setattr(debt, key, value)
    return debt


def toggle_debt_paid(*, account_id: str, debt_id: str) -> Debt:
    with atomic():
        debt = lock_for_update(
            db.session.query(Debt).filter_by(id=debt_id, account_id=account_id)
        ).first()
        if not debt:
            raise DebtNotFoundError(f"Debt {debt_id} not found")
        debt.is_paid = not debt.is_paid

    current_app.logger.info("Debt %s marked %s", debt.id, "paid" if debt.is_paid else "open")
    return debt


def delete_debt(*, account_id: str, debt_id: str) -> None:
    with atomic():
        debt = get_debt(account_id, debt_id)
        db.session.delete(debt)
