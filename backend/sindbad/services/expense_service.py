# Overview: Service-layer operations for expenses; encapsulates business logic and database work.

from datetime import date

from sqlalchemy import or_

from ..constants import EXPENSE_CATEGORIES, EXPENSE_CATEGORY_LABELS
from ..extensions import db
from ..models import Expense
from ..validation import (
    ModelValidationPolicy,
    NotFoundError,
    enforce_rules_amounts,
    validate_payload,
)
from .concurrency import atomic


class ExpenseNotFoundError(NotFoundError):
    """Raised when an expense is not found for the account."""
    pass


EXPENSE_POLICY = ModelValidationPolicy(
    writable_fields={"category", "amount_cents", "description", "date"},
    required_on_create={"category", "amount_cents", "date"},
    choices={"category": EXPENSE_CATEGORIES},
)


def create_expense(*, account_id: str, data: dict) -> Expense:
    patch = validate_payload(model=Expense, payload=data, policy=EXPENSE_POLICY, partial=False)
    enforce_rules_amounts(patch, ("amount_cents",))

    with atomic():
        expense = Expense(account_id=account_id, **patch)
        db.session.add(expense)
    return expense


def get_expense(account_id: str, expense_id: str) -> Expense:
    expense = db.session.query(Expense).filter_by(id=expense_id, account_id=account_id).first()
    if not expense:
        raise ExpenseNotFoundError(f"Expense {expense_id} not found")
    return expense


def list_expenses(
    account_id: str,
    *,
    search: str | None = None,
    on_date: date | None = None,
) -> list[Expense]:
    """Most recent transaction date first; search matches description or category label."""
    query = db.session.query(Expense).filter(Expense.account_id == account_id)
    if on_date:
        query = query.filter(Expense.date == on_date)
    if search:
        term = search.strip()
        categories = [key for key, label in EXPENSE_CATEGORY_LABELS.items() if term in label or term == key]
        conditions = [Expense.description.ilike(f"%{term}%")]
        if categories:
            conditions.append(Expense.category.in_(categories))
        query = query.filter(or_(*conditions))
    return query.order_by(Expense.date.desc(), Expense.created_at.desc()).all()


def update_expense(*, account_id: str, expense_id: str, data: dict) -> Expense:
    patch = validate_payload(model=Expense, payload=data, policy=EXPENSE_POLICY, partial=True)
    enforce_rules_amounts(patch, ("amount_cents",))

    with atomic():
        expense = get_expense(account_id, expense_id)
        for key, value in patch.items():
            setattr(expense, key, value)
    return expense


def delete_expense(*, account_id: str, expense_id: str) -> None:
    with atomic():
        expense = get_expense(account_id, expense_id)
        db.session.delete(expense)
