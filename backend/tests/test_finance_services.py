# Overview: Pytest coverage for expense and debt services.

from datetime import date

import pytest

from sindbad.services import debt_service, expense_service
from sindbad.services.debt_service import DebtNotFoundError
from sindbad.validation import ValidationError


class TestExpenses:
    def test_create_and_filter_by_date(self, account_a):
        expense_service.create_expense(
            account_id=account_a.id,
            data={"category": "office", "amount_cents": 500, "date": "2026-01-15"},
        )
        expense_service.create_expense(
            account_id=account_a.id,
            data={"category": "transport", "amount_cents": 300, "date": "2026-01-16"},
        )

        on_day = expense_service.list_expenses(account_a.id, on_date=date(2026, 1, 15))
        assert [e.amount_cents for e in on_day] == [500]

    def test_search_matches_category_label_and_description(self, account_a):
        expense_service.create_expense(
            account_id=account_a.id,
            data={"category": "transport", "amount_cents": 300, "date": "2026-01-16",
                  "description": "Airport pickup"},
        )
        expense_service.create_expense(
            account_id=account_a.id,
            data={"category": "salaries", "amount_cents": 9000, "date": "2026-01-16"},
        )

        assert len(expense_service.list_expenses(account_a.id, search="مواصلات")) == 1
        assert len(expense_service.list_expenses(account_a.id, search="airport")) == 1

    def test_category_must_be_known(self, account_a):
        with pytest.raises(ValidationError, match="category"):
            expense_service.create_expense(
                account_id=account_a.id,
                data={"category": "travel", "amount_cents": 300, "date": "2026-01-16"},
            )

    def test_date_is_required(self, account_a):
        with pytest.raises(ValidationError, match="date"):
            expense_service.create_expense(
                account_id=account_a.id, data={"category": "office", "amount_cents": 300}
            )


class TestDebts:
    def _debt(self, account_id, **overrides):
        data = {"person_name": "محمود", "amount_cents": 1000, "type": "receivable", "date": "2026-01-15"}
        data.update(overrides)
        return debt_service.create_debt(account_id=account_id, data=data)

    def test_toggle_paid(self, account_a):
        debt = self._debt(account_a.id)
        assert debt.is_paid is False

        debt = debt_service.toggle_debt_paid(account_id=account_a.id, debt_id=debt.id)
        assert debt.is_paid is True

        debt = debt_service.toggle_debt_paid(account_id=account_a.id, debt_id=debt.id)
        assert debt.is_paid is False

    def test_type_filter(self, account_a):
        self._debt(account_a.id)
        payable = self._debt(account_a.id, type="payable", amount_cents=400)

        assert [d.id for d in debt_service.list_debts(account_a.id, debt_type="payable")] == [payable.id]

    def test_type_must_be_known(self, account_a):
        with pytest.raises(ValidationError, match="type"):
            self._debt(account_a.id, type="loan")

    def test_toggle_foreign_debt_not_found(self, account_a, account_b):
        debt = self._debt(account_a.id)
        with pytest.raises(DebtNotFoundError):
            debt_service.toggle_debt_paid(account_id=account_b.id, debt_id=debt.id)
