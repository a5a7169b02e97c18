# Overview: Flask API routes for expense operations; parses input and returns JSON responses.

from flask import Blueprint, request, jsonify, g, current_app

from ..decorators import require_account
from ..services import expense_service
from ..time_utils import parse_iso_date
from ..validation import NotFoundError, ValidationError


expenses_bp = Blueprint("expenses", __name__, url_prefix="/api/expenses")


@expenses_bp.get("")
@require_account
def list_expenses_route():
    """
    List expenses, most recent date first.

    Query parameters:
    - search: matches description or category label
    - date: YYYY-MM-DD, only that day's expenses

    Returns:
        {items: Expense[], count: int, total_amount_cents: int}
    """
    try:
        on_date = parse_iso_date(request.args.get("date"))
    except ValueError:
        return jsonify({"error": "date must be YYYY-MM-DD"}), 400

    expenses = expense_service.list_expenses(
        g.account_id, search=request.args.get("search"), on_date=on_date
    )
    return jsonify({
        "items": [e.to_dict() for e in expenses],
        "count": len(expenses),
        "total_amount_cents": sum(e.amount_cents for e in expenses),
    })


@expenses_bp.post("")
@require_account
def create_expense_route():
    """
    Create an expense.

    Request body:
    {
        "category": "office",       // required: office, transport, marketing, salaries, utilities, other
        "amount_cents": 50000,      // required, >= 0
        "description": "...",
        "date": "YYYY-MM-DD"        // required
    }
    """
    data = request.get_json(silent=True) or {}
    try:
        expense = expense_service.create_expense(account_id=g.account_id, data=data)
        return jsonify(expense.to_dict()), 201
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    except Exception:
        current_app.logger.exception("Failed to create expense")
        return jsonify({"error": "Internal server error"}), 500


@expenses_bp.get("/<expense_id>")
@require_account
def get_expense_route(expense_id: str):
    try:
        expense = expense_service.get_expense(g.account_id, expense_id)
        return jsonify(expense.to_dict())
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404


@expenses_bp.patch("/<expense_id>")
@require_account
def update_expense_route(expense_id: str):
    data = request.get_json(silent=True) or {}
    try:
        expense = expense_service.update_expense(
            account_id=g.account_id, expense_id=expense_id, data=data
        )
        return jsonify(expense.to_dict())
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
    except Exception:
        current_app.logger.exception("Failed to update expense")
        return jsonify({"error": "Internal server error"}), 500


@expenses_bp.delete("/<expense_id>")
@require_account
def delete_expense_route(expense_id: str):
    try:
        expense_service.delete_expense(account_id=g.account_id, expense_id=expense_id)
        return jsonify({"deleted": True})
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
    except Exception:
        current_app.logger.exception("Failed to delete expense")
        return jsonify({"error": "Internal server error"}), 500
