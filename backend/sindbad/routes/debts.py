# Overview: Flask API routes for debt operations; parses input and returns JSON responses.

from flask import Blueprint, request, jsonify, g, current_app

from ..constants import DEBT_TYPES
from ..decorators import require_account
from ..services import debt_service
from ..time_utils import parse_iso_date
from ..validation import NotFoundError, ValidationError


debts_bp = Blueprint("debts", __name__, url_prefix="/api/debts")


@debts_bp.get("")
@require_account
def list_debts_route():
    """
    List debts, most recent date first.

    Query parameters:
    - type: receivable | payable
    - is_paid: "true" / "false"
    - date: YYYY-MM-DD
    """
    debt_type = request.args.get("type")
    if debt_type and debt_type not in DEBT_TYPES:
        return jsonify({"error": f"type must be one of: {', '.join(DEBT_TYPES)}"}), 400

    is_paid_arg = request.args.get("is_paid")
    is_paid = None if is_paid_arg is None else is_paid_arg.lower() == "true"

    try:
        on_date = parse_iso_date(request.args.get("date"))
    except ValueError:
        return jsonify({"error": "date must be YYYY-MM-DD"}), 400

    debts = debt_service.list_debts(g.account_id, debt_type=debt_type, is_paid=is_paid, on_date=on_date)
    return jsonify({
        "items": [d.to_dict() for d in debts],
        "count": len(debts),
    })


@debts_bp.post("")
@require_account
def create_debt_route():
    """
    Record a debt.

    Request body:
    {
        "person_name": "...",       // required
        "amount_cents": 100000,     // required, >= 0
        "type": "receivable",       // required: receivable (owed to us) | payable (we owe)
        "description": "...",
        "date": "YYYY-MM-DD",       // required
        "is_paid": false
    }
    """
    data = request.get_json(silent=True) or {}
    try:
        debt = debt_service.create_debt(account_id=g.account_id, data=data)
        return jsonify(debt.to_dict()), 201
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    except Exception:
        current_app.logger.exception("Failed to create debt")
        return jsonify({"error": "Internal server error"}), 500


@debts_bp.get("/<debt_id>")
@require_account
def get_debt_route(debt_id: str):
    try:
        debt = debt_service.get_debt(g.account_id, debt_id)
        return jsonify(debt.to_dict())
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404


@debts_bp.patch("/<debt_id>")
@require_account
def update_debt_route(debt_id: str):
    data = request.get_json(silent=True) or {}
    try:
        debt = debt_service.update_debt(account_id=g.account_id, debt_id=debt_id, data=data)
        return jsonify(debt.to_dict())
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
    except Exception:
        current_app.logger.exception("Failed to update debt")
        return jsonify({"error": "Internal server error"}), 500


@debts_bp.post("/<debt_id>/toggle-paid")
@require_account
def toggle_debt_paid_route(debt_id: str):
    try:
        debt = debt_service.toggle_debt_paid(account_id=g.account_id, debt_id=debt_id)
        return jsonify(debt.to_dict())
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
    except Exception:
        current_app.logger.exception("Failed to toggle debt")
        return jsonify({"error": "Internal server error"}), 500


@debts_bp.delete("/<debt_id>")
@require_account
def delete_debt_route(debt_id: str):
    try:
        debt_service.delete_debt(account_id=g.account_id, debt_id=debt_id)
        return jsonify({"deleted": True})
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
    except Exception:
        current_app.logger.exception("Failed to delete debt")
        return jsonify({"error": "Internal server error"}), 500
