# Overview: Flask API routes for customer operations; parses input and returns JSON responses.

from flask import Blueprint, request, jsonify, g, current_app

from ..decorators import require_account
from ..services import customer_service
from ..validation import NotFoundError, ValidationError


customers_bp = Blueprint("customers", __name__, url_prefix="/api/customers")


@customers_bp.get("")
@require_account
def list_customers_route():
    """
    List customers for the current account, newest first.

    Query parameters:
    - search: matches full name, phone number or national id
    """
    customers = customer_service.list_customers(g.account_id, search=request.args.get("search"))
    return jsonify({
        "items": [c.to_dict() for c in customers],
        "count": len(customers),
    })


@customers_bp.post("")
@require_account
def create_customer_route():
    """
    Create a customer.

    Request body:
    {
        "full_name": "...",      // required, >= 2 chars
        "phone_number": "...",   // required, >= 10 chars
        "national_id": "...",    // required, >= 5 chars
        "address": "...",
        "program_name": "...",
        "visa_status": "pending",
        "notes": "..."
    }
    """
    data = request.get_json(silent=True) or {}
    try:
        customer = customer_service.create_customer(account_id=g.account_id, data=data)
        return jsonify(customer.to_dict()), 201
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    except Exception:
        current_app.logger.exception("Failed to create customer")
        return jsonify({"error": "Internal server error"}), 500


@customers_bp.get("/<customer_id>")
@require_account
def get_customer_route(customer_id: str):
    try:
        customer = customer_service.get_customer(g.account_id, customer_id)
        return jsonify(customer.to_dict())
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404


@customers_bp.patch("/<customer_id>")
@require_account
def update_customer_route(customer_id: str):
    data = request.get_json(silent=True) or {}
    try:
        customer = customer_service.update_customer(
            account_id=g.account_id, customer_id=customer_id, data=data
        )
        return jsonify(customer.to_dict())
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
    except Exception:
        current_app.logger.exception("Failed to update customer")
        return jsonify({"error": "Internal server error"}), 500


@customers_bp.delete("/<customer_id>")
@require_account
def delete_customer_route(customer_id: str):
    """
    Delete a customer and, with it, all of its bookings and visas.

    Returns:
        {"deleted": true, "removed": {"bookings": int, "visas": int}}
    """
    try:
        removed = customer_service.delete_customer(account_id=g.account_id, customer_id=customer_id)
        return jsonify({"deleted": True, "removed": removed})
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
    except Exception:
        current_app.logger.exception("Failed to delete customer")
        return jsonify({"error": "Internal server error"}), 500
