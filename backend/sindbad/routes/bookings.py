# Overview: Flask API routes for booking operations; parses input and returns JSON responses.

"""
Booking Routes

remaining_amount_cents is read-only: clients send total and deposit, the
service derives the remainder and keeps it in step with is_paid.
"""

from flask import Blueprint, request, jsonify, g, current_app

from ..decorators import require_account
from ..services import booking_service
from ..validation import NotFoundError, ValidationError


bookings_bp = Blueprint("bookings", __name__, url_prefix="/api/bookings")


@bookings_bp.get("")
@require_account
def list_bookings_route():
    """
    List bookings for the current account, newest first.

    Query parameters:
    - search: matches customer name or program name
    - customer_id: only this customer's bookings
    - is_paid: "true" / "false"
    """
    is_paid_arg = request.args.get("is_paid")
    is_paid = None if is_paid_arg is None else is_paid_arg.lower() == "true"

    bookings = booking_service.list_bookings(
        g.account_id,
        search=request.args.get("search"),
        customer_id=request.args.get("customer_id"),
        is_paid=is_paid,
    )
    return jsonify({
        "items": [b.to_dict() for b in bookings],
        "count": len(bookings),
    })


@bookings_bp.post("")
@require_account
def create_booking_route():
    """
    Create a booking.

    Request body:
    {
        "customer_id": "...",           // required
        "program_name": "...",          // required
        "total_amount_cents": 1000000,  // required, >= 0
        "visa_deposit_cents": 200000,   // >= 0, <= total
        "is_paid": false,
        "travel_direction": "egypt-to-saudi",
        "from_location": "...",
        "to_location": "...",
        "departure_date": "YYYY-MM-DD"
    }
    """
    data = request.get_json(silent=True) or {}
    try:
        booking = booking_service.create_booking(account_id=g.account_id, data=data)
        return jsonify(booking.to_dict()), 201
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
    except Exception:
        current_app.logger.exception("Failed to create booking")
        return jsonify({"error": "Internal server error"}), 500


@bookings_bp.get("/<booking_id>")
@require_account
def get_booking_route(booking_id: str):
    try:
        booking = booking_service.get_booking(g.account_id, booking_id)
        return jsonify(booking.to_dict())
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404


@bookings_bp.patch("/<booking_id>")
@require_account
def update_booking_route(booking_id: str):
    data = request.get_json(silent=True) or {}
    try:
        booking = booking_service.update_booking(
            account_id=g.account_id, booking_id=booking_id, data=data
        )
        return jsonify(booking.to_dict())
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
    except Exception:
        current_app.logger.exception("Failed to update booking")
        return jsonify({"error": "Internal server error"}), 500


@bookings_bp.post("/<booking_id>/toggle-payment")
@require_account
def toggle_payment_route(booking_id: str):
    """Flip the paid flag; the remaining balance follows."""
    try:
        booking = booking_service.toggle_payment_status(account_id=g.account_id, booking_id=booking_id)
        return jsonify(booking.to_dict())
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
    except Exception:
        current_app.logger.exception("Failed to toggle booking payment")
        return jsonify({"error": "Internal server error"}), 500


@bookings_bp.delete("/<booking_id>")
@require_account
def delete_booking_route(booking_id: str):
    try:
        booking_service.delete_booking(account_id=g.account_id, booking_id=booking_id)
        return jsonify({"deleted": True})
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
    except Exception:
        current_app.logger.exception("Failed to delete booking")
        return jsonify({"error": "Internal server error"}), 500
