# Overview: Flask API routes for visa operations; parses input and returns JSON responses.

from flask import Blueprint, request, jsonify, g, current_app

from ..decorators import require_account
from ..services import export_service, visa_service
from ..validation import NotFoundError, ValidationError


visas_bp = Blueprint("visas", __name__, url_prefix="/api/visas")


@visas_bp.get("")
@require_account
def list_visas_route():
    """
    List visas for the current account, newest first.

    Query parameters:
    - search: matches customer name or visa number
    - customer_id: only this customer's visas
    - status: pending | issued | expired
    """
    visas = visa_service.list_visas(
        g.account_id,
        search=request.args.get("search"),
        customer_id=request.args.get("customer_id"),
        status=request.args.get("status"),
    )
    return jsonify({
        "items": [v.to_dict() for v in visas],
        "count": len(visas),
    })


@visas_bp.post("")
@require_account
def create_visa_route():
    """
    Create a visa.

    Request body:
    {
        "customer_id": "...",               // required
        "visa_number": "...",               // required, opaque
        "issue_date": "YYYY-MM-DD",         // required
        "expiry_date": "YYYY-MM-DD",        // required, not before issue_date
        "departure_date": "YYYY-MM-DD",     // required
        "booking_date": "YYYY-MM-DD",
        "status": "pending",
        "travel_direction": "egypt-to-saudi",
        "from_location": "<governorate or Saudi city>",
        "to_location": "<Saudi city or governorate>"
    }
    """
    data = request.get_json(silent=True) or {}
    try:
        visa = visa_service.create_visa(account_id=g.account_id, data=data)
        return jsonify(visa.to_dict()), 201
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
    except Exception:
        current_app.logger.exception("Failed to create visa")
        return jsonify({"error": "Internal server error"}), 500


@visas_bp.get("/<visa_id>")
@require_account
def get_visa_route(visa_id: str):
    try:
        visa = visa_service.get_visa(g.account_id, visa_id)
        return jsonify(visa.to_dict())
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404


@visas_bp.patch("/<visa_id>")
@require_account
def update_visa_route(visa_id: str):
    data = request.get_json(silent=True) or {}
    try:
        visa = visa_service.update_visa(account_id=g.account_id, visa_id=visa_id, data=data)
        return jsonify(visa.to_dict())
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
    except Exception:
        current_app.logger.exception("Failed to update visa")
        return jsonify({"error": "Internal server error"}), 500


@visas_bp.delete("/<visa_id>")
@require_account
def delete_visa_route(visa_id: str):
    try:
        visa_service.delete_visa(account_id=g.account_id, visa_id=visa_id)
        return jsonify({"deleted": True})
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
    except Exception:
        current_app.logger.exception("Failed to delete visa")
        return jsonify({"error": "Internal server error"}), 500


@visas_bp.get("/<visa_id>/card")
@require_account
def visa_card_route(visa_id: str):
    """Data for rendering the visa card (image/PDF rendering happens client-side)."""
    try:
        visa = visa_service.get_visa(g.account_id, visa_id)
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404

    return jsonify(export_service.visa_card(
        visa,
        visa.customer,
        agency_name=current_app.config["AGENCY_NAME"],
        agency_phones=current_app.config["AGENCY_PHONES"],
    ))


@visas_bp.post("/<visa_id>/share")
@require_account
def share_visa_route(visa_id: str):
    """
    Build a messaging link that forwards the visa details.

    Request body:
    {"phone": "01012345678"}

    Returns:
        {"phone": "201012345678", "message": "...", "url": "https://wa.me/..."}
    """
    data = request.get_json(silent=True) or {}
    phone = data.get("phone")
    if not phone:
        return jsonify({"error": "phone is required"}), 400

    try:
        visa = visa_service.get_visa(g.account_id, visa_id)
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404

    try:
        link = export_service.share_link(
            str(phone),
            visa,
            visa.customer,
            agency_name=current_app.config["AGENCY_NAME"],
            agency_phones=current_app.config["AGENCY_PHONES"],
            country_prefix=current_app.config["DEFAULT_COUNTRY_PREFIX"],
        )
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    return jsonify(link)
