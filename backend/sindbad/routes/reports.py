# Overview: Flask API routes for reports, report export and report re-import.

from flask import Blueprint, jsonify, request, g, current_app

from ..decorators import require_account
from ..services import export_service, reporting_service


reports_bp = Blueprint("reports", __name__, url_prefix="/api/reports")


@reports_bp.get("/daily")
@require_account
def daily_report():
    try:
        day = reporting_service.parse_report_date(request.args.get("date"))
    except reporting_service.ReportError as exc:
        return jsonify({"error": str(exc)}), 400

    report = reporting_service.daily_report(account_id=g.account_id, day=day)
    return jsonify(report), 200


@reports_bp.get("/summary")
@require_account
def summary_report():
    return jsonify(reporting_service.summary_report(account_id=g.account_id)), 200


@reports_bp.get("/dashboard")
@require_account
def dashboard():
    return jsonify(reporting_service.dashboard(account_id=g.account_id)), 200


@reports_bp.get("/debts")
@require_account
def debt_summary():
    return jsonify(reporting_service.debt_summary(account_id=g.account_id)), 200


@reports_bp.get("/export")
@require_account
def export_report():
    """
    Export the reporting day as a self-describing JSON document.

    Query parameters:
    - date: YYYY-MM-DD (default: today, UTC)

    The document carries the figures and every entry they were computed
    from; POST it back to /api/reports/import to verify it.
    """
    try:
        day = reporting_service.parse_report_date(request.args.get("date"))
    except reporting_service.ReportError as exc:
        return jsonify({"error": str(exc)}), 400

    snapshot = reporting_service.load_snapshot(g.account_id)
    document = export_service.export_report(snapshot, day)
    current_app.logger.info(
        "Exported report for account %s on %s (%d bookings)",
        g.account_id, document["date"], len(document["bookings"]),
    )
    return jsonify(document), 200


@reports_bp.post("/import")
@require_account
def import_report():
    """
    Recompute figures from a previously exported document.

    Returns 400 if the document is malformed or its figures do not match
    its entries.
    """
    document = request.get_json(silent=True)
    if document is None:
        return jsonify({"error": "Request body must be a JSON report document"}), 400

    try:
        result = export_service.recompute_report(document)
    except reporting_service.ReportError as exc:
        return jsonify({"error": str(exc)}), 400

    return jsonify(result), 200
