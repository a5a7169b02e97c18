# Overview: System health and version endpoints.

"""
System health and version endpoints.

Neither endpoint requires an API key; they expose counts and timings only.
"""

import sys
import time

from flask import Blueprint, current_app

from ..extensions import db
from ..models import Account, Booking, Customer
from sindbad.time_utils import to_utc_z, utcnow

system_bp = Blueprint("system", __name__)

API_VERSION = "1.0.0"


def check_database_health() -> dict:
    """
    Check database connectivity and basic operations.

    Returns dict with status and details.
    """
    start_time = time.time()
    try:
        account_count = db.session.query(Account).count()
        active_accounts = db.session.query(Account).filter_by(is_active=True).count()
        customer_count = db.session.query(Customer).count()
        booking_count = db.session.query(Booking).count()

        elapsed_ms = (time.time() - start_time) * 1000

        details = {
            "accounts": account_count,
            "active_accounts": active_accounts,
            "customers": customer_count,
            "bookings": booking_count,
        }
        if active_accounts == 0:
            return {
                "status": "degraded",
                "latency_ms": round(elapsed_ms, 2),
                "warning": "No active accounts; create one with `flask accounts create`",
                "details": details,
            }

        return {
            "status": "healthy",
            "latency_ms": round(elapsed_ms, 2),
            "details": details,
        }
    except Exception:
        elapsed_ms = (time.time() - start_time) * 1000
        current_app.logger.exception("Database health check failed")
        return {
            "status": "unhealthy",
            "latency_ms": round(elapsed_ms, 2),
            "error": "Database error"
        }


@system_bp.get("/health")
def health():
    """
    Health check endpoint.

    Returns:
    - 200: healthy or degraded (no active accounts yet)
    - 503: database unreachable
    """
    start_time = time.time()
    database_health = check_database_health()

    if database_health["status"] == "unhealthy":
        http_status = 503
    else:
        http_status = 200

    response = {
        "status": database_health["status"],
        "timestamp": to_utc_z(utcnow()),
        "total_latency_ms": round((time.time() - start_time) * 1000, 2),
        "checks": {
            "database": database_health,
        }
    }

    return response, http_status


@system_bp.get("/version")
def version():
    """
    Version endpoint for deployment debugging.

    Does NOT expose secret keys, database credentials or internal paths.
    """
    env = "production" if not current_app.debug else "development"

    return {
        "api_version": API_VERSION,
        "agency": current_app.config["AGENCY_NAME"],
        "environment": env,
        "python_version": sys.version.split()[0],
        "server_time": to_utc_z(utcnow()),
    }
