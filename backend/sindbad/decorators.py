# Overview: Request decorators for API routes.

from functools import wraps
from flask import request, jsonify, g

from .services import account_service


def require_account(f):
    """
    Require an account API key and establish ownership context.

    Sets the following Flask g attributes:
    - g.account: The authenticated Account object
    - g.account_id: Owner id applied to every read and write

    SECURITY: Returns 401 if:
    - No Authorization header
    - Unknown API key
    - Account deactivated
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        # Extract key from Authorization header
        auth_header = request.headers.get("Authorization")

        if not auth_header or not auth_header.startswith("Bearer "):
            return jsonify({"error": "Authentication required"}), 401

        api_key = auth_header.split(" ", 1)[1].strip()

        account = account_service.authenticate(api_key)
        if not account:
            return jsonify({"error": "Invalid API key"}), 401

        g.account = account
        g.account_id = account.id

        return f(*args, **kwargs)

    return decorated_function
