# Overview: Service-layer operations for owning accounts and their API keys.

"""
Account Service

Every agency record belongs to exactly one account. Requests identify the
account with an API key sent as a bearer token.

SECURITY FEATURES:
- Cryptographically secure random keys (32 bytes)
- Keys hashed with SHA-256 before storage (fast, one-way)
- Plaintext key is returned once, at issue/rotation time
- Deactivated accounts fail authentication
"""

import hashlib
import secrets

from ..extensions import db
from ..models import Account
from ..validation import NotFoundError, ValidationError


class AccountNotFoundError(NotFoundError):
    """Raised when an account is not found."""
    pass


def generate_api_key() -> str:
    """
    Generate cryptographically secure random API key.

    Returns 64-character hex string (32 bytes of entropy).
    """
    return secrets.token_hex(32)


def hash_api_key(api_key: str) -> str:
    """Hash key for database storage using SHA-256 (keys are already high-entropy)."""
    return hashlib.sha256(api_key.encode('utf-8')).hexdigest()


def create_account(name: str) -> tuple[Account, str]:
    """
    Create an account and issue its first API key.

    Returns:
        (account, plaintext_api_key)
    """
    if not name or not name.strip():
        raise ValidationError("Account name is required")

    api_key = generate_api_key()
    account = Account(name=name.strip(), api_key_hash=hash_api_key(api_key), is_active=True)
    db.session.add(account)
    db.session.commit()
    return account, api_key


def get_account(account_id: str) -> Account:
    account = db.session.query(Account).filter_by(id=account_id).first()
    if not account:
        raise AccountNotFoundError(f"Account {account_id} not found")
    return account


def list_accounts() -> list[Account]:
    return db.session.query(Account).order_by(Account.created_at.asc()).all()


def authenticate(api_key: str | None) -> Account | None:
    """Resolve an API key to its active account, or None."""
    if not api_key:
        return None
    account = db.session.query(Account).filter_by(api_key_hash=hash_api_key(api_key)).first()
    if not account or not account.is_active:
        return None
    return account


def rotate_api_key(account_id: str) -> str:
    """Replace the account's key; the old key stops working immediately."""
    account = get_account(account_id)
    api_key = generate_api_key()
    account.api_key_hash = hash_api_key(api_key)
    db.session.commit()
    return api_key


def deactivate_account(account_id: str) -> Account:
    account = get_account(account_id)
    account.is_active = False
    db.session.commit()
    return account
