from __future__ import annotations
from datetime import date, datetime
from sindbad.time_utils import parse_iso_date, parse_iso_datetime

from dataclasses import dataclass
from typing import Any

from sqlalchemy import Boolean, Date, DateTime, Integer, String, Text
from sqlalchemy.orm import DeclarativeMeta

from sindbad.constants import ROUTE_LOCATIONS


# Maximum amount: 999,999,999.99 (99,999,999,999 minor units)
# This prevents database overflow issues and nonsensical amounts
MAX_AMOUNT_CENTS = 99_999_999_999


class ValidationError(ValueError):
    """400-level input problem."""


class NotFoundError(LookupError):
    """404-level referential problem: the id does not exist for this account."""


@dataclass(frozen=True)
class ModelValidationPolicy:
    """
    Central policy layer:
    - writable_fields: what clients are allowed to set (security boundary)
    - required_on_create: fields required for POST
    - choices: closed value sets for enum-like string columns
    - min_lengths: minimum stripped length for string columns
    """
    writable_fields: set[str]
    required_on_create: set[str] = None  # type: ignore
    choices: dict[str, tuple] | None = None
    min_lengths: dict[str, int] | None = None


def _columns_by_key(model: DeclarativeMeta) -> dict[str, Any]:
    mapper = model.__mapper__
    return {c.key: c for c in mapper.columns}


def _coerce_value(col, value: Any):
    coltype = col.type

    if value is None:
        return None

    # Integers - strict validation to reject floats and scientific notation
    if isinstance(coltype, Integer):
        # Already an int (but not bool which is a subclass of int)
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        # String input - must be plain digits (with optional leading minus)
        if isinstance(value, str):
            stripped = value.strip()
            if not stripped:
                raise ValidationError(f"{col.key} must be an integer")
            # Reject scientific notation (e.g., "1e15", "1E10")
            if 'e' in stripped.lower():
                raise ValidationError(f"{col.key} must be a plain integer (scientific notation not allowed)")
            # Reject decimal points (e.g., "12.5")
            if '.' in stripped:
                raise ValidationError(f"{col.key} must be an integer (no decimals)")
            try:
                return int(stripped)
            except ValueError:
                raise ValidationError(f"{col.key} must be an integer")
        # Reject floats explicitly
        if isinstance(value, float):
            raise ValidationError(f"{col.key} must be an integer, not a decimal")
        # Other types
        raise ValidationError(f"{col.key} must be an integer")

    # Booleans
    if isinstance(coltype, Boolean):
        if isinstance(value, bool):
            return value
        if isinstance(value, str) and value.strip().lower() in ("true", "false"):
            return value.strip().lower() == "true"
        raise ValidationError(f"{col.key} must be a boolean")

    # Datetimes (accept ISO-8601 strings; normalize to UTC)
    if isinstance(coltype, DateTime):
        if isinstance(value, datetime):
            return value
        if isinstance(value, str):
            try:
                dt = parse_iso_datetime(value)
            except ValueError:
                raise ValidationError(f"{col.key} must be an ISO-8601 datetime")
            if dt is None:
                raise ValidationError(f"{col.key} must be an ISO-8601 datetime")
            return dt
        raise ValidationError(f"{col.key} must be a datetime")

    # Calendar days ("YYYY-MM-DD"; full datetimes keep their day part)
    if isinstance(coltype, Date):
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value
        if isinstance(value, str):
            try:
                d = parse_iso_date(value)
            except ValueError:
                raise ValidationError(f"{col.key} must be an ISO-8601 date")
            if d is None:
                raise ValidationError(f"{col.key} must be an ISO-8601 date")
            return d
        raise ValidationError(f"{col.key} must be a date")

    # Strings / Text
    if isinstance(coltype, (String, Text)):
        return str(value).strip()

    # Default: leave as-is
    return value


def validate_payload(
    *,
    model: DeclarativeMeta,
    payload: dict,
    policy: ModelValidationPolicy,
    partial: bool,
) -> dict:
    """
    Validates + normalizes incoming JSON against:
    - SQLAlchemy column metadata (nullable, type, String length)
    - a policy allowlist (writable_fields)
    - required_on_create (if partial=False)
    - closed choices and minimum lengths from the policy
    Returns a cleaned patch dict with only writable fields.

    partial=False: create semantics (enforce required_on_create)
    partial=True: patch semantics (validate only provided keys)
    """
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise ValidationError("Invalid JSON payload")

    required = policy.required_on_create or set()
    if not partial:
        missing = sorted(f for f in required if payload.get(f) in (None, ""))
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")

    cols = _columns_by_key(model)

    # Reject unknown / non-writable fields
    for k in payload.keys():
        if k not in policy.writable_fields:
            raise ValidationError(f"Field not allowed: {k}")
        if k not in cols:
            raise ValidationError(f"Unknown field: {k}")

    choices = policy.choices or {}
    min_lengths = policy.min_lengths or {}
    patch: dict = {}

    for k, raw in payload.items():
        col = cols[k]

        # NULL handling (a column with a Python default may still be omitted on create)
        if raw is None:
            if not col.nullable:
                raise ValidationError(f"{k} cannot be null")
            patch[k] = None
            continue

        val = _coerce_value(col, raw)

        # Blank string check for non-nullable text fields
        if isinstance(col.type, (String, Text)) and not col.nullable:
            if isinstance(val, str) and val == "":
                raise ValidationError(f"{k} cannot be blank")

        # Max length check for String(n)
        if isinstance(col.type, String) and col.type.length and isinstance(val, str):
            if len(val) > col.type.length:
                raise ValidationError(f"{k} exceeds max length {col.type.length}")

        if k in min_lengths and isinstance(val, str) and val and len(val) < min_lengths[k]:
            raise ValidationError(f"{k} must be at least {min_lengths[k]} characters")

        if k in choices and val not in choices[k]:
            raise ValidationError(f"{k} must be one of: {', '.join(choices[k])}")

        patch[k] = val

    return patch


def merged_values(instance, patch: dict, fields: tuple[str, ...]) -> dict:
    """Field values as they will be after applying patch to instance (None = new record)."""
    values = {}
    for field in fields:
        if field in patch:
            values[field] = patch[field]
        elif instance is not None:
            values[field] = getattr(instance, field)
        else:
            values[field] = None
    return values


def enforce_rules_amounts(patch: dict, fields: tuple[str, ...]) -> None:
    """
    Business rules that are not captured by SQLAlchemy metadata alone.
    Keep these small and centralized.
    """
    for field in fields:
        if field in patch and patch[field] is not None:
            amount = patch[field]
            if amount < 0:
                raise ValidationError(f"{field} must be >= 0")
            if amount > MAX_AMOUNT_CENTS:
                raise ValidationError(f"{field} cannot exceed {MAX_AMOUNT_CENTS} ({MAX_AMOUNT_CENTS / 100:,.2f})")


def enforce_rules_booking(values: dict) -> None:
    # Deposit may never exceed the total; rejected here rather than clamped
    total = values.get("total_amount_cents") or 0
    deposit = values.get("visa_deposit_cents") or 0
    if deposit > total:
        raise ValidationError("visa_deposit_cents cannot exceed total_amount_cents")


def enforce_rules_route(values: dict) -> None:
    # Origin/destination must sit on the correct side for the direction
    direction = values.get("travel_direction")
    if direction not in ROUTE_LOCATIONS:
        return
    origins, destinations = ROUTE_LOCATIONS[direction]

    from_location = values.get("from_location")
    to_location = values.get("to_location")
    if from_location and from_location not in origins:
        raise ValidationError(f"from_location '{from_location}' is not valid for {direction}")
    if to_location and to_location not in destinations:
        raise ValidationError(f"to_location '{to_location}' is not valid for {direction}")


def enforce_rules_visa_dates(values: dict) -> None:
    issue = values.get("issue_date")
    expiry = values.get("expiry_date")
    if issue and expiry and expiry < issue:
        raise ValidationError("expiry_date cannot be before issue_date")
