# Overview: Report document export/import and visa card sharing payloads.

"""
Export Service

REPORT DOCUMENT: a self-describing JSON document holding the figures for a
reporting day together with every booking, expense and debt entry they were
computed from. Importing the document rebuilds a snapshot from the entries
and recomputes the figures, which must match the ones stated in the
document; a tampered or truncated document is rejected.

VISA SHARING: rendering the card to PNG/PDF happens outside this service.
Here we only produce the card data and a messaging deep link
(https://wa.me/<number>?text=<message>).
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime
from urllib.parse import quote

from sindbad.calculations import RecordSnapshot, report_figures
from sindbad.constants import DEBT_TYPES
from sindbad.services.reporting_service import ReportError, debt_summary_for
from sindbad.time_utils import parse_iso_date, parse_iso_datetime, to_iso_date, to_utc_z, utcnow

REPORT_FORMAT = "sindbad.report"
REPORT_VERSION = 1

WHATSAPP_URL = "https://wa.me"


@dataclass
class BookingEntry:
    customer_name: str | None
    program_name: str | None
    total_amount_cents: int
    visa_deposit_cents: int
    remaining_amount_cents: int
    is_paid: bool
    created_at: datetime


@dataclass
class ExpenseEntry:
    category: str | None
    description: str | None
    amount_cents: int
    date: date


@dataclass
class DebtEntry:
    person_name: str | None
    type: str
    amount_cents: int
    is_paid: bool
    date: date | None


# ---------------------------------------------------------------------------
# Report documents
# ---------------------------------------------------------------------------

def export_report(snapshot: RecordSnapshot, day: date) -> dict:
    return {
        "format": REPORT_FORMAT,
        "version": REPORT_VERSION,
        "date": to_iso_date(day),
        "generated_at": to_utc_z(utcnow()),
        "figures": report_figures(snapshot, day),
        "debt_summary": debt_summary_for(snapshot),
        "bookings": [
            {
                "customer": snapshot.customer_name(b.customer_id),
                "program": b.program_name,
                "total_amount_cents": b.total_amount_cents,
                "visa_deposit_cents": b.visa_deposit_cents,
                "remaining_amount_cents": b.remaining_amount_cents,
                "is_paid": b.is_paid,
                "created_at": to_utc_z(b.created_at),
            }
            for b in snapshot.bookings
        ],
        "expenses": [
            {
                "category": e.category,
                "description": e.description,
                "amount_cents": e.amount_cents,
                "date": to_iso_date(e.date),
            }
            for e in snapshot.expenses
        ],
        "debts": [
            {
                "person_name": d.person_name,
                "type": d.type,
                "amount_cents": d.amount_cents,
                "is_paid": d.is_paid,
                "date": to_iso_date(d.date),
            }
            for d in snapshot.debts
        ],
    }


def _amount(entry: dict, key: str) -> int:
    value = entry.get(key, 0)
    if not isinstance(value, int) or isinstance(value, bool) or value < 0:
        raise ReportError(f"{key} must be a non-negative integer")
    return value


def _flag(entry: dict, key: str) -> bool:
    value = entry.get(key, False)
    if not isinstance(value, bool):
        raise ReportError(f"{key} must be a boolean")
    return value


def _entries(document: dict, key: str) -> list:
    entries = document.get(key, [])
    if not isinstance(entries, list) or not all(isinstance(e, dict) for e in entries):
        raise ReportError(f"{key} must be a list of objects")
    return entries


def import_report(document: dict) -> tuple[date, RecordSnapshot]:
    """
    Rebuild the reporting day and snapshot from an exported document.

    Raises:
        ReportError: unknown format/version, malformed entries, or stated
        figures that disagree with the entries.
    """
    if not isinstance(document, dict):
        raise ReportError("Report document must be a JSON object")
    if document.get("format") != REPORT_FORMAT:
        raise ReportError("Unrecognized report format")
    if document.get("version") != REPORT_VERSION:
        raise ReportError(f"Unsupported report version: {document.get('version')}")

    try:
        day = parse_iso_date(document.get("date"))
        bookings = [
            BookingEntry(
                customer_name=e.get("customer"),
                program_name=e.get("program"),
                total_amount_cents=_amount(e, "total_amount_cents"),
                visa_deposit_cents=_amount(e, "visa_deposit_cents"),
                remaining_amount_cents=_amount(e, "remaining_amount_cents"),
                is_paid=_flag(e, "is_paid"),
                created_at=parse_iso_datetime(e.get("created_at")),
            )
            for e in _entries(document, "bookings")
        ]
        expenses = [
            ExpenseEntry(
                category=e.get("category"),
                description=e.get("description"),
                amount_cents=_amount(e, "amount_cents"),
                date=parse_iso_date(e.get("date")),
            )
            for e in _entries(document, "expenses")
        ]
        debts = []
        for e in _entries(document, "debts"):
            if e.get("type") not in DEBT_TYPES:
                raise ReportError(f"Debt type must be one of: {', '.join(DEBT_TYPES)}")
            debts.append(
                DebtEntry(
                    person_name=e.get("person_name"),
                    type=e["type"],
                    amount_cents=_amount(e, "amount_cents"),
                    is_paid=_flag(e, "is_paid"),
                    date=parse_iso_date(e.get("date")),
                )
            )
    except (AttributeError, TypeError, ValueError) as exc:
        raise ReportError(f"Malformed report document: {exc}")

    if day is None:
        raise ReportError("Report document is missing its date")

    snapshot = RecordSnapshot(bookings=bookings, expenses=expenses, debts=debts)

    stated = document.get("figures")
    if stated is not None:
        if not isinstance(stated, dict):
            raise ReportError("figures must be an object")
        recomputed = report_figures(snapshot, day)
        mismatched = sorted(k for k, v in recomputed.items() if stated.get(k) != v)
        if mismatched:
            raise ReportError(f"Report figures do not match entries: {', '.join(mismatched)}")

    return day, snapshot


def recompute_report(document: dict) -> dict:
    day, snapshot = import_report(document)
    return {
        "date": to_iso_date(day),
        "figures": report_figures(snapshot, day),
        "debt_summary": debt_summary_for(snapshot),
    }


# ---------------------------------------------------------------------------
# Visa cards
# ---------------------------------------------------------------------------

def visa_card(visa, customer, *, agency_name: str, agency_phones: list[str]) -> dict:
    """Everything a renderer needs to draw the visa card."""
    return {
        "agency_name": agency_name,
        "agency_phones": list(agency_phones),
        "customer_name": customer.full_name,
        "national_id": customer.national_id,
        "phone_number": customer.phone_number,
        "visa_number": visa.visa_number,
        "status": visa.status,
        "travel_direction": visa.travel_direction,
        "from_location": visa.from_location,
        "to_location": visa.to_location,
        "issue_date": to_iso_date(visa.issue_date),
        "expiry_date": to_iso_date(visa.expiry_date),
        "departure_date": to_iso_date(visa.departure_date),
        "booking_date": to_iso_date(visa.booking_date),
        "file_name": f"visa-{visa.visa_number}.png",
    }


def normalize_phone(raw: str, *, country_prefix: str = "2") -> str:
    """
    Digits-only international number for a messaging link.

    Local numbers with a leading 0 get the country prefix; anything else not
    already starting with the prefix gets it too.
    """
    digits = re.sub(r"\D", "", raw or "")
    if not digits:
        raise ValueError("Phone number has no digits")
    if digits.startswith("0"):
        digits = country_prefix + digits
    if not digits.startswith(country_prefix):
        digits = country_prefix + digits
    return digits


def share_message(visa, customer, *, agency_name: str, agency_phones: list[str]) -> str:
    lines = [
        f"تأشيرة العميل: {customer.full_name if customer else 'غير معروف'}",
        f"رقم التأشيرة: {visa.visa_number}",
    ]
    if visa.from_location and visa.to_location:
        lines.append(f"الاتجاه: من {visa.from_location} إلى {visa.to_location}")
    if visa.departure_date:
        lines.append(f"تاريخ الذهاب: {to_iso_date(visa.departure_date)}")
    lines.append("")
    lines.append(agency_name)
    if agency_phones:
        lines.append(f"للتواصل: {' - '.join(agency_phones)}")
    return "\n".join(lines)


def share_link(
    phone: str,
    visa,
    customer,
    *,
    agency_name: str,
    agency_phones: list[str],
    country_prefix: str = "2",
) -> dict:
    number = normalize_phone(phone, country_prefix=country_prefix)
    message = share_message(visa, customer, agency_name=agency_name, agency_phones=agency_phones)
    return {
        "phone": number,
        "message": message,
        "url": f"{WHATSAPP_URL}/{number}?text={quote(message)}",
    }
