# Overview: Pytest coverage for report export/import and visa share links.

"""
Export Tests

The report document must survive a JSON round trip: re-importing an export
reproduces the same figures, and edited figures are rejected.
"""

import json
from types import SimpleNamespace
from urllib.parse import unquote

import pytest

from sindbad.calculations import report_figures
from sindbad.services import (
    booking_service,
    debt_service,
    expense_service,
    export_service,
    reporting_service,
)
from sindbad.services.reporting_service import ReportError
from sindbad.time_utils import to_iso_date, today


@pytest.fixture
def populated(account_a, customer_a):
    """Account A with a paid and an unpaid booking, two expenses and three debts."""
    day = today()
    booking_service.create_booking(
        account_id=account_a.id,
        data={"customer_id": customer_a.id, "program_name": "عمرة", "total_amount_cents": 10000,
              "visa_deposit_cents": 2000},
    )
    booking_service.create_booking(
        account_id=account_a.id,
        data={"customer_id": customer_a.id, "program_name": "حج", "total_amount_cents": 6000,
              "visa_deposit_cents": 1000, "is_paid": True},
    )
    expense_service.create_expense(
        account_id=account_a.id,
        data={"category": "office", "amount_cents": 500, "date": to_iso_date(day)},
    )
    expense_service.create_expense(
        account_id=account_a.id,
        data={"category": "transport", "amount_cents": 300, "date": "2020-01-01"},
    )
    for amount, debt_type, is_paid in ((1000, "receivable", False), (400, "payable", False),
                                       (200, "receivable", True)):
        debt_service.create_debt(
            account_id=account_a.id,
            data={"person_name": "محمود", "amount_cents": amount, "type": debt_type,
                  "is_paid": is_paid, "date": to_iso_date(day)},
        )
    return account_a, day


class TestReportRoundTrip:
    def test_export_then_import_reproduces_figures(self, populated):
        account, day = populated
        snapshot = reporting_service.load_snapshot(account.id)

        document = json.loads(json.dumps(export_service.export_report(snapshot, day)))
        imported_day, imported = export_service.import_report(document)

        assert imported_day == day
        assert report_figures(imported, day) == report_figures(snapshot, day)

    def test_exported_figures(self, populated):
        account, day = populated
        document = export_service.export_report(reporting_service.load_snapshot(account.id), day)
        figures = document["figures"]

        assert document["format"] == export_service.REPORT_FORMAT
        assert document["date"] == to_iso_date(day)
        assert figures["daily_income_cents"] == 8000
        assert figures["daily_expenses_cents"] == 500
        assert figures["daily_profit_cents"] == 7500
        assert figures["total_expenses_cents"] == 800
        assert figures["remaining_payments_cents"] == 8000
        assert figures["total_receivables_cents"] == 1000
        assert figures["total_payables_cents"] == 400
        assert {b["customer"] for b in document["bookings"]} == {"أحمد محمد"}

    def test_recompute_report(self, populated):
        account, day = populated
        document = export_service.export_report(reporting_service.load_snapshot(account.id), day)

        result = export_service.recompute_report(document)

        assert result["figures"] == document["figures"]
        assert result["debt_summary"]["net_position_cents"] == 600

    def test_tampered_figures_rejected(self, populated):
        account, day = populated
        document = export_service.export_report(reporting_service.load_snapshot(account.id), day)
        document["figures"]["net_profit_cents"] += 100

        with pytest.raises(ReportError, match="net_profit_cents"):
            export_service.import_report(document)

    def test_dropped_entry_rejected(self, populated):
        account, day = populated
        document = export_service.export_report(reporting_service.load_snapshot(account.id), day)
        document["expenses"].pop()

        with pytest.raises(ReportError):
            export_service.import_report(document)

    @pytest.mark.parametrize("document", [
        [],
        {"format": "other", "version": 1, "date": "2026-01-01"},
        {"format": "sindbad.report", "version": 99, "date": "2026-01-01"},
        {"format": "sindbad.report", "version": 1},
        {"format": "sindbad.report", "version": 1, "date": "2026-01-01",
         "bookings": [{"total_amount_cents": "ten"}]},
        {"format": "sindbad.report", "version": 1, "date": "2026-01-01",
         "debts": [{"type": "gift", "amount_cents": 1}]},
        {"format": "sindbad.report", "version": 1, "date": "not-a-date"},
    ])
    def test_malformed_documents_rejected(self, document):
        with pytest.raises(ReportError):
            export_service.import_report(document)


class TestShareLink:
    def _visa(self):
        visa = SimpleNamespace(
            visa_number="V-77",
            from_location="القاهرة",
            to_location="جدة",
            departure_date=None,
        )
        customer = SimpleNamespace(full_name="أحمد محمد")
        return visa, customer

    @pytest.mark.parametrize("raw, expected", [
        ("01012345678", "201012345678"),
        ("+20 101 234 5678", "201012345678"),
        ("201012345678", "201012345678"),
        ("1012345678", "21012345678"),
    ])
    def test_normalize_phone(self, raw, expected):
        assert export_service.normalize_phone(raw) == expected

    def test_phone_without_digits_rejected(self):
        with pytest.raises(ValueError):
            export_service.normalize_phone("---")

    def test_share_link_embeds_message(self):
        visa, customer = self._visa()
        link = export_service.share_link(
            "01012345678", visa, customer, agency_name="السندباد", agency_phones=["01119452522"]
        )

        assert link["url"].startswith("https://wa.me/201012345678?text=")
        assert "V-77" in link["message"]
        assert "01119452522" in link["message"]
        assert unquote(link["url"].split("text=", 1)[1]) == link["message"]
