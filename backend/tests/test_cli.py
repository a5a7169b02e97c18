# Overview: Pytest coverage for the management CLI commands.

import json

from sindbad.models import Account
from sindbad.services import account_service, booking_service


class TestAccountCommands:
    def test_create_prints_working_key(self, app, db_session):
        runner = app.test_cli_runner()
        result = runner.invoke(args=["accounts", "create", "--name", "Sindbad Alex"])

        assert result.exit_code == 0, result.output
        api_key = result.output.strip().splitlines()[-1].rsplit(" ", 1)[-1]
        account = account_service.authenticate(api_key)
        assert account is not None
        assert account.name == "Sindbad Alex"

    def test_list(self, app, account_a):
        result = app.test_cli_runner().invoke(args=["accounts", "list"])
        assert result.exit_code == 0
        assert account_a.id in result.output

    def test_deactivate(self, app, db_session, account_a):
        result = app.test_cli_runner().invoke(args=["accounts", "deactivate", account_a.id])

        assert result.exit_code == 0
        assert db_session.get(Account, account_a.id).is_active is False

    def test_rotate_unknown_account(self, app, db_session):
        result = app.test_cli_runner().invoke(args=["accounts", "rotate-key", "missing"])
        assert result.exit_code == 1
        assert "FAIL" in result.output


class TestReportCommands:
    def test_daily(self, app, account_a, customer_a):
        booking_service.create_booking(
            account_id=account_a.id,
            data={"customer_id": customer_a.id, "program_name": "عمرة", "total_amount_cents": 10000,
                  "visa_deposit_cents": 2500},
        )

        result = app.test_cli_runner().invoke(args=["reports", "daily", "--account-id", account_a.id])

        assert result.exit_code == 0, result.output
        assert "25.00" in result.output

    def test_export_to_file(self, app, account_a, customer_a, tmp_path):
        output = tmp_path / "report.json"
        result = app.test_cli_runner().invoke(args=[
            "reports", "export", "--account-id", account_a.id,
            "--date", "2026-01-15", "--output", str(output),
        ])

        assert result.exit_code == 0, result.output
        document = json.loads(output.read_text(encoding="utf-8"))
        assert document["date"] == "2026-01-15"
        assert document["format"] == "sindbad.report"

    def test_bad_date(self, app, account_a):
        result = app.test_cli_runner().invoke(args=[
            "reports", "daily", "--account-id", account_a.id, "--date", "15/01/2026",
        ])
        assert result.exit_code == 1
