# Overview: Flask CLI command groups for bootstrap, account management, and reports.

# backend/sindbad/cli.py
# Commands Legend (run from the backend directory):
# Prereqs:
# - Activate your virtualenv.
# - Set FLASK_APP to wsgi.py (PowerShell: $env:FLASK_APP="wsgi.py").
# - Use: python -m flask <group> <command> [options]
#
# System bootstrap/repair:
# - python -m flask system init-db
#   Create any missing tables (idempotent).
# - python -m flask system reset-db --yes
#   DEV/TEST only: drop and recreate all tables (deletes all data).
#
# Account management:
# - python -m flask accounts create --name "Sindbad Cairo"
#   Create an account and print its API key (shown once).
# - python -m flask accounts list
#   List accounts with record counts and active status.
# - python -m flask accounts rotate-key <ACCOUNT_ID>
#   Issue a new API key; the old one stops working.
# - python -m flask accounts deactivate <ACCOUNT_ID>
#   Block the account's API key without deleting its records.
#
# Reports:
# - python -m flask reports daily --account-id <ID> [--date 2026-01-31]
#   Print the day's income, expenses and profit.
# - python -m flask reports export --account-id <ID> [--date 2026-01-31] [--output report.json]
#   Write the JSON report document (stdout when --output is omitted).

import json

import click
from flask.cli import with_appcontext

from .extensions import db
from .models import Booking, Customer
from .services import account_service, export_service, reporting_service
from .validation import NotFoundError, ValidationError


def _money(cents: int) -> str:
    return f"{cents / 100:,.2f}"


@click.group('system')
def system_group():
    """System bootstrap and repair commands."""


@system_group.command('init-db')
@with_appcontext
def init_db():
    """Create all tables that do not exist yet."""
    db.create_all()
    click.echo("PASS Database tables created.")


@system_group.command('reset-db')
@click.option('--yes', is_flag=True, help='Skip confirmation')
@with_appcontext
def reset_db(yes):
    """
    DANGER: Drop all tables and recreate schema.

    This will DELETE ALL DATA!
    """
    if not yes:
        click.confirm("WARN This will DELETE ALL DATA. Are you sure?", abort=True)

    click.echo("DELETE  Dropping all tables...")
    db.drop_all()

    click.echo("BUILD  Creating all tables...")
    db.create_all()

    click.echo("PASS Database reset complete. Run 'python -m flask accounts create' to add an account.")


@click.group('accounts')
def accounts_group():
    """Account and API key management commands."""


@accounts_group.command('create')
@click.option('--name', required=True, help='Account (agency branch) name')
@with_appcontext
def create_account_cli(name):
    """Create an account and print its API key."""
    try:
        account, api_key = account_service.create_account(name)
    except ValidationError as e:
        click.echo(f"FAIL {e}")
        raise SystemExit(1)

    click.echo(f"PASS Created account: {account.name} (ID: {account.id})")
    click.echo(f"API key (store it now, it will not be shown again): {api_key}")


@accounts_group.command('list')
@with_appcontext
def list_accounts_cli():
    """List all accounts."""
    accounts = account_service.list_accounts()

    if not accounts:
        click.echo("No accounts found.")
        return

    click.echo("\n" + "="*90)
    click.echo(f"{'ID':<38} {'Name':<25} {'Active':<8} {'Customers':<10} {'Bookings'}")
    click.echo("="*90)

    for account in accounts:
        customer_count = db.session.query(Customer).filter_by(account_id=account.id).count()
        booking_count = db.session.query(Booking).filter_by(account_id=account.id).count()
        active_str = "Yes" if account.is_active else "No"
        click.echo(f"{account.id:<38} {account.name:<25} {active_str:<8} {customer_count:<10} {booking_count}")

    click.echo("="*90 + "\n")


@accounts_group.command('rotate-key')
@click.argument('account_id')
@with_appcontext
def rotate_key_cli(account_id):
    """Issue a new API key for an account."""
    try:
        api_key = account_service.rotate_api_key(account_id)
    except NotFoundError as e:
        click.echo(f"FAIL {e}")
        raise SystemExit(1)

    click.echo(f"PASS New API key for {account_id}: {api_key}")


@accounts_group.command('deactivate')
@click.argument('account_id')
@with_appcontext
def deactivate_account_cli(account_id):
    """Deactivate an account (records are kept)."""
    try:
        account = account_service.deactivate_account(account_id)
    except NotFoundError as e:
        click.echo(f"FAIL {e}")
        raise SystemExit(1)

    click.echo(f"PASS Deactivated account: {account.name} (ID: {account.id})")


@click.group('reports')
def reports_group():
    """Report commands."""


def _resolve_report_args(account_id, date_str):
    try:
        account_service.get_account(account_id)
        day = reporting_service.parse_report_date(date_str)
    except (NotFoundError, reporting_service.ReportError) as e:
        click.echo(f"FAIL {e}")
        raise SystemExit(1)
    return day


@reports_group.command('daily')
@click.option('--account-id', required=True, help='Account ID')
@click.option('--date', 'date_str', help='Reporting day YYYY-MM-DD (default: today)')
@with_appcontext
def daily_report_cli(account_id, date_str):
    """Print a day's income, expenses and profit."""
    day = _resolve_report_args(account_id, date_str)
    report = reporting_service.daily_report(account_id=account_id, day=day)

    click.echo(f"\nDaily report for {report['date']}")
    click.echo("-"*40)
    click.echo(f"{'Income':<12} {_money(report['daily_income_cents']):>20}")
    click.echo(f"{'Expenses':<12} {_money(report['daily_expenses_cents']):>20}")
    click.echo(f"{'Profit':<12} {_money(report['daily_profit_cents']):>20}")
    click.echo("-"*40)
    click.echo(f"Bookings: {len(report['bookings'])}  Expenses: {len(report['expenses'])}\n")


@reports_group.command('export')
@click.option('--account-id', required=True, help='Account ID')
@click.option('--date', 'date_str', help='Reporting day YYYY-MM-DD (default: today)')
@click.option('--output', type=click.Path(dir_okay=False, writable=True), help='Write to file instead of stdout')
@with_appcontext
def export_report_cli(account_id, date_str, output):
    """Export the JSON report document."""
    day = _resolve_report_args(account_id, date_str)
    snapshot = reporting_service.load_snapshot(account_id)
    document = export_service.export_report(snapshot, day)
    payload = json.dumps(document, ensure_ascii=False, indent=2)

    if output:
        with open(output, "w", encoding="utf-8") as fh:
            fh.write(payload)
        click.echo(f"PASS Report for {document['date']} written to {output}")
    else:
        click.echo(payload)


def register_commands(app):
    """Register all CLI commands with Flask app."""
    app.cli.add_command(system_group)
    app.cli.add_command(accounts_group)
    app.cli.add_command(reports_group)
