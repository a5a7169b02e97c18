"""
Pytest fixtures for Sindbad backend tests.

Provides test database setup, two isolated accounts, and a test client.
"""

import pytest
from sindbad import create_app
from sindbad.extensions import db
from sindbad.services import account_service, customer_service


@pytest.fixture(scope='session')
def app():
    """Create application for testing."""
    app = create_app({
        'TESTING': True,
        'SQLALCHEMY_DATABASE_URI': 'sqlite:///:memory:',
        'SQLALCHEMY_TRACK_MODIFICATIONS': False,
    })

    with app.app_context():
        db.create_all()
        yield app
        db.drop_all()


@pytest.fixture(scope='function')
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture(scope='function')
def db_session(app):
    """Create fresh database for each test."""
    with app.app_context():
        # Clear all data but keep schema
        meta = db.metadata
        for table in reversed(meta.sorted_tables):
            db.session.execute(table.delete())
        db.session.commit()

        yield db.session

        # Cleanup after test
        db.session.rollback()


@pytest.fixture(scope='function')
def account_a(db_session):
    """Create Account A (first owner)."""
    account, _ = account_service.create_account("Sindbad Cairo")
    return account


@pytest.fixture(scope='function')
def account_b(db_session):
    """Create Account B (second owner)."""
    account, _ = account_service.create_account("Sindbad Jeddah")
    return account


@pytest.fixture(scope='function')
def customer_a(account_a):
    """Create a customer owned by Account A."""
    return customer_service.create_customer(
        account_id=account_a.id,
        data={
            "full_name": "أحمد محمد",
            "phone_number": "01012345678",
            "national_id": "29001011234567",
            "program_name": "عمرة رجب",
        },
    )


@pytest.fixture(scope='function')
def customer_b(account_b):
    """Create a customer owned by Account B."""
    return customer_service.create_customer(
        account_id=account_b.id,
        data={
            "full_name": "سارة علي",
            "phone_number": "01198765432",
            "national_id": "29505051234567",
        },
    )


def auth_headers(token: str) -> dict:
    """Helper to create Authorization headers."""
    return {'Authorization': f'Bearer {token}'}


@pytest.fixture(scope='function')
def headers_a(account_a):
    """Authorization headers for Account A (issues a fresh key)."""
    return auth_headers(account_service.rotate_api_key(account_a.id))


@pytest.fixture(scope='function')
def headers_b(account_b):
    """Authorization headers for Account B (issues a fresh key)."""
    return auth_headers(account_service.rotate_api_key(account_b.id))
