# Overview: Pytest coverage for customers, cascade delete, and account isolation.

import pytest

from sindbad.models import Booking, Customer, Visa
from sindbad.services import booking_service, customer_service, visa_service
from sindbad.services.customer_service import CustomerNotFoundError
from sindbad.validation import ValidationError


class TestCustomerValidation:
    def test_required_fields(self, account_a):
        with pytest.raises(ValidationError, match="national_id"):
            customer_service.create_customer(
                account_id=account_a.id,
                data={"full_name": "أحمد محمد", "phone_number": "01012345678"},
            )

    def test_minimum_lengths(self, account_a):
        with pytest.raises(ValidationError, match="phone_number"):
            customer_service.create_customer(
                account_id=account_a.id,
                data={"full_name": "أحمد محمد", "phone_number": "0101", "national_id": "29001011234567"},
            )

    def test_visa_status_choices(self, account_a, customer_a):
        with pytest.raises(ValidationError, match="visa_status"):
            customer_service.update_customer(
                account_id=account_a.id, customer_id=customer_a.id, data={"visa_status": "lost"}
            )

    def test_unknown_field_rejected(self, account_a, customer_a):
        with pytest.raises(ValidationError, match="account_id"):
            customer_service.update_customer(
                account_id=account_a.id, customer_id=customer_a.id, data={"account_id": "other"}
            )

    def test_defaults(self, customer_a):
        assert customer_a.visa_status == "pending"
        assert len(customer_a.id) == 36


class TestCustomerCascade:
    def test_delete_removes_bookings_and_visas(self, db_session, account_a, customer_a):
        booking_service.create_booking(
            account_id=account_a.id,
            data={"customer_id": customer_a.id, "program_name": "عمرة", "total_amount_cents": 5000},
        )
        visa_service.create_visa(
            account_id=account_a.id,
            data={
                "customer_id": customer_a.id,
                "visa_number": "V-1001",
                "issue_date": "2026-01-01",
                "expiry_date": "2026-04-01",
                "departure_date": "2026-02-01",
            },
        )

        removed = customer_service.delete_customer(account_id=account_a.id, customer_id=customer_a.id)

        assert removed == {"bookings": 1, "visas": 1}
        assert db_session.query(Customer).count() == 0
        assert db_session.query(Booking).count() == 0
        assert db_session.query(Visa).count() == 0

    def test_delete_unknown_customer(self, account_a):
        with pytest.raises(CustomerNotFoundError):
            customer_service.delete_customer(account_id=account_a.id, customer_id="missing")


class TestCustomerIsolation:
    def test_list_only_returns_own_customers(self, account_a, account_b, customer_a, customer_b):
        assert [c.id for c in customer_service.list_customers(account_a.id)] == [customer_a.id]
        assert [c.id for c in customer_service.list_customers(account_b.id)] == [customer_b.id]

    def test_cannot_read_or_delete_foreign_customer(self, account_a, customer_b):
        with pytest.raises(CustomerNotFoundError):
            customer_service.get_customer(account_a.id, customer_b.id)
        with pytest.raises(CustomerNotFoundError):
            customer_service.delete_customer(account_id=account_a.id, customer_id=customer_b.id)

    def test_search_by_name_phone_and_national_id(self, account_a, customer_a):
        assert customer_service.list_customers(account_a.id, search="أحمد")
        assert customer_service.list_customers(account_a.id, search="0101234")
        assert customer_service.list_customers(account_a.id, search="2900101")
        assert customer_service.list_customers(account_a.id, search="غير موجود") == []
