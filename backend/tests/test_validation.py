import unittest
from datetime import date

from sindbad.models import Booking, Customer, Visa
from sindbad.validation import (
    MAX_AMOUNT_CENTS,
    ModelValidationPolicy,
    ValidationError,
    enforce_rules_amounts,
    enforce_rules_booking,
    enforce_rules_route,
    enforce_rules_visa_dates,
    merged_values,
    validate_payload,
)


BOOKING_FIELDS = ModelValidationPolicy(
    writable_fields={"customer_id", "program_name", "total_amount_cents", "is_paid", "departure_date"},
    required_on_create={"customer_id", "program_name"},
)


class ValidatePayloadTests(unittest.TestCase):
    def test_coerces_strings(self):
        patch = validate_payload(
            model=Booking,
            payload={
                "customer_id": " c1 ",
                "program_name": "Umrah",
                "total_amount_cents": "1500",
                "is_paid": "true",
                "departure_date": "2026-02-01",
            },
            policy=BOOKING_FIELDS,
            partial=False,
        )
        self.assertEqual(patch["customer_id"], "c1")
        self.assertEqual(patch["total_amount_cents"], 1500)
        self.assertIs(patch["is_paid"], True)
        self.assertEqual(patch["departure_date"], date(2026, 2, 1))

    def test_rejects_scientific_notation(self):
        with self.assertRaises(ValidationError):
            validate_payload(
                model=Booking,
                payload={"total_amount_cents": "1e5"},
                policy=BOOKING_FIELDS,
                partial=True,
            )

    def test_rejects_non_boolean(self):
        with self.assertRaises(ValidationError):
            validate_payload(model=Booking, payload={"is_paid": 1}, policy=BOOKING_FIELDS, partial=True)

    def test_rejects_blank_required_string(self):
        with self.assertRaises(ValidationError):
            validate_payload(model=Booking, payload={"program_name": "   "}, policy=BOOKING_FIELDS, partial=True)

    def test_rejects_overlong_string(self):
        policy = ModelValidationPolicy(writable_fields={"phone_number"})
        with self.assertRaises(ValidationError):
            validate_payload(model=Customer, payload={"phone_number": "0" * 40}, policy=policy, partial=True)

    def test_rejects_non_object_payload(self):
        with self.assertRaises(ValidationError):
            validate_payload(model=Booking, payload=["x"], policy=BOOKING_FIELDS, partial=True)


class BusinessRuleTests(unittest.TestCase):
    def test_amount_ceiling(self):
        with self.assertRaises(ValidationError):
            enforce_rules_amounts({"total_amount_cents": MAX_AMOUNT_CENTS + 1}, ("total_amount_cents",))
        enforce_rules_amounts({"total_amount_cents": MAX_AMOUNT_CENTS}, ("total_amount_cents",))

    def test_deposit_equal_to_total_is_allowed(self):
        enforce_rules_booking({"total_amount_cents": 500, "visa_deposit_cents": 500})
        with self.assertRaises(ValidationError):
            enforce_rules_booking({"total_amount_cents": 500, "visa_deposit_cents": 501})

    def test_route_sides(self):
        enforce_rules_route({"travel_direction": "egypt-to-saudi", "from_location": "سوهاج", "to_location": "الطائف"})
        with self.assertRaises(ValidationError):
            enforce_rules_route({"travel_direction": "egypt-to-saudi", "to_location": "سوهاج"})

    def test_visa_dates(self):
        enforce_rules_visa_dates({"issue_date": date(2026, 1, 1), "expiry_date": date(2026, 1, 1)})
        with self.assertRaises(ValidationError):
            enforce_rules_visa_dates({"issue_date": date(2026, 1, 2), "expiry_date": date(2026, 1, 1)})

    def test_merged_values_prefers_patch(self):
        visa = Visa(issue_date=date(2026, 1, 1), expiry_date=date(2026, 3, 1))
        values = merged_values(visa, {"expiry_date": date(2026, 5, 1)}, ("issue_date", "expiry_date"))
        self.assertEqual(values, {"issue_date": date(2026, 1, 1), "expiry_date": date(2026, 5, 1)})


if __name__ == "__main__":
    unittest.main()
