from __future__ import annotations

from ..extensions import db
from ..identifiers import new_id
from ..time_utils import to_iso_date, to_utc_z, utcnow


class Booking(db.Model):
    """
    A reserved travel/pilgrimage program for a customer.

    DERIVED FIELD: remaining_amount_cents is stored, not computed on read.
    It is written together with the fields it depends on, in the same
    transaction:
    - unpaid: remaining = total - deposit
    - paid:   remaining = 0
    """
    __tablename__ = "bookings"
    __table_args__ = (
        db.CheckConstraint("total_amount_cents >= 0", name="ck_bookings_total_nonneg"),
        db.CheckConstraint("visa_deposit_cents >= 0", name="ck_bookings_deposit_nonneg"),
        db.CheckConstraint("visa_deposit_cents <= total_amount_cents", name="ck_bookings_deposit_le_total"),
        db.CheckConstraint("remaining_amount_cents >= 0", name="ck_bookings_remaining_nonneg"),
        db.Index("ix_bookings_account_created", "account_id", "created_at"),
    )

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    account_id = db.Column(db.String(36), db.ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False, index=True)
    customer_id = db.Column(db.String(36), db.ForeignKey("customers.id", ondelete="CASCADE"), nullable=False, index=True)

    program_name = db.Column(db.String(255), nullable=False)

    total_amount_cents = db.Column(db.Integer, nullable=False, default=0)
    visa_deposit_cents = db.Column(db.Integer, nullable=False, default=0)
    remaining_amount_cents = db.Column(db.Integer, nullable=False, default=0)
    is_paid = db.Column(db.Boolean, nullable=False, default=False, index=True)

    travel_direction = db.Column(db.String(16), nullable=False, default="egypt-to-saudi")
    from_location = db.Column(db.String(128), nullable=True)
    to_location = db.Column(db.String(128), nullable=True)
    departure_date = db.Column(db.Date, nullable=True)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow, server_default=db.func.now(), index=True)
    updated_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow, server_default=db.func.now(), onupdate=utcnow)

    customer = db.relationship("Customer", back_populates="bookings")

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "account_id": self.account_id,
            "customer_id": self.customer_id,
            "customer_name": self.customer.full_name if self.customer else None,
            "program_name": self.program_name,
            "total_amount_cents": self.total_amount_cents,
            "visa_deposit_cents": self.visa_deposit_cents,
            "remaining_amount_cents": self.remaining_amount_cents,
            "is_paid": self.is_paid,
            "travel_direction": self.travel_direction,
            "from_location": self.from_location,
            "to_location": self.to_location,
            "departure_date": to_iso_date(self.departure_date),
            "created_at": to_utc_z(self.created_at),
            "updated_at": to_utc_z(self.updated_at),
        }
