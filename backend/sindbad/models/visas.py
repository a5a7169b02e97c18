from __future__ import annotations

from ..extensions import db
from ..identifiers import new_id
from ..time_utils import to_iso_date, to_utc_z, utcnow


class Visa(db.Model):
    """
    Travel authorization tracked per customer.

    status follows its own pending -> issued -> expired lifecycle, separate
    from Customer.visa_status. visa_number is opaque free text.
    """
    __tablename__ = "visas"
    __table_args__ = (
        db.Index("ix_visas_account_created", "account_id", "created_at"),
    )

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    account_id = db.Column(db.String(36), db.ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False, index=True)
    customer_id = db.Column(db.String(36), db.ForeignKey("customers.id", ondelete="CASCADE"), nullable=False, index=True)

    visa_number = db.Column(db.String(64), nullable=False)
    issue_date = db.Column(db.Date, nullable=True)
    expiry_date = db.Column(db.Date, nullable=True)
    departure_date = db.Column(db.Date, nullable=True)
    booking_date = db.Column(db.Date, nullable=True)

    status = db.Column(db.String(16), nullable=False, default="pending", index=True)  # pending, issued, expired
    travel_direction = db.Column(db.String(16), nullable=False, default="egypt-to-saudi")
    from_location = db.Column(db.String(128), nullable=True)
    to_location = db.Column(db.String(128), nullable=True)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow, server_default=db.func.now())
    updated_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow, server_default=db.func.now(), onupdate=utcnow)

    customer = db.relationship("Customer", back_populates="visas")

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "account_id": self.account_id,
            "customer_id": self.customer_id,
            "customer_name": self.customer.full_name if self.customer else None,
            "visa_number": self.visa_number,
            "issue_date": to_iso_date(self.issue_date),
            "expiry_date": to_iso_date(self.expiry_date),
            "departure_date": to_iso_date(self.departure_date),
            "booking_date": to_iso_date(self.booking_date),
            "status": self.status,
            "travel_direction": self.travel_direction,
            "from_location": self.from_location,
            "to_location": self.to_location,
            "created_at": to_utc_z(self.created_at),
            "updated_at": to_utc_z(self.updated_at),
        }
