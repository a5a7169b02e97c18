from __future__ import annotations

from ..extensions import db
from ..identifiers import new_id
from ..time_utils import to_utc_z, utcnow


class Customer(db.Model):
    """
    Agency customer (pilgrim / traveller) master data.

    Bookings and visas hang off a customer. Deleting the customer removes
    them in the same transaction (ORM cascade, mirrored by ON DELETE CASCADE
    on the foreign keys).
    """
    __tablename__ = "customers"
    __table_args__ = (
        db.Index("ix_customers_account_created", "account_id", "created_at"),
    )

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    account_id = db.Column(db.String(36), db.ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False, index=True)

    full_name = db.Column(db.String(255), nullable=False)
    phone_number = db.Column(db.String(32), nullable=False)
    national_id = db.Column(db.String(64), nullable=False)
    address = db.Column(db.String(512), nullable=True)
    program_name = db.Column(db.String(255), nullable=True)
    visa_status = db.Column(db.String(16), nullable=False, default="pending")  # see CUSTOMER_VISA_STATUSES
    notes = db.Column(db.Text, nullable=True)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow, server_default=db.func.now())
    updated_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow, server_default=db.func.now(), onupdate=utcnow)

    bookings = db.relationship(
        "Booking", back_populates="customer", cascade="all, delete-orphan", lazy=True
    )
    visas = db.relationship(
        "Visa", back_populates="customer", cascade="all, delete-orphan", lazy=True
    )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "account_id": self.account_id,
            "full_name": self.full_name,
            "phone_number": self.phone_number,
            "national_id": self.national_id,
            "address": self.address,
            "program_name": self.program_name,
            "visa_status": self.visa_status,
            "notes": self.notes,
            "created_at": to_utc_z(self.created_at),
            "updated_at": to_utc_z(self.updated_at),
        }
