from __future__ import annotations

from ..extensions import db
from ..identifiers import new_id
from ..time_utils import to_utc_z, utcnow


class Account(db.Model):
    """
    Owning account for every agency record.

    SINGLE-TENANT PER ACCOUNT: customers, bookings, visas, expenses and
    debts all carry account_id; no record is shared across accounts.

    The API key is only ever shown once at issue time. We store its
    SHA-256 hash, which is enough for a high-entropy random key.
    """
    __tablename__ = "accounts"

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    name = db.Column(db.String(255), nullable=False)
    api_key_hash = db.Column(db.String(64), nullable=False, unique=True, index=True)
    is_active = db.Column(db.Boolean, nullable=False, default=True)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow, server_default=db.func.now())
    updated_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow, server_default=db.func.now(), onupdate=utcnow)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "is_active": self.is_active,
            "created_at": to_utc_z(self.created_at),
            "updated_at": to_utc_z(self.updated_at),
        }
