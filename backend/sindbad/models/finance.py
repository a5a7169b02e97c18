from __future__ import annotations

from ..extensions import db
from ..identifiers import new_id
from ..time_utils import to_iso_date, to_utc_z, utcnow


class Expense(db.Model):
    """Operating expense, dated by the business day it was incurred."""
    __tablename__ = "expenses"
    __table_args__ = (
        db.CheckConstraint("amount_cents >= 0", name="ck_expenses_amount_nonneg"),
        db.Index("ix_expenses_account_date", "account_id", "date"),
    )

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    account_id = db.Column(db.String(36), db.ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False, index=True)

    category = db.Column(db.String(32), nullable=False)  # office, transport, marketing, salaries, utilities, other
    amount_cents = db.Column(db.Integer, nullable=False, default=0)
    description = db.Column(db.String(512), nullable=True)
    date = db.Column(db.Date, nullable=False)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow, server_default=db.func.now())
    updated_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow, server_default=db.func.now(), onupdate=utcnow)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "account_id": self.account_id,
            "category": self.category,
            "amount_cents": self.amount_cents,
            "description": self.description,
            "date": to_iso_date(self.date),
            "created_at": to_utc_z(self.created_at),
            "updated_at": to_utc_z(self.updated_at),
        }


class Debt(db.Model):
    """
    Money owed to the agency (receivable) or by the agency (payable).

    Only unpaid debts count toward receivable/payable totals.
    """
    __tablename__ = "debts"
    __table_args__ = (
        db.CheckConstraint("amount_cents >= 0", name="ck_debts_amount_nonneg"),
        db.Index("ix_debts_account_date", "account_id", "date"),
    )

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    account_id = db.Column(db.String(36), db.ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False, index=True)

    person_name = db.Column(db.String(255), nullable=False)
    amount_cents = db.Column(db.Integer, nullable=False, default=0)
    type = db.Column(db.String(16), nullable=False)  # receivable, payable
    description = db.Column(db.String(512), nullable=True)
    date = db.Column(db.Date, nullable=False)
    is_paid = db.Column(db.Boolean, nullable=False, default=False, index=True)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow, server_default=db.func.now())
    updated_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow, server_default=db.func.now(), onupdate=utcnow)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "account_id": self.account_id,
            "person_name": self.person_name,
            "amount_cents": self.amount_cents,
            "type": self.type,
            "description": self.description,
            "date": to_iso_date(self.date),
            "is_paid": self.is_paid,
            "created_at": to_utc_z(self.created_at),
            "updated_at": to_utc_z(self.updated_at),
        }
