import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, Text, DateTime, Enum, UniqueConstraint
from .db import Base
from .validation.types import ColorPreference


def _new_id() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# -----------------------------
# ORM model (table) for registrations
# -----------------------------
class Customer(Base):
    __tablename__ = "customers"
    # The unique constraints are the source of truth for duplicates;
    # their names are matched when an insert fails.
    __table_args__ = (
        UniqueConstraint("tax_id", name="uq_customers_tax_id"),
        UniqueConstraint("email", name="uq_customers_email"),
    )

    id               = Column(String(36), primary_key=True, default=_new_id)
    full_name        = Column(String(255), nullable=False)
    tax_id           = Column(String(11), nullable=False)         # digits only
    email            = Column(String(255), nullable=False)        # lower-cased
    color_preference = Column(Enum(ColorPreference, name="color_preference"), nullable=False)
    notes            = Column(Text)                               # NULL when absent
    created_at       = Column(DateTime(timezone=True), nullable=False, default=_utcnow)

    def __repr__(self):
        return f"<Customer(id={self.id}, email={self.email}, tax_id={self.tax_id})>"
