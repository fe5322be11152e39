import logging
import re
from typing import Optional
from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from app.models import Customer
from app.validation import NormalizedCustomer

log = logging.getLogger(__name__)

_CONSTRAINT_FIELDS = {
    "uq_customers_tax_id": "taxId",
    "uq_customers_email": "email",
}

# constraint name (PostgreSQL) or table.column (SQLite)
_CONSTRAINT_PATTERNS = (
    (re.compile(r"\buq_customers_tax_id\b|\bcustomers\.tax_id\b"), "taxId"),
    (re.compile(r"\buq_customers_email\b|\bcustomers\.email\b"), "email"),
)


def find_conflict(db: Session, tax_id: str, email: str) -> Optional[str]:
    """
    Return the wire name of the field an existing record already holds,
    or None. Two different rows may match (one per field); the tax ID
    always wins, as it does when a single row matches both.
    """
    rows = db.execute(
        select(Customer.tax_id, Customer.email)
        .where(or_(Customer.tax_id == tax_id, Customer.email == email))
        .limit(2)
    ).all()
    if not rows:
        return None
    if any(r.tax_id == tax_id for r in rows):
        return "taxId"
    return "email"


def insert_customer(db: Session, record: NormalizedCustomer) -> Customer:
    """Add a new row and flush so id/created_at are populated."""
    row = Customer(
        full_name=record.full_name,
        tax_id=record.tax_id,
        email=record.email,
        color_preference=record.color_preference,
        notes=record.notes,
    )
    db.add(row)
    db.flush()
    return row


def conflicting_field(e: IntegrityError) -> Optional[str]:
    """
    Which unique constraint an IntegrityError violated, as a wire field
    name. Works off the driver message, which names the constraint
    (PostgreSQL) or the column (SQLite).
    """
    diag = getattr(e.orig, "diag", None)
    name = getattr(diag, "constraint_name", None)
    if name:
        return _CONSTRAINT_FIELDS.get(name)

    # only the first line: PostgreSQL appends a DETAIL line echoing the value
    text = str(e.orig).lower()
    first = text.splitlines()[0] if text else ""
    for pattern, field in _CONSTRAINT_PATTERNS:
        if pattern.search(first):
            return field
    log.warning("integrity error not tied to a known unique constraint: %s", text)
    return None
