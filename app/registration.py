# app/registration.py
import logging
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import sessionmaker

from app import repositories
from app.db import run_with_timeout
from app.errors import (
    DuplicateEntry,
    InternalError,
    RegistrationError,
    ServiceUnavailable,
    is_infrastructure_error,
)
from app.settings import Settings
from app.validation import ColorPreference, NormalizedCustomer

log = logging.getLogger(__name__)


class StoredCustomer(BaseModel):
    """The public view of a persisted registration (tax ID and notes stay internal)."""
    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: str
    full_name: str = Field(serialization_alias="fullName")
    email: str
    color_preference: ColorPreference = Field(serialization_alias="colorPreference")
    created_at: datetime = Field(serialization_alias="createdAt")

    def to_public(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class RegistrationService:
    """
    Create-only registration with duplicate detection.

    The pre-check gives a precise DuplicateEntry before touching the table;
    the unique constraints on tax_id/email remain the authority, and their
    violation is mapped to the same DuplicateEntry.
    """

    def __init__(self, session_factory: sessionmaker, settings: Settings):
        self.session_factory = session_factory
        self.settings = settings

    def register(self, record: NormalizedCustomer) -> StoredCustomer:
        try:
            return run_with_timeout(self._create, self.settings.db_timeout_seconds, record)
        except TimeoutError as e:
            log.error("registration timed out: %s", e)
            raise ServiceUnavailable(str(e)) from e
        except RegistrationError:
            raise
        except Exception as e:
            # any failure, database or not, is checked for outage markers
            if is_infrastructure_error(e):
                log.exception("registration failed: database unavailable")
                raise ServiceUnavailable(str(e)) from e
            log.exception("registration failed")
            raise InternalError(str(e)) from e

    def _create(self, record: NormalizedCustomer) -> StoredCustomer:
        # one session per attempt, owned by the worker thread
        with self.session_factory() as db:
            conflict = repositories.find_conflict(db, record.tax_id, record.email)
            if conflict:
                log.warning("duplicate registration rejected: field=%s", conflict)
                raise DuplicateEntry(conflict)

            try:
                row = repositories.insert_customer(db, record)
                stored = StoredCustomer.model_validate(row)
                db.commit()
            except IntegrityError as e:
                db.rollback()
                field = repositories.conflicting_field(e)
                if field is None:
                    raise
                log.warning("duplicate registration caught by constraint: field=%s", field)
                raise DuplicateEntry(field) from e

        log.info("customer registered: id=%s", stored.id)
        return stored
