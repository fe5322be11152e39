# app/errors.py
"""
Registration outcome taxonomy.

Each error carries a stable machine-readable `code` and the HTTP status the
API answers with. Messages are produced per locale by `message()`.
"""
import socket
from typing import Iterator, List, Optional

from sqlalchemy import exc as sa_exc

from app.i18n import FALLBACK_LOCALE, t


class RegistrationError(Exception):
    code = "INTERNAL_ERROR"
    status_code = 500
    message_key = "internal_error"

    def message(self, locale: str = FALLBACK_LOCALE) -> str:
        return t(self.message_key, locale)


class ValidationFailed(RegistrationError):
    """Client-fixable input problem. Carries every FieldError found."""
    code = "VALIDATION_ERROR"
    status_code = 400
    message_key = "request.invalid"

    def __init__(self, errors: List):
        super().__init__(f"{len(errors)} field error(s)")
        self.errors = errors

    def message(self, locale: str = FALLBACK_LOCALE) -> str:
        # errors are already localized by the validator
        if self.errors:
            return self.errors[0].message
        return t(self.message_key, locale)


class DuplicateEntry(RegistrationError):
    """An existing record already holds this tax ID or email."""
    code = "DUPLICATE_ENTRY"
    status_code = 409
    message_key = "duplicate"

    def __init__(self, field: str):
        super().__init__(f"duplicate {field}")
        self.field = field  # "taxId" | "email"

    def message(self, locale: str = FALLBACK_LOCALE) -> str:
        return t(self.message_key, locale, field=t(f"duplicate.{self.field}", locale))


class ServiceUnavailable(RegistrationError):
    """The backend timed out or could not be reached."""
    code = "SERVICE_UNAVAILABLE"
    status_code = 503
    message_key = "service_unavailable"


class InternalError(RegistrationError):
    pass


# -------------------------------------------------------------------
# Infrastructure failure classification
# -------------------------------------------------------------------
_UNAVAILABLE_MARKERS = (
    "timeout",
    "timed out",
    "eai_again",
    "econnrefused",
    "enotfound",
    "connection refused",
    "could not connect",
    "could not translate host name",
    "name or service not known",
    "temporary failure in name resolution",
    "server closed the connection",
    "unable to open database file",
)

_UNAVAILABLE_TYPES = (
    TimeoutError,
    ConnectionError,
    socket.gaierror,
    sa_exc.TimeoutError,        # pool checkout
    sa_exc.DisconnectionError,
)


def _causes(e: Optional[BaseException]) -> Iterator[BaseException]:
    seen = set()
    while e is not None and id(e) not in seen:
        seen.add(id(e))
        yield e
        e = e.__cause__ or e.__context__


def is_infrastructure_error(e: BaseException) -> bool:
    """
    True when `e` (or anything in its cause chain) means the backend is
    unreachable or stalled rather than that the request itself is bad.
    """
    for cause in _causes(e):
        if isinstance(cause, _UNAVAILABLE_TYPES):
            return True
        if isinstance(cause, sa_exc.DBAPIError) and cause.connection_invalidated:
            return True
        text = str(cause).lower()
        if any(marker in text for marker in _UNAVAILABLE_MARKERS):
            return True
    return False
