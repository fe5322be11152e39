import socket

from sqlalchemy.exc import IntegrityError, OperationalError

from app.errors import DuplicateEntry, ServiceUnavailable, ValidationFailed, is_infrastructure_error
from app.i18n import resolve_locale, t
from app.repositories import conflicting_field


def test_timeouts_and_network_errors_are_infrastructure():
    assert is_infrastructure_error(TimeoutError("x"))
    assert is_infrastructure_error(ConnectionRefusedError("x"))
    assert is_infrastructure_error(socket.gaierror(-3, "Temporary failure in name resolution"))
    assert is_infrastructure_error(RuntimeError("getaddrinfo EAI_AGAIN db"))
    assert is_infrastructure_error(RuntimeError("getaddrinfo ENOTFOUND db"))


def test_cause_chain_is_inspected():
    try:
        try:
            raise ConnectionRefusedError("refused")
        except ConnectionRefusedError as inner:
            raise RuntimeError("wrapped") from inner
    except RuntimeError as outer:
        assert is_infrastructure_error(outer)


def test_plain_failures_are_not_infrastructure():
    assert not is_infrastructure_error(RuntimeError("Database connection failed"))
    assert not is_infrastructure_error(OperationalError("q", {}, Exception("no such table: customers")))


def test_error_codes_and_statuses():
    assert (ValidationFailed([]).code, ValidationFailed([]).status_code) == ("VALIDATION_ERROR", 400)
    assert (DuplicateEntry("email").code, DuplicateEntry("email").status_code) == ("DUPLICATE_ENTRY", 409)
    assert (ServiceUnavailable().code, ServiceUnavailable().status_code) == ("SERVICE_UNAVAILABLE", 503)


def test_duplicate_messages_name_the_field():
    assert "CPF" in DuplicateEntry("taxId").message("en")
    assert "email" in DuplicateEntry("email").message("en")
    assert DuplicateEntry("taxId").message("pt-BR") == "Um cliente com este CPF já existe"


def test_conflicting_field_from_driver_messages():
    sqlite = IntegrityError("INSERT", {}, Exception("UNIQUE constraint failed: customers.tax_id"))
    pg = IntegrityError("INSERT", {}, Exception('duplicate key value violates unique constraint "uq_customers_email"'))
    other = IntegrityError("INSERT", {}, Exception("NOT NULL constraint failed: customers.full_name"))
    assert conflicting_field(sqlite) == "taxId"
    assert conflicting_field(pg) == "email"
    assert conflicting_field(other) is None


def test_resolve_locale():
    assert resolve_locale("pt-BR,pt;q=0.9,en;q=0.8") == "pt-BR"
    assert resolve_locale("en-US") == "en"
    assert resolve_locale("fr-FR", default="pt-BR") == "pt-BR"
    assert resolve_locale(None, default="xx") == "en"


def test_translate_falls_back_to_english():
    assert t("fullName.required", "de") == "Full name is required"


def test_conflicting_field_ignores_detail_values():
    pg = IntegrityError("INSERT", {}, Exception(
        'duplicate key value violates unique constraint "uq_customers_email"\n'
        "DETAIL:  Key (email)=(tax_id@corp.com) already exists."
    ))
    assert conflicting_field(pg) == "email"


def test_conflicting_field_prefers_diag_constraint_name():
    class Diag:
        constraint_name = "uq_customers_email"

    class DriverError(Exception):
        diag = Diag()

    e = IntegrityError("INSERT", {}, DriverError("Key (tax_id)=(52998224725) taken? no: uq_customers_tax_id"))
    assert conflicting_field(e) == "email"
