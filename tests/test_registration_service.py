import threading

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from app import repositories
from app.errors import DuplicateEntry, InternalError, ServiceUnavailable
from app.registration import RegistrationService
from app.validation import validate_or_raise


def _record(**overrides):
    data = {
        "fullName": "John Doe",
        "taxId": "862.883.667-57",
        "email": "new@example.com",
        "colorPreference": "YELLOW",
    }
    data.update(overrides)
    return validate_or_raise(data)


@pytest.fixture
def service(app, client):
    return app.state.registration


def test_register_assigns_id_and_timestamp(service):
    stored = service.register(_record())
    assert stored.id
    assert stored.created_at is not None
    assert stored.to_public()["email"] == "new@example.com"
    assert "taxId" not in stored.to_public()


def test_ids_are_unique(service):
    a = service.register(_record())
    b = service.register(_record(taxId="11122233396", email="other@example.com"))
    assert a.id != b.id


def test_duplicate_tax_id(service, seed_sample):
    with pytest.raises(DuplicateEntry) as exc:
        service.register(_record(taxId="52998224725"))
    assert exc.value.field == "taxId"


def test_duplicate_email(service, seed_sample):
    with pytest.raises(DuplicateEntry) as exc:
        service.register(_record(email="x@y.com"))
    assert exc.value.field == "email"


def test_both_fields_taken_reports_tax_id(service, seed_sample):
    with pytest.raises(DuplicateEntry) as exc:
        service.register(_record(taxId="52998224725", email="x@y.com"))
    assert exc.value.field == "taxId"


def test_same_record_matching_both_reports_tax_id(service, seed_sample):
    with pytest.raises(DuplicateEntry) as exc:
        service.register(_record(taxId="52998224725", email="alice@example.com"))
    assert exc.value.field == "taxId"


@pytest.mark.parametrize("overrides,field", [
    ({"taxId": "52998224725"}, "taxId"),
    ({"email": "x@y.com"}, "email"),
])
def test_unique_constraint_is_authoritative(service, seed_sample, monkeypatch, overrides, field):
    # simulate a concurrent insert slipping past the pre-check
    monkeypatch.setattr(repositories, "find_conflict", lambda *a, **kw: None)
    with pytest.raises(DuplicateEntry) as exc:
        service.register(_record(**overrides))
    assert exc.value.field == field
    assert isinstance(exc.value.__cause__, IntegrityError)


def test_timeout_is_service_unavailable(app, client, settings, monkeypatch):
    slow = RegistrationService(app.state.session_factory, settings.model_copy(update={"db_timeout_seconds": 0.1}))

    released = threading.Event()
    finished = threading.Event()

    def stall(*a, **kw):
        try:
            released.wait(2)
            # abandon the attempt quietly once the test is done with it
            raise RuntimeError("released")
        finally:
            finished.set()

    monkeypatch.setattr(repositories, "find_conflict", stall)
    try:
        with pytest.raises(ServiceUnavailable):
            slow.register(_record())
    finally:
        released.set()
        assert finished.wait(2)


def test_unreachable_database_is_service_unavailable(service, monkeypatch):
    def refused(*a, **kw):
        raise OperationalError("SELECT 1", {}, Exception("could not connect to server: Connection refused"))

    monkeypatch.setattr(repositories, "find_conflict", refused)
    with pytest.raises(ServiceUnavailable):
        service.register(_record())


def test_other_database_errors_are_internal(service, monkeypatch):
    def broken(*a, **kw):
        raise OperationalError("SELECT 1", {}, Exception("no such table: customers"))

    monkeypatch.setattr(repositories, "find_conflict", broken)
    with pytest.raises(InternalError):
        service.register(_record())


def test_outage_markers_on_any_exception(service, monkeypatch):
    def dns(*a, **kw):
        raise RuntimeError("getaddrinfo EAI_AGAIN db")

    monkeypatch.setattr(repositories, "find_conflict", dns)
    with pytest.raises(ServiceUnavailable):
        service.register(_record())


def test_plain_runtime_error_is_internal(service, monkeypatch):
    def broken(*a, **kw):
        raise RuntimeError("Insert failed")

    monkeypatch.setattr(repositories, "insert_customer", broken)
    with pytest.raises(InternalError):
        service.register(_record())
