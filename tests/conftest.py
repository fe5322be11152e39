# tests/conftest.py
import pytest
from fastapi.testclient import TestClient

from app.main import create_app
from app.models import Customer
from app.settings import Settings
from app.validation import ColorPreference


# --- Fresh SQLite file per test: the service opens its own sessions ---
@pytest.fixture
def settings(tmp_path):
    return Settings(
        environment="test",
        database_url=f"sqlite:///{tmp_path / 'test.db'}",
        default_locale="en",
        db_timeout_seconds=3.0,
        health_timeout_seconds=2.0,
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    # entering the context runs the lifespan, which creates the tables
    with TestClient(app) as c:
        yield c


@pytest.fixture
def db_session(app, client):
    db = app.state.session_factory()
    try:
        yield db
    finally:
        db.rollback()
        db.close()


@pytest.fixture
def valid_payload():
    return {
        "fullName": "John Doe",
        "taxId": "529.982.247-25",
        "email": "JOHN@EXAMPLE.COM",
        "colorPreference": "BLUE",
    }


# --- Seed: two prior records, one per unique field ---
@pytest.fixture
def seed_sample(db_session):
    """
    - Alice owns tax ID 52998224725
    - Bob owns email x@y.com
    """
    db_session.add_all([
        Customer(full_name="Alice Adams", tax_id="52998224725", email="alice@example.com",
                 color_preference=ColorPreference.RED),
        Customer(full_name="Bob Brown", tax_id="11144477735", email="x@y.com",
                 color_preference=ColorPreference.GREEN, notes="first"),
    ])
    db_session.commit()
