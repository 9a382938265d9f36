"""
Test configuration for the medical appointments backend.
"""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool

from medical.config import Settings
from medical.database import Base, build_engine
from medical.doctors.models import DoctorProfile
from medical.main import create_app

# In-memory database shared by every connection of the test engine
TEST_DATABASE_URL = "sqlite://"
TEST_SIGNING_KEY = "test-signing-key-with-at-least-32-bytes!"

API = "/api"
DEFAULT_PASSWORD = "Secret123"


@pytest.fixture(scope="function")
def settings():
    """
    Settings for the test application; nothing is read from .env.
    """
    return Settings(
        _env_file=None,
        database_url=TEST_DATABASE_URL,
        jwt_signing_key=TEST_SIGNING_KEY,
        auto_create_tables=False,
        log_level="WARNING",
    )


@pytest.fixture(scope="function")
def engine():
    engine = build_engine(TEST_DATABASE_URL, poolclass=StaticPool)
    yield engine
    engine.dispose()


@pytest.fixture(scope="function")
def app(settings, engine):
    return create_app(settings, engine=engine)


@pytest.fixture(scope="function")
def db(app, engine):
    """
    Create a fresh database for each test.
    """
    # Create tables
    Base.metadata.create_all(bind=engine)

    # Create session
    db = app.state.session_factory()
    try:
        yield db
    finally:
        db.close()

    # Drop tables after test
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(app, db):
    """
    Create a test client against the test application.
    """
    with TestClient(app) as client:
        yield client


@pytest.fixture
def token_issuer(app):
    return app.state.token_issuer


def patient_payload(email="patient@example.com", **overrides):
    payload = {
        "firstName": "Pat",
        "lastName": "Jones",
        "email": email,
        "password": DEFAULT_PASSWORD,
        "dateOfBirth": "1990-05-17",
        "address": "1 Main Street",
    }
    payload.update(overrides)
    return payload


def doctor_payload(email="doctor@example.com", **overrides):
    payload = {
        "firstName": "Dana",
        "lastName": "Smith",
        "email": email,
        "password": DEFAULT_PASSWORD,
        "specialization": "Cardiology",
        "licenseNumber": "LIC-12345",
        "yearsOfExperience": 12,
    }
    payload.update(overrides)
    return payload


def auth_headers(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def register_patient(client):
    """
    Register a patient and return the auth response body.
    """
    def _register(email="patient@example.com", **overrides):
        response = client.post(f"{API}/auth/register-patient", json=patient_payload(email, **overrides))
        assert response.status_code == 200, response.text
        return response.json()
    return _register


@pytest.fixture
def register_doctor(client):
    """
    Register a doctor and return the auth response body.
    """
    def _register(email="doctor@example.com", **overrides):
        response = client.post(f"{API}/auth/register-doctor", json=doctor_payload(email, **overrides))
        assert response.status_code == 200, response.text
        return response.json()
    return _register


@pytest.fixture
def verify_doctor(db):
    """
    Mark a doctor as verified directly in the database.
    """
    def _verify(user_id):
        profile = db.query(DoctorProfile).filter(DoctorProfile.user_id == user_id).one()
        profile.is_verified = True
        db.commit()
    return _verify


@pytest.fixture
def patient(register_patient):
    return register_patient()


@pytest.fixture
def doctor(register_doctor):
    return register_doctor()
