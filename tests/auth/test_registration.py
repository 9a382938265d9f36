"""
Tests for patient and doctor registration.
"""
from datetime import date

import pytest
from sqlalchemy import func, select

from conftest import API, auth_headers, doctor_payload, patient_payload
from medical.auth.credentials import CredentialStore
from medical.auth.exceptions import EmailAlreadyExistsException, ProfileLinkException
from medical.auth.models import Role, User, user_roles
from medical.auth.roles import PATIENT_ROLE
from medical.auth.seeds import PatientProfileSeed
from medical.auth.service import register_user
from medical.doctors.models import DoctorProfile
from medical.patients.models import PatientProfile


def _count(db, table):
    return db.execute(select(func.count()).select_from(table)).scalar_one()


def test_register_patient_success(client, db, token_issuer):
    response = client.post(f"{API}/auth/register-patient", json=patient_payload())
    assert response.status_code == 200
    data = response.json()

    assert data["email"] == "patient@example.com"
    assert data["firstName"] == "Pat"
    assert data["lastName"] == "Jones"
    assert data["roles"] == [PATIENT_ROLE]
    assert data["token"]
    assert data["expiresAt"]

    claims = token_issuer.decode(data["token"])
    assert claims.user_id == data["userId"]
    assert claims.roles.count(PATIENT_ROLE) == 1

    user = db.query(User).filter(User.id == data["userId"]).one()
    assert user.role_names == [PATIENT_ROLE]
    assert user.password_hash != patient_payload()["password"]
    profile = user.patient_profile
    assert profile.date_of_birth == date(1990, 5, 17)
    assert profile.address == "1 Main Street"
    assert user.doctor_profile is None


def test_register_doctor_starts_unverified(client, db):
    response = client.post(f"{API}/auth/register-doctor", json=doctor_payload())
    assert response.status_code == 200
    data = response.json()
    assert data["roles"] == ["Doctor"]

    profile = db.query(DoctorProfile).filter(DoctorProfile.user_id == data["userId"]).one()
    assert profile.specialization == "Cardiology"
    assert profile.license_number == "LIC-12345"
    assert profile.years_of_experience == 12
    assert profile.is_verified is False


def test_register_lowercases_email(client):
    response = client.post(f"{API}/auth/register-patient", json=patient_payload("Mixed.Case@Example.com"))
    assert response.status_code == 200
    assert response.json()["email"] == "mixed.case@example.com"


def test_register_duplicate_email_fails(client, db, register_patient):
    register_patient()
    users_before = _count(db, User.__table__)

    response = client.post(f"{API}/auth/register-doctor", json=doctor_payload("PATIENT@example.com"))
    assert response.status_code == 400
    assert response.json()["detail"] == "Email is already registered."

    assert _count(db, User.__table__) == users_before
    assert _count(db, DoctorProfile.__table__) == 0


def test_register_weak_password_lists_every_violation(client, db):
    response = client.post(f"{API}/auth/register-patient", json=patient_payload(password="short"))
    assert response.status_code == 400
    data = response.json()
    assert data["detail"].startswith("Registration failed: ")
    assert "Passwords must be at least 8 characters." in data["errors"]
    assert "Passwords must have at least one digit ('0'-'9')." in data["errors"]
    assert "Passwords must have at least one uppercase ('A'-'Z')." in data["errors"]
    assert _count(db, User.__table__) == 0


def test_register_malformed_body_is_bad_request(client):
    response = client.post(f"{API}/auth/register-patient", json=patient_payload(email="not-an-email"))
    assert response.status_code == 400
    assert response.json()["detail"] == "Validation error"

    missing_dob = patient_payload()
    del missing_dob["dateOfBirth"]
    response = client.post(f"{API}/auth/register-patient", json=missing_dob)
    assert response.status_code == 400


def test_role_is_created_once(client, db, register_patient):
    register_patient("one@example.com")
    register_patient("two@example.com")
    assert db.query(Role).filter(Role.name == PATIENT_ROLE).count() == 1


def test_concurrent_duplicate_is_reported_as_duplicate(db, token_issuer, monkeypatch, register_patient):
    register_patient("race@example.com")

    # The racing request passed the existence check before the other insert committed
    original = CredentialStore.find_by_email
    calls = []

    def find_by_email(self, email):
        calls.append(email)
        if len(calls) == 1:
            return None
        return original(self, email)

    monkeypatch.setattr(CredentialStore, "find_by_email", find_by_email)

    with pytest.raises(EmailAlreadyExistsException):
        register_user(
            db,
            token_issuer,
            email="race@example.com",
            password="Secret123",
            first_name="Late",
            last_name="Comer",
            role_name=PATIENT_ROLE,
            seed=PatientProfileSeed(date_of_birth=date(1985, 1, 1)),
        )

    assert _count(db, User.__table__) == 1
    assert _count(db, PatientProfile.__table__) == 1


class _MislinkedSeed:
    role_name = PATIENT_ROLE

    def build(self, owner_id):
        return PatientProfile(user_id="someone-else", date_of_birth=date(1985, 1, 1))


def test_profile_link_failure_leaves_no_rows(db, token_issuer):
    with pytest.raises(ProfileLinkException):
        register_user(
            db,
            token_issuer,
            email="broken@example.com",
            password="Secret123",
            first_name="Broken",
            last_name="Link",
            role_name=PATIENT_ROLE,
            seed=_MislinkedSeed(),
        )

    assert _count(db, User.__table__) == 0
    assert _count(db, user_roles) == 0
    assert _count(db, PatientProfile.__table__) == 0
    # The role is provisioned outside the registration unit
    assert db.query(Role).filter(Role.name == PATIENT_ROLE).count() == 1


class _FailingIssuer:
    def issue(self, user, roles):
        raise RuntimeError("signing backend unavailable")


def test_token_failure_rolls_back_registration(db):
    with pytest.raises(RuntimeError):
        register_user(
            db,
            _FailingIssuer(),
            email="notoken@example.com",
            password="Secret123",
            first_name="No",
            last_name="Token",
            role_name=PATIENT_ROLE,
            seed=PatientProfileSeed(date_of_birth=date(1985, 1, 1)),
        )

    assert _count(db, User.__table__) == 0
    assert _count(db, user_roles) == 0
    assert _count(db, PatientProfile.__table__) == 0


def test_registered_token_authenticates(client, register_patient):
    data = register_patient()
    response = client.get(f"{API}/patients/profile", headers=auth_headers(data["token"]))
    assert response.status_code == 200
    assert response.json()["userId"] == data["userId"]
