"""
Tests for the patient's own profile.
"""
import pytest

from conftest import API, auth_headers
from medical.auth.exceptions import ConcurrencyConflictException, ResourceNotFoundException
from medical.patients.models import PatientProfile
from medical.patients.schemas import PatientProfileUpdate
from medical.patients.service import get_my_profile, update_my_profile


def test_get_my_profile(client, patient):
    response = client.get(f"{API}/patients/profile", headers=auth_headers(patient["token"]))
    assert response.status_code == 200
    data = response.json()
    assert data["userId"] == patient["userId"]
    assert data["email"] == "patient@example.com"
    assert data["dateOfBirth"] == "1990-05-17"
    assert data["address"] == "1 Main Street"
    assert data["allergies"] is None


def test_partial_updates_keep_untouched_fields(client, patient):
    headers = auth_headers(patient["token"])

    response = client.put(
        f"{API}/patients/profile",
        json={"address": "A", "allergies": "peanuts"},
        headers=headers,
    )
    assert response.status_code == 204

    response = client.put(f"{API}/patients/profile", json={"address": "B"}, headers=headers)
    assert response.status_code == 204

    data = client.get(f"{API}/patients/profile", headers=headers).json()
    assert data["address"] == "B"
    assert data["allergies"] == "peanuts"


def test_null_keeps_and_blank_clears(client, patient):
    headers = auth_headers(patient["token"])
    client.put(
        f"{API}/patients/profile",
        json={"allergies": "peanuts", "currentMedications": "aspirin"},
        headers=headers,
    )

    response = client.put(
        f"{API}/patients/profile",
        json={"allergies": None, "currentMedications": "   "},
        headers=headers,
    )
    assert response.status_code == 204

    data = client.get(f"{API}/patients/profile", headers=headers).json()
    assert data["allergies"] == "peanuts"
    assert data["currentMedications"] is None


def test_empty_update_changes_nothing(client, patient):
    headers = auth_headers(patient["token"])
    response = client.put(f"{API}/patients/profile", json={}, headers=headers)
    assert response.status_code == 204
    assert client.get(f"{API}/patients/profile", headers=headers).json()["address"] == "1 Main Street"


def test_update_requires_patient_role(client, doctor):
    response = client.put(
        f"{API}/patients/profile",
        json={"address": "Somewhere"},
        headers=auth_headers(doctor["token"]),
    )
    assert response.status_code == 403


def test_missing_profile_is_not_found(db):
    with pytest.raises(ResourceNotFoundException):
        get_my_profile(db, "no-such-user")
    with pytest.raises(ResourceNotFoundException):
        update_my_profile(db, "no-such-user", PatientProfileUpdate(address="x"))


def test_concurrent_update_is_a_conflict(db, patient):
    profile = db.query(PatientProfile).filter(PatientProfile.user_id == patient["userId"]).one()

    # Another writer bumps the row version behind this session's back
    table = PatientProfile.__table__
    db.execute(
        table.update()
        .where(table.c.id == profile.id)
        .values(version_id=table.c.version_id + 1)
    )

    with pytest.raises(ConcurrencyConflictException):
        update_my_profile(db, patient["userId"], PatientProfileUpdate(allergies="pollen"))

    db.expire_all()
    assert db.get(PatientProfile, profile.id).allergies is None


def test_concurrency_conflict_maps_to_bad_request(client, patient, monkeypatch):
    from medical.patients import router as patients_router

    def conflicting_update(db, user_id, update_data):
        raise ConcurrencyConflictException()

    monkeypatch.setattr(patients_router, "update_my_profile", conflicting_update)

    response = client.put(
        f"{API}/patients/profile",
        json={"address": "Elsewhere"},
        headers=auth_headers(patient["token"]),
    )
    assert response.status_code == 400
    assert "concurrency conflict" in response.json()["detail"]
