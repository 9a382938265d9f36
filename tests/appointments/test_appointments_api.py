"""
Tests for booking and listing appointments.
"""
from datetime import datetime, timedelta, timezone

from conftest import API, auth_headers


def _in_days(days):
    return (datetime.now(timezone.utc) + timedelta(days=days)).replace(microsecond=0).isoformat()


def _book(client, patient, doctor, **overrides):
    payload = {
        "doctorId": doctor["userId"],
        "appointmentDateTime": _in_days(3),
        "durationMinutes": 45,
        "reasonForVisit": "Chest pain",
    }
    payload.update(overrides)
    return client.post(f"{API}/appointments", json=payload, headers=auth_headers(patient["token"]))


def test_patient_books_appointment(client, patient, doctor):
    response = _book(client, patient, doctor)
    assert response.status_code == 201
    data = response.json()
    assert data["id"]
    assert data["status"] == "Scheduled"
    assert data["durationMinutes"] == 45
    assert data["reasonForVisit"] == "Chest pain"
    assert data["patientId"] == patient["userId"]
    assert data["doctorId"] == doctor["userId"]
    assert data["patientName"] == "Pat Jones"
    assert data["doctorName"] == "Dana Smith"
    assert data["doctorNotes"] is None


def test_default_duration(client, patient, doctor):
    response = client.post(
        f"{API}/appointments",
        json={"doctorId": doctor["userId"], "appointmentDateTime": _in_days(1)},
        headers=auth_headers(patient["token"]),
    )
    assert response.status_code == 201
    assert response.json()["durationMinutes"] == 30


def test_appointment_in_the_past_is_rejected(client, patient, doctor):
    response = _book(client, patient, doctor, appointmentDateTime=_in_days(-1))
    assert response.status_code == 400
    assert response.json()["detail"] == "Appointment time must be in the future."


def test_booking_with_non_doctor_is_not_found(client, patient, register_patient):
    other = register_patient("other@example.com")
    response = _book(client, patient, other)
    assert response.status_code == 404
    assert response.json()["detail"] == "Doctor not found."


def test_doctor_cannot_book(client, doctor, register_doctor):
    colleague = register_doctor("colleague@example.com")
    response = _book(client, doctor, colleague)
    assert response.status_code == 403


def test_invalid_duration_is_bad_request(client, patient, doctor):
    response = _book(client, patient, doctor, durationMinutes=1)
    assert response.status_code == 400


def test_both_parties_see_appointments_in_time_order(client, patient, doctor, register_patient):
    later = _book(client, patient, doctor, appointmentDateTime=_in_days(10)).json()
    sooner = _book(client, patient, doctor, appointmentDateTime=_in_days(2)).json()

    outsider = register_patient("outsider@example.com")
    _book(client, outsider, doctor)

    mine = client.get(f"{API}/appointments", headers=auth_headers(patient["token"])).json()
    assert [a["id"] for a in mine] == [sooner["id"], later["id"]]

    doctors_view = client.get(f"{API}/appointments", headers=auth_headers(doctor["token"])).json()
    assert len(doctors_view) == 3

    outsiders_view = client.get(f"{API}/appointments", headers=auth_headers(outsider["token"])).json()
    assert len(outsiders_view) == 1


def test_listing_requires_authentication(client):
    response = client.get(f"{API}/appointments")
    assert response.status_code == 401
