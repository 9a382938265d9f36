"""
Appointment Service - booking and listing appointments.
"""
import logging
from datetime import datetime, timezone
from typing import List

from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from ..auth.exceptions import InternalErrorException, ResourceNotFoundException
from ..doctors.models import DoctorProfile
from ..exceptions import AppException
from .models import Appointment, AppointmentStatus
from .schemas import AppointmentCreate, AppointmentResponse

logger = logging.getLogger(__name__)


def _as_utc(value: datetime) -> datetime:
    """Naive datetimes are taken to be UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _to_response(appointment: Appointment) -> AppointmentResponse:
    return AppointmentResponse(
        id=appointment.id,
        appointment_datetime=appointment.appointment_datetime,
        duration_minutes=appointment.duration_minutes,
        status=appointment.status,
        reason_for_visit=appointment.reason_for_visit,
        doctor_notes=appointment.doctor_notes,
        patient_id=appointment.patient_id,
        doctor_id=appointment.doctor_id,
        patient_name=appointment.patient.full_name,
        doctor_name=appointment.doctor.full_name,
    )


def schedule_appointment(db: Session, patient_id: str, data: AppointmentCreate) -> AppointmentResponse:
    """
    Book an appointment for a patient with a doctor.

    Args:
        db: Database session
        patient_id: User ID of the booking patient
        data: Requested appointment

    Raises:
        AppException: If the requested time is not in the future
        ResourceNotFoundException: If the doctor ID is not a doctor
    """
    starts_at = _as_utc(data.appointment_datetime)
    if starts_at <= datetime.now(timezone.utc):
        raise AppException(status_code=400, detail="Appointment time must be in the future.")

    doctor_exists = db.query(DoctorProfile.id).filter(DoctorProfile.user_id == data.doctor_id).first()
    if doctor_exists is None:
        logger.warning(f"Scheduling failed: {data.doctor_id} is not a doctor")
        raise ResourceNotFoundException("Doctor not found.")

    appointment = Appointment(
        patient_id=patient_id,
        doctor_id=data.doctor_id,
        appointment_datetime=starts_at,
        duration_minutes=data.duration_minutes,
        reason_for_visit=data.reason_for_visit,
        status=AppointmentStatus.SCHEDULED,
    )
    db.add(appointment)
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error scheduling appointment for patient {patient_id}: {str(e)}")
        raise InternalErrorException("An error occurred while scheduling the appointment.") from e

    db.refresh(appointment)
    logger.info(f"Appointment {appointment.id} scheduled: patient {patient_id} with doctor {data.doctor_id}")
    return _to_response(appointment)


def list_my_appointments(db: Session, user_id: str) -> List[AppointmentResponse]:
    """
    List appointments where the user is the patient or the doctor, earliest first.
    """
    appointments = (
        db.query(Appointment)
        .options(joinedload(Appointment.patient), joinedload(Appointment.doctor))
        .filter(or_(Appointment.patient_id == user_id, Appointment.doctor_id == user_id))
        .order_by(Appointment.appointment_datetime, Appointment.id)
        .all()
    )
    return [_to_response(appointment) for appointment in appointments]
