"""
Appointment Schemas - scheduling requests and appointment views.
"""
from datetime import datetime
from typing import Optional

from pydantic import Field

from ..core.schemas import CamelModel
from .models import AppointmentStatus


class AppointmentCreate(CamelModel):
    """
    Appointment Creation Schema - Used when a patient books a doctor

    Fields:
    - doctor_id: User ID of the doctor
    - appointment_datetime: Requested start; must be in the future
    - duration_minutes: Planned length of the visit
    - reason_for_visit: Optional note from the patient
    """
    doctor_id: str = Field(..., min_length=1)
    appointment_datetime: datetime = Field(..., alias="appointmentDateTime")
    duration_minutes: int = Field(30, ge=5, le=480)
    reason_for_visit: Optional[str] = Field(None, max_length=1000)


class AppointmentResponse(CamelModel):
    """
    Appointment Response Schema - Used when returning appointment data
    """
    id: int
    appointment_datetime: datetime = Field(..., alias="appointmentDateTime")
    duration_minutes: int
    status: AppointmentStatus
    reason_for_visit: Optional[str] = None
    doctor_notes: Optional[str] = None
    patient_id: str
    doctor_id: str
    patient_name: str
    doctor_name: str
