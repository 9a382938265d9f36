"""
Appointment Router - booking and listing appointments.
"""
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ..auth.dependencies import get_current_user, require_patient
from ..core.security import TokenClaims
from ..database import get_db
from .schemas import AppointmentCreate, AppointmentResponse
from .service import list_my_appointments, schedule_appointment

router = APIRouter()


@router.post("", response_model=AppointmentResponse, status_code=status.HTTP_201_CREATED)
def create_appointment(
    appointment_data: AppointmentCreate,
    db: Session = Depends(get_db),
    current_user: TokenClaims = Depends(require_patient),
):
    """
    Book an appointment with a doctor (patients only)
    """
    return schedule_appointment(db, current_user.user_id, appointment_data)


@router.get("", response_model=List[AppointmentResponse])
def get_my_appointments(
    db: Session = Depends(get_db),
    current_user: TokenClaims = Depends(get_current_user),
):
    """
    List the caller's appointments as patient or doctor
    """
    return list_my_appointments(db, current_user.user_id)
