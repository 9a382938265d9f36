"""
Patient Schemas - Pydantic models for patient profile data.
"""
from datetime import date
from typing import Optional

from pydantic import Field

from ..core.schemas import CamelModel


class PatientProfileUpdate(CamelModel):
    """
    Patient Profile Update Schema - Used when a patient updates their own profile

    Omitted and null fields keep their stored value; a blank string clears
    the field.
    """
    address: Optional[str] = Field(None, max_length=500)
    medical_history_summary: Optional[str] = Field(None, max_length=4000)
    allergies: Optional[str] = Field(None, max_length=2000)
    current_medications: Optional[str] = Field(None, max_length=2000)


class PatientProfileResponse(CamelModel):
    """
    Patient Profile Response Schema - the patient's own view of their profile
    """
    user_id: str
    email: str
    first_name: str
    last_name: str
    date_of_birth: date
    address: Optional[str] = None
    medical_history_summary: Optional[str] = None
    allergies: Optional[str] = None
    current_medications: Optional[str] = None
