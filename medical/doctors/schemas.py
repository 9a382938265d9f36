"""
Doctor Schemas - Pydantic models for doctor profile data validation and serialization.

Doctor registration is handled through the auth schemas.
"""
from typing import Optional

from pydantic import Field

from ..core.schemas import CamelModel


class DoctorProfileUpdate(CamelModel):
    """
    Doctor Profile Update Schema - Used when a doctor updates their own profile

    Omitted and null fields keep their stored value; a blank string clears
    a text field.

    Fields:
    - clinic_address: Physical address of the doctor's clinic
    - professional_bio: Professional biography
    - years_of_experience: Years in practice
    """
    clinic_address: Optional[str] = Field(None, max_length=500)
    professional_bio: Optional[str] = Field(None, max_length=4000)
    years_of_experience: Optional[int] = Field(None, ge=0, le=80)


class DoctorProfileResponse(CamelModel):
    """
    Doctor Profile Response Schema - the owner's view and the public view

    The public view masks the license number.
    """
    user_id: str
    email: str
    first_name: str
    last_name: str
    specialization: str
    license_number: str
    years_of_experience: int
    clinic_address: Optional[str] = None
    professional_bio: Optional[str] = None
    is_verified: bool


class DoctorSummary(CamelModel):
    """
    Doctor Summary Schema - one entry of the available doctors listing
    """
    doctor_user_id: str
    first_name: str
    last_name: str
    specialization: str
