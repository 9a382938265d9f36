"""
Auth Schemas - Pydantic models for registration, login and token responses.
"""
from datetime import date, datetime
from typing import List, Optional

from pydantic import EmailStr, Field

from ..core.schemas import CamelModel


class UserBase(CamelModel):
    """
    Base User Schema - Contains fields common to all registration schemas

    Fields:
    - first_name / last_name: User's name
    - email: User's email address
    - password: User's plain text password (hashed before storage)
    """
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=1)


class PatientRegistration(UserBase):
    """
    Patient Registration Schema - Used for patient self-registration

    Adds:
    - date_of_birth: Patient's date of birth
    - address: Patient's address (optional)
    """
    date_of_birth: date
    address: Optional[str] = Field(None, max_length=500)


class DoctorRegistration(UserBase):
    """
    Doctor Registration Schema - Used for doctor registration

    Includes additional professional information:
    - specialization: Doctor's medical specialization
    - license_number: Medical license number
    - years_of_experience: Years in practice
    """
    specialization: str = Field(..., min_length=1, max_length=150, description="Doctor's medical specialization")
    license_number: str = Field(..., min_length=1, max_length=100, description="Medical license number")
    years_of_experience: int = Field(0, ge=0, le=80)


class UserLogin(CamelModel):
    """
    User Login Schema - Used for authentication

    Fields:
    - email: User's email address
    - password: User's plain text password
    """
    email: EmailStr
    password: str


class AuthResponse(CamelModel):
    """
    Auth Response Schema - returned by registration and login

    Fields:
    - user_id: Identifier of the authenticated user
    - email: User's email address
    - token: Signed bearer token
    - expires_at: When the token stops being accepted
    - roles: Role names embedded in the token
    - first_name / last_name: For display by the client
    """
    user_id: str
    email: str
    token: str
    expires_at: datetime
    roles: List[str]
    first_name: str
    last_name: str
