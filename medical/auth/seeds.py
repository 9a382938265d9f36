"""
Profile seeds - the role-specific half of a registration.

A seed carries the profile fields collected at registration and builds the
profile model once the owner's user id is known. Each seed sets its own
owner field directly.
"""
from dataclasses import dataclass
from datetime import date
from typing import Optional, Union

from ..doctors.models import DoctorProfile
from ..patients.models import PatientProfile
from .roles import DOCTOR_ROLE, PATIENT_ROLE


@dataclass(frozen=True)
class PatientProfileSeed:
    date_of_birth: date
    address: Optional[str] = None

    role_name = PATIENT_ROLE

    def build(self, owner_id: str) -> PatientProfile:
        return PatientProfile(
            user_id=owner_id,
            date_of_birth=self.date_of_birth,
            address=self.address,
        )


@dataclass(frozen=True)
class DoctorProfileSeed:
    specialization: str
    license_number: str
    years_of_experience: int = 0

    role_name = DOCTOR_ROLE

    def build(self, owner_id: str) -> DoctorProfile:
        # Doctors start unverified
        return DoctorProfile(
            user_id=owner_id,
            specialization=self.specialization,
            license_number=self.license_number,
            years_of_experience=self.years_of_experience,
            is_verified=False,
        )


ProfileSeed = Union[PatientProfileSeed, DoctorProfileSeed]
