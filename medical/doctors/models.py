"""
Doctor Profile Model - Stores doctor-specific professional information.

Each profile belongs to exactly one user holding the Doctor role.
"""
from sqlalchemy import Boolean, Column, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from ..database import Base


class DoctorProfile(Base):
    """
    Doctor Profile Model - Stores doctor-specific information

    Fields:
    - id: Primary key for doctor profile
    - user_id: Foreign key to User model (mandatory, unique)
    - specialization: Doctor's medical specialization
    - license_number: Medical license number (masked in public views)
    - years_of_experience: Years in practice
    - clinic_address: Physical address of the doctor's clinic
    - professional_bio: Professional biography
    - is_verified: Whether the doctor has been verified; only verified
      doctors are listed as available
    - version_id: Row version used to detect concurrent updates
    """
    __tablename__ = "doctor_profiles"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)
    specialization = Column(String(150), nullable=False)
    license_number = Column(String(100), nullable=False)
    years_of_experience = Column(Integer, nullable=False, default=0)
    clinic_address = Column(String(500), nullable=True)
    professional_bio = Column(Text, nullable=True)
    is_verified = Column(Boolean, nullable=False, default=False)
    version_id = Column(Integer, nullable=False)

    # Relationships
    user = relationship("User", back_populates="doctor_profile")

    __mapper_args__ = {"version_id_col": version_id}

    def __repr__(self):
        """String representation of the DoctorProfile model"""
        return f"<DoctorProfile(id={self.id}, user_id={self.user_id}, specialization='{self.specialization}')>"

    @property
    def full_name(self) -> str:
        """Get doctor's full name from associated user"""
        return self.user.full_name if self.user else None
