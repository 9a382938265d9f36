"""
Patient Profile Model - Stores patient-specific information.

Each profile belongs to exactly one user holding the Patient role.
"""
from sqlalchemy import Column, Date, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from ..database import Base


class PatientProfile(Base):
    """
    Patient Profile Model - Stores patient-specific information

    Fields:
    - id: Primary key for patient profile
    - user_id: Foreign key to User model (mandatory, unique)
    - date_of_birth: Patient's date of birth
    - address: Patient's address
    - medical_history_summary: Medical history notes
    - allergies: Known allergies
    - current_medications: Medications currently taken
    - version_id: Row version used to detect concurrent updates
    """
    __tablename__ = "patient_profiles"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)
    date_of_birth = Column(Date, nullable=False)
    address = Column(String(500), nullable=True)
    medical_history_summary = Column(Text, nullable=True)
    allergies = Column(Text, nullable=True)
    current_medications = Column(Text, nullable=True)
    version_id = Column(Integer, nullable=False)

    # Relationships
    user = relationship("User", back_populates="patient_profile")

    __mapper_args__ = {"version_id_col": version_id}

    def __repr__(self):
        """String representation of the PatientProfile model"""
        return f"<PatientProfile(id={self.id}, user_id={self.user_id})>"
