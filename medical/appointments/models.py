"""
Appointment Model - Stores appointment information and scheduling.

This model links a patient user to a doctor user for a visit.
"""
import enum
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Enum, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from ..database import Base


class AppointmentStatus(str, enum.Enum):
    """Enum for appointment status"""
    SCHEDULED = "Scheduled"
    COMPLETED = "Completed"
    CANCELLED_BY_PATIENT = "CancelledByPatient"
    CANCELLED_BY_DOCTOR = "CancelledByDoctor"
    NO_SHOW = "NoShow"


class Appointment(Base):
    """
    Appointment Model - Stores appointment information

    Fields:
    - id: Primary key for appointment
    - patient_id: Foreign key to the patient's User
    - doctor_id: Foreign key to the doctor's User
    - appointment_datetime: Date and time of the appointment
    - duration_minutes: Planned length of the visit
    - status: Current status of the appointment
    - reason_for_visit: Provided by the patient
    - doctor_notes: Filled in by the doctor after the visit
    - created_at: When the appointment was created
    """
    __tablename__ = "appointments"

    id = Column(Integer, primary_key=True, index=True)
    patient_id = Column(String(36), ForeignKey("users.id", ondelete="RESTRICT"), nullable=False, index=True)
    doctor_id = Column(String(36), ForeignKey("users.id", ondelete="RESTRICT"), nullable=False, index=True)
    appointment_datetime = Column(DateTime(timezone=True), nullable=False)
    duration_minutes = Column(Integer, nullable=False, default=30)
    status = Column(
        Enum(AppointmentStatus, name="appointment_status", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=AppointmentStatus.SCHEDULED,
    )
    reason_for_visit = Column(String(1000), nullable=True)
    doctor_notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False)

    # Relationships
    patient = relationship("User", foreign_keys=[patient_id])
    doctor = relationship("User", foreign_keys=[doctor_id])

    def __repr__(self):
        """String representation of the Appointment model"""
        return f"<Appointment(id={self.id}, doctor_id={self.doctor_id}, patient_id={self.patient_id}, date='{self.appointment_datetime}')>"
