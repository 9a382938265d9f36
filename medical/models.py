"""
Import every model so the mapper registry and ``Base.metadata`` are complete.
"""
from .auth.models import Role, User, user_roles
from .patients.models import PatientProfile
from .doctors.models import DoctorProfile
from .appointments.models import Appointment, AppointmentStatus
from .messages.models import Message

__all__ = ["Role", "User", "user_roles", "PatientProfile", "DoctorProfile",
           "Appointment", "AppointmentStatus", "Message"]
