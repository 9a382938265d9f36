"""
Patient Service - read and update of the calling patient's profile.
"""
import logging

from sqlalchemy.orm import Session, joinedload

from ..auth.exceptions import ResourceNotFoundException
from ..core.profiles import apply_profile_update, collect_updates
from .models import PatientProfile
from .schemas import PatientProfileResponse, PatientProfileUpdate

logger = logging.getLogger(__name__)


def get_my_profile(db: Session, user_id: str) -> PatientProfileResponse:
    """
    Get a patient's profile by owner user ID.

    Raises:
        ResourceNotFoundException: If the user does not exist or has no patient profile
    """
    logger.info(f"Attempting to retrieve profile for patient User ID: {user_id}")
    profile = (
        db.query(PatientProfile)
        .options(joinedload(PatientProfile.user))
        .filter(PatientProfile.user_id == user_id)
        .first()
    )
    if profile is None:
        logger.warning(f"Patient profile not found for User ID {user_id}, or user is not a patient.")
        raise ResourceNotFoundException("Patient profile not found.")

    user = profile.user
    return PatientProfileResponse(
        user_id=user.id,
        email=user.email,
        first_name=user.first_name,
        last_name=user.last_name,
        date_of_birth=profile.date_of_birth,
        address=profile.address,
        medical_history_summary=profile.medical_history_summary,
        allergies=profile.allergies,
        current_medications=profile.current_medications,
    )


def update_my_profile(db: Session, user_id: str, update_data: PatientProfileUpdate) -> None:
    """
    Apply a partial update to a patient's profile.

    Raises:
        ResourceNotFoundException: If the patient profile does not exist
        ConcurrencyConflictException: If the profile changed concurrently
    """
    logger.info(f"Attempting to update profile for patient User ID: {user_id}")
    profile = db.query(PatientProfile).filter(PatientProfile.user_id == user_id).first()
    if profile is None:
        logger.warning(f"Update failed: Patient profile not found for User ID {user_id}")
        raise ResourceNotFoundException("Patient profile not found.")

    apply_profile_update(db, profile, collect_updates(update_data), user_id)
