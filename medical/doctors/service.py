"""
Doctor Service - Business logic for doctor profile management.

This module provides the doctor's own profile read/update, the public
profile lookup and the available doctors listing.
"""
import logging
from typing import List

from sqlalchemy.orm import Session, joinedload

from ..auth.exceptions import ResourceNotFoundException
from ..auth.models import User
from ..core.profiles import apply_profile_update, collect_updates
from .models import DoctorProfile
from .schemas import DoctorProfileResponse, DoctorProfileUpdate, DoctorSummary

# Set up logging
logger = logging.getLogger(__name__)

MASKED_LICENSE_NUMBER = "********"


def _to_response(profile: DoctorProfile, mask_license: bool) -> DoctorProfileResponse:
    user = profile.user
    return DoctorProfileResponse(
        user_id=user.id,
        email=user.email,
        first_name=user.first_name,
        last_name=user.last_name,
        specialization=profile.specialization,
        license_number=MASKED_LICENSE_NUMBER if mask_license else profile.license_number,
        years_of_experience=profile.years_of_experience,
        clinic_address=profile.clinic_address,
        professional_bio=profile.professional_bio,
        is_verified=profile.is_verified,
    )


def _get_profile(db: Session, user_id: str) -> DoctorProfile:
    profile = (
        db.query(DoctorProfile)
        .options(joinedload(DoctorProfile.user))
        .filter(DoctorProfile.user_id == user_id)
        .first()
    )
    if profile is None:
        logger.warning(f"Doctor profile not found for User ID {user_id}, or user is not a doctor.")
        raise ResourceNotFoundException("Doctor profile not found.")
    return profile


def get_available_doctors(db: Session) -> List[DoctorSummary]:
    """
    List verified doctors ordered by last name, then first name.

    Args:
        db: Database session

    Returns:
        List of doctor summaries
    """
    rows = (
        db.query(User.id, User.first_name, User.last_name, DoctorProfile.specialization)
        .join(DoctorProfile, DoctorProfile.user_id == User.id)
        .filter(DoctorProfile.is_verified.is_(True))
        .order_by(User.last_name, User.first_name)
        .all()
    )
    logger.info(f"Found {len(rows)} available doctors.")
    return [
        DoctorSummary(
            doctor_user_id=user_id,
            first_name=first_name,
            last_name=last_name,
            specialization=specialization,
        )
        for user_id, first_name, last_name, specialization in rows
    ]


def get_doctor_profile_by_id(db: Session, doctor_id: str) -> DoctorProfileResponse:
    """
    Get the public profile of a doctor, with the license number masked.

    Args:
        db: Database session
        doctor_id: User ID of the doctor

    Raises:
        ResourceNotFoundException: If the user does not exist or is not a doctor
    """
    logger.info(f"Attempting to retrieve profile for doctor with User ID: {doctor_id}")
    profile = _get_profile(db, doctor_id)
    return _to_response(profile, mask_license=True)


def get_my_profile(db: Session, user_id: str) -> DoctorProfileResponse:
    """
    Get the calling doctor's own profile, including the license number.

    Raises:
        ResourceNotFoundException: If the doctor profile does not exist
    """
    logger.info(f"Attempting to retrieve profile for doctor User ID: {user_id}")
    profile = _get_profile(db, user_id)
    return _to_response(profile, mask_license=False)


def update_my_profile(db: Session, user_id: str, update_data: DoctorProfileUpdate) -> None:
    """
    Apply a partial update to the calling doctor's profile.

    Args:
        db: Database session
        user_id: User ID of the doctor
        update_data: Fields to change

    Raises:
        ResourceNotFoundException: If the doctor profile does not exist
        ConcurrencyConflictException: If the profile changed concurrently
    """
    logger.info(f"Attempting to update profile for doctor User ID: {user_id}")
    profile = db.query(DoctorProfile).filter(DoctorProfile.user_id == user_id).first()
    if profile is None:
        logger.warning(f"Update failed: Doctor profile not found for User ID {user_id}")
        raise ResourceNotFoundException("Doctor profile not found.")

    apply_profile_update(db, profile, collect_updates(update_data), user_id)
