"""
Doctor Router - API endpoints for doctor profiles.

Doctor registration is handled through the auth router.
"""
from typing import List

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from ..auth.dependencies import get_current_user, require_doctor
from ..core.security import TokenClaims
from ..database import get_db
from .schemas import DoctorProfileResponse, DoctorProfileUpdate, DoctorSummary
from .service import get_available_doctors, get_doctor_profile_by_id, get_my_profile, update_my_profile

router = APIRouter()


@router.get("/profile", response_model=DoctorProfileResponse)
def get_my_doctor_profile(
    db: Session = Depends(get_db),
    current_user: TokenClaims = Depends(require_doctor),
):
    """
    Get the current doctor's profile
    """
    return get_my_profile(db, current_user.user_id)


@router.put("/profile", status_code=status.HTTP_204_NO_CONTENT)
def update_my_doctor_profile(
    profile_data: DoctorProfileUpdate,
    db: Session = Depends(get_db),
    current_user: TokenClaims = Depends(require_doctor),
):
    """
    Update the current doctor's profile

    Only the fields present in the body are changed.
    """
    update_my_profile(db, current_user.user_id, profile_data)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/available", response_model=List[DoctorSummary])
def list_available_doctors(
    db: Session = Depends(get_db),
    current_user: TokenClaims = Depends(get_current_user),
):
    """
    List verified doctors, ordered by last name then first name
    """
    return get_available_doctors(db)


@router.get("/{doctor_id}", response_model=DoctorProfileResponse)
def get_doctor(
    doctor_id: str,
    db: Session = Depends(get_db),
    current_user: TokenClaims = Depends(get_current_user),
):
    """
    Get a doctor's public profile by user ID

    The license number is masked.
    """
    return get_doctor_profile_by_id(db, doctor_id)
