"""
Patient Router - the calling patient's own profile.
"""
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from ..auth.dependencies import require_patient
from ..core.security import TokenClaims
from ..database import get_db
from .schemas import PatientProfileResponse, PatientProfileUpdate
from .service import get_my_profile, update_my_profile

router = APIRouter()


@router.get("/profile", response_model=PatientProfileResponse)
def get_my_patient_profile(
    db: Session = Depends(get_db),
    current_user: TokenClaims = Depends(require_patient),
):
    """
    Get the current patient's profile
    """
    return get_my_profile(db, current_user.user_id)


@router.put("/profile", status_code=status.HTTP_204_NO_CONTENT)
def update_my_patient_profile(
    profile_data: PatientProfileUpdate,
    db: Session = Depends(get_db),
    current_user: TokenClaims = Depends(require_patient),
):
    """
    Update the current patient's profile

    Only the fields present in the body are changed.
    """
    update_my_profile(db, current_user.user_id, profile_data)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
