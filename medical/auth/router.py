"""
Authentication routes: patient/doctor registration and login.
"""
import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..core.security import TokenIssuer
from ..database import get_db
from .dependencies import get_token_issuer
from .schemas import AuthResponse, DoctorRegistration, PatientRegistration, UserLogin
from .service import login_user, register_doctor, register_patient

# Set up logging
logger = logging.getLogger(__name__)

# Create API router
router = APIRouter()


@router.post("/register-patient", response_model=AuthResponse, summary="Patient Self-Registration")
def register_patient_route(
    patient_data: PatientRegistration,
    db: Session = Depends(get_db),
    token_issuer: TokenIssuer = Depends(get_token_issuer),
):
    """
    Patient self-registration endpoint.

    Creates the user, the Patient role membership and the patient profile in
    one transaction and returns a signed token for the new account.
    """
    logger.info(f"Received request to register patient {patient_data.email}")
    return register_patient(db, patient_data, token_issuer)


@router.post("/register-doctor", response_model=AuthResponse, summary="Doctor Self-Registration")
def register_doctor_route(
    doctor_data: DoctorRegistration,
    db: Session = Depends(get_db),
    token_issuer: TokenIssuer = Depends(get_token_issuer),
):
    """
    Doctor registration endpoint.

    The doctor profile starts unverified and is not listed as available
    until it is verified.
    """
    logger.info(f"Received request to register doctor {doctor_data.email}")
    return register_doctor(db, doctor_data, token_issuer)


@router.post("/login", response_model=AuthResponse, summary="Login")
def login_route(
    login_data: UserLogin,
    db: Session = Depends(get_db),
    token_issuer: TokenIssuer = Depends(get_token_issuer),
):
    """
    Exchange email and password for a fresh token.
    """
    return login_user(db, login_data, token_issuer)
