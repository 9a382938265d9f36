"""
Authentication service layer: registration transaction and login.
"""
import logging
from typing import List

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.security import IssuedToken, TokenIssuer
from .credentials import CredentialStore, normalize_email
from .exceptions import (
    AuthException,
    EmailAlreadyExistsException,
    InternalErrorException,
    InvalidCredentialsException,
    ProfileLinkException,
)
from .models import User
from .roles import RoleRegistry
from .schemas import AuthResponse, DoctorRegistration, PatientRegistration, UserLogin
from .seeds import DoctorProfileSeed, PatientProfileSeed, ProfileSeed

# Set up logging
logger = logging.getLogger(__name__)


def _auth_response(user: User, roles: List[str], issued: IssuedToken) -> AuthResponse:
    return AuthResponse(
        user_id=user.id,
        email=user.email,
        token=issued.token,
        expires_at=issued.expires_at,
        roles=roles,
        first_name=user.first_name,
        last_name=user.last_name,
    )


def register_patient(db: Session, data: PatientRegistration, token_issuer: TokenIssuer) -> AuthResponse:
    """
    Register a new patient together with their patient profile.

    Args:
        db: Database session
        data: Patient registration data
        token_issuer: Issuer used to sign the returned token

    Returns:
        AuthResponse with the new user's token

    Raises:
        EmailAlreadyExistsException: If email already exists
        CredentialRejectedException: If the password policy is not met
    """
    logger.info(f"Attempting to register patient with email {data.email}")
    seed = PatientProfileSeed(date_of_birth=data.date_of_birth, address=data.address)
    return register_user(
        db,
        token_issuer,
        email=data.email,
        password=data.password,
        first_name=data.first_name,
        last_name=data.last_name,
        role_name=seed.role_name,
        seed=seed,
    )


def register_doctor(db: Session, data: DoctorRegistration, token_issuer: TokenIssuer) -> AuthResponse:
    """
    Register a new doctor together with an unverified doctor profile.

    Args:
        db: Database session
        data: Doctor registration data
        token_issuer: Issuer used to sign the returned token

    Returns:
        AuthResponse with the new user's token

    Raises:
        EmailAlreadyExistsException: If email already exists
        CredentialRejectedException: If the password policy is not met
    """
    logger.info(f"Attempting to register doctor with email {data.email}")
    seed = DoctorProfileSeed(
        specialization=data.specialization,
        license_number=data.license_number,
        years_of_experience=data.years_of_experience,
    )
    return register_user(
        db,
        token_issuer,
        email=data.email,
        password=data.password,
        first_name=data.first_name,
        last_name=data.last_name,
        role_name=seed.role_name,
        seed=seed,
    )


def register_user(
    db: Session,
    token_issuer: TokenIssuer,
    *,
    email: str,
    password: str,
    first_name: str,
    last_name: str,
    role_name: str,
    seed: ProfileSeed,
) -> AuthResponse:
    """
    Create user, role membership and profile as one unit, then issue a token.

    The role itself is provisioned (and committed) before the unit starts and
    is kept even if the unit is rolled back. Any failure while creating the
    user, assigning the role, linking the profile or signing the token leaves
    no rows behind.

    Raises:
        EmailAlreadyExistsException: If the email is taken, including by a concurrent registration
        RoleProvisioningException: If the role cannot be created
        CredentialRejectedException: If the credential store rejects the user
        RoleAssignmentException: If the membership cannot be stored
        ProfileLinkException: If the profile is not owned by the new user
        InternalErrorException: For any other store failure
    """
    email = normalize_email(email)
    credentials = CredentialStore(db)
    roles = RoleRegistry(db)

    if credentials.find_by_email(email) is not None:
        logger.warning(f"Registration failed: Email {email} is already in use.")
        raise EmailAlreadyExistsException()

    roles.ensure_role(role_name)

    try:
        user = credentials.create(
            User(email=email, first_name=first_name.strip(), last_name=last_name.strip()),
            password,
        )
        logger.info(f"User identity created for {email} with ID {user.id}.")

        roles.assign(user, role_name)
        logger.info(f"User {email} added to role {role_name}.")

        profile = seed.build(user.id)
        if getattr(profile, "user_id", None) != user.id:
            logger.error(f"Profile of type {type(profile).__name__} is not linked to user {user.id}")
            raise ProfileLinkException()
        db.add(profile)
        db.flush()
        logger.info(f"Profile of type {type(profile).__name__} created for user {email}.")

        role_names = roles.roles_for(user)
        issued = token_issuer.issue(user, role_names)

        db.commit()
    except IntegrityError as e:
        db.rollback()
        if credentials.find_by_email(email) is not None:
            logger.warning(f"Registration failed: Email {email} was registered concurrently.")
            raise EmailAlreadyExistsException() from e
        logger.error(f"Integrity error during registration for {email}: {str(e)}")
        raise InternalErrorException("An internal error occurred during registration.") from e
    except AuthException:
        db.rollback()
        raise
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Database error during registration for {email}: {str(e)}")
        raise InternalErrorException("An internal error occurred during registration.") from e
    except Exception:
        db.rollback()
        logger.exception(f"Unexpected error during registration transaction for {email}")
        raise

    logger.info(f"Registration transaction committed successfully for {email}")
    return _auth_response(user, role_names, issued)


def login_user(db: Session, data: UserLogin, token_issuer: TokenIssuer) -> AuthResponse:
    """
    Authenticate a user and issue a fresh token.

    An unknown email and a wrong password fail identically.

    Args:
        db: Database session
        data: Login credentials
        token_issuer: Issuer used to sign the returned token

    Returns:
        AuthResponse with roles re-read from the store

    Raises:
        InvalidCredentialsException: If credentials are invalid
    """
    logger.info(f"Attempting login for user {data.email}")
    credentials = CredentialStore(db)

    user = credentials.find_by_email(data.email)
    if not credentials.verify(user, data.password):
        logger.warning(f"Login failed: Invalid credentials for {data.email}")
        raise InvalidCredentialsException()

    role_names = RoleRegistry(db).roles_for(user)
    issued = token_issuer.issue(user, role_names)

    logger.info(f"Login successful: User {user.id} ({user.email})")
    return _auth_response(user, role_names, issued)
