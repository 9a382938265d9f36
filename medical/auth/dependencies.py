"""
FastAPI dependencies for authentication and role-based authorization.
"""
import logging
from typing import List

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ..core.security import TokenClaims, TokenDecodeError, TokenIssuer
from .exceptions import InvalidTokenException, PermissionDeniedException
from .roles import DOCTOR_ROLE, PATIENT_ROLE

logger = logging.getLogger(__name__)

# Bearer scheme; a missing header is reported by get_current_user
bearer_scheme = HTTPBearer(auto_error=False)


def get_token_issuer(request: Request) -> TokenIssuer:
    """Return the token issuer built by the application factory."""
    return request.app.state.token_issuer


def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    token_issuer: TokenIssuer = Depends(get_token_issuer),
) -> TokenClaims:
    """
    Get the identity asserted by the bearer token.

    Args:
        credentials: Parsed Authorization header
        token_issuer: Issuer used to verify the token

    Returns:
        TokenClaims: Verified identity and roles

    Raises:
        InvalidTokenException: If the token is missing, invalid or expired
    """
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise InvalidTokenException("Not authenticated")

    try:
        claims = token_issuer.decode(credentials.credentials)
    except TokenDecodeError as e:
        logger.warning(f"Rejected bearer token: {str(e)}")
        raise InvalidTokenException()

    if not claims.user_id:
        raise InvalidTokenException("Invalid token payload")
    return claims


def require_roles(allowed_roles: List[str]):
    """
    Dependency factory to require specific roles.

    Args:
        allowed_roles: Role names that are allowed access

    Returns:
        Function that checks the token's role claim
    """
    def role_checker(current_user: TokenClaims = Depends(get_current_user)) -> TokenClaims:
        if not current_user.has_any_role(allowed_roles):
            logger.warning(
                f"User {current_user.user_id} with roles {current_user.roles} denied; requires {allowed_roles}"
            )
            raise PermissionDeniedException(f"Access denied. Required roles: {allowed_roles}")
        return current_user
    return role_checker


# Convenience dependencies for specific roles
require_patient = require_roles([PATIENT_ROLE])
require_doctor = require_roles([DOCTOR_ROLE])
