"""
Authentication and profile exceptions.
"""
from typing import List, Optional

from fastapi import status

from ..exceptions import AppException


class AuthException(AppException):
    """Base class for authentication exceptions."""
    def __init__(self, status_code: int, detail: str, errors: Optional[List[str]] = None, headers: Optional[dict] = None):
        super().__init__(status_code=status_code, detail=detail, errors=errors, headers=headers)


class InvalidCredentialsException(AuthException):
    """Raised for an unknown email or a wrong password; the two are indistinguishable."""
    def __init__(self, detail: str = "Invalid email or password."):
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


class EmailAlreadyExistsException(AuthException):
    """Exception raised when email already exists."""
    def __init__(self, detail: str = "Email is already registered."):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class CredentialRejectedException(AuthException):
    """Exception raised when the credential store refuses to create a user."""
    def __init__(self, errors: List[str], detail: str = "Registration failed"):
        message = f"{detail}: {'; '.join(errors)}" if errors else detail
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=message, errors=errors)


class RoleProvisioningException(AuthException):
    """Exception raised when a required role cannot be created."""
    def __init__(self, role_name: str):
        self.role_name = role_name
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An internal error occurred during registration.",
        )


class RoleAssignmentException(AuthException):
    """Exception raised when a user cannot be added to a role."""
    def __init__(self, detail: str = "Failed to assign role"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class ProfileLinkException(AuthException):
    """Exception raised when a profile cannot be linked to its owner."""
    def __init__(self, detail: str = "Internal error creating profile link."):
        super().__init__(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)


class InvalidTokenException(AuthException):
    """Exception raised when a bearer token is missing, malformed or expired."""
    def __init__(self, detail: str = "Invalid or expired token"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class PermissionDeniedException(AuthException):
    """Exception raised when user doesn't have the required role."""
    def __init__(self, detail: str = "Permission denied"):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class ResourceNotFoundException(AppException):
    """Exception raised when a requested record does not exist."""
    def __init__(self, detail: str = "Resource not found"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class ConcurrencyConflictException(AppException):
    """Exception raised when a record changed between read and write."""
    def __init__(
        self,
        detail: str = "Failed to update profile due to a concurrency conflict. Please refresh and try again.",
    ):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class InternalErrorException(AppException):
    """Exception raised for store failures whose detail must stay server-side."""
    def __init__(self, detail: str = "An internal error occurred."):
        super().__init__(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)
