"""
Credential store - identity lookup by email, password hashing and verification.
"""
import logging
from typing import Optional

from sqlalchemy.orm import Session

from ..core.security import hash_password, pwd_context, validate_password_strength, verify_password
from .exceptions import CredentialRejectedException
from .models import User

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    """Emails are unique case-insensitively; they are stored lower-cased."""
    return email.strip().lower()


class CredentialStore:
    """
    Narrow wrapper over the users table for everything that touches passwords.

    Args:
        db: Database session of the current request
    """
    def __init__(self, db: Session):
        self.db = db

    def find_by_email(self, email: str) -> Optional[User]:
        """Return the user registered under ``email``, if any."""
        return self.db.query(User).filter(User.email == normalize_email(email)).first()

    def verify(self, user: Optional[User], password: str) -> bool:
        """
        Check ``password`` against the user's stored hash.

        A missing user never verifies; a dummy hash check keeps the timing
        close to that of a wrong password.
        """
        if user is None:
            pwd_context.dummy_verify()
            return False
        return verify_password(password, user.password_hash)

    def create(self, user: User, password: str) -> User:
        """
        Hash the password onto ``user`` and stage it in the session.

        The row is flushed so that constraint violations surface here, but the
        surrounding transaction is left for the caller to commit.

        Raises:
            CredentialRejectedException: If the password or identity fields are rejected
        """
        errors = validate_password_strength(password)
        if not user.first_name or not user.first_name.strip():
            errors.append("First name is required.")
        if not user.last_name or not user.last_name.strip():
            errors.append("Last name is required.")
        if errors:
            logger.warning(f"User creation rejected for {user.email}: {len(errors)} validation error(s)")
            raise CredentialRejectedException(errors)

        user.email = normalize_email(user.email)
        user.password_hash = hash_password(password)
        self.db.add(user)
        self.db.flush()
        return user
