"""
Core security utilities for password handling and token issuance.
"""
import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, List, Optional, Sequence

from jose import JWTError, jwt
from passlib.context import CryptContext

from ..config import Settings

# Set up logging
logger = logging.getLogger(__name__)

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

MIN_SIGNING_KEY_BYTES = 32
MIN_PASSWORD_LENGTH = 8


def hash_password(password: str) -> str:
    """
    Hash a password using bcrypt.

    Args:
        password: Plain text password

    Returns:
        str: Hashed password
    """
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a password against a hash.

    Args:
        plain_password: Plain text password
        hashed_password: Hashed password to compare against

    Returns:
        bool: True if password matches hash
    """
    return pwd_context.verify(plain_password, hashed_password)


def validate_password_strength(password: str) -> List[str]:
    """
    Check a password against the registration policy.

    Args:
        password: Password to validate

    Returns:
        List of human-readable violations; empty when the password is acceptable
    """
    errors = []
    if len(password) < MIN_PASSWORD_LENGTH:
        errors.append(f"Passwords must be at least {MIN_PASSWORD_LENGTH} characters.")
    if not any(c.isdigit() for c in password):
        errors.append("Passwords must have at least one digit ('0'-'9').")
    if not any(c.islower() for c in password):
        errors.append("Passwords must have at least one lowercase ('a'-'z').")
    if not any(c.isupper() for c in password):
        errors.append("Passwords must have at least one uppercase ('A'-'Z').")
    return errors


class TokenConfigurationError(RuntimeError):
    """Raised when the token signing configuration is missing or insecure."""


class TokenDecodeError(Exception):
    """Raised when a token fails signature, expiry, issuer or audience checks."""


@dataclass(frozen=True)
class IssuedToken:
    """A freshly signed token and the moment it stops being valid."""
    token: str
    expires_at: datetime


@dataclass(frozen=True)
class TokenClaims:
    """Identity asserted by a verified token."""
    user_id: str
    email: str
    first_name: str
    last_name: str
    roles: List[str]
    token_id: str
    issued_at: datetime
    expires_at: datetime

    def has_any_role(self, roles: Sequence[str]) -> bool:
        return any(role in self.roles for role in roles)


class TokenIssuer:
    """
    Mints and verifies signed, time-limited bearer tokens.

    Built once per application from the settings. A missing or short signing
    key raises ``TokenConfigurationError`` here, so a misconfigured
    deployment fails at startup rather than on the first login.

    Args:
        settings: Application settings carrying the ``jwt_*`` values
        clock: Callable returning the current UTC time (overridable in tests)
    """
    def __init__(self, settings: Settings, clock: Optional[Callable[[], datetime]] = None):
        signing_key = settings.jwt_signing_key
        if not signing_key or not signing_key.strip():
            logger.error("JWT signing key is missing.")
            raise TokenConfigurationError("JWT signing key is not configured.")
        if len(signing_key.encode("utf-8")) < MIN_SIGNING_KEY_BYTES:
            logger.error("JWT signing key is insecurely short.")
            raise TokenConfigurationError(
                f"JWT signing key must be at least {MIN_SIGNING_KEY_BYTES} bytes."
            )

        self._signing_key = signing_key
        self.algorithm = settings.jwt_algorithm
        self.issuer = settings.jwt_issuer
        self.audience = settings.jwt_audience
        self.duration = timedelta(minutes=settings.jwt_duration_minutes)
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def issue(self, user, roles: Sequence[str]) -> IssuedToken:
        """
        Create a signed access token for ``user``.

        Args:
            user: User whose identity is asserted
            roles: The user's current role names

        Returns:
            IssuedToken: The encoded token and its expiry
        """
        # JWT timestamps have second precision
        issued_at = self._clock().replace(microsecond=0)
        expires_at = issued_at + self.duration

        to_encode: Dict[str, Any] = {
            "sub": user.id,
            "email": user.email,
            "given_name": user.first_name,
            "family_name": user.last_name,
            "role": list(roles),
            "jti": str(uuid.uuid4()),
            "iat": int(issued_at.timestamp()),
            "exp": int(expires_at.timestamp()),
            "iss": self.issuer,
            "aud": self.audience,
        }
        token = jwt.encode(to_encode, self._signing_key, algorithm=self.algorithm)
        logger.debug(f"Token generated for user {user.id} expiring at {expires_at.isoformat()}")
        return IssuedToken(token=token, expires_at=expires_at)

    def decode(self, token: str) -> TokenClaims:
        """
        Verify and decode a token.

        Args:
            token: Encoded token string

        Returns:
            TokenClaims: The verified identity

        Raises:
            TokenDecodeError: If the token is invalid, expired, or malformed
        """
        try:
            payload = jwt.decode(
                token,
                self._signing_key,
                algorithms=[self.algorithm],
                audience=self.audience,
                issuer=self.issuer,
                options={"require_sub": True, "require_exp": True, "require_iat": True, "leeway": 0},
            )
        except JWTError as e:
            raise TokenDecodeError(str(e)) from e

        roles = payload.get("role") or []
        if isinstance(roles, str):
            roles = [roles]
        try:
            return TokenClaims(
                user_id=payload["sub"],
                email=payload.get("email", ""),
                first_name=payload.get("given_name", ""),
                last_name=payload.get("family_name", ""),
                roles=list(roles),
                token_id=payload.get("jti", ""),
                issued_at=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
                expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise TokenDecodeError(f"Malformed token payload: {e}") from e
