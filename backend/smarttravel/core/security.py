# smarttravel/core/security.py
"""
Security module for authentication.
Handles password hashing and issuing/verifying the JWT carried by the session cookie.
"""
import datetime as dt
from dataclasses import dataclass

import jwt  # PyJWT
from passlib.context import CryptContext

from smarttravel.config import Settings, settings
from smarttravel.core.errors import ConfigurationError

# Password hashing context
# Argon2 is salted and memory-hard; verify() compares in constant time
pwd_context = CryptContext(
    schemes=["argon2"],
    deprecated="auto",
)

JWT_ALG = "HS256"  # JWT signing algorithm (HMAC SHA-256)
MIN_PASSWORD_LENGTH = 6  # Enforced by request validation, before hash_password is called


def hash_password(plain: str) -> str:
    """
    Hash a plain text password using Argon2.

    Args:
        plain: Plain text password to hash

    Returns:
        Hashed password string (safe to store in database)
    """
    return pwd_context.hash(plain)


def verify_password(plain: str, hashed: str) -> bool:
    """
    Verify a plain text password against a hashed password.

    Returns:
        True if password matches, False otherwise (including malformed hashes)
    """
    try:
        return pwd_context.verify(plain, hashed)
    except ValueError:
        return False


class InvalidToken(Exception):
    """Token signature mismatch, malformed token or expired token."""


@dataclass(frozen=True)
class TokenData:
    """Identity decoded from a verified session token."""
    id: str
    email: str


class TokenService:
    """
    Issues and verifies self-contained session tokens.

    The token binds {id, email} and an expiry to the process-wide JWT secret.
    Nothing is stored server-side, so a token stays valid until it expires.
    """

    def __init__(self, config: Settings):
        self.config = config

    @property
    def default_ttl(self) -> dt.timedelta:
        return dt.timedelta(days=self.config.session_ttl_days)

    def _secret(self) -> str:
        if not self.config.jwt_secret:
            raise ConfigurationError("JWT_SECRET is not configured")
        return self.config.jwt_secret

    def issue(self, subject_id: str, subject_email: str, ttl: dt.timedelta | None = None) -> str:
        """
        Create a signed token for a user.

        Token payload includes:
            - id: User ID
            - email: User email
            - iat: Issued at timestamp
            - exp: Expiration timestamp
        """
        now = dt.datetime.now(dt.timezone.utc)
        payload = {
            "id": subject_id,
            "email": subject_email,
            "iat": now,
            "exp": now + (ttl if ttl is not None else self.default_ttl),
        }
        return jwt.encode(payload, self._secret(), algorithm=JWT_ALG)

    def verify(self, token: str) -> TokenData:
        """
        Decode and validate a token.

        Raises:
            InvalidToken: bad signature, malformed payload or expired token
        """
        try:
            payload = jwt.decode(
                token,
                self._secret(),
                algorithms=[JWT_ALG],
                options={"require": ["exp", "iat"]},
            )
        except jwt.PyJWTError as e:
            raise InvalidToken(str(e)) from e

        user_id = payload.get("id")
        email = payload.get("email")
        if not isinstance(user_id, str) or not isinstance(email, str):
            raise InvalidToken("token payload is missing id/email")
        return TokenData(id=user_id, email=email)


token_service = TokenService(settings)
