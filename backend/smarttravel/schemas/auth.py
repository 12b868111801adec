# smarttravel/schemas/auth.py
"""
Pydantic schemas for authentication endpoints.
Defines request models for signup and login, with the field rules the
API enforces before any handler logic runs.
"""
import re

from pydantic import BaseModel, field_validator

from smarttravel.core.security import MIN_PASSWORD_LENGTH
from smarttravel.models.user import EMAIL_PATTERN, normalize_email

_EMAIL_RE = re.compile(EMAIL_PATTERN)


def _check_email(value: str) -> str:
    email = normalize_email(value)
    if not _EMAIL_RE.match(email):
        raise ValueError("Please provide a valid email address")
    return email


def _check_password(value: str) -> str:
    # Surrounding whitespace is dropped before hashing or comparing
    password = value.strip()
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValueError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long")
    return password


class LoginIn(BaseModel):
    """
    Request model for user login endpoint.
    """
    email: str  # Login e-mail (case-insensitive)
    password: str  # Plain text password, verified against the stored hash

    check_email = field_validator("email")(_check_email)
    check_password = field_validator("password")(_check_password)


class SignupIn(LoginIn):
    """
    Request model for signup: login fields plus a display name.
    """
    name: str

    @field_validator("name")
    @classmethod
    def check_name(cls, value: str) -> str:
        name = value.strip()
        if not name:
            raise ValueError("Name is required")
        if len(name) < 2:
            raise ValueError("Name must be at least 2 characters long")
        return name
