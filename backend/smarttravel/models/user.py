# smarttravel/models/user.py
"""
Database model for users.
Represents a user account in the system: profile information and
authentication credentials. The user owns its chat history and trips.
"""
import uuid
from tortoise import fields, models
from tortoise.validators import MinLengthValidator, RegexValidator

EMAIL_PATTERN = r"^\S+@\S+\.\S+$"


def normalize_email(email: str) -> str:
    """E-mails are unique case-insensitively, so they are stored lowercased."""
    return (email or "").strip().lower()


class User(models.Model):
    """
    User database model.

    Relationships:
    - Has many ChatMessages (one-to-many, via related_name="chats")
    - Has many Trips (one-to-many, via related_name="trips")

    Security:
    - Password is stored as a hash (never store plain text passwords)
    - Email is unique and stored lowercased
    """
    id = fields.UUIDField(pk=True, default=uuid.uuid4)  # Primary key: unique user identifier
    name = fields.CharField(max_length=128, validators=[MinLengthValidator(2)])
    email = fields.CharField(
        max_length=256,
        unique=True,
        index=True,
        validators=[RegexValidator(EMAIL_PATTERN, 0)],
    )  # Login e-mail (unique, indexed for fast lookups)
    password_hash = fields.CharField(max_length=255)  # Argon2 hash, never returned to clients
    created_at = fields.DatetimeField(auto_now_add=True)
    updated_at = fields.DatetimeField(auto_now=True)

    class Meta:
        """Tortoise ORM metadata configuration."""
        table = "users"

    async def save(self, *args, **kwargs) -> None:
        self.name = (self.name or "").strip()
        self.email = normalize_email(self.email)
        await super().save(*args, **kwargs)

    def public(self) -> dict:
        """Profile fields safe to return to the client."""
        return {"id": str(self.id), "name": self.name, "email": self.email}
