# smarttravel/models/trip.py
"""
Database model for trips.
A trip is a planned journey owned by exactly one user.
"""
import uuid
from tortoise import fields, models


class Trip(models.Model):
    """
    Trip database model.

    Relationships:
    - Belongs to a User (many-to-one); deleted together with the user
    """
    id = fields.UUIDField(pk=True, default=uuid.uuid4)
    user = fields.ForeignKeyField(
        "models.User",
        related_name="trips",
        on_delete=fields.CASCADE,
    )
    destination = fields.CharField(max_length=128)
    start_date = fields.DateField()
    end_date = fields.DateField()  # Always strictly after start_date (checked by the schemas)
    description = fields.TextField(null=True)
    created_at = fields.DatetimeField(auto_now_add=True)
    updated_at = fields.DatetimeField(auto_now=True)

    class Meta:
        """Tortoise ORM metadata configuration."""
        table = "trips"

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "userId": str(self.user_id),
            "destination": self.destination,
            "startDate": self.start_date.isoformat(),
            "endDate": self.end_date.isoformat(),
            "description": self.description,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }
