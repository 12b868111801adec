# smarttravel/schemas/trip.py
"""
Pydantic schemas for trip endpoints.
Defines request models for trip creation and partial updates.
"""
import datetime as dt
from typing import Literal, Optional

from pydantic import BaseModel, field_validator, model_validator

DESTINATION_MAX_LENGTH = 128
DESCRIPTION_MAX_LENGTH = 2000

TripSortField = Literal["startDate", "endDate", "destination", "createdAt"]

# API sort keys -> model fields
SORT_FIELDS = {
    "startDate": "start_date",
    "endDate": "end_date",
    "destination": "destination",
    "createdAt": "created_at",
}


def check_date_order(start: dt.date, end: dt.date) -> None:
    if end <= start:
        raise ValueError("End date must be after start date")


def _check_destination(value: Optional[str]) -> str:
    if value is None:
        raise ValueError("Destination is required")
    destination = value.strip()
    if not destination:
        raise ValueError("Destination is required")
    if len(destination) > DESTINATION_MAX_LENGTH:
        raise ValueError(f"Destination must be at most {DESTINATION_MAX_LENGTH} characters long")
    return destination


def _check_description(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    description = value.strip()
    if len(description) > DESCRIPTION_MAX_LENGTH:
        raise ValueError(f"Description must be at most {DESCRIPTION_MAX_LENGTH} characters long")
    return description or None


def _check_required_date(value: Optional[dt.date]) -> dt.date:
    if value is None:
        raise ValueError("Date is required")
    return value


class TripCreateIn(BaseModel):
    """
    Request model for creating a trip.
    """
    destination: str
    startDate: dt.date  # ISO date, e.g. "2024-06-01"
    endDate: dt.date  # Must be after startDate
    description: Optional[str] = None

    check_destination = field_validator("destination")(_check_destination)
    check_description = field_validator("description")(_check_description)

    @model_validator(mode="after")
    def check_dates(self):
        check_date_order(self.startDate, self.endDate)
        return self


class TripUpdateIn(BaseModel):
    """
    Request model for partial trip updates.
    Only fields present in the body are changed; the date order is checked
    against the stored trip once the update is merged.
    """
    destination: Optional[str] = None
    startDate: Optional[dt.date] = None
    endDate: Optional[dt.date] = None
    description: Optional[str] = None

    check_destination = field_validator("destination")(_check_destination)
    check_start = field_validator("startDate")(_check_required_date)
    check_end = field_validator("endDate")(_check_required_date)
    check_description = field_validator("description")(_check_description)
