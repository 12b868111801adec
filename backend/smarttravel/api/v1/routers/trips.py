import datetime as dt
import math
import uuid
from typing import Literal

from fastapi import APIRouter, Depends, Query, status

from smarttravel.api.v1.deps import get_session_user
from smarttravel.core.errors import NotFound, PermissionDenied, ValidationFailed
from smarttravel.models.trip import Trip
from smarttravel.models.user import User
from smarttravel.schemas.trip import SORT_FIELDS, TripCreateIn, TripSortField, TripUpdateIn, check_date_order

router = APIRouter(prefix="/trips", tags=["trips"])

# API field names -> model fields for partial updates
UPDATE_FIELDS = {
    "destination": "destination",
    "startDate": "start_date",
    "endDate": "end_date",
    "description": "description",
}


async def _owned_trip(tid: str, user: User) -> Trip:
    """Load a trip and make sure it belongs to the user (404 if missing, 403 if foreign)."""
    try:
        trip_id = uuid.UUID(tid)
    except ValueError:
        raise NotFound("Trip not found")
    trip = await Trip.get_or_none(id=trip_id)
    if not trip:
        raise NotFound("Trip not found")
    if str(trip.user_id) != str(user.id):
        raise PermissionDenied("You do not have access to this trip")
    return trip


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_trip(body: TripCreateIn, user: User = Depends(get_session_user)):
    """
    Create a trip for the authenticated user.

    Errors:
        400: missing fields, invalid dates, end date not after start date
        401: not authenticated
    """
    trip = await Trip.create(
        user=user,
        destination=body.destination,
        start_date=body.startDate,
        end_date=body.endDate,
        description=body.description,
    )
    return trip.to_dict()


@router.get("")
async def list_trips(
    user: User = Depends(get_session_user),
    startDate: dt.date | None = Query(None),
    endDate: dt.date | None = Query(None),
    sortBy: TripSortField = Query("startDate"),
    order: Literal["asc", "desc"] = Query("asc"),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
):
    """
    List the user's trips.

    startDate / endDate select trips lying entirely inside the range.
    Results are sorted by sortBy (ties broken by creation time) and paginated.

    Returns:
        200 {trips: [...], pagination: {currentPage, totalPages, totalItems, limit}}
    """
    qs = Trip.filter(user=user)
    if startDate:
        qs = qs.filter(start_date__gte=startDate)
    if endDate:
        qs = qs.filter(end_date__lte=endDate)

    total = await qs.count()
    prefix = "-" if order == "desc" else ""
    rows = await (
        qs.order_by(f"{prefix}{SORT_FIELDS[sortBy]}", f"{prefix}created_at")
        .offset((page - 1) * limit)
        .limit(limit)
    )
    return {
        "trips": [t.to_dict() for t in rows],
        "pagination": {
            "currentPage": page,
            "totalPages": math.ceil(total / limit),
            "totalItems": total,
            "limit": limit,
        },
    }


@router.get("/{tid}")
async def get_trip(tid: str, user: User = Depends(get_session_user)):
    trip = await _owned_trip(tid, user)
    return trip.to_dict()


@router.put("/{tid}")
async def update_trip(tid: str, body: TripUpdateIn, user: User = Depends(get_session_user)):
    """
    Partially update a trip; only fields present in the body change.

    Errors:
        400: invalid field, or the merged dates would put the end on/before the start
        403: trip belongs to another user
        404: trip not found
    """
    trip = await _owned_trip(tid, user)
    changes = body.model_dump(exclude_unset=True)
    if not changes:
        return trip.to_dict()

    for api_name, value in changes.items():
        setattr(trip, UPDATE_FIELDS[api_name], value)
    try:
        check_date_order(trip.start_date, trip.end_date)
    except ValueError as e:
        raise ValidationFailed(errors=[{"field": "endDate", "message": str(e)}])

    await trip.save(update_fields=[UPDATE_FIELDS[k] for k in changes] + ["updated_at"])
    return trip.to_dict()


@router.delete("/{tid}")
async def delete_trip(tid: str, user: User = Depends(get_session_user)):
    trip = await _owned_trip(tid, user)
    await trip.delete()
    return {"message": "Trip deleted", "id": str(trip.id)}
