"""
Trip service for trip-related business logic.
"""
import logging
from typing import Optional

from sqlalchemy.orm import Session

from tripjournal.core.exceptions import NotFoundError, ValidationError
from tripjournal.core.pagination import Page, paginate_query
from tripjournal.core.utils import LIKE_ESCAPE, like_pattern, reject_nulls
from tripjournal.models.companion import TripCompanion
from tripjournal.models.trip import Trip, TripCollaborator, TripStatus
from tripjournal.models.tag import TripTag, TripTagAssignment
from tripjournal.schemas.trip import TripCreate, TripUpdate
from tripjournal.services.access_service import Access, authorize_trip, require_owner
from tripjournal.services.companion_service import get_myself_companion

logger = logging.getLogger(__name__)


def _check_dates(start_date, end_date) -> None:
    if start_date and end_date and end_date < start_date:
        raise ValidationError("End date must be on or after start date")


def create_trip(db: Session, user_id: int, data: TripCreate) -> Trip:
    """Create a trip owned by the caller."""
    _check_dates(data.start_date, data.end_date)
    trip = Trip(user_id=user_id, **data.model_dump())
    db.add(trip)
    myself = get_myself_companion(db, user_id)
    if myself:
        # The traveller is always on their own trip
        trip.companion_assignments.append(TripCompanion(companion_id=myself.id))
    db.commit()
    db.refresh(trip)
    logger.info(f"User {user_id} created trip {trip.id}")
    return trip


def list_trips(
    db: Session,
    user_id: int,
    skip: int,
    take: int,
    status: Optional[TripStatus] = None,
    search: Optional[str] = None
) -> Page:
    """List trips owned by the caller, newest start date first."""
    query = db.query(Trip).filter(Trip.user_id == user_id)
    if status:
        query = query.filter(Trip.status == status)
    if search:
        query = query.filter(Trip.title.ilike(like_pattern(search), escape=LIKE_ESCAPE))
    query = query.order_by(Trip.start_date.desc(), Trip.created_at.desc())
    return paginate_query(query, skip, take)


def list_shared_trips(db: Session, user_id: int, skip: int, take: int) -> Page:
    """List trips where the caller is a collaborator."""
    query = db.query(Trip).join(TripCollaborator).filter(
        TripCollaborator.user_id == user_id
    ).order_by(Trip.start_date.desc(), Trip.created_at.desc())
    return paginate_query(query, skip, take)


def get_trip(db: Session, user_id: int, trip_id: int) -> Trip:
    return authorize_trip(db, trip_id, user_id, Access.READ)


def update_trip(db: Session, user_id: int, trip_id: int, data: TripUpdate) -> Trip:
    """Update trip fields; privacy changes stay with the owner."""
    trip = authorize_trip(db, trip_id, user_id, Access.WRITE)
    changes = data.model_dump(exclude_unset=True)

    if "privacy_level" in changes:
        require_owner(trip, user_id, "change trip privacy")
    reject_nulls(changes, "title", "status", "privacy_level")

    _check_dates(changes.get("start_date", trip.start_date), changes.get("end_date", trip.end_date))

    for field, value in changes.items():
        setattr(trip, field, value)
    db.commit()
    db.refresh(trip)
    return trip


def delete_trip(db: Session, user_id: int, trip_id: int) -> None:
    """Delete a trip and everything it owns."""
    trip = authorize_trip(db, trip_id, user_id, Access.WRITE)
    require_owner(trip, user_id, "delete the trip")
    db.delete(trip)
    db.commit()
    logger.info(f"User {user_id} deleted trip {trip_id}")


def add_tag_to_trip(db: Session, user_id: int, trip_id: int, tag_id: int) -> Trip:
    """Apply one of the caller's tags to a trip (no-op if already applied)."""
    trip = authorize_trip(db, trip_id, user_id, Access.WRITE)
    tag = db.query(TripTag).filter(TripTag.id == tag_id, TripTag.user_id == user_id).first()
    if not tag:
        raise NotFoundError("Tag not found")

    existing = db.query(TripTagAssignment).filter(
        TripTagAssignment.trip_id == trip_id,
        TripTagAssignment.tag_id == tag_id
    ).first()
    if not existing:
        db.add(TripTagAssignment(trip_id=trip_id, tag_id=tag_id))
        db.commit()
    db.refresh(trip)
    return trip


def remove_tag_from_trip(db: Session, user_id: int, trip_id: int, tag_id: int) -> None:
    authorize_trip(db, trip_id, user_id, Access.WRITE)
    assignment = db.query(TripTagAssignment).filter(
        TripTagAssignment.trip_id == trip_id,
        TripTagAssignment.tag_id == tag_id
    ).first()
    if not assignment:
        raise NotFoundError("Tag is not assigned to this trip")
    db.delete(assignment)
    db.commit()
