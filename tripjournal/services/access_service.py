"""
Trip access control.

Every trip-owned entity goes through the same rule:

* READ   - owner, any user on a Public trip, or a collaborator on a Shared trip
* WRITE  - owner, or an `edit`/`admin` collaborator on a Shared trip
* MANAGE - owner, or an `admin` collaborator on a Shared trip

A missing trip or entity raises NotFoundError (404); an existing one the
caller may not touch raises ForbiddenError (403).
"""
import enum
from typing import Optional, Type, TypeVar

from sqlalchemy.orm import Session

from tripjournal.core.exceptions import NotFoundError, ForbiddenError, ValidationError
from tripjournal.models.trip import Trip, TripCollaborator, PrivacyLevel, PermissionLevel

T = TypeVar("T")


class Access(str, enum.Enum):
    """Kind of operation being authorized."""
    READ = "read"
    WRITE = "write"
    MANAGE = "manage"


_WRITE_LEVELS = {PermissionLevel.EDIT, PermissionLevel.ADMIN}


def get_collaborator(db: Session, trip_id: int, user_id: int) -> Optional[TripCollaborator]:
    """Collaborator row for a user on a trip, if any."""
    return db.query(TripCollaborator).filter(
        TripCollaborator.trip_id == trip_id,
        TripCollaborator.user_id == user_id
    ).first()


def can_access(db: Session, trip: Trip, user_id: int, access: Access = Access.READ) -> bool:
    """Evaluate the access rule for an already loaded trip."""
    if trip.user_id == user_id:
        return True

    if access == Access.READ and trip.privacy_level == PrivacyLevel.PUBLIC:
        return True

    if trip.privacy_level != PrivacyLevel.SHARED:
        return False

    collaborator = get_collaborator(db, trip.id, user_id)
    if not collaborator:
        return False
    if access == Access.READ:
        return True
    if access == Access.WRITE:
        return collaborator.permission_level in _WRITE_LEVELS
    return collaborator.permission_level == PermissionLevel.ADMIN


def check_trip_access(trip: Optional[Trip], user_id: int, db: Session,
                      access: Access = Access.READ) -> Trip:
    """Raise if the trip is missing or the user may not perform `access` on it."""
    if not trip:
        raise NotFoundError("Trip not found")
    if not can_access(db, trip, user_id, access):
        raise ForbiddenError("Access denied to this trip")
    return trip


def authorize_trip(db: Session, trip_id: int, user_id: int, access: Access = Access.READ) -> Trip:
    """Load a trip by id and authorize it."""
    trip = db.query(Trip).filter(Trip.id == trip_id).first()
    return check_trip_access(trip, user_id, db, access)


def require_owner(trip: Trip, user_id: int, action: str = "perform this action") -> None:
    """Some operations stay with the trip owner regardless of collaboration."""
    if trip.user_id != user_id:
        raise ForbiddenError(f"Only the trip owner can {action}")


def authorize_entity(db: Session, model: Type[T], entity_id: int, user_id: int,
                     access: Access = Access.READ, name: Optional[str] = None) -> T:
    """Load a trip-owned entity and authorize it through its trip."""
    entity = db.query(model).filter(model.id == entity_id).first()
    if not entity:
        raise NotFoundError(f"{name or model.__name__} not found")
    check_trip_access(entity.trip, user_id, db, access)
    return entity


def ensure_in_trip(db: Session, model: Type[T], entity_id: Optional[int], trip_id: int,
                   name: Optional[str] = None) -> Optional[T]:
    """Verify a referenced entity belongs to the given trip."""
    if entity_id is None:
        return None
    entity = db.query(model).filter(model.id == entity_id, model.trip_id == trip_id).first()
    if not entity:
        raise ValidationError(f"{name or model.__name__} not found or does not belong to trip")
    return entity
