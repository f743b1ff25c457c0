"""
Collaborator management for Shared trips.
"""
import logging
from typing import List

from sqlalchemy.orm import Session, joinedload

from tripjournal.core.exceptions import NotFoundError, ForbiddenError, ValidationError
from tripjournal.models.trip import TripCollaborator, PermissionLevel
from tripjournal.models.user import User
from tripjournal.schemas.collaboration import CollaboratorAdd, CollaboratorResponse
from tripjournal.services.access_service import Access, authorize_trip

logger = logging.getLogger(__name__)


def to_view(collaborator: TripCollaborator) -> CollaboratorResponse:
    return CollaboratorResponse(
        id=collaborator.id,
        trip_id=collaborator.trip_id,
        user_id=collaborator.user_id,
        username=collaborator.user.username,
        permission_level=collaborator.permission_level,
        created_at=collaborator.created_at
    )


def list_collaborators(db: Session, user_id: int, trip_id: int) -> List[TripCollaborator]:
    authorize_trip(db, trip_id, user_id, Access.READ)
    return db.query(TripCollaborator).options(
        joinedload(TripCollaborator.user)
    ).filter(
        TripCollaborator.trip_id == trip_id
    ).order_by(TripCollaborator.created_at).all()


def add_collaborator(db: Session, user_id: int, trip_id: int, data: CollaboratorAdd) -> TripCollaborator:
    """Give another user access to the trip."""
    trip = authorize_trip(db, trip_id, user_id, Access.MANAGE)

    if data.permission_level == PermissionLevel.ADMIN and trip.user_id != user_id:
        raise ForbiddenError("Only the trip owner can grant admin permissions")

    user = db.query(User).filter(User.username == data.username).first()
    if not user:
        raise NotFoundError("User not found")
    if user.id == trip.user_id:
        raise ValidationError("The trip owner cannot be added as a collaborator")

    existing = db.query(TripCollaborator).filter(
        TripCollaborator.trip_id == trip_id,
        TripCollaborator.user_id == user.id
    ).first()
    if existing:
        raise ValidationError("User is already a collaborator")

    collaborator = TripCollaborator(
        trip_id=trip_id,
        user_id=user.id,
        permission_level=data.permission_level
    )
    db.add(collaborator)
    db.commit()
    db.refresh(collaborator)
    logger.info(f"User {user.id} added to trip {trip_id} as {data.permission_level.value}")
    return collaborator


def _get_collaborator(db: Session, trip_id: int, collaborator_user_id: int) -> TripCollaborator:
    collaborator = db.query(TripCollaborator).filter(
        TripCollaborator.trip_id == trip_id,
        TripCollaborator.user_id == collaborator_user_id
    ).first()
    if not collaborator:
        raise NotFoundError("Collaborator not found")
    return collaborator


def update_collaborator(db: Session, user_id: int, trip_id: int, collaborator_user_id: int,
                        permission_level: PermissionLevel) -> TripCollaborator:
    trip = authorize_trip(db, trip_id, user_id, Access.MANAGE)
    if collaborator_user_id == trip.user_id:
        raise ValidationError("Cannot modify trip owner permissions")
    if permission_level == PermissionLevel.ADMIN and trip.user_id != user_id:
        raise ForbiddenError("Only the trip owner can grant admin permissions")

    collaborator = _get_collaborator(db, trip_id, collaborator_user_id)
    collaborator.permission_level = permission_level
    db.commit()
    db.refresh(collaborator)
    return collaborator


def remove_collaborator(db: Session, user_id: int, trip_id: int, collaborator_user_id: int) -> None:
    """
    Remove a collaborator.

    Leaving a trip only needs the caller's own collaborator row, so it works
    even after the trip stopped being Shared.
    """
    if collaborator_user_id != user_id:
        authorize_trip(db, trip_id, user_id, Access.MANAGE)

    collaborator = _get_collaborator(db, trip_id, collaborator_user_id)
    db.delete(collaborator)
    db.commit()
