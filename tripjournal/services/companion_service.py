"""
Travel companion service.
"""
import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from tripjournal.core.exceptions import NotFoundError, ValidationError
from tripjournal.models.companion import TravelCompanion, TripCompanion
from tripjournal.schemas.companion import CompanionCreate, CompanionUpdate, TripCompanionLink
from tripjournal.services.access_service import Access, authorize_trip, require_owner

logger = logging.getLogger(__name__)


def _get_own_companion(db: Session, user_id: int, companion_id: int) -> TravelCompanion:
    companion = db.query(TravelCompanion).filter(
        TravelCompanion.id == companion_id,
        TravelCompanion.user_id == user_id
    ).first()
    if not companion:
        raise NotFoundError("Companion not found")
    return companion


def _clear_myself(db: Session, user_id: int) -> None:
    # Only one companion per user can represent the user
    db.query(TravelCompanion).filter(
        TravelCompanion.user_id == user_id,
        TravelCompanion.is_myself.is_(True)
    ).update({TravelCompanion.is_myself: False}, synchronize_session=False)


def list_companions(db: Session, user_id: int) -> List[TravelCompanion]:
    return db.query(TravelCompanion).filter(
        TravelCompanion.user_id == user_id
    ).order_by(TravelCompanion.is_myself.desc(), TravelCompanion.name).all()


def create_companion(db: Session, user_id: int, data: CompanionCreate) -> TravelCompanion:
    if data.is_myself:
        _clear_myself(db, user_id)
    companion = TravelCompanion(user_id=user_id, **data.model_dump())
    db.add(companion)
    db.commit()
    db.refresh(companion)
    return companion


def update_companion(db: Session, user_id: int, companion_id: int, data: CompanionUpdate) -> TravelCompanion:
    companion = _get_own_companion(db, user_id, companion_id)
    changes = data.model_dump(exclude_unset=True)
    if changes.get("name", "") is None:
        raise ValidationError("Companion name cannot be empty")
    if changes.get("is_myself"):
        _clear_myself(db, user_id)
    if changes.get("is_myself", False) is None:
        changes.pop("is_myself")

    for field, value in changes.items():
        setattr(companion, field, value)
    db.commit()
    db.refresh(companion)
    return companion


def delete_companion(db: Session, user_id: int, companion_id: int) -> None:
    companion = _get_own_companion(db, user_id, companion_id)
    db.delete(companion)
    db.commit()


def get_myself_companion(db: Session, user_id: int) -> Optional[TravelCompanion]:
    return db.query(TravelCompanion).filter(
        TravelCompanion.user_id == user_id,
        TravelCompanion.is_myself.is_(True)
    ).first()


def list_trip_companions(db: Session, user_id: int, trip_id: int) -> List[TravelCompanion]:
    """Companions on a trip, in the order they were added."""
    authorize_trip(db, trip_id, user_id, Access.READ)
    return db.query(TravelCompanion).join(TripCompanion).filter(
        TripCompanion.trip_id == trip_id
    ).order_by(TripCompanion.created_at, TripCompanion.id).all()


def link_companion_to_trip(db: Session, user_id: int, data: TripCompanionLink) -> TravelCompanion:
    """Bring one of the caller's companions on a trip the caller owns."""
    trip = authorize_trip(db, data.trip_id, user_id, Access.WRITE)
    require_owner(trip, user_id, "manage trip companions")
    companion = _get_own_companion(db, user_id, data.companion_id)

    existing = db.query(TripCompanion).filter(
        TripCompanion.trip_id == trip.id,
        TripCompanion.companion_id == companion.id
    ).first()
    if existing:
        raise ValidationError("Companion already linked to this trip")

    db.add(TripCompanion(trip_id=trip.id, companion_id=companion.id))
    db.commit()
    db.refresh(companion)
    logger.info(f"Companion {companion.id} linked to trip {trip.id}")
    return companion


def unlink_companion_from_trip(db: Session, user_id: int, trip_id: int, companion_id: int) -> None:
    trip = authorize_trip(db, trip_id, user_id, Access.WRITE)
    require_owner(trip, user_id, "manage trip companions")
    link = db.query(TripCompanion).filter(
        TripCompanion.trip_id == trip.id,
        TripCompanion.companion_id == companion_id
    ).first()
    if not link:
        raise NotFoundError("Companion not linked to this trip")
    db.delete(link)
    db.commit()
