"""
Location service.
"""
from sqlalchemy.orm import Session

from tripjournal.core.pagination import Page, paginate_query
from tripjournal.core.utils import reject_nulls
from tripjournal.models.location import Location
from tripjournal.models.activity import Activity
from tripjournal.models.lodging import Lodging
from tripjournal.models.journal import JournalEntry
from tripjournal.models.transportation import Transportation
from tripjournal.schemas.location import LocationCreate, LocationUpdate
from tripjournal.services.access_service import Access, authorize_trip, authorize_entity


def create_location(db: Session, user_id: int, data: LocationCreate) -> Location:
    authorize_trip(db, data.trip_id, user_id, Access.WRITE)
    location = Location(**data.model_dump())
    db.add(location)
    db.commit()
    db.refresh(location)
    return location


def list_locations(db: Session, user_id: int, trip_id: int, skip: int, take: int) -> Page:
    """Locations of a trip ordered by visit time, unscheduled ones last."""
    authorize_trip(db, trip_id, user_id, Access.READ)
    query = db.query(Location).filter(Location.trip_id == trip_id).order_by(
        Location.visit_datetime.is_(None),
        Location.visit_datetime,
        Location.created_at
    )
    return paginate_query(query, skip, take)


def get_location(db: Session, user_id: int, location_id: int) -> Location:
    return authorize_entity(db, Location, location_id, user_id, Access.READ)


def update_location(db: Session, user_id: int, location_id: int, data: LocationUpdate) -> Location:
    location = authorize_entity(db, Location, location_id, user_id, Access.WRITE)
    changes = data.model_dump(exclude_unset=True)
    reject_nulls(changes, "name")
    for field, value in changes.items():
        setattr(location, field, value)
    db.commit()
    db.refresh(location)
    return location


def delete_location(db: Session, user_id: int, location_id: int) -> None:
    """Delete a location and detach everything that pointed at it."""
    location = authorize_entity(db, Location, location_id, user_id, Access.WRITE)

    for model in (Activity, Lodging, JournalEntry):
        db.query(model).filter(model.location_id == location_id).update(
            {model.location_id: None}, synchronize_session=False
        )
    db.query(Transportation).filter(Transportation.from_location_id == location_id).update(
        {Transportation.from_location_id: None}, synchronize_session=False
    )
    db.query(Transportation).filter(Transportation.to_location_id == location_id).update(
        {Transportation.to_location_id: None}, synchronize_session=False
    )

    db.delete(location)
    db.commit()
