"""
Activity service.
"""
from sqlalchemy.orm import Session

from tripjournal.core.pagination import Page, paginate_query
from tripjournal.core.utils import reject_nulls
from tripjournal.models.activity import Activity
from tripjournal.models.location import Location
from tripjournal.schemas.activity import ActivityCreate, ActivityUpdate
from tripjournal.services.access_service import Access, authorize_trip, authorize_entity, ensure_in_trip


def create_activity(db: Session, user_id: int, data: ActivityCreate) -> Activity:
    """Create an activity; its location must belong to the same trip."""
    authorize_trip(db, data.trip_id, user_id, Access.WRITE)
    ensure_in_trip(db, Location, data.location_id, data.trip_id, "Location")

    activity = Activity(**data.model_dump())
    db.add(activity)
    db.commit()
    db.refresh(activity)
    return activity


def list_activities(db: Session, user_id: int, trip_id: int, skip: int, take: int) -> Page:
    authorize_trip(db, trip_id, user_id, Access.READ)
    query = db.query(Activity).filter(Activity.trip_id == trip_id).order_by(
        Activity.start_time.is_(None),
        Activity.start_time,
        Activity.created_at
    )
    return paginate_query(query, skip, take)


def get_activity(db: Session, user_id: int, activity_id: int) -> Activity:
    return authorize_entity(db, Activity, activity_id, user_id, Access.READ)


def update_activity(db: Session, user_id: int, activity_id: int, data: ActivityUpdate) -> Activity:
    activity = authorize_entity(db, Activity, activity_id, user_id, Access.WRITE)
    changes = data.model_dump(exclude_unset=True)
    reject_nulls(changes, "name", "all_day")
    if changes.get("location_id") is not None:
        ensure_in_trip(db, Location, changes["location_id"], activity.trip_id, "Location")

    for field, value in changes.items():
        setattr(activity, field, value)
    db.commit()
    db.refresh(activity)
    return activity


def delete_activity(db: Session, user_id: int, activity_id: int) -> None:
    activity = authorize_entity(db, Activity, activity_id, user_id, Access.WRITE)
    db.delete(activity)
    db.commit()
