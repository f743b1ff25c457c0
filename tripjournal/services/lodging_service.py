"""
Lodging service.
"""
from sqlalchemy.orm import Session

from tripjournal.core.exceptions import ValidationError
from tripjournal.core.pagination import Page, paginate_query
from tripjournal.core.utils import reject_nulls
from tripjournal.models.lodging import Lodging
from tripjournal.models.location import Location
from tripjournal.schemas.lodging import LodgingCreate, LodgingUpdate
from tripjournal.services.access_service import Access, authorize_trip, authorize_entity, ensure_in_trip


def _check_stay(check_in, check_out) -> None:
    if check_in and check_out and check_out < check_in:
        raise ValidationError("Check-out must be after check-in")


def create_lodging(db: Session, user_id: int, data: LodgingCreate) -> Lodging:
    authorize_trip(db, data.trip_id, user_id, Access.WRITE)
    ensure_in_trip(db, Location, data.location_id, data.trip_id, "Location")
    _check_stay(data.check_in_date, data.check_out_date)

    lodging = Lodging(**data.model_dump(exclude={"type"}), type=data.type.value)
    db.add(lodging)
    db.commit()
    db.refresh(lodging)
    return lodging


def list_lodging(db: Session, user_id: int, trip_id: int, skip: int, take: int) -> Page:
    authorize_trip(db, trip_id, user_id, Access.READ)
    query = db.query(Lodging).filter(Lodging.trip_id == trip_id).order_by(
        Lodging.check_in_date.is_(None),
        Lodging.check_in_date,
        Lodging.created_at
    )
    return paginate_query(query, skip, take)


def get_lodging(db: Session, user_id: int, lodging_id: int) -> Lodging:
    return authorize_entity(db, Lodging, lodging_id, user_id, Access.READ)


def update_lodging(db: Session, user_id: int, lodging_id: int, data: LodgingUpdate) -> Lodging:
    lodging = authorize_entity(db, Lodging, lodging_id, user_id, Access.WRITE)
    changes = data.model_dump(exclude_unset=True)
    reject_nulls(changes, "name", "type")
    if changes.get("location_id") is not None:
        ensure_in_trip(db, Location, changes["location_id"], lodging.trip_id, "Location")
    _check_stay(
        changes.get("check_in_date", lodging.check_in_date),
        changes.get("check_out_date", lodging.check_out_date)
    )
    if changes.get("type") is not None:
        changes["type"] = changes["type"].value

    for field, value in changes.items():
        setattr(lodging, field, value)
    db.commit()
    db.refresh(lodging)
    return lodging


def delete_lodging(db: Session, user_id: int, lodging_id: int) -> None:
    lodging = authorize_entity(db, Lodging, lodging_id, user_id, Access.WRITE)
    db.delete(lodging)
    db.commit()
