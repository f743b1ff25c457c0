"""
Transportation service.

Route metrics (distance, duration, geometry) are filled in after the response
is sent, by `compute_transportation_route` running as a background task.
"""
import logging
from typing import Optional, Tuple

from sqlalchemy.orm import Session

from tripjournal.core.pagination import Page, paginate_query
from tripjournal.core.utils import reject_nulls
from tripjournal.db import session as db_session
from tripjournal.models.location import Location
from tripjournal.models.transportation import Transportation, TransportationType
from tripjournal.schemas.transportation import TransportationCreate, TransportationUpdate
from tripjournal.services.access_service import Access, authorize_trip, authorize_entity, ensure_in_trip
from tripjournal.services.routing_service import Coordinates, RoutingService

logger = logging.getLogger(__name__)

# Modes without a road/path network use the great-circle distance directly
ROUTING_PROFILES = {
    TransportationType.CAR.value: "driving-car",
    TransportationType.BUS.value: "driving-car",
    TransportationType.BICYCLE.value: "cycling-regular",
    TransportationType.WALK.value: "foot-walking",
}

_ROUTE_FIELDS = {"type", "from_location_id", "to_location_id"}


def needs_route(transportation: Transportation) -> bool:
    """True when both endpoints are locations with coordinates."""
    return bool(
        transportation.from_location and transportation.from_location.has_coordinates
        and transportation.to_location and transportation.to_location.has_coordinates
    )


def _endpoints(transportation: Transportation) -> Optional[Tuple[Coordinates, Coordinates]]:
    if not needs_route(transportation):
        return None
    origin = transportation.from_location
    destination = transportation.to_location
    return (
        Coordinates(origin.latitude, origin.longitude),
        Coordinates(destination.latitude, destination.longitude),
    )


def _clear_route(transportation: Transportation) -> None:
    transportation.calculated_distance = None
    transportation.calculated_duration = None
    transportation.distance_source = None
    transportation.route_geometry = None


def create_transportation(db: Session, user_id: int, data: TransportationCreate) -> Transportation:
    authorize_trip(db, data.trip_id, user_id, Access.WRITE)
    ensure_in_trip(db, Location, data.from_location_id, data.trip_id, "From location")
    ensure_in_trip(db, Location, data.to_location_id, data.trip_id, "To location")

    transportation = Transportation(**data.model_dump(exclude={"type"}), type=data.type.value)
    db.add(transportation)
    db.commit()
    db.refresh(transportation)
    return transportation


def list_transportation(db: Session, user_id: int, trip_id: int, skip: int, take: int) -> Page:
    authorize_trip(db, trip_id, user_id, Access.READ)
    query = db.query(Transportation).filter(Transportation.trip_id == trip_id).order_by(
        Transportation.departure_time.is_(None),
        Transportation.departure_time,
        Transportation.created_at
    )
    return paginate_query(query, skip, take)


def get_transportation(db: Session, user_id: int, transportation_id: int) -> Transportation:
    return authorize_entity(db, Transportation, transportation_id, user_id, Access.READ)


def update_transportation(db: Session, user_id: int, transportation_id: int,
                          data: TransportationUpdate) -> Tuple[Transportation, bool]:
    """
    Apply a partial update.

    Returns the row and whether its route has to be recalculated.
    """
    transportation = authorize_entity(db, Transportation, transportation_id, user_id, Access.WRITE)
    changes = data.model_dump(exclude_unset=True)
    reject_nulls(changes, "type")

    if changes.get("from_location_id") is not None:
        ensure_in_trip(db, Location, changes["from_location_id"], transportation.trip_id, "From location")
    if changes.get("to_location_id") is not None:
        ensure_in_trip(db, Location, changes["to_location_id"], transportation.trip_id, "To location")
    if changes.get("type") is not None:
        changes["type"] = changes["type"].value

    route_changed = any(
        field in changes and changes[field] != getattr(transportation, field)
        for field in _ROUTE_FIELDS
    )

    for field, value in changes.items():
        setattr(transportation, field, value)
    if route_changed:
        _clear_route(transportation)
    db.commit()
    db.refresh(transportation)
    return transportation, route_changed and needs_route(transportation)


def delete_transportation(db: Session, user_id: int, transportation_id: int) -> None:
    transportation = authorize_entity(db, Transportation, transportation_id, user_id, Access.WRITE)
    db.delete(transportation)
    db.commit()


def apply_route(db: Session, transportation: Transportation, routing: RoutingService) -> bool:
    """Compute and store route metrics on a loaded row. Caller commits."""
    endpoints = _endpoints(transportation)
    if not endpoints:
        return False

    origin, destination = endpoints
    profile = ROUTING_PROFILES.get(transportation.type)
    if profile:
        result = routing.calculate_route(db, origin, destination, profile)
    else:
        result = routing.haversine_route(origin, destination)

    transportation.calculated_distance = result.distance
    transportation.calculated_duration = result.duration
    transportation.distance_source = result.source.value
    transportation.route_geometry = result.geometry
    return True


def compute_transportation_route(transportation_id: int, routing: RoutingService) -> None:
    """
    Background task: fill in route metrics for one transportation row.

    Runs with its own session after the request has finished, so failures
    are logged and never reach the client.
    """
    db = db_session.SessionLocal()
    try:
        transportation = db.query(Transportation).filter(
            Transportation.id == transportation_id
        ).first()
        if not transportation:
            logger.warning(f"Transportation {transportation_id} disappeared before routing")
            return
        if apply_route(db, transportation, routing):
            db.commit()
            logger.info(
                f"Route for transportation {transportation_id}: "
                f"{transportation.calculated_distance:.1f} km ({transportation.distance_source})"
            )
    except Exception:
        db.rollback()
        logger.exception(f"Route calculation failed for transportation {transportation_id}")
    finally:
        db.close()
