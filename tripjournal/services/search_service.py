"""
Search across the caller's trips, locations, journal entries and photos.
"""
import logging
import math
from datetime import datetime
from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session, joinedload

from tripjournal.core.utils import LIKE_ESCAPE, like_pattern
from tripjournal.models.journal import JournalEntry
from tripjournal.models.location import Location
from tripjournal.models.photo import Photo, PhotoSource
from tripjournal.models.trip import Trip
from tripjournal.schemas.search import SearchResponse, SearchResult, SearchType

logger = logging.getLogger(__name__)

SEARCHED_TYPES = (SearchType.TRIP, SearchType.LOCATION, SearchType.JOURNAL, SearchType.PHOTO)


def _matches(pattern: str, *columns):
    return or_(*[column.ilike(pattern, escape=LIKE_ESCAPE) for column in columns])


def _as_datetime(value) -> Optional[datetime]:
    if value is None or isinstance(value, datetime):
        return value
    return datetime(value.year, value.month, value.day)


def _photo_thumbnail(photo: Photo) -> Optional[str]:
    if photo.source == PhotoSource.IMMICH.value and photo.immich_asset_id:
        return f"/api/immich/assets/{photo.immich_asset_id}/thumbnail"
    path = photo.thumbnail_path or photo.local_path
    return f"/uploads/{path}" if path else None


def _search_trips(db: Session, user_id: int, pattern: str, limit: int) -> List[SearchResult]:
    trips = db.query(Trip).filter(
        Trip.user_id == user_id,
        _matches(pattern, Trip.title, Trip.description)
    ).order_by(Trip.updated_at.desc()).limit(limit).all()
    return [
        SearchResult(
            id=trip.id,
            type=SearchType.TRIP,
            title=trip.title,
            subtitle=trip.status.value,
            trip_id=trip.id,
            date=_as_datetime(trip.start_date)
        )
        for trip in trips
    ]


def _search_locations(db: Session, user_id: int, pattern: str, limit: int) -> List[SearchResult]:
    locations = db.query(Location).join(Trip).options(joinedload(Location.trip)).filter(
        Trip.user_id == user_id,
        _matches(pattern, Location.name, Location.address, Location.notes)
    ).order_by(Location.updated_at.desc()).limit(limit).all()
    return [
        SearchResult(
            id=location.id,
            type=SearchType.LOCATION,
            title=location.name,
            subtitle=f"Trip: {location.trip.title}",
            trip_id=location.trip_id,
            date=location.visit_datetime
        )
        for location in locations
    ]


def _search_journal(db: Session, user_id: int, pattern: str, limit: int) -> List[SearchResult]:
    entries = db.query(JournalEntry).join(Trip).options(joinedload(JournalEntry.trip)).filter(
        Trip.user_id == user_id,
        _matches(pattern, JournalEntry.title, JournalEntry.content)
    ).order_by(JournalEntry.updated_at.desc()).limit(limit).all()
    return [
        SearchResult(
            id=entry.id,
            type=SearchType.JOURNAL,
            title=entry.title or "Untitled Journal Entry",
            subtitle=f"Trip: {entry.trip.title}",
            trip_id=entry.trip_id,
            date=entry.date
        )
        for entry in entries
    ]


def _search_photos(db: Session, user_id: int, pattern: str, limit: int) -> List[SearchResult]:
    photos = db.query(Photo).join(Trip).options(joinedload(Photo.trip)).filter(
        Trip.user_id == user_id,
        _matches(pattern, Photo.caption)
    ).order_by(Photo.updated_at.desc()).limit(limit).all()
    return [
        SearchResult(
            id=photo.id,
            type=SearchType.PHOTO,
            title=photo.caption or "Unnamed Photo",
            subtitle=f"Trip: {photo.trip.title}",
            trip_id=photo.trip_id,
            date=photo.taken_at,
            thumbnail=_photo_thumbnail(photo)
        )
        for photo in photos
    ]


_SEARCHERS = {
    SearchType.TRIP: _search_trips,
    SearchType.LOCATION: _search_locations,
    SearchType.JOURNAL: _search_journal,
    SearchType.PHOTO: _search_photos,
}


def global_search(db: Session, user_id: int, q: str, type: SearchType = SearchType.ALL,
                  limit: int = 20) -> SearchResponse:
    """
    Case-insensitive substring search over the caller's own trips.

    Searching every type takes a slice of `limit` from each (with a little
    slack for uneven hits), then keeps the `limit` most recent results;
    results without a date go last.
    """
    pattern = like_pattern(q)
    if type == SearchType.ALL:
        types = SEARCHED_TYPES
        per_type = math.ceil(limit / len(SEARCHED_TYPES)) + 2
    else:
        types = (type,)
        per_type = limit

    results: List[SearchResult] = []
    for searched in types:
        results.extend(_SEARCHERS[searched](db, user_id, pattern, per_type))

    results.sort(key=lambda result: result.date or datetime.min, reverse=True)
    results = results[:limit]
    logger.debug(f"Search by user {user_id} for {q!r} ({type.value}) found {len(results)} results")
    return SearchResponse(results=results, total=len(results))
