"""
Restore of a backup document.

The whole restore runs in one transaction: if anything fails, nothing is
cleared and nothing is imported.
"""
import logging
from typing import Dict

from sqlalchemy import text
from sqlalchemy.orm import Session

from tripjournal.core.config import settings
from tripjournal.core.exceptions import ValidationError
from tripjournal.models.activity import Activity
from tripjournal.models.companion import TravelCompanion, TripCompanion
from tripjournal.models.journal import JournalEntry
from tripjournal.models.location import Location
from tripjournal.models.lodging import Lodging
from tripjournal.models.photo import Photo, PhotoAlbum, PhotoAlbumAssignment
from tripjournal.models.tag import TripTag, TripTagAssignment
from tripjournal.models.transportation import Transportation
from tripjournal.models.trip import Trip
from tripjournal.models.user import User
from tripjournal.schemas.backup import (
    BACKUP_VERSION, BackupData, BackupTrip, RestoreOptions, RestoreRequest, RestoreResult, RestoreStats
)

logger = logging.getLogger(__name__)


def _set_lock_timeout(db: Session) -> None:
    # A large restore holds row locks for a while on MySQL
    if db.get_bind().dialect.name == "mysql":
        db.execute(
            text("SET SESSION innodb_lock_wait_timeout = :seconds"),
            {"seconds": settings.RESTORE_LOCK_WAIT_SECONDS}
        )


def _clear_user_data(db: Session, user_id: int) -> None:
    """Delete the user's trips (with children), tags and companions."""
    for trip in db.query(Trip).filter(Trip.user_id == user_id).all():
        db.delete(trip)
    for tag in db.query(TripTag).filter(TripTag.user_id == user_id).all():
        db.delete(tag)
    for companion in db.query(TravelCompanion).filter(TravelCompanion.user_id == user_id).all():
        db.delete(companion)
    db.flush()


def _restore_tags(db: Session, user_id: int, data: BackupData, stats: RestoreStats) -> Dict[str, int]:
    """Create missing tags; returns tag ids by name."""
    tag_ids = {
        tag.name: tag.id
        for tag in db.query(TripTag).filter(TripTag.user_id == user_id).all()
    }
    for tag_data in data.tags:
        if tag_data.name in tag_ids:
            continue
        tag = TripTag(user_id=user_id, **tag_data.model_dump())
        db.add(tag)
        db.flush()
        tag_ids[tag.name] = tag.id
        stats.tags += 1
    return tag_ids


def _restore_companions(db: Session, user_id: int, data: BackupData, stats: RestoreStats) -> Dict[str, int]:
    """Create the backup's companions; returns companion ids by name."""
    companion_ids = {
        companion.name: companion.id
        for companion in db.query(TravelCompanion).filter(TravelCompanion.user_id == user_id).all()
    }
    for companion_data in data.companions:
        companion = TravelCompanion(user_id=user_id, **companion_data.model_dump())
        db.add(companion)
        db.flush()
        companion_ids[companion.name] = companion.id
        stats.companions += 1
    return companion_ids


def _restore_trip(db: Session, user_id: int, trip_data: BackupTrip, tag_ids: Dict[str, int],
                  companion_ids: Dict[str, int], options: RestoreOptions, stats: RestoreStats) -> Trip:
    """Import one trip, remapping backup ids of locations and photos."""
    trip = Trip(
        user_id=user_id,
        **trip_data.model_dump(include={
            "title", "description", "start_date", "end_date", "timezone", "status", "privacy_level"
        })
    )
    db.add(trip)
    db.flush()
    stats.trips += 1

    location_ids: Dict[int, int] = {}
    for location_data in trip_data.locations:
        location = Location(trip_id=trip.id, **location_data.model_dump(exclude={"id"}))
        db.add(location)
        db.flush()
        if location_data.id is not None:
            location_ids[location_data.id] = location.id
        stats.locations += 1

    photo_ids: Dict[int, int] = {}
    if options.import_photos:
        seen_assets = set()
        for photo_data in trip_data.photos:
            if photo_data.immich_asset_id:
                if photo_data.immich_asset_id in seen_assets:
                    continue
                seen_assets.add(photo_data.immich_asset_id)
            photo = Photo(
                trip_id=trip.id,
                **photo_data.model_dump(exclude={"id", "source"}),
                source=photo_data.source.value
            )
            db.add(photo)
            db.flush()
            if photo_data.id is not None:
                photo_ids[photo_data.id] = photo.id
            stats.photos += 1

        for album_data in trip_data.albums:
            album = PhotoAlbum(
                trip_id=trip.id,
                name=album_data.name,
                description=album_data.description,
                cover_photo_id=photo_ids.get(album_data.cover_photo_id)
            )
            db.add(album)
            db.flush()
            new_photo_ids = {photo_ids[old] for old in album_data.photo_ids if old in photo_ids}
            db.add_all([
                PhotoAlbumAssignment(album_id=album.id, photo_id=photo_id)
                for photo_id in sorted(new_photo_ids)
            ])
            stats.albums += 1

    for activity_data in trip_data.activities:
        values = activity_data.model_dump()
        values["location_id"] = location_ids.get(values["location_id"])
        db.add(Activity(trip_id=trip.id, **values))
        stats.activities += 1

    for lodging_data in trip_data.lodging:
        values = lodging_data.model_dump()
        values["location_id"] = location_ids.get(values["location_id"])
        values["type"] = lodging_data.type.value
        db.add(Lodging(trip_id=trip.id, **values))
        stats.lodging += 1

    for transportation_data in trip_data.transportation:
        values = transportation_data.model_dump()
        values["from_location_id"] = location_ids.get(values["from_location_id"])
        values["to_location_id"] = location_ids.get(values["to_location_id"])
        values["type"] = transportation_data.type.value
        if transportation_data.distance_source:
            values["distance_source"] = transportation_data.distance_source.value
        db.add(Transportation(trip_id=trip.id, **values))
        stats.transportation += 1

    for entry_data in trip_data.journal_entries:
        values = entry_data.model_dump()
        values["location_id"] = location_ids.get(values["location_id"])
        values["entry_type"] = entry_data.entry_type.value
        db.add(JournalEntry(trip_id=trip.id, **values))
        stats.journal_entries += 1

    for name in dict.fromkeys(trip_data.tags):
        if name in tag_ids:
            db.add(TripTagAssignment(trip_id=trip.id, tag_id=tag_ids[name]))
    for name in dict.fromkeys(trip_data.companions):
        if name in companion_ids:
            db.add(TripCompanion(trip_id=trip.id, companion_id=companion_ids[name]))

    db.flush()
    return trip


def restore_from_backup(db: Session, user: User, request: RestoreRequest) -> RestoreResult:
    """
    Restore a backup for the given user.

    With `clear_existing_data` the user's trips, tags and companions are
    replaced; otherwise the backup is added next to them.
    """
    data = request.data
    options = request.options
    if data.version != BACKUP_VERSION:
        raise ValidationError(
            f"Unsupported backup version {data.version}; expected {BACKUP_VERSION}"
        )

    stats = RestoreStats()
    try:
        _set_lock_timeout(db)
        if options.clear_existing_data:
            _clear_user_data(db, user.id)

        if data.user:
            if data.user.timezone:
                user.timezone = data.user.timezone
            if data.user.immich_api_url and not user.immich_api_url:
                user.immich_api_url = data.user.immich_api_url

        tag_ids = _restore_tags(db, user.id, data, stats)
        companion_ids = _restore_companions(db, user.id, data, stats)

        for trip_data in data.trips:
            _restore_trip(db, user.id, trip_data, tag_ids, companion_ids, options, stats)

        db.commit()
    except Exception:
        db.rollback()
        logger.exception(f"Restore failed for user {user.id}; changes rolled back")
        raise

    logger.info(f"User {user.id} restored backup: {stats.trips} trips")
    return RestoreResult(success=True, message="Backup restored successfully", stats=stats)
