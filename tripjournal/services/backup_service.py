"""
Export of everything a user owns as a versioned JSON document.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Dict

from sqlalchemy.orm import Session, selectinload

from tripjournal.models.companion import TravelCompanion, TripCompanion
from tripjournal.models.photo import PhotoAlbum
from tripjournal.models.tag import TripTag, TripTagAssignment
from tripjournal.models.trip import Trip
from tripjournal.models.user import User
from tripjournal.schemas.backup import (
    BACKUP_VERSION, BackupActivity, BackupAlbum, BackupCompanion, BackupData, BackupJournalEntry,
    BackupLocation, BackupLodging, BackupPhoto, BackupTag, BackupTransportation, BackupTrip, BackupUser
)

logger = logging.getLogger(__name__)


def _trip_backup(trip: Trip) -> BackupTrip:
    def convert(schema, rows):
        return [schema.model_validate(row, from_attributes=True) for row in rows]

    return BackupTrip(
        title=trip.title,
        description=trip.description,
        start_date=trip.start_date,
        end_date=trip.end_date,
        timezone=trip.timezone,
        status=trip.status,
        privacy_level=trip.privacy_level,
        tags=[assignment.tag.name for assignment in trip.tag_assignments],
        companions=[assignment.companion.name for assignment in trip.companion_assignments],
        locations=convert(BackupLocation, trip.locations),
        photos=convert(BackupPhoto, trip.photos),
        albums=[
            BackupAlbum(
                name=album.name,
                description=album.description,
                cover_photo_id=album.cover_photo_id,
                photo_ids=[assignment.photo_id for assignment in album.photo_assignments]
            )
            for album in trip.albums
        ],
        activities=convert(BackupActivity, trip.activities),
        lodging=convert(BackupLodging, trip.lodgings),
        transportation=convert(BackupTransportation, trip.transportations),
        journal_entries=convert(BackupJournalEntry, trip.journal_entries),
    )


def export_user_data(db: Session, user: User) -> Dict[str, Any]:
    """Serialize the user's settings, tags, companions and trips."""
    trips = db.query(Trip).options(
        selectinload(Trip.locations),
        selectinload(Trip.photos),
        selectinload(Trip.albums).selectinload(PhotoAlbum.photo_assignments),
        selectinload(Trip.activities),
        selectinload(Trip.lodgings),
        selectinload(Trip.transportations),
        selectinload(Trip.journal_entries),
        selectinload(Trip.tag_assignments).selectinload(TripTagAssignment.tag),
        selectinload(Trip.companion_assignments).selectinload(TripCompanion.companion),
    ).filter(Trip.user_id == user.id).order_by(Trip.id).all()

    tags = db.query(TripTag).filter(TripTag.user_id == user.id).order_by(TripTag.name).all()
    companions = db.query(TravelCompanion).filter(
        TravelCompanion.user_id == user.id
    ).order_by(TravelCompanion.id).all()

    backup = BackupData(
        version=BACKUP_VERSION,
        export_date=datetime.now(timezone.utc),
        user=BackupUser(
            username=user.username,
            email=user.email,
            timezone=user.timezone,
            immich_api_url=user.immich_api_url
        ),
        tags=[BackupTag.model_validate(tag, from_attributes=True) for tag in tags],
        companions=[BackupCompanion.model_validate(c, from_attributes=True) for c in companions],
        trips=[_trip_backup(trip) for trip in trips],
    )
    logger.info(f"User {user.id} exported {len(trips)} trips")
    return backup.model_dump(mode="json")
