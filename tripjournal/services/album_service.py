"""
Photo album service.
"""
import logging
from typing import Dict, Iterable, List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from tripjournal.core.exceptions import NotFoundError, ValidationError
from tripjournal.core.pagination import has_more
from tripjournal.models.photo import Photo, PhotoAlbum, PhotoAlbumAssignment
from tripjournal.models.trip import Trip
from tripjournal.schemas.album import (
    AddPhotosResult, AlbumCreate, AlbumDetailResponse, AlbumResponse, AlbumTripRef,
    AlbumUpdate, AlbumWithTripResponse, AllAlbumsResponse, TripAlbumsResponse
)
from tripjournal.schemas.photo import PhotoResponse
from tripjournal.services.access_service import Access, authorize_trip, authorize_entity, ensure_in_trip
from tripjournal.services.photo_service import unsorted_photos_query

logger = logging.getLogger(__name__)


def _photo_counts(db: Session, album_ids: Iterable[int]) -> Dict[int, int]:
    album_ids = list(album_ids)
    if not album_ids:
        return {}
    rows = db.query(
        PhotoAlbumAssignment.album_id, func.count(PhotoAlbumAssignment.id)
    ).filter(
        PhotoAlbumAssignment.album_id.in_(album_ids)
    ).group_by(PhotoAlbumAssignment.album_id).all()
    return dict(rows)


def _album_fields(album: PhotoAlbum, photo_count: int) -> dict:
    return {
        "id": album.id,
        "trip_id": album.trip_id,
        "name": album.name,
        "description": album.description,
        "cover_photo_id": album.cover_photo_id,
        "cover_photo": PhotoResponse.model_validate(album.cover_photo) if album.cover_photo else None,
        "photo_count": photo_count,
        "created_at": album.created_at,
        "updated_at": album.updated_at,
    }


def to_view(album: PhotoAlbum, photo_count: int) -> AlbumResponse:
    return AlbumResponse(**_album_fields(album, photo_count))


def album_view(db: Session, album: PhotoAlbum) -> AlbumResponse:
    return to_view(album, _photo_counts(db, [album.id]).get(album.id, 0))


def list_all_albums(db: Session, user_id: int, skip: int, take: int) -> AllAlbumsResponse:
    """Albums of every trip the caller owns, newest first."""
    owned = db.query(PhotoAlbum).join(Trip).filter(Trip.user_id == user_id)

    total_albums = owned.count()
    total_photos = db.query(PhotoAlbumAssignment).join(PhotoAlbum).join(Trip).filter(
        Trip.user_id == user_id
    ).count()
    trip_count = owned.with_entities(func.count(func.distinct(PhotoAlbum.trip_id))).scalar() or 0

    albums = owned.options(
        joinedload(PhotoAlbum.trip), joinedload(PhotoAlbum.cover_photo)
    ).order_by(PhotoAlbum.created_at.desc(), PhotoAlbum.id.desc()).offset(skip).limit(take).all()
    counts = _photo_counts(db, (album.id for album in albums))

    views = [
        AlbumWithTripResponse(
            **_album_fields(album, counts.get(album.id, 0)),
            trip=AlbumTripRef(
                id=album.trip.id,
                title=album.trip.title,
                start_date=album.trip.start_date,
                end_date=album.trip.end_date
            )
        )
        for album in albums
    ]
    return AllAlbumsResponse(
        albums=views,
        total_albums=total_albums,
        total_photos=total_photos,
        trip_count=trip_count,
        has_more=has_more(skip, len(views), total_albums)
    )


def list_trip_albums(db: Session, user_id: int, trip_id: int) -> TripAlbumsResponse:
    """Albums of one trip with the number of photos not in any album."""
    authorize_trip(db, trip_id, user_id, Access.READ)
    albums = db.query(PhotoAlbum).options(joinedload(PhotoAlbum.cover_photo)).filter(
        PhotoAlbum.trip_id == trip_id
    ).order_by(PhotoAlbum.created_at.desc(), PhotoAlbum.id.desc()).all()
    counts = _photo_counts(db, (album.id for album in albums))

    return TripAlbumsResponse(
        albums=[to_view(album, counts.get(album.id, 0)) for album in albums],
        unsorted_count=unsorted_photos_query(db, trip_id).count(),
        total_count=db.query(Photo).filter(Photo.trip_id == trip_id).count()
    )


def create_album(db: Session, user_id: int, data: AlbumCreate) -> PhotoAlbum:
    authorize_trip(db, data.trip_id, user_id, Access.WRITE)
    ensure_in_trip(db, Photo, data.cover_photo_id, data.trip_id, "Cover photo")

    album = PhotoAlbum(**data.model_dump())
    db.add(album)
    db.commit()
    db.refresh(album)
    return album


def get_album(db: Session, user_id: int, album_id: int, skip: int, take: int) -> AlbumDetailResponse:
    """
    Album with one page of its photos, most recently added first.

    `total` and `has_more` are computed from the full assignment count.
    """
    album = authorize_entity(db, PhotoAlbum, album_id, user_id, Access.READ, "Album")

    assignments = db.query(PhotoAlbumAssignment).filter(
        PhotoAlbumAssignment.album_id == album.id
    )
    total = assignments.count()
    page = assignments.options(joinedload(PhotoAlbumAssignment.photo)).order_by(
        PhotoAlbumAssignment.created_at.desc(), PhotoAlbumAssignment.id.desc()
    ).offset(skip).limit(take).all()

    photos = [PhotoResponse.model_validate(assignment.photo) for assignment in page]
    return AlbumDetailResponse(
        **_album_fields(album, total),
        photos=photos,
        total=total,
        has_more=has_more(skip, len(photos), total)
    )


def update_album(db: Session, user_id: int, album_id: int, data: AlbumUpdate) -> PhotoAlbum:
    album = authorize_entity(db, PhotoAlbum, album_id, user_id, Access.WRITE, "Album")
    changes = data.model_dump(exclude_unset=True)
    if changes.get("name", "") is None:
        raise ValidationError("Album name cannot be empty")
    if changes.get("cover_photo_id") is not None:
        ensure_in_trip(db, Photo, changes["cover_photo_id"], album.trip_id, "Cover photo")

    for field, value in changes.items():
        setattr(album, field, value)
    db.commit()
    db.refresh(album)
    return album


def delete_album(db: Session, user_id: int, album_id: int) -> None:
    """Delete an album; its photos stay in the trip."""
    album = authorize_entity(db, PhotoAlbum, album_id, user_id, Access.WRITE, "Album")
    db.delete(album)
    db.commit()


def add_photos_to_album(db: Session, user_id: int, album_id: int, photo_ids: List[int]) -> AddPhotosResult:
    """
    Add photos of the album's trip to the album.

    Fails as a whole if any id is not a photo of that trip. Photos already in
    the album are skipped; the returned count is the number of eligible ids.
    """
    album = authorize_entity(db, PhotoAlbum, album_id, user_id, Access.WRITE, "Album")
    requested = list(dict.fromkeys(photo_ids))

    eligible = {
        photo_id for (photo_id,) in db.query(Photo.id).filter(
            Photo.id.in_(requested),
            Photo.trip_id == album.trip_id
        )
    }
    if len(eligible) != len(requested):
        raise ValidationError("One or more photos not found or do not belong to the album's trip")

    present = {
        photo_id for (photo_id,) in db.query(PhotoAlbumAssignment.photo_id).filter(
            PhotoAlbumAssignment.album_id == album.id,
            PhotoAlbumAssignment.photo_id.in_(requested)
        )
    }
    db.add_all([
        PhotoAlbumAssignment(album_id=album.id, photo_id=photo_id)
        for photo_id in requested if photo_id not in present
    ])
    db.commit()
    logger.info(f"Album {album.id}: {len(requested) - len(present)} photos added")
    return AddPhotosResult(added_count=len(eligible))


def remove_photo_from_album(db: Session, user_id: int, album_id: int, photo_id: int) -> None:
    album = authorize_entity(db, PhotoAlbum, album_id, user_id, Access.WRITE, "Album")
    assignment: Optional[PhotoAlbumAssignment] = db.query(PhotoAlbumAssignment).filter(
        PhotoAlbumAssignment.album_id == album.id,
        PhotoAlbumAssignment.photo_id == photo_id
    ).first()
    if not assignment:
        raise NotFoundError("Photo is not in this album")
    db.delete(assignment)
    db.commit()
