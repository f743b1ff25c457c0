"""
Photo service: local uploads, external asset links, listing and edits.
"""
import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from tripjournal.core.config import settings
from tripjournal.core.exceptions import ValidationError, UpstreamUnavailableError, NotFoundError
from tripjournal.core.pagination import Page, paginate_query
from tripjournal.models.photo import Photo, PhotoAlbum, PhotoAlbumAssignment, PhotoSource
from tripjournal.schemas.photo import (
    AlbumRef, BatchLinkResult, ImmichAssetInput, LinkImmichPhoto, LinkImmichPhotoBatch,
    PhotoDetailResponse, PhotoUpdate
)
from tripjournal.services.access_service import Access, authorize_trip, authorize_entity
from tripjournal.services.immich_service import ImmichService
from tripjournal.services.storage_service import PhotoStorage

logger = logging.getLogger(__name__)


def to_view(photo: Photo) -> PhotoDetailResponse:
    """Photo plus the albums it is assigned to."""
    view = PhotoDetailResponse.model_validate(photo)
    view.albums = [
        AlbumRef(id=assignment.album.id, name=assignment.album.name)
        for assignment in photo.album_assignments
    ]
    return view


def upload_photo(
    db: Session,
    user_id: int,
    trip_id: int,
    content: bytes,
    content_type: str,
    storage: PhotoStorage,
    caption: Optional[str] = None,
    taken_at: Optional[datetime] = None,
    latitude: Optional[float] = None,
    longitude: Optional[float] = None
) -> Photo:
    """
    Store an uploaded image for a trip.

    Metadata given by the caller wins; EXIF only fills what was left unset.
    """
    authorize_trip(db, trip_id, user_id, Access.WRITE)

    if content_type not in settings.ALLOWED_IMAGE_TYPES:
        raise ValidationError(f"Unsupported image type: {content_type}")
    if not content:
        raise ValidationError("Uploaded file is empty")
    if len(content) > settings.MAX_UPLOAD_SIZE:
        raise ValidationError(
            f"File exceeds the maximum size of {settings.MAX_UPLOAD_SIZE // (1024 * 1024)} MB"
        )

    stored = storage.save(content, content_type)
    if latitude is None or longitude is None:
        latitude, longitude = stored.latitude, stored.longitude

    photo = Photo(
        trip_id=trip_id,
        source=PhotoSource.LOCAL.value,
        local_path=stored.local_path,
        thumbnail_path=stored.thumbnail_path,
        caption=caption,
        taken_at=taken_at or stored.taken_at,
        latitude=latitude,
        longitude=longitude,
    )
    db.add(photo)
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        storage.delete(stored.local_path, stored.thumbnail_path)
        raise
    db.refresh(photo)
    logger.info(f"User {user_id} uploaded photo {photo.id} to trip {trip_id}")
    return photo


def _photo_from_asset(trip_id: int, asset: ImmichAssetInput) -> Photo:
    return Photo(
        trip_id=trip_id,
        source=PhotoSource.IMMICH.value,
        immich_asset_id=asset.immich_asset_id,
        caption=asset.caption,
        taken_at=asset.taken_at,
        latitude=asset.latitude,
        longitude=asset.longitude,
    )


def _fill_from_immich(asset: LinkImmichPhoto, immich: ImmichService) -> LinkImmichPhoto:
    try:
        metadata = immich.asset_metadata(asset.immich_asset_id)
    except (UpstreamUnavailableError, NotFoundError) as e:
        logger.warning(f"Could not fetch Immich metadata for {asset.immich_asset_id}: {e.detail}")
        return asset

    unset = {
        key: value for key, value in metadata.items()
        if getattr(asset, key) is None
    }
    if not unset:
        return asset
    try:
        return LinkImmichPhoto.model_validate({**asset.model_dump(), **unset})
    except ValueError as e:
        logger.warning(f"Ignoring unusable Immich metadata for {asset.immich_asset_id}: {e}")
        return asset


def link_immich_photo(db: Session, user_id: int, data: LinkImmichPhoto,
                      immich: Optional[ImmichService] = None) -> Photo:
    """Link one external asset; metadata lookup is opportunistic."""
    authorize_trip(db, data.trip_id, user_id, Access.WRITE)

    existing = db.query(Photo).filter(
        Photo.trip_id == data.trip_id,
        Photo.immich_asset_id == data.immich_asset_id
    ).first()
    if existing:
        raise ValidationError("Asset is already linked to this trip")

    if immich is not None:
        data = _fill_from_immich(data, immich)

    photo = _photo_from_asset(data.trip_id, data)
    db.add(photo)
    db.commit()
    db.refresh(photo)
    return photo


def _insert_photo_chunk(db: Session, trip_id: int, chunk: List[ImmichAssetInput]) -> int:
    """Insert one chunk of linked assets. Returns the number of rows added."""
    db.add_all([_photo_from_asset(trip_id, asset) for asset in chunk])
    db.flush()
    return len(chunk)


def link_photos_batch(db: Session, user_id: int, data: LinkImmichPhotoBatch,
                      batch_size: Optional[int] = None) -> BatchLinkResult:
    """
    Link many external assets in fixed-size chunks.

    Assets already linked to the trip (or repeated in the request) are
    dropped up front. Each chunk commits on its own; a failing chunk is
    rolled back, counted as failed and the remaining chunks still run.
    """
    authorize_trip(db, data.trip_id, user_id, Access.WRITE)
    batch_size = batch_size or settings.PHOTO_BATCH_SIZE

    requested_ids = {asset.immich_asset_id for asset in data.assets}
    linked = {
        asset_id for (asset_id,) in db.query(Photo.immich_asset_id).filter(
            Photo.trip_id == data.trip_id,
            Photo.immich_asset_id.in_(requested_ids)
        )
    }

    pending: List[ImmichAssetInput] = []
    for asset in data.assets:
        if asset.immich_asset_id in linked:
            continue
        linked.add(asset.immich_asset_id)
        pending.append(asset)

    result = BatchLinkResult(total=len(pending), successful=0, failed=0, errors=[])
    for number, start in enumerate(range(0, len(pending), batch_size), start=1):
        chunk = pending[start:start + batch_size]
        try:
            inserted = _insert_photo_chunk(db, data.trip_id, chunk)
            db.commit()
            result.successful += inserted
            logger.info(f"Batch {number}: linked {inserted} photos to trip {data.trip_id}")
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Batch {number} failed for trip {data.trip_id}: {e}")
            result.failed += len(chunk)
            result.errors.append(f"Batch {number}: {e}")

    return result


def _trip_photos(db: Session, trip_id: int):
    return db.query(Photo).options(
        selectinload(Photo.album_assignments).selectinload(PhotoAlbumAssignment.album)
    ).filter(Photo.trip_id == trip_id)


def list_trip_photos(db: Session, user_id: int, trip_id: int, skip: int, take: int) -> Page:
    """Photos of a trip, newest capture time first."""
    authorize_trip(db, trip_id, user_id, Access.READ)
    query = _trip_photos(db, trip_id).order_by(
        Photo.taken_at.is_(None),
        Photo.taken_at.desc(),
        Photo.created_at.desc()
    )
    page = paginate_query(query, skip, take)
    page.items = [to_view(photo) for photo in page.items]
    return page


def unsorted_photos_query(db: Session, trip_id: int):
    """Photos of a trip that are not in any album."""
    in_album = db.query(PhotoAlbumAssignment.photo_id).join(PhotoAlbum).filter(
        PhotoAlbum.trip_id == trip_id
    )
    return db.query(Photo).filter(Photo.trip_id == trip_id, ~Photo.id.in_(in_album))


def list_unsorted_photos(db: Session, user_id: int, trip_id: int, skip: int, take: int) -> Page:
    authorize_trip(db, trip_id, user_id, Access.READ)
    query = unsorted_photos_query(db, trip_id).order_by(
        Photo.taken_at.is_(None),
        Photo.taken_at.desc(),
        Photo.created_at.desc()
    )
    page = paginate_query(query, skip, take)
    page.items = [to_view(photo) for photo in page.items]
    return page


def list_immich_asset_ids(db: Session, user_id: int, trip_id: int) -> List[str]:
    """External asset ids already linked to a trip."""
    authorize_trip(db, trip_id, user_id, Access.READ)
    rows = db.query(Photo.immich_asset_id).filter(
        Photo.trip_id == trip_id,
        Photo.immich_asset_id.isnot(None)
    ).all()
    return [asset_id for (asset_id,) in rows]


def get_photo(db: Session, user_id: int, photo_id: int) -> Photo:
    return authorize_entity(db, Photo, photo_id, user_id, Access.READ)


def update_photo(db: Session, user_id: int, photo_id: int, data: PhotoUpdate) -> Photo:
    photo = authorize_entity(db, Photo, photo_id, user_id, Access.WRITE)
    for field, value in data.model_dump(exclude_unset=True).items():
        setattr(photo, field, value)
    db.commit()
    db.refresh(photo)
    return photo


def delete_photo(db: Session, user_id: int, photo_id: int, storage: PhotoStorage) -> None:
    """Delete a photo, its album assignments and any local files."""
    photo = authorize_entity(db, Photo, photo_id, user_id, Access.WRITE)
    paths = (photo.local_path, photo.thumbnail_path)

    db.query(PhotoAlbum).filter(PhotoAlbum.cover_photo_id == photo.id).update(
        {PhotoAlbum.cover_photo_id: None}, synchronize_session=False
    )
    db.delete(photo)
    db.commit()

    if photo.source == PhotoSource.LOCAL.value:
        storage.delete(*paths)
