"""
Photo album routes.
"""
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from tripjournal.db.session import get_db
from tripjournal.core.config import settings
from tripjournal.core.utils import format_message, format_response
from tripjournal.models.user import User
from tripjournal.schemas.album import (
    AddPhotosToAlbum, AlbumCreate, AlbumDetailResponse, AlbumResponse, AlbumUpdate,
    AllAlbumsResponse, TripAlbumsResponse
)
from tripjournal.services import album_service
from tripjournal.api.dependencies import get_current_user

router = APIRouter(prefix="/albums", tags=["albums"])


@router.get("", response_model=AllAlbumsResponse)
async def list_all_albums(
    skip: int = Query(0, ge=0),
    take: int = Query(settings.ALBUM_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List albums across all trips of the current user."""
    return album_service.list_all_albums(db, current_user.id, skip, take)


@router.get("/trip/{trip_id}", response_model=TripAlbumsResponse)
async def list_trip_albums(
    trip_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List albums of a trip with unsorted photo counts."""
    return album_service.list_trip_albums(db, current_user.id, trip_id)


@router.post("", response_model=AlbumResponse, status_code=status.HTTP_201_CREATED)
async def create_album(
    album_data: AlbumCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    album = album_service.create_album(db, current_user.id, album_data)
    return album_service.album_view(db, album)


@router.get("/{album_id}", response_model=AlbumDetailResponse)
async def get_album(
    album_id: int,
    skip: int = Query(0, ge=0),
    take: int = Query(settings.PHOTO_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get an album with one page of its photos."""
    return album_service.get_album(db, current_user.id, album_id, skip, take)


@router.put("/{album_id}", response_model=AlbumResponse)
async def update_album(
    album_id: int,
    album_data: AlbumUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    album = album_service.update_album(db, current_user.id, album_id, album_data)
    return album_service.album_view(db, album)


@router.delete("/{album_id}")
async def delete_album(
    album_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Delete an album; its photos stay in the trip."""
    album_service.delete_album(db, current_user.id, album_id)
    return format_message("Album deleted successfully")


@router.post("/{album_id}/photos")
async def add_photos_to_album(
    album_id: int,
    photos: AddPhotosToAlbum,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Add photos of the same trip to an album."""
    result = album_service.add_photos_to_album(db, current_user.id, album_id, photos.photo_ids)
    return format_response(result.model_dump())


@router.delete("/{album_id}/photos/{photo_id}")
async def remove_photo_from_album(
    album_id: int,
    photo_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    album_service.remove_photo_from_album(db, current_user.id, album_id, photo_id)
    return format_message("Photo removed from album")
