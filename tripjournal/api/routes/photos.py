"""
Photo routes: uploads, Immich links, listing and edits.
"""
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from sqlalchemy.orm import Session
from tripjournal.db.session import get_db
from tripjournal.core.config import settings
from tripjournal.core.utils import format_message, format_response
from tripjournal.models.user import User
from tripjournal.schemas.photo import (
    LinkImmichPhoto, LinkImmichPhotoBatch, PhotoDetailResponse, PhotoListResponse, PhotoUpdate
)
from tripjournal.services import photo_service
from tripjournal.services.immich_service import ImmichService
from tripjournal.services.storage_service import PhotoStorage
from tripjournal.api.dependencies import get_current_user, get_optional_immich_service, get_photo_storage

router = APIRouter(prefix="/photos", tags=["photos"])


# Thumbnailing and Immich lookups block, so these two handlers are plain `def`
@router.post("/upload", response_model=PhotoDetailResponse, status_code=status.HTTP_201_CREATED)
def upload_photo(
    trip_id: int = Form(...),
    file: UploadFile = File(...),
    caption: Optional[str] = Form(None),
    taken_at: Optional[datetime] = Form(None),
    latitude: Optional[float] = Form(None, ge=-90, le=90),
    longitude: Optional[float] = Form(None, ge=-180, le=180),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    storage: PhotoStorage = Depends(get_photo_storage)
):
    """Upload a photo to a trip."""
    content = file.file.read()
    photo = photo_service.upload_photo(
        db, current_user.id, trip_id, content, file.content_type, storage,
        caption=caption, taken_at=taken_at, latitude=latitude, longitude=longitude
    )
    return photo_service.to_view(photo)


@router.post("/immich", response_model=PhotoDetailResponse, status_code=status.HTTP_201_CREATED)
def link_immich_photo(
    link_data: LinkImmichPhoto,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    immich: Optional[ImmichService] = Depends(get_optional_immich_service)
):
    """Link an Immich asset to a trip."""
    photo = photo_service.link_immich_photo(db, current_user.id, link_data, immich)
    return photo_service.to_view(photo)


@router.post("/immich/batch")
async def link_immich_photos_batch(
    batch_data: LinkImmichPhotoBatch,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Link many Immich assets; chunks that fail are reported, not fatal."""
    result = photo_service.link_photos_batch(db, current_user.id, batch_data)
    return format_response(result.model_dump())


@router.get("/trip/{trip_id}", response_model=PhotoListResponse)
async def list_trip_photos(
    trip_id: int,
    skip: int = Query(0, ge=0),
    take: int = Query(settings.PHOTO_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List photos of a trip, newest first."""
    return photo_service.list_trip_photos(db, current_user.id, trip_id, skip, take).as_dict()


@router.get("/trip/{trip_id}/unsorted", response_model=PhotoListResponse)
async def list_unsorted_photos(
    trip_id: int,
    skip: int = Query(0, ge=0),
    take: int = Query(settings.PHOTO_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List photos of a trip that are not in any album."""
    return photo_service.list_unsorted_photos(db, current_user.id, trip_id, skip, take).as_dict()


@router.get("/trip/{trip_id}/immich-asset-ids", response_model=List[str])
async def list_immich_asset_ids(
    trip_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Immich asset ids already linked to a trip."""
    return photo_service.list_immich_asset_ids(db, current_user.id, trip_id)


@router.get("/{photo_id}", response_model=PhotoDetailResponse)
async def get_photo(
    photo_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return photo_service.to_view(photo_service.get_photo(db, current_user.id, photo_id))


@router.put("/{photo_id}", response_model=PhotoDetailResponse)
async def update_photo(
    photo_id: int,
    photo_data: PhotoUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Update caption, capture time or position."""
    photo = photo_service.update_photo(db, current_user.id, photo_id, photo_data)
    return photo_service.to_view(photo)


@router.delete("/{photo_id}")
async def delete_photo(
    photo_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    storage: PhotoStorage = Depends(get_photo_storage)
):
    photo_service.delete_photo(db, current_user.id, photo_id, storage)
    return format_message("Photo deleted successfully")
