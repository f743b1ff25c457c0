"""
Pydantic schemas for Photo entity and external asset linking.
"""
from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime
from tripjournal.models.photo import PhotoSource


class AlbumRef(BaseModel):
    """Album a photo is assigned to."""
    id: int
    name: str


class PhotoResponse(BaseModel):
    """Schema for photo response."""
    id: int
    trip_id: int
    source: PhotoSource
    immich_asset_id: Optional[str] = None
    local_path: Optional[str] = None
    thumbnail_path: Optional[str] = None
    caption: Optional[str] = None
    taken_at: Optional[datetime] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class PhotoDetailResponse(PhotoResponse):
    """Photo with the albums it belongs to."""
    albums: List[AlbumRef] = []


class PhotoListResponse(BaseModel):
    """Page of photos."""
    items: List[PhotoDetailResponse]
    total: int
    has_more: bool


class PhotoUpdate(BaseModel):
    """Schema for photo update."""
    caption: Optional[str] = Field(None, max_length=1000)
    taken_at: Optional[datetime] = None
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)


class ImmichAssetInput(BaseModel):
    """One external asset to link."""
    immich_asset_id: str = Field(..., min_length=1)
    caption: Optional[str] = Field(None, max_length=1000)
    taken_at: Optional[datetime] = None
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)


class LinkImmichPhoto(ImmichAssetInput):
    """Schema for linking a single external asset."""
    trip_id: int


class LinkImmichPhotoBatch(BaseModel):
    """Schema for linking many external assets."""
    trip_id: int
    assets: List[ImmichAssetInput] = Field(..., min_length=1)


class BatchLinkResult(BaseModel):
    """Outcome of a batch link."""
    total: int
    successful: int
    failed: int
    errors: List[str] = []
