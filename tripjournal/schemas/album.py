"""
Pydantic schemas for PhotoAlbum entity.
"""
from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import date, datetime
from tripjournal.schemas.photo import PhotoResponse


class AlbumCreate(BaseModel):
    """Schema for album creation."""
    trip_id: int
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=2000)
    cover_photo_id: Optional[int] = None


class AlbumUpdate(BaseModel):
    """Schema for album update."""
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=2000)
    cover_photo_id: Optional[int] = None


class AlbumTripRef(BaseModel):
    """Trip summary shown next to an album."""
    id: int
    title: str
    start_date: Optional[date] = None
    end_date: Optional[date] = None


class AlbumResponse(BaseModel):
    """Album without its photos."""
    id: int
    trip_id: int
    name: str
    description: Optional[str] = None
    cover_photo_id: Optional[int] = None
    cover_photo: Optional[PhotoResponse] = None
    photo_count: int = 0
    created_at: datetime
    updated_at: datetime


class AlbumWithTripResponse(AlbumResponse):
    """Album plus its trip, used by the cross-trip listing."""
    trip: AlbumTripRef


class AlbumDetailResponse(AlbumResponse):
    """Album with one page of photos."""
    photos: List[PhotoResponse] = []
    total: int
    has_more: bool


class AllAlbumsResponse(BaseModel):
    """Albums across every trip the user owns."""
    albums: List[AlbumWithTripResponse]
    total_albums: int
    total_photos: int
    trip_count: int
    has_more: bool


class TripAlbumsResponse(BaseModel):
    """Albums of one trip plus unsorted photo counts."""
    albums: List[AlbumResponse]
    unsorted_count: int
    total_count: int


class AddPhotosToAlbum(BaseModel):
    """Schema for adding photos to an album."""
    photo_ids: List[int] = Field(..., min_length=1)


class AddPhotosResult(BaseModel):
    """Number of eligible photos in the request."""
    added_count: int
