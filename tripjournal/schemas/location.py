"""
Pydantic schemas for Location entity.
"""
from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime


class LocationBase(BaseModel):
    """Base location schema."""
    name: str = Field(..., min_length=1, max_length=500)
    address: Optional[str] = None
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)
    visit_datetime: Optional[datetime] = None
    visit_duration_minutes: Optional[int] = Field(None, ge=0)
    notes: Optional[str] = None


class LocationCreate(LocationBase):
    """Schema for location creation."""
    trip_id: int


class LocationUpdate(BaseModel):
    """Schema for location update."""
    name: Optional[str] = Field(None, min_length=1, max_length=500)
    address: Optional[str] = None
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)
    visit_datetime: Optional[datetime] = None
    visit_duration_minutes: Optional[int] = Field(None, ge=0)
    notes: Optional[str] = None


class LocationResponse(LocationBase):
    """Schema for location response."""
    id: int
    trip_id: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class LocationRef(BaseModel):
    """Short location reference embedded in other entities."""
    id: int
    name: str

    class Config:
        from_attributes = True


class LocationListResponse(BaseModel):
    """Page of locations."""
    items: List[LocationResponse]
    total: int
    has_more: bool
