"""
Pydantic schemas for Trip entity.
"""
from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import date, datetime
from tripjournal.models.trip import TripStatus, PrivacyLevel


class TripTagRef(BaseModel):
    """Tag shown on a trip."""
    id: int
    name: str
    color: Optional[str] = None
    text_color: Optional[str] = None

    class Config:
        from_attributes = True


class TripBase(BaseModel):
    """Base trip schema."""
    title: str = Field(..., min_length=1, max_length=500)
    description: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    timezone: Optional[str] = Field(None, max_length=100)


class TripCreate(TripBase):
    """Schema for trip creation."""
    status: TripStatus = TripStatus.PLANNING
    privacy_level: PrivacyLevel = PrivacyLevel.PRIVATE


class TripUpdate(BaseModel):
    """Schema for trip update."""
    title: Optional[str] = Field(None, min_length=1, max_length=500)
    description: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    timezone: Optional[str] = Field(None, max_length=100)
    status: Optional[TripStatus] = None
    privacy_level: Optional[PrivacyLevel] = None


class TripResponse(TripBase):
    """Schema for trip response."""
    id: int
    user_id: int
    status: TripStatus
    privacy_level: PrivacyLevel
    tags: List[TripTagRef] = []
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class TripListResponse(BaseModel):
    """Page of trips."""
    items: List[TripResponse]
    total: int
    has_more: bool


class TripTagAssign(BaseModel):
    """Schema for tagging a trip."""
    tag_id: int
