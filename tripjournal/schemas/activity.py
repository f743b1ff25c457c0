"""
Pydantic schemas for Activity entity.
"""
from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime
from tripjournal.schemas.location import LocationRef


class ActivityBase(BaseModel):
    """Base activity schema."""
    location_id: Optional[int] = None
    name: str = Field(..., min_length=1, max_length=500)
    description: Optional[str] = None
    category: Optional[str] = Field(None, max_length=100)
    all_day: bool = False
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    cost: Optional[float] = Field(None, ge=0)
    currency: Optional[str] = Field(None, min_length=3, max_length=3)
    booking_reference: Optional[str] = Field(None, max_length=255)
    notes: Optional[str] = None


class ActivityCreate(ActivityBase):
    """Schema for activity creation."""
    trip_id: int


class ActivityUpdate(BaseModel):
    """Schema for activity update."""
    location_id: Optional[int] = None
    name: Optional[str] = Field(None, min_length=1, max_length=500)
    description: Optional[str] = None
    category: Optional[str] = Field(None, max_length=100)
    all_day: Optional[bool] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    cost: Optional[float] = Field(None, ge=0)
    currency: Optional[str] = Field(None, min_length=3, max_length=3)
    booking_reference: Optional[str] = Field(None, max_length=255)
    notes: Optional[str] = None


class ActivityResponse(ActivityBase):
    """Schema for activity response."""
    id: int
    trip_id: int
    location: Optional[LocationRef] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ActivityListResponse(BaseModel):
    """Page of activities."""
    items: List[ActivityResponse]
    total: int
    has_more: bool
