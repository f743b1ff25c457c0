"""
Pydantic schemas for Lodging entity.
"""
from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime
from tripjournal.models.lodging import LodgingType
from tripjournal.schemas.location import LocationRef


class LodgingBase(BaseModel):
    """Base lodging schema."""
    type: LodgingType = LodgingType.HOTEL
    location_id: Optional[int] = None
    name: str = Field(..., min_length=1, max_length=500)
    address: Optional[str] = None
    check_in_date: Optional[datetime] = None
    check_out_date: Optional[datetime] = None
    confirmation_number: Optional[str] = Field(None, max_length=255)
    cost: Optional[float] = Field(None, ge=0)
    currency: Optional[str] = Field(None, min_length=3, max_length=3)
    booking_url: Optional[str] = Field(None, max_length=500)
    notes: Optional[str] = None


class LodgingCreate(LodgingBase):
    """Schema for lodging creation."""
    trip_id: int


class LodgingUpdate(BaseModel):
    """Schema for lodging update."""
    type: Optional[LodgingType] = None
    location_id: Optional[int] = None
    name: Optional[str] = Field(None, min_length=1, max_length=500)
    address: Optional[str] = None
    check_in_date: Optional[datetime] = None
    check_out_date: Optional[datetime] = None
    confirmation_number: Optional[str] = Field(None, max_length=255)
    cost: Optional[float] = Field(None, ge=0)
    currency: Optional[str] = Field(None, min_length=3, max_length=3)
    booking_url: Optional[str] = Field(None, max_length=500)
    notes: Optional[str] = None


class LodgingResponse(LodgingBase):
    """Schema for lodging response."""
    id: int
    trip_id: int
    location: Optional[LocationRef] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class LodgingListResponse(BaseModel):
    """Page of lodging."""
    items: List[LodgingResponse]
    total: int
    has_more: bool
