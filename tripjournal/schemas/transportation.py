"""
Pydantic schemas for Transportation entity.
"""
from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime
from tripjournal.models.transportation import TransportationType, DistanceSource
from tripjournal.schemas.location import LocationRef


class TransportationBase(BaseModel):
    """Base transportation schema."""
    type: TransportationType
    from_location_id: Optional[int] = None
    to_location_id: Optional[int] = None
    from_location_name: Optional[str] = Field(None, max_length=500)
    to_location_name: Optional[str] = Field(None, max_length=500)
    departure_time: Optional[datetime] = None
    arrival_time: Optional[datetime] = None
    carrier: Optional[str] = Field(None, max_length=200)
    vehicle_number: Optional[str] = Field(None, max_length=100)
    confirmation_number: Optional[str] = Field(None, max_length=100)
    cost: Optional[float] = Field(None, ge=0)
    currency: Optional[str] = Field(None, min_length=3, max_length=3)
    notes: Optional[str] = Field(None, max_length=2000)


class TransportationCreate(TransportationBase):
    """Schema for transportation creation."""
    trip_id: int


class TransportationUpdate(BaseModel):
    """Schema for transportation update."""
    type: Optional[TransportationType] = None
    from_location_id: Optional[int] = None
    to_location_id: Optional[int] = None
    from_location_name: Optional[str] = Field(None, max_length=500)
    to_location_name: Optional[str] = Field(None, max_length=500)
    departure_time: Optional[datetime] = None
    arrival_time: Optional[datetime] = None
    carrier: Optional[str] = Field(None, max_length=200)
    vehicle_number: Optional[str] = Field(None, max_length=100)
    confirmation_number: Optional[str] = Field(None, max_length=100)
    cost: Optional[float] = Field(None, ge=0)
    currency: Optional[str] = Field(None, min_length=3, max_length=3)
    notes: Optional[str] = Field(None, max_length=2000)


class TransportationResponse(TransportationBase):
    """Schema for transportation response."""
    id: int
    trip_id: int
    from_location: Optional[LocationRef] = None
    to_location: Optional[LocationRef] = None
    calculated_distance: Optional[float] = None
    calculated_duration: Optional[float] = None
    distance_source: Optional[DistanceSource] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class TransportationListResponse(BaseModel):
    """Page of transportation."""
    items: List[TransportationResponse]
    total: int
    has_more: bool
