"""
Pydantic schemas for travel companions.
"""
from pydantic import BaseModel, EmailStr, Field
from typing import Optional
from datetime import datetime


class CompanionCreate(BaseModel):
    """Schema for companion creation."""
    name: str = Field(..., min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=50)
    relationship_label: Optional[str] = Field(None, max_length=100)
    notes: Optional[str] = None
    is_myself: bool = False


class CompanionUpdate(BaseModel):
    """Schema for companion update."""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=50)
    relationship_label: Optional[str] = Field(None, max_length=100)
    notes: Optional[str] = None
    is_myself: Optional[bool] = None


class CompanionResponse(BaseModel):
    """Schema for companion response."""
    id: int
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    relationship_label: Optional[str] = None
    notes: Optional[str] = None
    is_myself: bool
    created_at: datetime

    class Config:
        from_attributes = True


class TripCompanionLink(BaseModel):
    """Schema for bringing a companion on a trip."""
    trip_id: int
    companion_id: int
