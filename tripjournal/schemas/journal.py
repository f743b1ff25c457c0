"""
Pydantic schemas for JournalEntry entity.
"""
from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime
from tripjournal.models.journal import JournalEntryType


class JournalEntryCreate(BaseModel):
    """Schema for journal entry creation."""
    trip_id: int
    location_id: Optional[int] = None
    title: Optional[str] = Field(None, max_length=500)
    content: str = Field(..., min_length=1)
    date: Optional[datetime] = None
    entry_type: JournalEntryType = JournalEntryType.DAILY


class JournalEntryUpdate(BaseModel):
    """Schema for journal entry update."""
    location_id: Optional[int] = None
    title: Optional[str] = Field(None, max_length=500)
    content: Optional[str] = Field(None, min_length=1)
    date: Optional[datetime] = None
    entry_type: Optional[JournalEntryType] = None


class JournalEntryResponse(BaseModel):
    """Schema for journal entry response."""
    id: int
    trip_id: int
    location_id: Optional[int] = None
    title: Optional[str] = None
    content: str
    date: Optional[datetime] = None
    entry_type: JournalEntryType
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class JournalEntryListResponse(BaseModel):
    """Page of journal entries."""
    items: List[JournalEntryResponse]
    total: int
    has_more: bool
