"""
Journal entry model.
"""
from sqlalchemy import Column, String, Text, DateTime, ForeignKey, Integer
from sqlalchemy.orm import relationship
from tripjournal.db.base import BaseModel
import enum


class JournalEntryType(str, enum.Enum):
    """Daily note or whole-trip reflection."""
    DAILY = "daily"
    TRIP = "trip"


class JournalEntry(BaseModel):
    """Free-form journal text attached to a trip."""
    __tablename__ = "journal_entries"

    trip_id = Column(Integer, ForeignKey("trips.id"), nullable=False, index=True)
    location_id = Column(Integer, ForeignKey("locations.id"), nullable=True, index=True)
    title = Column(String(500), nullable=True)
    content = Column(Text, nullable=False)
    date = Column(DateTime, nullable=True, index=True)
    entry_type = Column(String(20), nullable=False, default=JournalEntryType.DAILY.value)

    # Relationships
    trip = relationship("Trip", back_populates="journal_entries")
    location = relationship("Location")
