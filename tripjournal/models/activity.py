"""
Activity model.
"""
from sqlalchemy import Column, String, Text, Boolean, DateTime, Numeric, ForeignKey, Integer
from sqlalchemy.orm import relationship
from tripjournal.db.base import BaseModel


class Activity(BaseModel):
    """Something planned or done during a trip."""
    __tablename__ = "activities"

    trip_id = Column(Integer, ForeignKey("trips.id"), nullable=False, index=True)
    location_id = Column(Integer, ForeignKey("locations.id"), nullable=True, index=True)
    name = Column(String(500), nullable=False)
    description = Column(Text, nullable=True)
    category = Column(String(100), nullable=True)
    all_day = Column(Boolean, default=False, nullable=False)
    start_time = Column(DateTime, nullable=True, index=True)
    end_time = Column(DateTime, nullable=True)
    cost = Column(Numeric(12, 2), nullable=True)
    currency = Column(String(3), nullable=True)
    booking_reference = Column(String(255), nullable=True)
    notes = Column(Text, nullable=True)

    # Relationships
    trip = relationship("Trip", back_populates="activities")
    location = relationship("Location")
