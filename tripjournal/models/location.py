"""
Location model: a place attached to a trip.
"""
from sqlalchemy import Column, String, Text, Float, DateTime, ForeignKey, Integer
from sqlalchemy.orm import relationship
from tripjournal.db.base import BaseModel


class Location(BaseModel):
    """Place visited or planned during a trip."""
    __tablename__ = "locations"

    trip_id = Column(Integer, ForeignKey("trips.id"), nullable=False, index=True)
    name = Column(String(500), nullable=False)
    address = Column(Text, nullable=True)
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)
    visit_datetime = Column(DateTime, nullable=True)
    visit_duration_minutes = Column(Integer, nullable=True)
    notes = Column(Text, nullable=True)

    # Relationships
    trip = relationship("Trip", back_populates="locations")

    @property
    def has_coordinates(self) -> bool:
        return self.latitude is not None and self.longitude is not None
