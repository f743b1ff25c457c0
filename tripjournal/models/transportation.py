"""
Transportation model with route metrics computed in the background.
"""
from sqlalchemy import Column, String, Text, DateTime, Numeric, Float, JSON, ForeignKey, Integer
from sqlalchemy.orm import relationship
from tripjournal.db.base import BaseModel
import enum


class TransportationType(str, enum.Enum):
    """Mode of travel."""
    FLIGHT = "flight"
    TRAIN = "train"
    BUS = "bus"
    CAR = "car"
    FERRY = "ferry"
    BICYCLE = "bicycle"
    WALK = "walk"
    OTHER = "other"


class DistanceSource(str, enum.Enum):
    """How calculated_distance was obtained."""
    API = "api"
    HAVERSINE = "haversine"


class Transportation(BaseModel):
    """A leg of travel between two points."""
    __tablename__ = "transportations"

    trip_id = Column(Integer, ForeignKey("trips.id"), nullable=False, index=True)
    type = Column(String(20), nullable=False)
    from_location_id = Column(Integer, ForeignKey("locations.id"), nullable=True, index=True)
    to_location_id = Column(Integer, ForeignKey("locations.id"), nullable=True, index=True)
    from_location_name = Column(String(500), nullable=True)
    to_location_name = Column(String(500), nullable=True)
    departure_time = Column(DateTime, nullable=True, index=True)
    arrival_time = Column(DateTime, nullable=True)
    carrier = Column(String(200), nullable=True)
    vehicle_number = Column(String(100), nullable=True)
    confirmation_number = Column(String(100), nullable=True)
    cost = Column(Numeric(12, 2), nullable=True)
    currency = Column(String(3), nullable=True)
    notes = Column(Text, nullable=True)

    # Filled by the background route calculation
    calculated_distance = Column(Float, nullable=True)  # km
    calculated_duration = Column(Float, nullable=True)  # minutes
    distance_source = Column(String(20), nullable=True)
    route_geometry = Column(JSON, nullable=True)  # [[lon, lat], ...]

    # Relationships
    trip = relationship("Trip", back_populates="transportations")
    from_location = relationship("Location", foreign_keys=[from_location_id])
    to_location = relationship("Location", foreign_keys=[to_location_id])
