"""
Lodging model.
"""
from sqlalchemy import Column, String, Text, DateTime, Numeric, ForeignKey, Integer
from sqlalchemy.orm import relationship
from tripjournal.db.base import BaseModel
import enum


class LodgingType(str, enum.Enum):
    """Kind of place to stay."""
    HOTEL = "hotel"
    HOSTEL = "hostel"
    AIRBNB = "airbnb"
    VACATION_RENTAL = "vacation_rental"
    CAMPING = "camping"
    RESORT = "resort"
    MOTEL = "motel"
    BED_AND_BREAKFAST = "bed_and_breakfast"
    APARTMENT = "apartment"
    FRIENDS_FAMILY = "friends_family"
    OTHER = "other"


class Lodging(BaseModel):
    """Accommodation booked for a trip."""
    __tablename__ = "lodgings"

    trip_id = Column(Integer, ForeignKey("trips.id"), nullable=False, index=True)
    location_id = Column(Integer, ForeignKey("locations.id"), nullable=True, index=True)
    type = Column(String(30), nullable=False, default=LodgingType.HOTEL.value)
    name = Column(String(500), nullable=False)
    address = Column(Text, nullable=True)
    check_in_date = Column(DateTime, nullable=True, index=True)
    check_out_date = Column(DateTime, nullable=True)
    confirmation_number = Column(String(255), nullable=True)
    cost = Column(Numeric(12, 2), nullable=True)
    currency = Column(String(3), nullable=True)
    booking_url = Column(String(500), nullable=True)
    notes = Column(Text, nullable=True)

    # Relationships
    trip = relationship("Trip", back_populates="lodgings")
    location = relationship("Location")
