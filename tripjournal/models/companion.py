"""
Travel companion models.
"""
from sqlalchemy import Column, String, Text, Boolean, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import relationship
from tripjournal.db.base import BaseModel


class TravelCompanion(BaseModel):
    """Person a user travels with."""
    __tablename__ = "travel_companions"

    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=True)
    phone = Column(String(50), nullable=True)
    relationship_label = Column("relationship", String(100), nullable=True)
    notes = Column(Text, nullable=True)
    is_myself = Column(Boolean, default=False, nullable=False)

    # Relationships
    user = relationship("User", back_populates="companions")
    trip_assignments = relationship("TripCompanion", back_populates="companion", cascade="all, delete-orphan")


class TripCompanion(BaseModel):
    """Companion who comes along on a trip."""
    __tablename__ = "trip_companions"

    trip_id = Column(Integer, ForeignKey("trips.id"), nullable=False, index=True)
    companion_id = Column(Integer, ForeignKey("travel_companions.id"), nullable=False, index=True)

    # Relationships
    trip = relationship("Trip", back_populates="companion_assignments")
    companion = relationship("TravelCompanion", back_populates="trip_assignments")

    __table_args__ = (
        UniqueConstraint("trip_id", "companion_id", name="uq_trip_companion"),
    )
