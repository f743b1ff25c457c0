"""
User-defined trip tags.
"""
from sqlalchemy import Column, String, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import relationship
from tripjournal.db.base import BaseModel


class TripTag(BaseModel):
    """Colored label owned by a user."""
    __tablename__ = "trip_tags"

    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    color = Column(String(7), nullable=True)
    text_color = Column(String(7), nullable=True)

    # Relationships
    user = relationship("User", back_populates="tags")
    assignments = relationship("TripTagAssignment", back_populates="tag", cascade="all, delete-orphan")

    __table_args__ = (
        UniqueConstraint("user_id", "name", name="uq_user_tag_name"),
    )


class TripTagAssignment(BaseModel):
    """Tag applied to a trip."""
    __tablename__ = "trip_tag_assignments"

    trip_id = Column(Integer, ForeignKey("trips.id"), nullable=False, index=True)
    tag_id = Column(Integer, ForeignKey("trip_tags.id"), nullable=False, index=True)

    # Relationships
    trip = relationship("Trip", back_populates="tag_assignments")
    tag = relationship("TripTag", back_populates="assignments")

    __table_args__ = (
        UniqueConstraint("trip_id", "tag_id", name="uq_trip_tag"),
    )
