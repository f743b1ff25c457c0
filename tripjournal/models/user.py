"""
User model for authentication and per-user integration settings.
"""
from sqlalchemy import Column, String, Boolean
from sqlalchemy.orm import relationship
from tripjournal.db.base import BaseModel


class User(BaseModel):
    """User model with immutable username."""
    __tablename__ = "users"

    username = Column(String(50), unique=True, nullable=False, index=True)
    email = Column(String(100), unique=True, nullable=False, index=True)
    hashed_password = Column(String(255), nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    timezone = Column(String(100), nullable=True)

    # External photo service, configured per user
    immich_api_url = Column(String(500), nullable=True)
    immich_api_key = Column(String(255), nullable=True)

    # Relationships
    trips = relationship("Trip", back_populates="owner", cascade="all, delete-orphan")
    collaborations = relationship("TripCollaborator", back_populates="user", cascade="all, delete-orphan")
    tags = relationship("TripTag", back_populates="user", cascade="all, delete-orphan")
    companions = relationship("TravelCompanion", back_populates="user", cascade="all, delete-orphan")

    @property
    def immich_configured(self) -> bool:
        return bool(self.immich_api_url and self.immich_api_key)
