"""
Trip model and the collaborator association.
"""
from sqlalchemy import Column, String, Date, Text, Enum as SQLEnum, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import relationship
from tripjournal.db.base import BaseModel
import enum


class TripStatus(str, enum.Enum):
    """Trip planning status."""
    DREAM = "Dream"
    PLANNING = "Planning"
    PLANNED = "Planned"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


class PrivacyLevel(str, enum.Enum):
    """Who besides the owner may see a trip."""
    PRIVATE = "Private"
    SHARED = "Shared"
    PUBLIC = "Public"


class PermissionLevel(str, enum.Enum):
    """What a collaborator may do on a shared trip."""
    VIEW = "view"
    EDIT = "edit"
    ADMIN = "admin"


class Trip(BaseModel):
    """Top-level container for a user's travel plan."""
    __tablename__ = "trips"

    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    title = Column(String(500), nullable=False)
    description = Column(Text, nullable=True)
    start_date = Column(Date, nullable=True, index=True)
    end_date = Column(Date, nullable=True)
    timezone = Column(String(100), nullable=True)
    status = Column(SQLEnum(TripStatus), default=TripStatus.PLANNING, nullable=False)
    privacy_level = Column(SQLEnum(PrivacyLevel), default=PrivacyLevel.PRIVATE, nullable=False)

    # Relationships
    owner = relationship("User", back_populates="trips")
    collaborators = relationship("TripCollaborator", back_populates="trip", cascade="all, delete-orphan")
    locations = relationship("Location", back_populates="trip", cascade="all, delete-orphan")
    photos = relationship("Photo", back_populates="trip", cascade="all, delete-orphan")
    albums = relationship("PhotoAlbum", back_populates="trip", cascade="all, delete-orphan")
    activities = relationship("Activity", back_populates="trip", cascade="all, delete-orphan")
    lodgings = relationship("Lodging", back_populates="trip", cascade="all, delete-orphan")
    transportations = relationship("Transportation", back_populates="trip", cascade="all, delete-orphan")
    journal_entries = relationship("JournalEntry", back_populates="trip", cascade="all, delete-orphan")
    tag_assignments = relationship("TripTagAssignment", back_populates="trip", cascade="all, delete-orphan")
    companion_assignments = relationship("TripCompanion", back_populates="trip", cascade="all, delete-orphan")

    @property
    def tags(self):
        return [assignment.tag for assignment in self.tag_assignments]


class TripCollaborator(BaseModel):
    """Grants a non-owner user access to a Shared trip."""
    __tablename__ = "trip_collaborators"

    trip_id = Column(Integer, ForeignKey("trips.id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    permission_level = Column(SQLEnum(PermissionLevel), default=PermissionLevel.VIEW, nullable=False)

    # Relationships
    trip = relationship("Trip", back_populates="collaborators")
    user = relationship("User", back_populates="collaborations")

    __table_args__ = (
        UniqueConstraint("trip_id", "user_id", name="uq_trip_collaborator"),
    )
