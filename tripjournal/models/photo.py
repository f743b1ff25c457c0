"""
Photo, album and album assignment models.
"""
from sqlalchemy import Column, String, Text, Float, DateTime, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import relationship
from tripjournal.db.base import BaseModel
import enum


class PhotoSource(str, enum.Enum):
    """Where the photo bytes live."""
    LOCAL = "local"
    IMMICH = "immich"


class Photo(BaseModel):
    """Photo belonging to exactly one trip."""
    __tablename__ = "photos"

    trip_id = Column(Integer, ForeignKey("trips.id"), nullable=False, index=True)
    source = Column(String(20), nullable=False, default=PhotoSource.LOCAL.value)
    immich_asset_id = Column(String(255), nullable=True, index=True)
    local_path = Column(String(500), nullable=True)
    thumbnail_path = Column(String(500), nullable=True)
    caption = Column(Text, nullable=True)
    taken_at = Column(DateTime, nullable=True, index=True)
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)

    # Relationships
    trip = relationship("Trip", back_populates="photos")
    album_assignments = relationship("PhotoAlbumAssignment", back_populates="photo", cascade="all, delete-orphan")

    __table_args__ = (
        UniqueConstraint("trip_id", "immich_asset_id", name="uq_trip_immich_asset"),
    )


class PhotoAlbum(BaseModel):
    """Named grouping of photos within one trip."""
    __tablename__ = "photo_albums"

    trip_id = Column(Integer, ForeignKey("trips.id"), nullable=False, index=True)
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    cover_photo_id = Column(Integer, ForeignKey("photos.id", ondelete="SET NULL"), nullable=True)

    # Relationships
    trip = relationship("Trip", back_populates="albums")
    cover_photo = relationship("Photo", foreign_keys=[cover_photo_id])
    photo_assignments = relationship(
        "PhotoAlbumAssignment",
        back_populates="album",
        cascade="all, delete-orphan",
        order_by="PhotoAlbumAssignment.created_at.desc()",
    )


class PhotoAlbumAssignment(BaseModel):
    """Join row between an album and a photo."""
    __tablename__ = "photo_album_assignments"

    album_id = Column(Integer, ForeignKey("photo_albums.id"), nullable=False, index=True)
    photo_id = Column(Integer, ForeignKey("photos.id"), nullable=False, index=True)

    # Relationships
    album = relationship("PhotoAlbum", back_populates="photo_assignments")
    photo = relationship("Photo", back_populates="album_assignments")

    __table_args__ = (
        UniqueConstraint("album_id", "photo_id", name="uq_album_photo"),
    )
