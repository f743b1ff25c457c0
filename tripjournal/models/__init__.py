"""Models package - Import all models for SQLAlchemy registration."""
from tripjournal.models.user import User
from tripjournal.models.trip import Trip, TripCollaborator, TripStatus, PrivacyLevel, PermissionLevel
from tripjournal.models.location import Location
from tripjournal.models.photo import Photo, PhotoAlbum, PhotoAlbumAssignment, PhotoSource
from tripjournal.models.activity import Activity
from tripjournal.models.lodging import Lodging, LodgingType
from tripjournal.models.transportation import Transportation, TransportationType, DistanceSource
from tripjournal.models.journal import JournalEntry, JournalEntryType
from tripjournal.models.tag import TripTag, TripTagAssignment
from tripjournal.models.companion import TravelCompanion, TripCompanion
from tripjournal.models.route_cache import RouteCache

__all__ = [
    "User",
    "Trip",
    "TripCollaborator",
    "TripStatus",
    "PrivacyLevel",
    "PermissionLevel",
    "Location",
    "Photo",
    "PhotoAlbum",
    "PhotoAlbumAssignment",
    "PhotoSource",
    "Activity",
    "Lodging",
    "LodgingType",
    "Transportation",
    "TransportationType",
    "DistanceSource",
    "JournalEntry",
    "JournalEntryType",
    "TripTag",
    "TripTagAssignment",
    "TravelCompanion",
    "TripCompanion",
    "RouteCache",
]
