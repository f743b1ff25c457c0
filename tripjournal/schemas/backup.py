"""
Pydantic schemas for the backup document and restore requests.

Ids inside a backup are the ids at export time; they are only used to
resolve references (location, photo) within the same document.
"""
from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime
from tripjournal.models.journal import JournalEntryType
from tripjournal.models.photo import PhotoSource
from tripjournal.models.transportation import DistanceSource
from tripjournal.schemas.activity import ActivityBase
from tripjournal.schemas.location import LocationBase
from tripjournal.schemas.lodging import LodgingBase
from tripjournal.schemas.transportation import TransportationBase
from tripjournal.schemas.trip import TripCreate

BACKUP_VERSION = "1.0.0"


class BackupUser(BaseModel):
    """User settings carried in a backup."""
    username: str
    email: Optional[str] = None
    timezone: Optional[str] = None
    immich_api_url: Optional[str] = None


class BackupTag(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    color: Optional[str] = None
    text_color: Optional[str] = None


class BackupCompanion(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: Optional[str] = None
    phone: Optional[str] = None
    relationship_label: Optional[str] = None
    notes: Optional[str] = None
    is_myself: bool = False


class BackupLocation(LocationBase):
    id: Optional[int] = None


class BackupPhoto(BaseModel):
    id: Optional[int] = None
    source: PhotoSource = PhotoSource.LOCAL
    immich_asset_id: Optional[str] = None
    local_path: Optional[str] = None
    thumbnail_path: Optional[str] = None
    caption: Optional[str] = None
    taken_at: Optional[datetime] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None


class BackupAlbum(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    cover_photo_id: Optional[int] = None
    photo_ids: List[int] = []


class BackupActivity(ActivityBase):
    pass


class BackupLodging(LodgingBase):
    pass


class BackupTransportation(TransportationBase):
    calculated_distance: Optional[float] = None
    calculated_duration: Optional[float] = None
    distance_source: Optional[DistanceSource] = None
    route_geometry: Optional[list] = None


class BackupJournalEntry(BaseModel):
    location_id: Optional[int] = None
    title: Optional[str] = None
    content: str
    date: Optional[datetime] = None
    entry_type: JournalEntryType = JournalEntryType.DAILY


class BackupTrip(TripCreate):
    """A trip with everything it owns."""
    tags: List[str] = []
    companions: List[str] = []
    locations: List[BackupLocation] = []
    photos: List[BackupPhoto] = []
    albums: List[BackupAlbum] = []
    activities: List[BackupActivity] = []
    lodging: List[BackupLodging] = []
    transportation: List[BackupTransportation] = []
    journal_entries: List[BackupJournalEntry] = []


class BackupData(BaseModel):
    """Complete export of one user's data."""
    version: str
    export_date: datetime
    user: Optional[BackupUser] = None
    tags: List[BackupTag] = []
    companions: List[BackupCompanion] = []
    trips: List[BackupTrip] = []


class RestoreOptions(BaseModel):
    clear_existing_data: bool = True
    import_photos: bool = True


class RestoreRequest(BaseModel):
    data: BackupData
    options: RestoreOptions = RestoreOptions()


class RestoreStats(BaseModel):
    """Number of rows created per kind."""
    trips: int = 0
    locations: int = 0
    photos: int = 0
    albums: int = 0
    activities: int = 0
    lodging: int = 0
    transportation: int = 0
    journal_entries: int = 0
    tags: int = 0
    companions: int = 0


class RestoreResult(BaseModel):
    success: bool
    message: str
    stats: RestoreStats
