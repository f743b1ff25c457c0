"""
Pydantic schemas for global search.
"""
import enum
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel


class SearchType(str, enum.Enum):
    ALL = "all"
    TRIP = "trip"
    LOCATION = "location"
    JOURNAL = "journal"
    PHOTO = "photo"


class SearchResult(BaseModel):
    """One hit; `trip_id` points at the trip the hit belongs to."""
    id: int
    type: SearchType
    title: str
    subtitle: Optional[str] = None
    trip_id: int
    date: Optional[datetime] = None
    thumbnail: Optional[str] = None


class SearchResponse(BaseModel):
    results: List[SearchResult]
    total: int
