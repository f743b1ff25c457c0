"""
Pydantic schemas for the external photo service endpoints.
"""
from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional
from datetime import datetime


class ImmichConnectionTest(BaseModel):
    """Credentials to check before saving them."""
    api_url: str = Field(..., min_length=1, max_length=500)
    api_key: str = Field(..., min_length=1, max_length=255)


class ImmichConnectionResult(BaseModel):
    """Whether the service answered the ping."""
    connected: bool


class ImmichSearchQuery(BaseModel):
    """Metadata search forwarded to the photo service."""
    taken_after: Optional[datetime] = None
    taken_before: Optional[datetime] = None
    page: int = Field(1, ge=1)
    size: int = Field(100, ge=1, le=1000)


class ImmichSearchResult(BaseModel):
    """Assets returned by a metadata search."""
    assets: List[Dict[str, Any]]
    total: int
    next_page: Optional[str] = None
