"""
Pydantic schemas for trip tags.
"""
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

HEX_COLOR = r"^#[0-9A-Fa-f]{6}$"


class TagCreate(BaseModel):
    """Schema for tag creation."""
    name: str = Field(..., min_length=1, max_length=100)
    color: Optional[str] = Field(None, pattern=HEX_COLOR)
    text_color: Optional[str] = Field(None, pattern=HEX_COLOR)


class TagUpdate(BaseModel):
    """Schema for tag update."""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    color: Optional[str] = Field(None, pattern=HEX_COLOR)
    text_color: Optional[str] = Field(None, pattern=HEX_COLOR)


class TagResponse(TagCreate):
    """Schema for tag response."""
    id: int
    created_at: datetime

    class Config:
        from_attributes = True
