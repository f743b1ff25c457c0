"""
Pydantic schemas for trip collaborators.
"""
from pydantic import BaseModel
from datetime import datetime
from tripjournal.models.trip import PermissionLevel


class CollaboratorAdd(BaseModel):
    """Schema for adding a collaborator by username."""
    username: str
    permission_level: PermissionLevel = PermissionLevel.VIEW


class CollaboratorUpdate(BaseModel):
    """Schema for changing a collaborator's permission."""
    permission_level: PermissionLevel


class CollaboratorResponse(BaseModel):
    """Schema for collaborator response."""
    id: int
    trip_id: int
    user_id: int
    username: str
    permission_level: PermissionLevel
    created_at: datetime
