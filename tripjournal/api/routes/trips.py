"""
Trip management routes.
"""
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional
from tripjournal.db.session import get_db
from tripjournal.core.config import settings
from tripjournal.core.utils import format_message
from tripjournal.models.user import User
from tripjournal.models.trip import TripStatus
from tripjournal.schemas.trip import TripCreate, TripUpdate, TripResponse, TripListResponse, TripTagAssign
from tripjournal.schemas.collaboration import CollaboratorAdd, CollaboratorUpdate, CollaboratorResponse
from tripjournal.services import trip_service, collaboration_service
from tripjournal.api.dependencies import get_current_user

router = APIRouter(prefix="/trips", tags=["trips"])


@router.post("", response_model=TripResponse, status_code=status.HTTP_201_CREATED)
async def create_trip(
    trip_data: TripCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Create a new trip."""
    return trip_service.create_trip(db, current_user.id, trip_data)


@router.get("", response_model=TripListResponse)
async def list_trips(
    skip: int = Query(0, ge=0),
    take: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    status_filter: Optional[TripStatus] = Query(None, alias="status"),
    search: Optional[str] = Query(None, max_length=200),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List trips owned by the current user."""
    return trip_service.list_trips(db, current_user.id, skip, take, status_filter, search).as_dict()


@router.get("/shared", response_model=TripListResponse)
async def list_shared_trips(
    skip: int = Query(0, ge=0),
    take: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List trips other users shared with the current user."""
    return trip_service.list_shared_trips(db, current_user.id, skip, take).as_dict()


@router.get("/{trip_id}", response_model=TripResponse)
async def get_trip(
    trip_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get trip details."""
    return trip_service.get_trip(db, current_user.id, trip_id)


@router.put("/{trip_id}", response_model=TripResponse)
async def update_trip(
    trip_id: int,
    trip_data: TripUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Update a trip."""
    return trip_service.update_trip(db, current_user.id, trip_id, trip_data)


@router.delete("/{trip_id}")
async def delete_trip(
    trip_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Delete a trip and everything in it."""
    trip_service.delete_trip(db, current_user.id, trip_id)
    return format_message("Trip deleted successfully")


@router.post("/{trip_id}/tags", response_model=TripResponse)
async def add_trip_tag(
    trip_id: int,
    tag_data: TripTagAssign,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Apply a tag to a trip."""
    return trip_service.add_tag_to_trip(db, current_user.id, trip_id, tag_data.tag_id)


@router.delete("/{trip_id}/tags/{tag_id}")
async def remove_trip_tag(
    trip_id: int,
    tag_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Remove a tag from a trip."""
    trip_service.remove_tag_from_trip(db, current_user.id, trip_id, tag_id)
    return format_message("Tag removed from trip")


@router.get("/{trip_id}/collaborators", response_model=List[CollaboratorResponse])
async def list_collaborators(
    trip_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List collaborators of a trip."""
    collaborators = collaboration_service.list_collaborators(db, current_user.id, trip_id)
    return [collaboration_service.to_view(c) for c in collaborators]


@router.post("/{trip_id}/collaborators", response_model=CollaboratorResponse,
             status_code=status.HTTP_201_CREATED)
async def add_collaborator(
    trip_id: int,
    invite: CollaboratorAdd,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Give another user access to a trip."""
    collaborator = collaboration_service.add_collaborator(db, current_user.id, trip_id, invite)
    return collaboration_service.to_view(collaborator)


@router.put("/{trip_id}/collaborators/{user_id}", response_model=CollaboratorResponse)
async def update_collaborator(
    trip_id: int,
    user_id: int,
    update: CollaboratorUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Change a collaborator's permission level."""
    collaborator = collaboration_service.update_collaborator(
        db, current_user.id, trip_id, user_id, update.permission_level
    )
    return collaboration_service.to_view(collaborator)


@router.delete("/{trip_id}/collaborators/{user_id}")
async def remove_collaborator(
    trip_id: int,
    user_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Remove a collaborator (or leave a trip shared with you)."""
    collaboration_service.remove_collaborator(db, current_user.id, trip_id, user_id)
    return format_message("Collaborator removed successfully")
