"""
Location routes.
"""
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from tripjournal.db.session import get_db
from tripjournal.core.config import settings
from tripjournal.core.utils import format_message
from tripjournal.models.user import User
from tripjournal.schemas.location import LocationCreate, LocationUpdate, LocationResponse, LocationListResponse
from tripjournal.services import location_service
from tripjournal.api.dependencies import get_current_user

router = APIRouter(prefix="/locations", tags=["locations"])


@router.post("", response_model=LocationResponse, status_code=status.HTTP_201_CREATED)
async def create_location(
    location_data: LocationCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Add a location to a trip."""
    return location_service.create_location(db, current_user.id, location_data)


@router.get("/trip/{trip_id}", response_model=LocationListResponse)
async def list_locations(
    trip_id: int,
    skip: int = Query(0, ge=0),
    take: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List locations of a trip."""
    return location_service.list_locations(db, current_user.id, trip_id, skip, take).as_dict()


@router.get("/{location_id}", response_model=LocationResponse)
async def get_location(
    location_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return location_service.get_location(db, current_user.id, location_id)


@router.put("/{location_id}", response_model=LocationResponse)
async def update_location(
    location_id: int,
    location_data: LocationUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return location_service.update_location(db, current_user.id, location_id, location_data)


@router.delete("/{location_id}")
async def delete_location(
    location_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Delete a location; entries that referenced it keep existing."""
    location_service.delete_location(db, current_user.id, location_id)
    return format_message("Location deleted successfully")
