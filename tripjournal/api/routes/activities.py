"""
Activity routes.
"""
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from tripjournal.db.session import get_db
from tripjournal.core.config import settings
from tripjournal.core.utils import format_message
from tripjournal.models.user import User
from tripjournal.schemas.activity import ActivityCreate, ActivityUpdate, ActivityResponse, ActivityListResponse
from tripjournal.services import activity_service
from tripjournal.api.dependencies import get_current_user

router = APIRouter(prefix="/activities", tags=["activities"])


@router.post("", response_model=ActivityResponse, status_code=status.HTTP_201_CREATED)
async def create_activity(
    activity_data: ActivityCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Create an activity."""
    return activity_service.create_activity(db, current_user.id, activity_data)


@router.get("/trip/{trip_id}", response_model=ActivityListResponse)
async def list_activities(
    trip_id: int,
    skip: int = Query(0, ge=0),
    take: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List activities of a trip ordered by start time."""
    return activity_service.list_activities(db, current_user.id, trip_id, skip, take).as_dict()


@router.get("/{activity_id}", response_model=ActivityResponse)
async def get_activity(
    activity_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return activity_service.get_activity(db, current_user.id, activity_id)


@router.put("/{activity_id}", response_model=ActivityResponse)
async def update_activity(
    activity_id: int,
    activity_data: ActivityUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return activity_service.update_activity(db, current_user.id, activity_id, activity_data)


@router.delete("/{activity_id}")
async def delete_activity(
    activity_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    activity_service.delete_activity(db, current_user.id, activity_id)
    return format_message("Activity deleted successfully")
