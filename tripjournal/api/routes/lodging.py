"""
Lodging routes.
"""
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from tripjournal.db.session import get_db
from tripjournal.core.config import settings
from tripjournal.core.utils import format_message
from tripjournal.models.user import User
from tripjournal.schemas.lodging import LodgingCreate, LodgingUpdate, LodgingResponse, LodgingListResponse
from tripjournal.services import lodging_service
from tripjournal.api.dependencies import get_current_user

router = APIRouter(prefix="/lodging", tags=["lodging"])


@router.post("", response_model=LodgingResponse, status_code=status.HTTP_201_CREATED)
async def create_lodging(
    lodging_data: LodgingCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Add lodging to a trip."""
    return lodging_service.create_lodging(db, current_user.id, lodging_data)


@router.get("/trip/{trip_id}", response_model=LodgingListResponse)
async def list_lodging(
    trip_id: int,
    skip: int = Query(0, ge=0),
    take: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List lodging of a trip ordered by check-in."""
    return lodging_service.list_lodging(db, current_user.id, trip_id, skip, take).as_dict()


@router.get("/{lodging_id}", response_model=LodgingResponse)
async def get_lodging(
    lodging_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return lodging_service.get_lodging(db, current_user.id, lodging_id)


@router.put("/{lodging_id}", response_model=LodgingResponse)
async def update_lodging(
    lodging_id: int,
    lodging_data: LodgingUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return lodging_service.update_lodging(db, current_user.id, lodging_id, lodging_data)


@router.delete("/{lodging_id}")
async def delete_lodging(
    lodging_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    lodging_service.delete_lodging(db, current_user.id, lodging_id)
    return format_message("Lodging deleted successfully")
