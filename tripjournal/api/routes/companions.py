"""
Travel companion routes.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List
from tripjournal.db.session import get_db
from tripjournal.core.utils import format_message
from tripjournal.models.user import User
from tripjournal.schemas.companion import CompanionCreate, CompanionUpdate, CompanionResponse, TripCompanionLink
from tripjournal.services import companion_service
from tripjournal.api.dependencies import get_current_user

router = APIRouter(prefix="/companions", tags=["companions"])


@router.post("/link", response_model=CompanionResponse, status_code=status.HTTP_201_CREATED)
async def link_companion(
    link_data: TripCompanionLink,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Bring a companion on one of your trips."""
    return companion_service.link_companion_to_trip(db, current_user.id, link_data)


@router.get("/trips/{trip_id}", response_model=List[CompanionResponse])
async def list_trip_companions(
    trip_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return companion_service.list_trip_companions(db, current_user.id, trip_id)


@router.delete("/trips/{trip_id}/companions/{companion_id}")
async def unlink_companion(
    trip_id: int,
    companion_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    companion_service.unlink_companion_from_trip(db, current_user.id, trip_id, companion_id)
    return format_message("Companion removed from trip")


@router.get("", response_model=List[CompanionResponse])
async def list_companions(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List companions, the one marked as yourself first."""
    return companion_service.list_companions(db, current_user.id)


@router.post("", response_model=CompanionResponse, status_code=status.HTTP_201_CREATED)
async def create_companion(
    companion_data: CompanionCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return companion_service.create_companion(db, current_user.id, companion_data)


@router.put("/{companion_id}", response_model=CompanionResponse)
async def update_companion(
    companion_id: int,
    companion_data: CompanionUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return companion_service.update_companion(db, current_user.id, companion_id, companion_data)


@router.delete("/{companion_id}")
async def delete_companion(
    companion_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    companion_service.delete_companion(db, current_user.id, companion_id)
    return format_message("Companion deleted successfully")
