"""
Journal entry routes.
"""
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from tripjournal.db.session import get_db
from tripjournal.core.config import settings
from tripjournal.core.utils import format_message
from tripjournal.models.user import User
from tripjournal.schemas.journal import (
    JournalEntryCreate, JournalEntryUpdate, JournalEntryResponse, JournalEntryListResponse
)
from tripjournal.services import journal_service
from tripjournal.api.dependencies import get_current_user

router = APIRouter(prefix="/journal", tags=["journal"])


@router.post("", response_model=JournalEntryResponse, status_code=status.HTTP_201_CREATED)
async def create_journal_entry(
    entry_data: JournalEntryCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Write a journal entry for a trip."""
    return journal_service.create_journal_entry(db, current_user.id, entry_data)


@router.get("/trip/{trip_id}", response_model=JournalEntryListResponse)
async def list_journal_entries(
    trip_id: int,
    skip: int = Query(0, ge=0),
    take: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return journal_service.list_journal_entries(db, current_user.id, trip_id, skip, take).as_dict()


@router.get("/{entry_id}", response_model=JournalEntryResponse)
async def get_journal_entry(
    entry_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return journal_service.get_journal_entry(db, current_user.id, entry_id)


@router.put("/{entry_id}", response_model=JournalEntryResponse)
async def update_journal_entry(
    entry_id: int,
    entry_data: JournalEntryUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return journal_service.update_journal_entry(db, current_user.id, entry_id, entry_data)


@router.delete("/{entry_id}")
async def delete_journal_entry(
    entry_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    journal_service.delete_journal_entry(db, current_user.id, entry_id)
    return format_message("Journal entry deleted successfully")
