"""
Trip tag routes.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List
from tripjournal.db.session import get_db
from tripjournal.core.utils import format_message
from tripjournal.models.user import User
from tripjournal.schemas.tag import TagCreate, TagUpdate, TagResponse
from tripjournal.services import tag_service
from tripjournal.api.dependencies import get_current_user

router = APIRouter(prefix="/tags", tags=["tags"])


@router.get("", response_model=List[TagResponse])
async def list_tags(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return tag_service.list_tags(db, current_user.id)


@router.post("", response_model=TagResponse, status_code=status.HTTP_201_CREATED)
async def create_tag(
    tag_data: TagCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Create a tag (names are unique per user)."""
    return tag_service.create_tag(db, current_user.id, tag_data)


@router.put("/{tag_id}", response_model=TagResponse)
async def update_tag(
    tag_id: int,
    tag_data: TagUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return tag_service.update_tag(db, current_user.id, tag_id, tag_data)


@router.delete("/{tag_id}")
async def delete_tag(
    tag_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    tag_service.delete_tag(db, current_user.id, tag_id)
    return format_message("Tag deleted successfully")
