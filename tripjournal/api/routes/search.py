"""
Global search routes.
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from tripjournal.db.session import get_db
from tripjournal.models.user import User
from tripjournal.schemas.search import SearchResponse, SearchType
from tripjournal.services import search_service
from tripjournal.api.dependencies import get_current_user

router = APIRouter(prefix="/search", tags=["search"])


@router.get("", response_model=SearchResponse)
async def global_search(
    q: str = Query(..., min_length=1, max_length=200),
    type: SearchType = Query(SearchType.ALL),
    limit: int = Query(20, ge=1, le=100),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Search your trips and what they contain."""
    return search_service.global_search(db, current_user.id, q, type, limit)
