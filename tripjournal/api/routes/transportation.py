"""
Transportation routes.

Route distance and duration are computed in the background after create and
after updates that change the endpoints or travel type.
"""
from fastapi import APIRouter, BackgroundTasks, Depends, Query, status
from sqlalchemy.orm import Session
from tripjournal.db.session import get_db
from tripjournal.core.config import settings
from tripjournal.core.utils import format_message
from tripjournal.models.user import User
from tripjournal.schemas.transportation import (
    TransportationCreate, TransportationUpdate, TransportationResponse, TransportationListResponse
)
from tripjournal.services import transportation_service
from tripjournal.services.routing_service import RoutingService
from tripjournal.api.dependencies import get_current_user, get_routing_service

router = APIRouter(prefix="/transportation", tags=["transportation"])


@router.post("", response_model=TransportationResponse, status_code=status.HTTP_201_CREATED)
async def create_transportation(
    transportation_data: TransportationCreate,
    background_tasks: BackgroundTasks,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    routing: RoutingService = Depends(get_routing_service)
):
    """Create a transportation leg and schedule its route calculation."""
    transportation = transportation_service.create_transportation(db, current_user.id, transportation_data)
    if transportation_service.needs_route(transportation):
        background_tasks.add_task(
            transportation_service.compute_transportation_route, transportation.id, routing
        )
    return transportation


@router.get("/trip/{trip_id}", response_model=TransportationListResponse)
async def list_transportation(
    trip_id: int,
    skip: int = Query(0, ge=0),
    take: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List transportation of a trip ordered by departure."""
    return transportation_service.list_transportation(db, current_user.id, trip_id, skip, take).as_dict()


@router.get("/{transportation_id}", response_model=TransportationResponse)
async def get_transportation(
    transportation_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return transportation_service.get_transportation(db, current_user.id, transportation_id)


@router.put("/{transportation_id}", response_model=TransportationResponse)
async def update_transportation(
    transportation_id: int,
    transportation_data: TransportationUpdate,
    background_tasks: BackgroundTasks,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    routing: RoutingService = Depends(get_routing_service)
):
    """Update a transportation leg."""
    transportation, reroute = transportation_service.update_transportation(
        db, current_user.id, transportation_id, transportation_data
    )
    if reroute:
        background_tasks.add_task(
            transportation_service.compute_transportation_route, transportation.id, routing
        )
    return transportation


@router.delete("/{transportation_id}")
async def delete_transportation(
    transportation_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    transportation_service.delete_transportation(db, current_user.id, transportation_id)
    return format_message("Transportation deleted successfully")
