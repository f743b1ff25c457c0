"""
Backup and restore routes.
"""
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from tripjournal.db.session import get_db
from tripjournal.core.utils import format_response
from tripjournal.models.user import User
from tripjournal.schemas.backup import RestoreRequest
from tripjournal.services import backup_service, restore_service
from tripjournal.api.dependencies import get_current_user

router = APIRouter(prefix="/backup", tags=["backup"])


@router.get("")
async def create_backup(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Download everything the current user owns as JSON."""
    data = backup_service.export_user_data(db, current_user)
    filename = f"trip-journal-backup-{data['export_date'][:10]}.json"
    return JSONResponse(
        content=data,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'}
    )


@router.post("/restore")
async def restore_backup(
    request: RestoreRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Restore a backup in a single transaction."""
    result = restore_service.restore_from_backup(db, current_user, request)
    return format_response(result.model_dump())
