"""
Shared FastAPI dependencies: current user and injected collaborators.
"""
from pathlib import Path
from typing import Generator, Optional

import httpx
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from tripjournal.core.config import settings
from tripjournal.core.security import decode_access_token
from tripjournal.db.session import get_db
from tripjournal.models.user import User
from tripjournal.services.immich_service import ImmichService
from tripjournal.services.routing_service import RoutingService
from tripjournal.services.storage_service import PhotoStorage

bearer_scheme = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"}
    )


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db)
) -> User:
    """Resolve the bearer token to an active user."""
    if credentials is None:
        raise _unauthorized("Not authenticated")

    payload = decode_access_token(credentials.credentials)
    if not payload or "user_id" not in payload:
        raise _unauthorized("Invalid or expired token")

    user = db.query(User).filter(User.id == payload["user_id"]).first()
    if not user or not user.is_active:
        raise _unauthorized("User not found or inactive")
    return user


def get_photo_storage() -> PhotoStorage:
    return PhotoStorage(
        Path(settings.UPLOAD_DIR),
        thumbnail_size=settings.THUMBNAIL_SIZE,
        thumbnail_quality=settings.THUMBNAIL_QUALITY
    )


def get_routing_service(request: Request) -> RoutingService:
    """Routing service created at startup (see `main.lifespan`)."""
    return request.app.state.routing_service


def get_immich_transport() -> Optional[httpx.BaseTransport]:
    """Transport for Immich clients; None means real network I/O."""
    return None


def get_immich_service(
    current_user: User = Depends(get_current_user),
    transport: Optional[httpx.BaseTransport] = Depends(get_immich_transport)
) -> Generator[ImmichService, None, None]:
    """Immich client for the current user; 400 when not configured."""
    service = ImmichService.for_user(current_user, settings.IMMICH_TIMEOUT_SECONDS, transport)
    try:
        yield service
    finally:
        service.close()


def get_optional_immich_service(
    current_user: User = Depends(get_current_user),
    transport: Optional[httpx.BaseTransport] = Depends(get_immich_transport)
) -> Generator[Optional[ImmichService], None, None]:
    """Immich client when configured, otherwise None."""
    if not current_user.immich_configured:
        yield None
        return
    service = ImmichService.for_user(current_user, settings.IMMICH_TIMEOUT_SECONDS, transport)
    try:
        yield service
    finally:
        service.close()
