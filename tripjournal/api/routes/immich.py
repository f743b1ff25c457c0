"""
Immich proxy routes.
"""
from typing import Any, Dict, Optional

import httpx
from fastapi import APIRouter, Depends, Response
from tripjournal.core.config import settings
from tripjournal.models.user import User
from tripjournal.schemas.immich import (
    ImmichConnectionResult, ImmichConnectionTest, ImmichSearchQuery, ImmichSearchResult
)
from tripjournal.services.immich_service import ImmichService
from tripjournal.api.dependencies import get_current_user, get_immich_service, get_immich_transport

router = APIRouter(prefix="/immich", tags=["immich"])

# Handlers are plain `def`: Immich calls are blocking and run in the threadpool


@router.post("/test", response_model=ImmichConnectionResult)
def test_connection(
    credentials: ImmichConnectionTest,
    current_user: User = Depends(get_current_user),
    transport: Optional[httpx.BaseTransport] = Depends(get_immich_transport)
):
    """Check that an Immich URL and API key work before saving them."""
    service = ImmichService.connect(
        credentials.api_url, credentials.api_key, settings.IMMICH_TIMEOUT_SECONDS, transport
    )
    try:
        connected = service.test_connection()
    finally:
        service.close()
    return {"connected": connected}


@router.get("/assets/{asset_id}")
def get_asset(
    asset_id: str,
    immich: ImmichService = Depends(get_immich_service)
) -> Dict[str, Any]:
    """Asset details as returned by Immich."""
    return immich.get_asset(asset_id)


@router.get("/assets/{asset_id}/thumbnail")
def get_asset_thumbnail(
    asset_id: str,
    immich: ImmichService = Depends(get_immich_service)
):
    """Thumbnail bytes proxied from Immich."""
    content, media_type = immich.get_asset_thumbnail(asset_id)
    return Response(
        content=content,
        media_type=media_type,
        headers={"Cache-Control": "private, max-age=86400"}
    )


@router.post("/search", response_model=ImmichSearchResult)
def search_assets(
    query: ImmichSearchQuery,
    immich: ImmichService = Depends(get_immich_service)
):
    """Search Immich assets by capture date."""
    return immich.search_assets(query)
