"""
Client for a user's Immich server.

The stored URL is the server root (without `/api`); every request path
below carries the `/api` prefix.
"""
import logging
from typing import Any, Dict, Optional, Tuple

import httpx

from tripjournal.core.exceptions import NotFoundError, ValidationError, UpstreamUnavailableError
from tripjournal.models.user import User
from tripjournal.schemas.immich import ImmichSearchQuery

logger = logging.getLogger(__name__)


class ImmichService:
    """Thin wrapper around an `httpx.Client` bound to one Immich server."""

    def __init__(self, client: httpx.Client):
        self.client = client

    @classmethod
    def connect(cls, api_url: str, api_key: str, timeout: float = 30.0,
                transport: Optional[httpx.BaseTransport] = None) -> "ImmichService":
        client = httpx.Client(
            base_url=api_url.rstrip("/"),
            headers={"x-api-key": api_key, "Accept": "application/json"},
            timeout=timeout,
            transport=transport,
        )
        return cls(client)

    @classmethod
    def for_user(cls, user: User, timeout: float = 30.0,
                 transport: Optional[httpx.BaseTransport] = None) -> "ImmichService":
        if not user.immich_configured:
            raise ValidationError("Immich is not configured for this user")
        return cls.connect(user.immich_api_url, user.immich_api_key, timeout, transport)

    def close(self) -> None:
        self.client.close()

    def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        try:
            response = self.client.request(method, path, **kwargs)
        except httpx.TimeoutException:
            logger.warning(f"Immich request timed out: {method} {path}")
            raise UpstreamUnavailableError("Immich server timed out")
        except httpx.HTTPError as e:
            logger.warning(f"Immich request failed: {method} {path}: {e}")
            raise UpstreamUnavailableError("Cannot connect to Immich server")

        if response.status_code == 404:
            raise NotFoundError("Immich asset not found")
        if response.status_code in (401, 403):
            raise UpstreamUnavailableError("Immich rejected the API key")
        if response.is_error:
            logger.warning(f"Immich returned {response.status_code} for {method} {path}")
            raise UpstreamUnavailableError(f"Immich returned status {response.status_code}")
        return response

    def test_connection(self) -> bool:
        """Ping the server; never raises."""
        try:
            response = self.client.get("/api/server/ping")
        except httpx.HTTPError as e:
            logger.warning(f"Immich connection test failed: {e}")
            return False
        if response.status_code != 200:
            logger.warning(f"Immich connection test returned {response.status_code}")
            return False
        return True

    def get_asset(self, asset_id: str) -> Dict[str, Any]:
        return self._request("GET", f"/api/assets/{asset_id}").json()

    def get_asset_thumbnail(self, asset_id: str) -> Tuple[bytes, str]:
        """Preview-size thumbnail bytes and their content type."""
        response = self._request("GET", f"/api/assets/{asset_id}/thumbnail", params={"size": "preview"})
        return response.content, response.headers.get("content-type", "image/jpeg")

    def search_assets(self, query: ImmichSearchQuery) -> Dict[str, Any]:
        """Metadata search; returns the assets page and the next page cursor."""
        body: Dict[str, Any] = {"page": query.page, "size": query.size}
        if query.taken_after:
            body["takenAfter"] = query.taken_after.isoformat()
        if query.taken_before:
            body["takenBefore"] = query.taken_before.isoformat()

        data = self._request("POST", "/api/search/metadata", json=body).json()
        assets = data.get("assets") or {}
        items = assets.get("items") or []
        return {
            "assets": items,
            "total": assets.get("total", len(items)),
            "next_page": assets.get("nextPage"),
        }

    def asset_metadata(self, asset_id: str) -> Dict[str, Any]:
        """
        Capture time and GPS position of an asset, for filling unset photo fields.

        Returns only keys that have a value.
        """
        asset = self.get_asset(asset_id)
        exif = asset.get("exifInfo") or {}
        metadata: Dict[str, Any] = {}
        taken_at = exif.get("dateTimeOriginal") or asset.get("fileCreatedAt")
        if taken_at:
            metadata["taken_at"] = taken_at
        if exif.get("latitude") is not None and exif.get("longitude") is not None:
            metadata["latitude"] = exif["latitude"]
            metadata["longitude"] = exif["longitude"]
        return metadata
