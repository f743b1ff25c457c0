"""
Route distance and duration between two coordinates.

Uses the OpenRouteService directions API when a key is configured and falls
back to a great-circle (Haversine) estimate on any failure. Successful API
results are cached in the database.
"""
import logging
from dataclasses import dataclass
from datetime import timedelta
from typing import List, NamedTuple, Optional

import httpx
from sqlalchemy.orm import Session

from tripjournal.core.utils import haversine_km
from tripjournal.db.base import utcnow
from tripjournal.models.route_cache import RouteCache
from tripjournal.models.transportation import DistanceSource

logger = logging.getLogger(__name__)

# Average speeds in km/h used when no routed duration is available
PROFILE_SPEEDS = {
    "driving-car": 80.0,
    "cycling-regular": 20.0,
    "foot-walking": 5.0,
}
DEFAULT_PROFILE = "driving-car"

# ~100 m
CACHE_TOLERANCE_DEGREES = 0.001


class Coordinates(NamedTuple):
    latitude: float
    longitude: float


@dataclass
class RouteResult:
    """Distance in km, duration in minutes."""
    distance: float
    duration: float
    haversine_distance: float
    source: DistanceSource
    geometry: Optional[List[List[float]]] = None


class RoutingError(Exception):
    """Routing API failed or returned no route."""


def estimate_duration(distance_km: float, profile: str) -> float:
    """Minutes needed to cover the distance at the profile's average speed."""
    speed = PROFILE_SPEEDS.get(profile, PROFILE_SPEEDS[DEFAULT_PROFILE])
    return distance_km / speed * 60


class RoutingService:
    """Routing client with DB cache and Haversine fallback."""

    def __init__(self, client: httpx.Client, api_key: str, api_url: str, cache_days: int = 30):
        self.client = client
        self.api_key = api_key
        self.api_url = api_url.rstrip("/")
        self.cache_days = cache_days

    def haversine_route(self, origin: Coordinates, destination: Coordinates,
                        profile: str = DEFAULT_PROFILE) -> RouteResult:
        distance = haversine_km(origin.latitude, origin.longitude,
                                destination.latitude, destination.longitude)
        return RouteResult(
            distance=distance,
            duration=estimate_duration(distance, profile),
            haversine_distance=distance,
            source=DistanceSource.HAVERSINE,
        )

    def calculate_route(self, db: Session, origin: Coordinates, destination: Coordinates,
                        profile: str = DEFAULT_PROFILE) -> RouteResult:
        """
        Route between two points.

        Order of preference: cached API result, live API call, Haversine.
        Never raises for upstream problems.
        """
        fallback = self.haversine_route(origin, destination, profile)

        cached = self._get_cached_route(db, origin, destination, profile)
        if cached:
            logger.debug("Using cached route")
            return RouteResult(
                distance=cached.distance,
                duration=cached.duration,
                haversine_distance=fallback.haversine_distance,
                source=DistanceSource.API,
                geometry=cached.route_geometry,
            )

        if not self.api_key:
            logger.info("No routing API key configured, using Haversine distance")
            return fallback
        if profile not in PROFILE_SPEEDS:
            logger.warning(f"Unsupported routing profile '{profile}', using Haversine distance")
            return fallback

        try:
            distance, duration, geometry = self._fetch_route(origin, destination, profile)
        except (httpx.HTTPError, RoutingError, KeyError, ValueError) as e:
            logger.warning(f"Routing API failed, falling back to Haversine: {e}")
            return fallback

        self._cache_route(db, origin, destination, profile, distance, duration, geometry)
        return RouteResult(
            distance=distance,
            duration=duration,
            haversine_distance=fallback.haversine_distance,
            source=DistanceSource.API,
            geometry=geometry,
        )

    def _fetch_route(self, origin: Coordinates, destination: Coordinates, profile: str):
        url = f"{self.api_url}/v2/directions/{profile}/geojson"
        # OpenRouteService expects [longitude, latitude]
        body = {
            "coordinates": [
                [origin.longitude, origin.latitude],
                [destination.longitude, destination.latitude],
            ]
        }
        response = self.client.post(url, json=body, headers={"Authorization": self.api_key})
        if response.status_code == 429:
            raise RoutingError("Routing API rate limit exceeded")
        if response.status_code in (401, 403):
            raise RoutingError("Invalid routing API key")
        response.raise_for_status()

        features = response.json().get("features") or []
        if not features:
            raise RoutingError("No routes found in response")

        feature = features[0]
        summary = feature["properties"]["summary"]
        geometry = (feature.get("geometry") or {}).get("coordinates")
        return summary["distance"] / 1000, summary["duration"] / 60, geometry

    def _get_cached_route(self, db: Session, origin: Coordinates, destination: Coordinates,
                          profile: str) -> Optional[RouteCache]:
        cutoff = utcnow() - timedelta(days=self.cache_days)
        t = CACHE_TOLERANCE_DEGREES
        return db.query(RouteCache).filter(
            RouteCache.profile == profile,
            RouteCache.from_lat.between(origin.latitude - t, origin.latitude + t),
            RouteCache.from_lon.between(origin.longitude - t, origin.longitude + t),
            RouteCache.to_lat.between(destination.latitude - t, destination.latitude + t),
            RouteCache.to_lon.between(destination.longitude - t, destination.longitude + t),
            RouteCache.created_at >= cutoff
        ).order_by(RouteCache.created_at.desc()).first()

    def _cache_route(self, db: Session, origin: Coordinates, destination: Coordinates,
                     profile: str, distance: float, duration: float, geometry) -> None:
        db.add(RouteCache(
            from_lat=origin.latitude,
            from_lon=origin.longitude,
            to_lat=destination.latitude,
            to_lon=destination.longitude,
            profile=profile,
            distance=distance,
            duration=duration,
            route_geometry=geometry,
        ))
        db.flush()

    def cleanup_cache(self, db: Session) -> int:
        """Delete cache rows older than the cache lifetime."""
        cutoff = utcnow() - timedelta(days=self.cache_days)
        count = db.query(RouteCache).filter(RouteCache.created_at < cutoff).delete(
            synchronize_session=False
        )
        db.commit()
        logger.info(f"Cleaned up {count} old route cache entries")
        return count
