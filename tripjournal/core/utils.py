"""
Utility functions for the application.
"""
from typing import Any, Dict, Optional
import math

from tripjournal.core.exceptions import ValidationError


EARTH_RADIUS_KM = 6371.0


def format_response(data: Any, status: str = "success") -> Dict[str, Any]:
    """Format API response envelope."""
    return {
        "status": status,
        "data": data
    }


def format_message(message: str) -> Dict[str, Any]:
    """Format a plain message response."""
    return {"message": message}


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance between two points in kilometers."""
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lon / 2) ** 2
    )
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def empty_to_none(value: Optional[str]) -> Optional[str]:
    """Treat empty strings from forms as missing values."""
    if value is None:
        return None
    value = value.strip()
    return value or None


def reject_nulls(changes: Dict[str, Any], *fields: str) -> None:
    """Partial updates may omit required fields but not set them to null."""
    for field in fields:
        if field in changes and changes[field] is None:
            raise ValidationError(f"{field} cannot be null")


LIKE_ESCAPE = "\\"


def like_pattern(term: str) -> str:
    """Substring pattern for LIKE/ILIKE with `%` and `_` matched literally."""
    escaped = (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"
