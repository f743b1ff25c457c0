"""
Cached routing results keyed by endpoints and travel profile.
"""
from sqlalchemy import Column, String, Float, JSON
from tripjournal.db.base import BaseModel


class RouteCache(BaseModel):
    """Route distance/duration from the routing service."""
    __tablename__ = "route_cache"

    from_lat = Column(Float, nullable=False, index=True)
    from_lon = Column(Float, nullable=False)
    to_lat = Column(Float, nullable=False, index=True)
    to_lon = Column(Float, nullable=False)
    profile = Column(String(50), nullable=False, index=True)
    distance = Column(Float, nullable=False)  # km
    duration = Column(Float, nullable=False)  # minutes
    route_geometry = Column(JSON, nullable=True)
