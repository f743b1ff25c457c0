"""
Main API router that includes all route modules.
"""
from fastapi import APIRouter
from tripjournal.api.routes import (
    auth, users, trips, locations, photos, albums, activities,
    lodging, transportation, journal, tags, companions, immich, backup, search
)

api_router = APIRouter()

# Include all route modules
api_router.include_router(auth.router)
api_router.include_router(users.router)
api_router.include_router(trips.router)
api_router.include_router(locations.router)
api_router.include_router(photos.router)
api_router.include_router(albums.router)
api_router.include_router(activities.router)
api_router.include_router(lodging.router)
api_router.include_router(transportation.router)
api_router.include_router(journal.router)
api_router.include_router(tags.router)
api_router.include_router(companions.router)
api_router.include_router(immich.router)
api_router.include_router(backup.router)
api_router.include_router(search.router)
