"""
API Routes package.
"""
from fastapi import APIRouter

from app.api.routes.auth import router as auth_router
from app.api.routes.health import router as health_router
from app.api.routes.skills import router as skills_router
from app.api.routes.matches import router as matches_router
from app.api.routes.profile import router as profile_router

# Main API router
api_router = APIRouter()

# Include all routers
api_router.include_router(health_router)
api_router.include_router(auth_router)
api_router.include_router(skills_router)
api_router.include_router(matches_router)
api_router.include_router(profile_router)

__all__ = [
    "api_router",
    "auth_router",
    "health_router",
    "skills_router",
    "matches_router",
    "profile_router",
]
