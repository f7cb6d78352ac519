"""API router initialization."""

# Hey future me, this is the API router aggregator. main.py mounts it under settings.api_prefix
# (/api/v3), so the karaoke routes end up at /api/v3/karaoke/... The health router is NOT in
# here - probes live at /health outside the versioned API.

from fastapi import APIRouter

from karaoke.api.routers import health, karaoke

api_router = APIRouter()

api_router.include_router(karaoke.router, prefix="/karaoke", tags=["Karaoke"])

__all__ = ["api_router", "health"]
