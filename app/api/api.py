from fastapi import APIRouter

from app.api.endpoints import health, places

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(places.router, prefix="/places", tags=["places"])
