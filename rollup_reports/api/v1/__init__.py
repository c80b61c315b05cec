"""
API v1 router initialization and setup.
"""
from fastapi import APIRouter
from .endpoints import campaigns, rollups, mappings

api_router = APIRouter()

api_router.include_router(
    campaigns.router,
    prefix="/campaigns",
    tags=["campaigns"]
)

api_router.include_router(
    rollups.router,
    prefix="/rollups",
    tags=["rollups"]
)

api_router.include_router(
    mappings.router,
    prefix="/mappings",
    tags=["mappings"]
)
