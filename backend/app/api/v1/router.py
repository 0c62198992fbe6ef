"""
API v1 router that aggregates all endpoint routers.
"""

from fastapi import APIRouter

from app.api.v1.endpoints import (
    health,
    exchange_rates,
    files,
    travels,
)

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(
    exchange_rates.router,
    prefix="/exchange-rates",
    tags=["exchange-rates"],
)
api_router.include_router(
    travels.router,
    prefix="/travels",
    tags=["travels"],
)
api_router.include_router(
    files.router,
    prefix="/files",
    tags=["files"],
)
