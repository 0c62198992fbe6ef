"""
Health check endpoint: process uptime, database reachability and the newest
cached exchange rate month.
"""

from fastapi import APIRouter, Depends

from app.controllers.health_controller import HealthController
from app.deps.di_container import get_container
from app.schemas.health import HealthResponse

router = APIRouter()


def get_health_controller() -> HealthController:
    return get_container().health_controller()


@router.get("/health", response_model=HealthResponse)
async def get_health(
    controller: HealthController = Depends(get_health_controller),
) -> HealthResponse:
    return await controller.get_health()
