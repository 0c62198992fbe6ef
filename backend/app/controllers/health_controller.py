"""
Health controller.
"""

from app.schemas.health import HealthResponse
from app.services.health_service import HealthService


class HealthController:
    """Controller for the health report."""

    def __init__(self, health_service: HealthService):
        self.health_service = health_service

    async def get_health(self) -> HealthResponse:
        return await self.health_service.get_health()
