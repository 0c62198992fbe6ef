"""
Dependency injection container using dependency-injector.
Wires the rate source, services and controllers.
"""

from dependency_injector import containers, providers

from app.core.config import settings
from app.core.integrations.inforeuro import InforEuroClient, MonthlyRateSource
from app.services.health_service import HealthService
from app.controllers.health_controller import HealthController


class Container(containers.DeclarativeContainer):
    """Dependency injection container."""

    # Configuration
    config = providers.Configuration()

    # Integrations
    rate_source = providers.Singleton(
        InforEuroClient,
        base_url=config.exchange_rate_api_url,
        language=config.exchange_rate_api_language,
        timeout=config.exchange_rate_api_timeout,
    )

    # Services
    health_service = providers.Singleton(
        HealthService,
    )

    # Controllers
    health_controller = providers.Factory(
        HealthController,
        health_service=health_service,
    )


def configure_container(container: Container) -> Container:
    """Load settings into the container configuration."""
    container.config.from_dict({
        "exchange_rate_api_url": settings.EXCHANGE_RATE_API_URL,
        "exchange_rate_api_language": settings.EXCHANGE_RATE_API_LANGUAGE,
        "exchange_rate_api_timeout": settings.EXCHANGE_RATE_API_TIMEOUT,
    })
    return container


# Global container instance
_container: Container = None


def get_container() -> Container:
    """Get the global dependency injection container."""
    global _container
    if _container is None:
        _container = configure_container(Container())
    return _container


def get_rate_source() -> MonthlyRateSource:
    """FastAPI dependency returning the shared monthly rate source."""
    return get_container().rate_source()
