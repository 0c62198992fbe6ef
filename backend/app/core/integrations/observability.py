"""
Observability hooks.
Until an OTLP exporter is wired in, startup and recorded exceptions go to
the standard logger tagged with the service name.
"""

import logging

from fastapi import Request

from app.core.config import settings

logger = logging.getLogger(__name__)


def _service_tags() -> dict:
    return {
        "service_name": settings.OTEL_SERVICE_NAME,
        "environment": settings.OTEL_ENVIRONMENT,
    }


def setup_observability() -> None:
    logger.info(
        "Observability configured",
        extra={"otel_endpoint": settings.OTEL_EXPORTER_OTLP_ENDPOINT, **_service_tags()},
    )


def record_exception(exc: Exception, request: Request) -> None:
    """Report a server-side failure of a request."""
    logger.error(
        f"Exception recorded: {type(exc).__name__}: {exc}",
        extra={"path": request.url.path, "method": request.method, **_service_tags()},
    )
