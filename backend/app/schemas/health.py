"""
Health check response schemas.
"""

from pydantic import BaseModel, Field
from typing import Dict, Optional


class HealthResponse(BaseModel):
    """Process status, database reachability and rate cache state."""
    status: str = Field(..., description="ok, or degraded when the database is unreachable")
    version: str
    uptime: str = Field(..., description="ISO 8601 duration since start")
    checks: Dict[str, str] = {}
    base_currency: str
    latest_rate_month: Optional[str] = Field(None, description="YYYY-MM of the newest cached rate table")
