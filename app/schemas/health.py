"""Pydantic schemas for health check API."""

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Response model for health check endpoint."""

    service: str
    status: str
    version: str
    authentication: str
    components: dict[str, dict[str, str]]
    endpoints: dict[str, list[str]]
