"""
Abacus Backend — Shared Response Schemas
==========================================

What:  Error and health response models shared by every router.
Why:   Clients get one error shape from every endpoint: {"error": "<message>"}.
"""

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """
    What:  Standardized error response format for all API errors.

    Example:
        {"error": "Invalid operation: modulo"}

    The request correlation ID travels in the X-Request-ID header rather
    than the body.
    """
    error: str = Field(description="Human-readable error description")


class HealthResponse(BaseModel):
    """
    What:  Health check response showing service and database status.
    Who:   Returned by GET /health for monitoring and load balancer probes.
    """
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
