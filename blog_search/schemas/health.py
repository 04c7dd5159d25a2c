"""Health check API schemas."""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response for GET /health (liveness). Carries the deployed build."""

    status: str = Field(default="ok", description="Service status")
    service: str = Field(..., description="Service name (APP_NAME)")
    version: str = Field(..., description="Service version (APP_VERSION)")


class ReadinessResponse(BaseModel):
    """Response for GET /health/ready when the posts database answers."""

    status: str = Field(default="ok", description="Readiness status")
    database: str = Field(default="reachable", description="Posts database state")


class ReadinessErrorResponse(BaseModel):
    """Response for GET /health/ready when the posts database is unreachable (503)."""

    status: str = Field(default="not_ready", description="Readiness status")
    database: str = Field(default="unreachable", description="Posts database state")
    message: str = Field(..., description="Why searches cannot be served")
