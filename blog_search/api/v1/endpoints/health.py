"""Health check endpoints: liveness and database readiness."""

import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from blog_search.core.config import get_settings
from blog_search.domain.exceptions import SqlNotConfiguredException
from blog_search.infrastructure.persistence.database import session_scope
from blog_search.schemas.health import (
    HealthResponse,
    ReadinessErrorResponse,
    ReadinessResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Liveness: the process is up. Reports which build is serving."""
    settings = get_settings()
    return HealthResponse(service=settings.app_name, version=settings.app_version)


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    responses={503: {"description": "Database unreachable", "model": ReadinessErrorResponse}},
)
async def readiness_check() -> ReadinessResponse | JSONResponse:
    """200 when the posts database answers SELECT 1, 503 when searches would fail."""
    try:
        async with session_scope() as session:
            await session.execute(text("SELECT 1"))
    except (SQLAlchemyError, SqlNotConfiguredException, OSError) as e:
        logger.warning("Readiness check failed: %s", e)
        return JSONResponse(
            status_code=503,
            content=ReadinessErrorResponse(
                message="posts database unreachable; searches will fail",
            ).model_dump(),
        )
    return ReadinessResponse()
