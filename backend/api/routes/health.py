"""
Health check endpoints.

Provides endpoints for monitoring application health and readiness.
"""

import asyncio

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from shared.config import get_settings
from shared.database import Database
from shared.models import ApiResponse
from ..dependencies import get_database

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str


class ReadinessResponse(BaseModel):
    """Readiness check response model."""

    status: str
    database: str


@router.get("/health", response_model=ApiResponse[HealthResponse])
async def health_check() -> ApiResponse[HealthResponse]:
    """
    Basic health check endpoint.

    Returns 200 if the API is running.
    """
    return ApiResponse.ok(HealthResponse(status="healthy", version=get_settings().app_version))


@router.get("/ready", response_model=ApiResponse[ReadinessResponse])
async def readiness_check(db: Database = Depends(get_database)):
    """
    Readiness check endpoint.

    Returns 503 when the database cannot be reached.
    """
    if await asyncio.to_thread(db.ping):
        return ApiResponse.ok(ReadinessResponse(status="ready", database="connected"))

    body = ApiResponse(
        success=False,
        data=ReadinessResponse(status="not_ready", database="unavailable"),
        message="Database unavailable",
    )
    return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content=body.model_dump())
