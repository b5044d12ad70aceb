"""Health check API routes.

Provides REST API endpoints for health monitoring and readiness checks.

Anti-Patterns Avoided:
- ANTI_PATTERN_ANALYSIS §3.1: No bare except clauses
- ANTI_PATTERN_ANALYSIS §4.1: Cognitive complexity < 15 per function
"""

from __future__ import annotations

import logging
import os
from datetime import UTC, datetime
from enum import Enum

from fastapi import APIRouter
from pydantic import BaseModel, Field

from src.api.routes import references
from src.config.feature_flags import get_feature_flags


logger = logging.getLogger(__name__)


# =============================================================================
# Router Configuration
# =============================================================================

router = APIRouter(
    prefix="/health",
    tags=["Health"],
)


# =============================================================================
# Enums and Constants
# =============================================================================

class HealthStatus(str, Enum):
    """Health status enum."""

    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"


class DependencyStatus(str, Enum):
    """Dependency status enum."""

    UP = "up"
    DOWN = "down"


# Service metadata
SERVICE_NAME = "cite-references"
SERVICE_VERSION = os.environ.get("SERVICE_VERSION", "0.1.0")


# =============================================================================
# Response Models
# =============================================================================

class DependencyHealth(BaseModel):
    """Health status for a single dependency.

    Attributes:
        name: Dependency name
        status: Current status
        message: Optional status message
    """

    name: str = Field(..., description="Dependency name")
    status: DependencyStatus = Field(..., description="Current status")
    message: str | None = Field(
        default=None,
        description="Optional status message",
    )


class HealthResponse(BaseModel):
    """Response model for health check.

    Attributes:
        status: Overall service status
        service: Service name
        version: Service version
        timestamp: Check timestamp (ISO format)
        uptime_seconds: Service uptime in seconds
        reference_storage_enabled: Whether stored references are served
        dependencies: Health status of dependencies
    """

    status: HealthStatus = Field(
        default=HealthStatus.HEALTHY,
        description="Overall service status",
    )
    service: str = Field(
        default=SERVICE_NAME,
        description="Service name",
    )
    version: str = Field(
        default=SERVICE_VERSION,
        description="Service version",
    )
    timestamp: str = Field(
        default_factory=lambda: datetime.now(UTC).isoformat(),
        description="Check timestamp",
    )
    uptime_seconds: float | None = Field(
        default=None,
        description="Service uptime in seconds",
    )
    reference_storage_enabled: bool = Field(
        default=False,
        description="Whether stored references are served",
    )
    dependencies: list[DependencyHealth] = Field(
        default_factory=list,
        description="Health status of dependencies",
    )


class ReadinessResponse(BaseModel):
    """Response model for readiness check.

    Attributes:
        ready: Whether service is ready to accept traffic
        checks: Individual check results
    """

    ready: bool = Field(
        default=True,
        description="Whether service is ready",
    )
    checks: dict[str, bool] = Field(
        default_factory=dict,
        description="Individual check results",
    )


class LivenessResponse(BaseModel):
    """Response model for liveness check.

    Attributes:
        alive: Whether service is alive
        timestamp: Check timestamp
    """

    alive: bool = Field(
        default=True,
        description="Whether service is alive",
    )
    timestamp: str = Field(
        default_factory=lambda: datetime.now(UTC).isoformat(),
        description="Check timestamp",
    )


# =============================================================================
# Service Start Time
# =============================================================================

_service_start_time: datetime | None = None


def set_service_start_time(start_time: datetime | None = None) -> None:
    """Set the service start time for uptime calculation.

    Args:
        start_time: Service start time, defaults to now
    """
    global _service_start_time
    _service_start_time = start_time or datetime.now(UTC)


def get_uptime_seconds() -> float | None:
    """Get service uptime in seconds.

    Returns:
        Uptime in seconds, or None if start time not set
    """
    if _service_start_time is None:
        return None

    delta = datetime.now(UTC) - _service_start_time
    return delta.total_seconds()


# =============================================================================
# Dependency Checks
# =============================================================================

async def check_reference_store() -> DependencyHealth:
    """Check that a reference store is wired into the lookup endpoint.

    Returns:
        DependencyHealth for the reference store
    """
    try:
        endpoint = references.get_lookup_endpoint()
    except RuntimeError as e:
        return DependencyHealth(
            name="reference-store",
            status=DependencyStatus.DOWN,
            message=str(e),
        )
    return DependencyHealth(
        name="reference-store",
        status=DependencyStatus.UP,
        message=type(endpoint.store).__name__,
    )


async def check_page_directory() -> DependencyHealth:
    """Check that a page directory is configured.

    Returns:
        DependencyHealth for the page directory
    """
    try:
        directory = references.get_page_directory()
    except RuntimeError as e:
        return DependencyHealth(
            name="page-directory",
            status=DependencyStatus.DOWN,
            message=str(e),
        )
    return DependencyHealth(
        name="page-directory",
        status=DependencyStatus.UP,
        message=type(directory).__name__,
    )


async def get_all_dependency_checks() -> list[DependencyHealth]:
    """Run all dependency health checks.

    Returns:
        List of DependencyHealth objects
    """
    return [
        await check_reference_store(),
        await check_page_directory(),
    ]


def calculate_overall_status(dependencies: list[DependencyHealth]) -> HealthStatus:
    """Calculate overall health status from dependencies.

    Args:
        dependencies: List of dependency health checks

    Returns:
        Overall HealthStatus
    """
    if any(d.status == DependencyStatus.DOWN for d in dependencies):
        return HealthStatus.UNHEALTHY
    return HealthStatus.HEALTHY


# =============================================================================
# API Endpoints
# =============================================================================

@router.get(
    "",
    response_model=HealthResponse,
    summary="Health check",
    description="Returns comprehensive health status of the service.",
)
async def health_check() -> HealthResponse:
    """Comprehensive health check endpoint.

    Returns:
        HealthResponse with status, version, uptime, and dependencies
    """
    dependencies = await get_all_dependency_checks()

    return HealthResponse(
        status=calculate_overall_status(dependencies),
        service=SERVICE_NAME,
        version=SERVICE_VERSION,
        timestamp=datetime.now(UTC).isoformat(),
        uptime_seconds=get_uptime_seconds(),
        reference_storage_enabled=get_feature_flags().reference_storage_enabled,
        dependencies=dependencies,
    )


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    summary="Readiness check",
    description="Returns whether the service is ready to accept traffic.",
)
async def readiness_check() -> ReadinessResponse:
    """Kubernetes-style readiness probe.

    Storage being disabled is reported but does not gate readiness; requests
    then fail with citestoragedisabled.

    Returns:
        ReadinessResponse indicating if service is ready
    """
    store = await check_reference_store()
    directory = await check_page_directory()

    checks = {
        "reference_store": store.status == DependencyStatus.UP,
        "page_directory": directory.status == DependencyStatus.UP,
    }
    ready = all(checks.values())
    checks["reference_storage_enabled"] = get_feature_flags().reference_storage_enabled

    return ReadinessResponse(
        ready=ready,
        checks=checks,
    )


@router.get(
    "/live",
    response_model=LivenessResponse,
    summary="Liveness check",
    description="Returns whether the service is alive.",
)
async def liveness_check() -> LivenessResponse:
    """Kubernetes-style liveness probe.

    Returns:
        LivenessResponse indicating service is alive
    """
    return LivenessResponse(
        alive=True,
        timestamp=datetime.now(UTC).isoformat(),
    )


__all__ = [
    "DependencyHealth",
    "DependencyStatus",
    "HealthResponse",
    "HealthStatus",
    "LivenessResponse",
    "ReadinessResponse",
    "calculate_overall_status",
    "check_page_directory",
    "check_reference_store",
    "get_all_dependency_checks",
    "get_uptime_seconds",
    "router",
    "set_service_start_time",
]
