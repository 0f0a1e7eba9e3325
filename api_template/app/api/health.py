"""
Health check endpoints.

These routes are not versioned.  The application mounts the router
twice, at ``/health`` for probes from orchestrators and load balancers
and at ``/api/health`` alongside the versioned API:

* ``GET  /``         – run every registered check (200 or 503)
* ``GET  /ready``    – readiness, also runs the checks (200 or 503)
* ``GET  /live``     – liveness, checks nothing (always 200)
* ``GET  /version``  – build and runtime information
"""

import logging

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from api_template.app.schemas.health import HealthReport, LivenessReport, ReadinessReport, VersionInfo
from api_template.app.services.health_service import HEALTHY, HealthService

router = APIRouter()

logger = logging.getLogger(__name__)

_UNAVAILABLE = {status.HTTP_503_SERVICE_UNAVAILABLE: {"description": "A dependency is unhealthy"}}


@router.get("", response_model=HealthReport, responses=_UNAVAILABLE, summary="Get application health status")
async def get_health():
    logger.debug("Performing health check")
    report = await HealthService.health_report()
    code = status.HTTP_200_OK if report.status == HEALTHY else status.HTTP_503_SERVICE_UNAVAILABLE
    return JSONResponse(status_code=code, content=report.model_dump(mode="json"))


@router.get("/ready", response_model=ReadinessReport, responses=_UNAVAILABLE, summary="Get readiness status")
async def get_readiness():
    report = await HealthService.readiness()
    if report.error is not None:
        logger.error("Readiness check failed: %s", report.error)
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=report.model_dump(mode="json", exclude_none=True),
        )
    return JSONResponse(status_code=status.HTTP_200_OK, content=report.model_dump(mode="json", exclude_none=True))


@router.get("/live", response_model=LivenessReport, summary="Get liveness status")
async def get_liveness() -> LivenessReport:
    return HealthService.liveness()


@router.get("/version", response_model=VersionInfo, summary="Get version information")
async def get_version() -> VersionInfo:
    return HealthService.version_info()
