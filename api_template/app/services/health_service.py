"""
Health checks for the application.

Checks are plain callables registered in ``HealthService.checks``; each
returns normally when healthy and raises when not.  Only the database
probe exists today.  Readiness runs the checks; liveness never touches
dependencies.
"""

from __future__ import annotations

import logging
import os
import platform
import time
from datetime import datetime, timezone
from typing import Callable, Dict

from fastapi.concurrency import run_in_threadpool

from api_template.app.core.config import settings
from api_template.app.core.db import check_connection
from api_template.app.schemas.health import (
    HealthCheckResult,
    HealthReport,
    LivenessReport,
    ReadinessReport,
    VersionInfo,
)

logger = logging.getLogger(__name__)

HEALTHY = "Healthy"
UNHEALTHY = "Unhealthy"

STARTED_AT = datetime.now(timezone.utc)


def _enabled_checks() -> Dict[str, Callable[[], None]]:
    checks: Dict[str, Callable[[], None]] = {}
    if settings.health_checks_enabled and settings.health_database_check_enabled:
        checks["database"] = check_connection
    return checks


class HealthService:
    """Builds the health reports served by the health endpoints."""

    @classmethod
    async def health_report(cls) -> HealthReport:
        start = time.perf_counter()
        results = []
        for name, check in _enabled_checks().items():
            check_start = time.perf_counter()
            try:
                await run_in_threadpool(check)
            except Exception as exc:
                logger.error("Health check %s failed: %s", name, exc)
                results.append(
                    HealthCheckResult(
                        name=name,
                        status=UNHEALTHY,
                        duration_ms=(time.perf_counter() - check_start) * 1000,
                        description=f"{name} is unreachable",
                        error=str(exc),
                    )
                )
            else:
                results.append(
                    HealthCheckResult(
                        name=name,
                        status=HEALTHY,
                        duration_ms=(time.perf_counter() - check_start) * 1000,
                        description=f"{name} is reachable",
                    )
                )

        status = HEALTHY if all(r.status == HEALTHY for r in results) else UNHEALTHY
        logger.info("Health check completed with status: %s", status)
        return HealthReport(
            status=status,
            total_duration_ms=(time.perf_counter() - start) * 1000,
            checks=results,
        )

    @classmethod
    async def readiness(cls) -> ReadinessReport:
        report = await cls.health_report()
        now = datetime.now(timezone.utc)
        if report.status != HEALTHY:
            failed = ", ".join(f"{c.name}: {c.error}" for c in report.checks if c.status != HEALTHY)
            return ReadinessReport(status="Not Ready", timestamp=now, error=failed)
        return ReadinessReport(
            status="Ready",
            timestamp=now,
            uptime_seconds=(now - STARTED_AT).total_seconds(),
        )

    @staticmethod
    def liveness() -> LivenessReport:
        return LivenessReport(
            status="Alive",
            timestamp=datetime.now(timezone.utc),
            version=settings.api_version,
            environment=settings.environment,
        )

    @staticmethod
    def version_info() -> VersionInfo:
        return VersionInfo(
            version=settings.api_version,
            api_version=settings.supported_api_versions[-1] if settings.supported_api_versions else "",
            supported_api_versions=list(settings.supported_api_versions),
            environment=settings.environment,
            python_version=platform.python_version(),
            platform=platform.platform(),
            process_id=os.getpid(),
            working_directory=os.getcwd(),
            started_at=STARTED_AT,
        )
