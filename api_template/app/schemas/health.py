"""
Pydantic schemas for health, readiness, liveness and version reports.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel


class HealthCheckResult(BaseModel):
    name: str
    status: str
    duration_ms: float
    description: Optional[str] = None
    error: Optional[str] = None


class HealthReport(BaseModel):
    """Aggregate result of all registered health checks."""

    status: str
    total_duration_ms: float
    checks: List[HealthCheckResult]


class ReadinessReport(BaseModel):
    status: str
    timestamp: datetime
    uptime_seconds: Optional[float] = None
    error: Optional[str] = None


class LivenessReport(BaseModel):
    status: str
    timestamp: datetime
    version: str
    environment: str


class VersionInfo(BaseModel):
    version: str
    api_version: str
    supported_api_versions: List[str]
    environment: str
    python_version: str
    platform: str
    process_id: int
    working_directory: str
    started_at: datetime
