"""
API version negotiation.

Routing is by URL segment (``/api/v1``).  Clients may also state the
version they expect through a query parameter (``api-version``,
``version`` or ``v``) or a header (``X-Version`` or ``X-API-Version``).
A stated version that the server does not support is rejected with
400; every versioned response advertises the supported versions in
the ``api-supported-versions`` header.
"""

from typing import Iterable, List, Optional

from fastapi import Request, Response

from .config import settings
from .errors import UnsupportedApiVersionError

VERSION_QUERY_PARAMS = ("api-version", "version", "v")
VERSION_HEADERS = ("X-Version", "X-API-Version")
SUPPORTED_VERSIONS_HEADER = "api-supported-versions"


def normalize_version(raw: str) -> str:
    """Normalise ``"v1"``, ``"1"`` and ``"1.0"`` to ``"1.0"``."""
    value = raw.strip().lower().lstrip("v")
    if value and "." not in value:
        value = f"{value}.0"
    return value


def requested_version(request: Request) -> Optional[str]:
    for name in VERSION_QUERY_PARAMS:
        value = request.query_params.get(name)
        if value:
            return value
    for name in VERSION_HEADERS:
        value = request.headers.get(name)
        if value:
            return value
    return None


def ensure_supported(raw: str, supported: Iterable[str]) -> str:
    supported_list: List[str] = list(supported)
    version = normalize_version(raw)
    if version not in {normalize_version(v) for v in supported_list}:
        raise UnsupportedApiVersionError(raw, supported_list)
    return version


async def negotiate_api_version(request: Request, response: Response) -> Optional[str]:
    """Router dependency validating the client's requested API version."""
    response.headers[SUPPORTED_VERSIONS_HEADER] = ", ".join(settings.supported_api_versions)
    raw = requested_version(request)
    if raw is None:
        return None
    return ensure_supported(raw, settings.supported_api_versions)
