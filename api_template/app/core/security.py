"""
Placeholder for Bearer token authentication.

The template does not authenticate anyone.  It only declares an
``HTTPBearer`` scheme so the OpenAPI document already advertises
``Authorization: Bearer <token>`` and Swagger UI shows the
"Authorize" button.  The dependency never rejects a request; replace
``optional_bearer_token`` with real token verification when an
identity provider is chosen.
"""

import logging
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

logger = logging.getLogger(__name__)

# ``auto_error=False`` means a missing header is not an error.
bearer_scheme = HTTPBearer(auto_error=False)


def optional_bearer_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[str]:
    """Return the presented Bearer token, if any, without verifying it."""
    if credentials is None:
        return None
    logger.debug("Bearer token presented but not verified (authentication is not configured)")
    return credentials.credentials
