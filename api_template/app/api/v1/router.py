"""
Top‑level router for version 1 of the API.

This router aggregates domain‑specific routers under a unified prefix
and attaches API version negotiation and the (unenforced) Bearer
scheme to every route.  When new endpoints are added or when new
domains are introduced, update this file to include their routers.
"""

from fastapi import APIRouter, Depends

from api_template.app.core.security import optional_bearer_token
from api_template.app.core.versioning import negotiate_api_version

from .endpoints import sample_entities

# Create a router for version 1 and include sub‑routers for each domain.
router = APIRouter(dependencies=[Depends(negotiate_api_version), Depends(optional_bearer_token)])

router.include_router(sample_entities.router, prefix="/sample-entities", tags=["sample-entities"])
# NOTE: Early clients of the template addressed the sample collection as
# ``/test``.  The same router is included a second time under that prefix
# so those clients keep working; both prefixes expose identical endpoints.
router.include_router(sample_entities.router, prefix="/test", tags=["test"])
