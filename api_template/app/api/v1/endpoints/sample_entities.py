"""
Sample entity endpoints for API v1.

These routes expose a CRUD API over the sample entity collection and
demonstrate the conventions of the template: paginated listing with
filters, 201 + ``Location`` on create, 409 on a duplicate name, 404 on
unknown ids, 204 on delete and a ``HEAD`` existence probe.

Request validation (lengths, ranges, positive ids) happens here; the
service only sees already validated, already paginated arguments.
"""

from typing import Optional

from fastapi import APIRouter, HTTPException, Path, Query, Request, Response, status

from api_template.app.core.config import settings
from api_template.app.core.errors import ConflictError
from api_template.app.schemas.sample_entity import (
    PaginatedResult,
    SampleEntityCreate,
    SampleEntityRead,
    SampleEntityType,
    SampleEntityUpdate,
)
from api_template.app.services.sample_entity_service import SampleEntityService

router = APIRouter()


def _not_found(entity_id: int) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Sample entity with ID {entity_id} was not found.",
    )


@router.get(
    "/",
    response_model=PaginatedResult,
    summary="Get all sample entities",
)
async def list_sample_entities(
    page_number: int = Query(1, ge=1, description="1-based page number"),
    page_size: int = Query(
        settings.default_page_size, ge=1, le=settings.max_page_size, description="Items per page"
    ),
    search: Optional[str] = Query(None, max_length=100, description="Substring of name or description"),
    is_active: Optional[bool] = Query(None, description="Filter by active flag"),
    category: Optional[SampleEntityType] = Query(None, description="Filter by category"),
) -> PaginatedResult:
    """Return a filtered, id-ordered page of sample entities.

    ``total_count`` counts every match, not just the current page.  A
    page past the end is empty rather than an error.
    """
    skip = (page_number - 1) * page_size
    items, total = await SampleEntityService.list_entities(
        skip=skip,
        take=page_size,
        search=search,
        is_active=is_active,
        category=category,
    )
    return PaginatedResult.build(items, total, page_number, page_size)


@router.get("/{entity_id}", response_model=SampleEntityRead, summary="Get a sample entity by ID")
async def get_sample_entity(entity_id: int = Path(..., ge=1, description="Entity ID")) -> SampleEntityRead:
    entity = await SampleEntityService.get_entity(entity_id)
    if entity is None:
        raise _not_found(entity_id)
    return entity


@router.post(
    "/",
    response_model=SampleEntityRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create a sample entity",
)
async def create_sample_entity(
    entity_in: SampleEntityCreate,
    request: Request,
    response: Response,
) -> SampleEntityRead:
    """Create a new sample entity.

    Returns HTTP 409 if another entity already uses the same name.
    """
    try:
        entity = await SampleEntityService.create_entity(entity_in)
    except ConflictError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=exc.message)
    response.headers["Location"] = f"{request.url.path.rstrip('/')}/{entity.id}"
    return entity


@router.put("/{entity_id}", response_model=SampleEntityRead, summary="Replace a sample entity")
async def update_sample_entity(
    entity_in: SampleEntityUpdate,
    entity_id: int = Path(..., ge=1, description="Entity ID"),
) -> SampleEntityRead:
    """Replace every mutable field of an existing sample entity.

    Returns HTTP 404 for an unknown ID and 409 if the new name belongs
    to another entity.
    """
    try:
        entity = await SampleEntityService.update_entity(entity_id, entity_in)
    except ConflictError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=exc.message)
    if entity is None:
        raise _not_found(entity_id)
    return entity


@router.delete(
    "/{entity_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a sample entity",
)
async def delete_sample_entity(entity_id: int = Path(..., ge=1, description="Entity ID")) -> None:
    deleted = await SampleEntityService.delete_entity(entity_id)
    if not deleted:
        raise _not_found(entity_id)
    return None


@router.head(
    "/{entity_id}",
    response_class=Response,
    summary="Check whether a sample entity exists",
    responses={404: {"description": "Entity does not exist"}},
)
async def sample_entity_exists(
    response: Response,
    entity_id: int = Path(..., ge=1, description="Entity ID"),
) -> None:
    exists = await SampleEntityService.entity_exists(entity_id)
    response.status_code = status.HTTP_200_OK if exists else status.HTTP_404_NOT_FOUND
    return None
