"""
Service layer for the sample entity collection.

This is the only place with business rules:

* listing is filtered (substring search on name/description, exact
  ``is_active`` and ``category`` matches, combined with AND), always
  ordered by ``id`` ascending and windowed by ``skip``/``take``; the
  total is counted over the filtered set before windowing;
* ``name`` must be unique.  The service checks before writing and
  raises :class:`ConflictError`.  This pre-check is not atomic with
  the write; the ``UNIQUE`` constraint on the table is the authority
  and the repository reports its violations as the same error;
* timestamps are assigned here and never taken from the client;
* updates replace every mutable field (no merging with the old row).

Repository calls are blocking, so they run on a worker thread.  The
awaiting coroutine can therefore be cancelled like any other asyncio
task.  Nothing is retried.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple, Union

from fastapi.concurrency import run_in_threadpool

from api_template.app.core.db import utc_now
from api_template.app.core.errors import ConflictError
from api_template.app.repositories import sample_entity_repository as repository
from api_template.app.schemas.sample_entity import (
    SampleEntityCreate,
    SampleEntityRead,
    SampleEntityType,
    SampleEntityUpdate,
)

logger = logging.getLogger(__name__)


def _mutable_fields(data: Union[SampleEntityCreate, SampleEntityUpdate]) -> Dict[str, Any]:
    return {
        "name": data.name,
        "description": data.description,
        "is_active": data.is_active,
        "value": str(data.value) if data.value is not None else None,
        "category": data.category.value,
        "tags": list(data.tags),
        "metadata": data.metadata,
    }


class SampleEntityService:
    """Service class for managing sample entities."""

    @classmethod
    async def list_entities(
        cls,
        skip: int = 0,
        take: int = 10,
        search: Optional[str] = None,
        is_active: Optional[bool] = None,
        category: Optional[SampleEntityType] = None,
    ) -> Tuple[List[SampleEntityRead], int]:
        """Return one page of matching entities and the total match count.

        ``skip`` beyond the number of matches yields an empty page, not
        an error.
        """
        logger.debug(
            "Listing sample entities skip=%s take=%s search=%r is_active=%s category=%s",
            skip, take, search, is_active, category,
        )
        rows, total = await run_in_threadpool(
            repository.list_page,
            skip=skip,
            take=take,
            search=search,
            is_active=is_active,
            category=category.value if category is not None else None,
        )
        items = [SampleEntityRead(**row) for row in rows]
        logger.info("Retrieved %s sample entities out of %s total", len(items), total)
        return items, total

    @classmethod
    async def get_entity(cls, entity_id: int) -> Optional[SampleEntityRead]:
        row = await run_in_threadpool(repository.get_by_id, entity_id)
        if row is None:
            logger.warning("Sample entity %s not found", entity_id)
            return None
        return SampleEntityRead(**row)

    @classmethod
    async def create_entity(cls, data: SampleEntityCreate) -> SampleEntityRead:
        """Insert a new entity and return the stored record.

        Raises :class:`ConflictError` when ``data.name`` is already used.
        """
        logger.debug("Creating sample entity %r", data.name)
        if await run_in_threadpool(repository.name_exists, data.name):
            logger.warning("Cannot create sample entity: name %r already exists", data.name)
            raise ConflictError(data.name)

        now = utc_now()
        record = _mutable_fields(data)
        record["created_at"] = now
        record["updated_at"] = now
        entity_id = await run_in_threadpool(repository.insert, record)
        logger.info("Created sample entity %s: %s", entity_id, data.name)
        return SampleEntityRead(id=entity_id, **record)

    @classmethod
    async def update_entity(cls, entity_id: int, data: SampleEntityUpdate) -> Optional[SampleEntityRead]:
        """Replace an existing entity.

        Returns ``None`` if the record does not exist (there is no
        upsert).  Raises :class:`ConflictError` when the new name
        belongs to another record.
        """
        logger.debug("Updating sample entity %s", entity_id)
        existing = await run_in_threadpool(repository.get_by_id, entity_id)
        if existing is None:
            logger.warning("Cannot update: sample entity %s not found", entity_id)
            return None

        if existing["name"] != data.name:
            if await run_in_threadpool(repository.name_exists, data.name, entity_id):
                logger.warning("Cannot update sample entity %s: name %r already exists", entity_id, data.name)
                raise ConflictError(data.name)

        record = _mutable_fields(data)
        record["updated_at"] = utc_now()
        replaced = await run_in_threadpool(repository.replace, entity_id, record)
        if not replaced:
            # Deleted between the read and the write.
            logger.warning("Cannot update: sample entity %s disappeared", entity_id)
            return None
        logger.info("Updated sample entity %s: %s", entity_id, data.name)
        return SampleEntityRead(id=entity_id, created_at=existing["created_at"], **record)

    @classmethod
    async def delete_entity(cls, entity_id: int) -> bool:
        """Hard-delete an entity.  Returns ``True`` if a record was deleted."""
        deleted = await run_in_threadpool(repository.delete, entity_id)
        if deleted:
            logger.info("Deleted sample entity %s", entity_id)
        else:
            logger.warning("Cannot delete: sample entity %s not found", entity_id)
        return deleted

    @classmethod
    async def entity_exists(cls, entity_id: int) -> bool:
        exists = await run_in_threadpool(repository.exists, entity_id)
        logger.debug("Sample entity %s exists: %s", entity_id, exists)
        return exists
