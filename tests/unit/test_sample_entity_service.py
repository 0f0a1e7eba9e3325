from __future__ import annotations

import asyncio
from decimal import Decimal

import pytest

from api_template.app.core.errors import ConflictError
from api_template.app.repositories import sample_entity_repository
from api_template.app.schemas.sample_entity import (
    SampleEntityCreate,
    SampleEntityType,
    SampleEntityUpdate,
)
from api_template.app.services.sample_entity_service import SampleEntityService

pytestmark = pytest.mark.usefixtures("database")


def _create(name: str, **fields) -> SampleEntityCreate:
    return SampleEntityCreate(name=name, **fields)


def _update(name: str, **fields) -> SampleEntityUpdate:
    body = {
        "name": name,
        "description": None,
        "is_active": True,
        "value": None,
        "category": SampleEntityType.standard,
        "tags": [],
        "metadata": None,
    }
    body.update(fields)
    return SampleEntityUpdate(**body)


@pytest.mark.asyncio
async def test_list_scenario_two_active_records() -> None:
    a = await SampleEntityService.create_entity(_create("Sample Item 1", category=SampleEntityType.standard))
    b = await SampleEntityService.create_entity(_create("Sample Item 2", category=SampleEntityType.premium))

    items, total = await SampleEntityService.list_entities(skip=0, take=10)
    assert [item.id for item in items] == [a.id, b.id]
    assert total == 2

    items, total = await SampleEntityService.list_entities(skip=0, take=10, is_active=False)
    assert items == []
    assert total == 0


@pytest.mark.asyncio
async def test_list_windows_are_ordered_and_total_is_independent_of_window() -> None:
    for i in range(7):
        await SampleEntityService.create_entity(_create(f"Item {i}", is_active=i % 2 == 0))

    for skip in range(0, 9):
        for take in (1, 3, 10):
            items, total = await SampleEntityService.list_entities(skip=skip, take=take, is_active=True)
            ids = [item.id for item in items]
            assert len(items) <= take
            assert ids == sorted(ids)
            assert total == 4


@pytest.mark.asyncio
async def test_list_skip_past_end_returns_empty_page() -> None:
    await SampleEntityService.create_entity(_create("Only"))

    items, total = await SampleEntityService.list_entities(skip=50, take=10)

    assert items == []
    assert total == 1


@pytest.mark.asyncio
async def test_list_filters_combine_with_and() -> None:
    await SampleEntityService.create_entity(_create("Alpha", category=SampleEntityType.premium))
    await SampleEntityService.create_entity(_create("Beta", category=SampleEntityType.premium, is_active=False))
    await SampleEntityService.create_entity(_create("Alpha Two", category=SampleEntityType.custom))

    items, total = await SampleEntityService.list_entities(
        skip=0, take=10, search="Alpha", is_active=True, category=SampleEntityType.premium
    )

    assert [item.name for item in items] == ["Alpha"]
    assert total == 1


@pytest.mark.asyncio
async def test_search_matches_description_case_insensitively() -> None:
    await SampleEntityService.create_entity(_create("First", description="Contains the KEYWORD here"))
    await SampleEntityService.create_entity(_create("Second", description=None))
    await SampleEntityService.create_entity(_create("keyword in name"))

    items, total = await SampleEntityService.list_entities(skip=0, take=10, search="keyword")

    assert {item.name for item in items} == {"First", "keyword in name"}
    assert total == 2


@pytest.mark.asyncio
async def test_search_treats_wildcards_literally() -> None:
    await SampleEntityService.create_entity(_create("100% cotton"))
    await SampleEntityService.create_entity(_create("plain"))
    await SampleEntityService.create_entity(_create("under_score"))

    percent, _ = await SampleEntityService.list_entities(skip=0, take=10, search="%")
    underscore, _ = await SampleEntityService.list_entities(skip=0, take=10, search="_")

    assert [item.name for item in percent] == ["100% cotton"]
    assert [item.name for item in underscore] == ["under_score"]


@pytest.mark.asyncio
async def test_blank_search_is_no_filter() -> None:
    await SampleEntityService.create_entity(_create("One"))
    await SampleEntityService.create_entity(_create("Two"))

    _, total = await SampleEntityService.list_entities(skip=0, take=10, search="   ")

    assert total == 2


@pytest.mark.asyncio
async def test_create_sets_timestamps_and_round_trips_fields() -> None:
    created = await SampleEntityService.create_entity(
        _create(
            "Complete",
            description="desc",
            value=Decimal("250.75"),
            category=SampleEntityType.enterprise,
            tags=["b", "a"],
            metadata={"nested": {"k": [1, 2]}, "flag": True},
        )
    )

    assert created.created_at == created.updated_at
    assert created.created_at.tzinfo is not None

    fetched = await SampleEntityService.get_entity(created.id)
    assert fetched == created
    assert fetched.value == Decimal("250.75")
    assert fetched.tags == ["b", "a"]
    assert fetched.metadata == {"nested": {"k": [1, 2]}, "flag": True}


@pytest.mark.asyncio
async def test_create_duplicate_name_conflicts_and_keeps_one_record() -> None:
    await SampleEntityService.create_entity(_create("Sample Item 1"))

    with pytest.raises(ConflictError) as excinfo:
        await SampleEntityService.create_entity(_create("Sample Item 1"))

    assert excinfo.value.name == "Sample Item 1"
    _, total = await SampleEntityService.list_entities(skip=0, take=10)
    assert total == 1


@pytest.mark.asyncio
async def test_concurrent_creates_with_same_name_yield_one_conflict() -> None:
    results = await asyncio.gather(
        SampleEntityService.create_entity(_create("Racer")),
        SampleEntityService.create_entity(_create("Racer")),
        return_exceptions=True,
    )

    conflicts = [r for r in results if isinstance(r, ConflictError)]
    assert len(conflicts) == 1
    _, total = await SampleEntityService.list_entities(skip=0, take=10)
    assert total == 1


@pytest.mark.asyncio
async def test_unique_constraint_catches_writes_that_pass_the_precheck(monkeypatch: pytest.MonkeyPatch) -> None:
    await SampleEntityService.create_entity(_create("Taken"))
    monkeypatch.setattr(sample_entity_repository, "name_exists", lambda name, exclude_id=None: False)

    with pytest.raises(ConflictError):
        await SampleEntityService.create_entity(_create("Taken"))


@pytest.mark.asyncio
async def test_get_unknown_id_returns_none() -> None:
    assert await SampleEntityService.get_entity(12345) is None


@pytest.mark.asyncio
async def test_update_replaces_all_fields_and_keeps_created_at() -> None:
    created = await SampleEntityService.create_entity(
        _create("Original", description="old", value=Decimal("5"), tags=["x"], metadata={"a": 1})
    )

    updated = await SampleEntityService.update_entity(
        created.id, _update("Renamed", is_active=False, category=SampleEntityType.custom)
    )

    assert updated is not None
    assert updated.name == "Renamed"
    assert updated.description is None
    assert updated.value is None
    assert updated.tags == []
    assert updated.metadata is None
    assert updated.is_active is False
    assert updated.category == SampleEntityType.custom
    assert updated.created_at == created.created_at
    assert updated.updated_at >= created.updated_at
    assert await SampleEntityService.get_entity(created.id) == updated


@pytest.mark.asyncio
async def test_update_to_own_name_does_not_conflict() -> None:
    created = await SampleEntityService.create_entity(_create("Same"))

    updated = await SampleEntityService.update_entity(created.id, _update("Same", description="changed"))

    assert updated is not None
    assert updated.description == "changed"


@pytest.mark.asyncio
async def test_update_to_other_records_name_conflicts() -> None:
    await SampleEntityService.create_entity(_create("First"))
    second = await SampleEntityService.create_entity(_create("Second"))

    with pytest.raises(ConflictError):
        await SampleEntityService.update_entity(second.id, _update("First"))

    unchanged = await SampleEntityService.get_entity(second.id)
    assert unchanged.name == "Second"


@pytest.mark.asyncio
async def test_update_unknown_id_is_not_an_upsert() -> None:
    assert await SampleEntityService.update_entity(999, _update("Ghost")) is None
    _, total = await SampleEntityService.list_entities(skip=0, take=10)
    assert total == 0


@pytest.mark.asyncio
async def test_delete_then_exists_is_false() -> None:
    created = await SampleEntityService.create_entity(_create("Doomed"))
    assert await SampleEntityService.entity_exists(created.id) is True

    assert await SampleEntityService.delete_entity(created.id) is True

    assert await SampleEntityService.entity_exists(created.id) is False
    assert await SampleEntityService.delete_entity(created.id) is False
