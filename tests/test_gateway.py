# tests/test_gateway.py

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from taskboard.core.exceptions import RecordNotFoundError
from taskboard.repositories.task import TaskGateway


@pytest.mark.asyncio
async def test_insert_one_assigns_id_and_timestamps(gateway: TaskGateway) -> None:
    task = await gateway.insert_one("Write tests", None, "high")

    assert task.id is not None
    assert task.completed is False
    assert task.priority == "high"
    assert task.created_at is not None
    assert task.updated_at is not None


@pytest.mark.asyncio
async def test_find_one_returns_none_for_missing_id(gateway: TaskGateway) -> None:
    assert await gateway.find_one(404) is None


@pytest.mark.asyncio
async def test_update_one_sets_only_given_fields(gateway: TaskGateway) -> None:
    task = await gateway.insert_one("Original", "notes", "low")

    updated = await gateway.update_one(task.id, completed=True)

    assert updated.completed is True
    assert updated.title == "Original"
    assert updated.description == "notes"
    assert updated.updated_at >= updated.created_at


@pytest.mark.asyncio
async def test_update_and_delete_missing_id_raise(gateway: TaskGateway) -> None:
    with pytest.raises(RecordNotFoundError):
        await gateway.update_one(7, title="nope")
    with pytest.raises(RecordNotFoundError):
        await gateway.delete_one(7)


@pytest.mark.asyncio
async def test_ids_are_not_reused_after_delete(gateway: TaskGateway) -> None:
    await gateway.insert_one("one", None, "medium")
    second = await gateway.insert_one("two", None, "medium")

    await gateway.delete_one(second.id)
    third = await gateway.insert_one("three", None, "medium")

    assert third.id > second.id


@pytest.mark.asyncio
async def test_find_all_orders_newest_first(gateway: TaskGateway) -> None:
    ids = [(await gateway.insert_one(f"task {n}", None, "medium")).id for n in range(4)]

    tasks = await gateway.find_all()

    assert [t.id for t in tasks] == list(reversed(ids))


@pytest.mark.asyncio
async def test_find_all_orders_by_created_at_not_id(gateway: TaskGateway) -> None:
    first, second, third = [
        (await gateway.insert_one(title, None, "medium")).id for title in ("march", "january", "february")
    ]
    await gateway.update_one(first, created_at=datetime(2024, 3, 1, tzinfo=timezone.utc))
    await gateway.update_one(second, created_at=datetime(2024, 1, 1, tzinfo=timezone.utc))
    await gateway.update_one(third, created_at=datetime(2024, 2, 1, tzinfo=timezone.utc))

    tasks = await gateway.find_all()

    assert [t.title for t in tasks] == ["march", "february", "january"]
    assert [t.id for t in tasks] == [first, third, second]


@pytest.mark.asyncio
async def test_ping(gateway: TaskGateway) -> None:
    await gateway.ping()
