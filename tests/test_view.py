# tests/test_view.py

from __future__ import annotations

import pytest

from taskboard.core.events import InvalidationSignal
from taskboard.services.task import TaskService
from taskboard.ui.view import TaskListing, TaskListView

from .fakes import UnreachableGateway, make_task


def test_listing_partitions_preserving_order() -> None:
    tasks = [
        make_task(id=4, completed=False),
        make_task(id=3, completed=True),
        make_task(id=2, completed=False),
        make_task(id=1, completed=True),
    ]

    listing = TaskListing.from_tasks(tasks)

    assert [t.id for t in listing.pending] == [4, 2]
    assert [t.id for t in listing.completed] == [3, 1]
    assert listing.is_empty is False


def test_empty_listing() -> None:
    listing = TaskListing.from_tasks([])

    assert listing.is_empty
    assert listing.pending == []
    assert listing.completed == []


def test_all_completed_is_not_empty() -> None:
    listing = TaskListing.from_tasks([make_task(completed=True)])

    assert not listing.is_empty
    assert listing.pending == []


@pytest.mark.asyncio
async def test_load_reflects_mutations(service: TaskService, signal: InvalidationSignal) -> None:
    view = TaskListView(service, signal)
    first = (await service.create("first")).task
    await service.create("second")
    await service.toggle_complete(first.id)

    listing = await view.load()

    assert [t.title for t in listing.pending] == ["second"]
    assert [t.title for t in listing.completed] == ["first"]
    assert view.revision == 3


@pytest.mark.asyncio
async def test_close_stops_counting_revisions(service: TaskService, signal: InvalidationSignal) -> None:
    view = TaskListView(service, signal)
    view.close()

    await service.create("unseen")

    assert view.revision == 0


@pytest.mark.asyncio
async def test_unreachable_store_renders_empty() -> None:
    signal = InvalidationSignal()
    view = TaskListView(TaskService(UnreachableGateway(), signal), signal)

    listing = await view.load()

    assert listing.is_empty
