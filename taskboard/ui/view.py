"""
Task list view
Fetches the task collection and splits it into pending and completed groups
"""
import logging
from dataclasses import dataclass, field
from typing import List

from taskboard.core.events import InvalidationSignal
from taskboard.models.task import Task
from taskboard.services.task import TASK_LIST_PATH, TaskService

logger = logging.getLogger(__name__)


@dataclass
class TaskListing:
    """
    One render's worth of tasks

    Attributes:
        tasks: Every task, in list() order
        pending: Tasks not yet completed, in list() order
        completed: Completed tasks, in list() order
    """
    tasks: List[Task] = field(default_factory=list)
    pending: List[Task] = field(default_factory=list)
    completed: List[Task] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.tasks

    @classmethod
    def from_tasks(cls, tasks: List[Task]) -> "TaskListing":
        return cls(
            tasks=tasks,
            pending=[task for task in tasks if not task.completed],
            completed=[task for task in tasks if task.completed],
        )


class TaskListView:
    """
    Server-rendered task list

    Subscribes to invalidations of the list path and counts them as a
    revision number; the page embeds it so clients can tell whether the
    collection changed since their copy.
    """

    def __init__(self, service: TaskService, signal: InvalidationSignal):
        self._service = service
        self.revision = 0
        self._unsubscribe = signal.subscribe(TASK_LIST_PATH, self._on_invalidate)

    def _on_invalidate(self, path: str) -> None:
        self.revision += 1
        logger.debug(f"Task list view {path} invalidated (revision {self.revision})")

    def close(self) -> None:
        """Stop listening for invalidations"""
        self._unsubscribe()

    async def load(self) -> TaskListing:
        """
        Fetch the current tasks for one render

        list() already turns store failures into an empty result, so this
        never fails the page.
        """
        tasks = await self._service.list()
        return TaskListing.from_tasks(tasks)
