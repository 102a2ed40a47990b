"""
Task service layer
Validation, persistence and view invalidation for task operations
Reference: https://fastapi.tiangolo.com/tutorial/sql-databases/
"""
import logging
from dataclasses import dataclass
from typing import List, Optional, Union

from taskboard.core.events import InvalidationSignal
from taskboard.core.exceptions import (
    NotFoundError,
    PersistenceError,
    RecordNotFoundError,
    TaskError,
    ValidationError,
)
from taskboard.models.task import Priority, Task
from taskboard.repositories.task import TaskGateway

logger = logging.getLogger(__name__)

# The page that lists tasks; every mutation invalidates it
TASK_LIST_PATH = "/"

TITLE_MAX_LENGTH = 200
DESCRIPTION_MAX_LENGTH = 1000


@dataclass
class TaskResult:
    """
    Outcome of a task service operation

    Exactly one of task / error is meaningful: error is None on success.
    Delete has no task to return, so success there is just error is None.
    """
    task: Optional[Task] = None
    error: Optional[TaskError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _normalize(
    title: Optional[str],
    description: Optional[str],
    priority: Union[Priority, str, None],
) -> tuple[str, Optional[str], str]:
    """
    Trim and validate task fields

    Raises:
        ValidationError: If the title is blank or a field is out of range
    """
    title = (title or "").strip()
    if not title:
        raise ValidationError("Title is required")
    if len(title) > TITLE_MAX_LENGTH:
        raise ValidationError(f"Title must be at most {TITLE_MAX_LENGTH} characters")

    description = (description or "").strip() or None
    if description is not None and len(description) > DESCRIPTION_MAX_LENGTH:
        raise ValidationError(f"Description must be at most {DESCRIPTION_MAX_LENGTH} characters")

    if not priority:
        priority = Priority.MEDIUM
    try:
        priority = Priority(priority)
    except ValueError:
        allowed = ", ".join(p.value for p in Priority)
        raise ValidationError(f"Priority must be one of: {allowed}") from None

    return title, description, priority.value


class TaskService:
    """
    Service class for task-related business logic

    Operations never raise past this boundary: store failures are logged and
    returned as TaskResult errors. Every successful mutation emits an
    invalidation for the task list view.
    """

    def __init__(self, gateway: TaskGateway, signal: InvalidationSignal):
        self._gateway = gateway
        self._signal = signal

    def _invalidate(self) -> None:
        self._signal.emit(TASK_LIST_PATH)

    async def create(
        self,
        title: Optional[str],
        description: Optional[str] = None,
        priority: Union[Priority, str, None] = None,
    ) -> TaskResult:
        """
        Create a new task

        Args:
            title: Task title (required, trimmed)
            description: Optional description; blank is stored as None
            priority: Optional priority; falsy defaults to medium

        Returns:
            TaskResult with the created task, or a ValidationError / PersistenceError
        """
        try:
            title, description, priority = _normalize(title, description, priority)
        except ValidationError as e:
            return TaskResult(error=e)

        try:
            task = await self._gateway.insert_one(title, description, priority)
        except Exception as e:
            logger.error(f"Failed to create task: {type(e).__name__}: {e}", exc_info=True)
            return TaskResult(error=PersistenceError("Failed to create task"))

        logger.info(f"Created task {task.id} '{task.title}'")
        self._invalidate()
        return TaskResult(task=task)

    async def list(self) -> List[Task]:
        """
        Fetch all tasks, most recent first

        Returns:
            List of tasks, or an empty list if the store cannot be reached
        """
        try:
            return await self._gateway.find_all()
        except Exception as e:
            logger.error(f"Failed to fetch tasks: {type(e).__name__}: {e}", exc_info=True)
            return []

    async def get(self, task_id: int) -> TaskResult:
        """
        Fetch a single task

        Returns:
            TaskResult with the task, or a NotFoundError / PersistenceError
        """
        try:
            task = await self._gateway.find_one(task_id)
        except Exception as e:
            logger.error(f"Failed to fetch task {task_id}: {type(e).__name__}: {e}", exc_info=True)
            return TaskResult(error=PersistenceError("Failed to fetch task"))

        if task is None:
            return TaskResult(error=NotFoundError("Task not found"))
        return TaskResult(task=task)

    async def toggle_complete(self, task_id: int) -> TaskResult:
        """
        Flip the completion status of a task

        Returns:
            TaskResult with the updated task, or a NotFoundError / PersistenceError
        """
        try:
            task = await self._gateway.find_one(task_id)
            if task is None:
                return TaskResult(error=NotFoundError("Task not found"))
            task = await self._gateway.update_one(task_id, completed=not task.completed)
        except RecordNotFoundError:
            # Deleted between the read and the write
            return TaskResult(error=NotFoundError("Task not found"))
        except Exception as e:
            logger.error(f"Failed to toggle task {task_id}: {type(e).__name__}: {e}", exc_info=True)
            return TaskResult(error=PersistenceError("Failed to toggle task"))

        logger.info(f"Task {task_id} marked {'completed' if task.completed else 'pending'}")
        self._invalidate()
        return TaskResult(task=task)

    async def update(
        self,
        task_id: int,
        title: Optional[str],
        description: Optional[str] = None,
        priority: Union[Priority, str, None] = None,
    ) -> TaskResult:
        """
        Overwrite title, description and priority of a task

        The completed flag is left untouched.

        Returns:
            TaskResult with the updated task, or a ValidationError / PersistenceError
        """
        try:
            title, description, priority = _normalize(title, description, priority)
        except ValidationError as e:
            return TaskResult(error=e)

        try:
            task = await self._gateway.update_one(
                task_id,
                title=title,
                description=description,
                priority=priority,
            )
        except RecordNotFoundError:
            logger.warning(f"Failed to update task {task_id}: not found")
            return TaskResult(error=PersistenceError("Failed to update task", status_code=404))
        except Exception as e:
            logger.error(f"Failed to update task {task_id}: {type(e).__name__}: {e}", exc_info=True)
            return TaskResult(error=PersistenceError("Failed to update task"))

        logger.info(f"Updated task {task_id}")
        self._invalidate()
        return TaskResult(task=task)

    async def delete(self, task_id: int) -> TaskResult:
        """
        Permanently delete a task

        Returns:
            Empty TaskResult on success, or a PersistenceError
            (including when the task is already gone)
        """
        try:
            await self._gateway.delete_one(task_id)
        except RecordNotFoundError:
            logger.warning(f"Failed to delete task {task_id}: not found")
            return TaskResult(error=PersistenceError("Failed to delete task", status_code=404))
        except Exception as e:
            logger.error(f"Failed to delete task {task_id}: {type(e).__name__}: {e}", exc_info=True)
            return TaskResult(error=PersistenceError("Failed to delete task"))

        logger.info(f"Deleted task {task_id}")
        self._invalidate()
        return TaskResult()
