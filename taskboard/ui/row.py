"""
Task row
Per-task completion toggle (optimistic), edit mode and confirmed delete
"""
import inspect
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, Union

from taskboard.models.task import Task
from taskboard.services.task import TaskService
from taskboard.ui.form import TaskForm

logger = logging.getLogger(__name__)

Confirm = Callable[[], Union[bool, Awaitable[bool]]]

# Badge classes per priority, used by the row template
PRIORITY_BADGES = {
    "low": "badge-low",
    "medium": "badge-medium",
    "high": "badge-high",
}


@dataclass
class ToggleState:
    """
    Optimistic completion flag

    Attributes:
        confirmed: Last value the store acknowledged
        optimistic: Value currently displayed
        in_flight: A toggle is waiting for the store
    """
    confirmed: bool
    optimistic: bool
    in_flight: bool = False

    @classmethod
    def start(cls, completed: bool) -> "ToggleState":
        return cls(confirmed=completed, optimistic=completed)

    def begin(self) -> bool:
        """Flip the displayed value; False if a toggle is already in flight"""
        if self.in_flight:
            return False
        self.optimistic = not self.confirmed
        self.in_flight = True
        return True

    def commit(self) -> None:
        self.confirmed = self.optimistic
        self.in_flight = False

    def rollback(self) -> None:
        self.optimistic = self.confirmed
        self.in_flight = False


class TaskRow:
    """
    Interactive element for one task

    Display properties read the optimistic completion flag, so a row looks
    toggled as soon as the user acts, until the next full list refresh.
    """

    def __init__(self, task: Task, service: TaskService):
        self.task = task
        self._service = service
        self.toggle_state = ToggleState.start(task.completed)
        self.form: Optional[TaskForm] = None
        self.deleting = False
        self.error: Optional[str] = None

    @property
    def completed(self) -> bool:
        return self.toggle_state.optimistic

    @property
    def css_classes(self) -> str:
        return "task task-completed" if self.completed else "task"

    @property
    def checkmark(self) -> str:
        return "✓" if self.completed else ""

    @property
    def priority_badge(self) -> str:
        return PRIORITY_BADGES.get(self.task.priority, "badge-medium")

    @property
    def is_editing(self) -> bool:
        return self.form is not None

    async def toggle(self) -> bool:
        """
        Optimistically flip completion and persist it

        Returns:
            True if the store accepted the toggle; False if it was ignored
            (another toggle in flight) or failed and was rolled back
        """
        if not self.toggle_state.begin():
            logger.debug(f"Ignoring toggle of task {self.task.id}: already in flight")
            return False

        self.error = None
        try:
            result = await self._service.toggle_complete(self.task.id)
        except Exception as e:
            logger.error(f"Toggle of task {self.task.id} failed: {type(e).__name__}: {e}", exc_info=True)
            self.toggle_state.rollback()
            self.error = "Failed to toggle task"
            return False

        if not result.ok:
            logger.warning(f"Toggle of task {self.task.id} rolled back: {result.error.message}")
            self.toggle_state.rollback()
            self.error = result.error.message
            return False

        self.toggle_state.commit()
        return True

    def start_editing(self) -> TaskForm:
        """Switch into edit mode with a form pre-filled from this task"""
        self.form = TaskForm(self._service, task=self.task, on_success=self.stop_editing)
        return self.form

    def stop_editing(self) -> None:
        self.form = None

    async def delete(self, confirm: Confirm) -> bool:
        """
        Delete the task after the user confirms

        Args:
            confirm: Yes/no prompt; may be a plain or async callable

        Returns:
            True if the task was deleted
        """
        if self.deleting:
            return False

        answer = confirm()
        if inspect.isawaitable(answer):
            answer = await answer
        if not answer:
            return False

        self.deleting = True
        self.error = None
        try:
            result = await self._service.delete(self.task.id)
        except Exception as e:
            logger.error(f"Delete of task {self.task.id} failed: {type(e).__name__}: {e}", exc_info=True)
            self.deleting = False
            self.error = "Failed to delete task"
            return False

        if not result.ok:
            self.deleting = False
            self.error = result.error.message
            return False
        return True
