"""
Task form
Collects title, description and priority and submits them to the task
service, in create mode (no task) or edit mode (existing task)
"""
import logging
from enum import Enum
from typing import Callable, Mapping, Optional

from taskboard.models.task import Priority, Task
from taskboard.services.task import TaskResult, TaskService

logger = logging.getLogger(__name__)

GENERIC_ERROR = "Something went wrong"
BUSY_LABEL = "Saving..."


class FormState(str, Enum):
    """Submission state of a task form."""

    IDLE = "idle"
    SUBMITTING = "submitting"
    ERROR = "error"


def _empty_values() -> dict[str, str]:
    return {"title": "", "description": "", "priority": Priority.MEDIUM.value}


class TaskForm:
    """
    Create/edit form for a single task

    States:
        idle -> submitting on submit (a second submit while submitting is ignored)
        submitting -> idle on success (create mode clears the fields, then on_success runs)
        submitting -> error when the service reports an error (fields keep their values)
        error -> submitting on the next submit
    """

    def __init__(
        self,
        service: TaskService,
        task: Optional[Task] = None,
        on_success: Optional[Callable[[], None]] = None,
    ):
        self._service = service
        self.task = task
        self.on_success = on_success
        self.state = FormState.IDLE
        self.error: Optional[str] = None
        self.values = _empty_values()
        if task is not None:
            self.values = {
                "title": task.title or "",
                "description": task.description or "",
                "priority": task.priority or Priority.MEDIUM.value,
            }

    @property
    def is_editing(self) -> bool:
        return self.task is not None

    @property
    def is_submitting(self) -> bool:
        return self.state is FormState.SUBMITTING

    @property
    def submit_label(self) -> str:
        if self.is_submitting:
            return BUSY_LABEL
        return "Update Task" if self.is_editing else "Add Task"

    async def submit(self, data: Mapping[str, Optional[str]]) -> Optional[TaskResult]:
        """
        Submit entered values to the task service

        Args:
            data: Submitted fields (title, description, priority)

        Returns:
            The service result, or None when the submit was ignored or
            failed unexpectedly
        """
        if self.is_submitting:
            logger.debug("Ignoring submit while a submission is in flight")
            return None

        self._take(data)
        self.error = None
        self.state = FormState.SUBMITTING

        try:
            if self.is_editing:
                result = await self._service.update(
                    self.task.id,
                    self.values["title"],
                    self.values["description"],
                    self.values["priority"],
                )
            else:
                result = await self._service.create(
                    self.values["title"],
                    self.values["description"],
                    self.values["priority"],
                )
        except Exception as e:
            logger.error(f"Task form submission failed: {type(e).__name__}: {e}", exc_info=True)
            self.error = GENERIC_ERROR
            self.state = FormState.ERROR
            return None

        if not result.ok:
            self.error = result.error.message
            self.state = FormState.ERROR
            return result

        if not self.is_editing:
            self.values = _empty_values()
        self.state = FormState.IDLE
        if self.on_success is not None:
            self.on_success()
        return result

    def reject(self, data: Mapping[str, Optional[str]], message: str) -> None:
        """Show an error without submitting, keeping the entered values"""
        self._take(data)
        self.error = message
        self.state = FormState.ERROR

    def _take(self, data: Mapping[str, Optional[str]]) -> None:
        self.values = {
            "title": data.get("title") or "",
            "description": data.get("description") or "",
            "priority": data.get("priority") or Priority.MEDIUM.value,
        }
