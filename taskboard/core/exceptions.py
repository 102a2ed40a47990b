class RecordNotFoundError(Exception):
    """
    Raised by the persistence gateway when the target row does not exist
    """
    def __init__(self, task_id: int):
        self.task_id = task_id
        super().__init__(f"Task with ID {task_id} not found")


class TaskError(Exception):
    """
    Base class for failures reported by the task service

    The message is safe to show to users; status_code is the HTTP status
    the JSON API answers with.
    """
    status_code: int = 500

    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class ValidationError(TaskError):
    """
    Exception raised when user input is empty or invalid
    """
    status_code = 422


class NotFoundError(TaskError):
    """
    Exception raised when an operation targets a task id that does not exist
    """
    status_code = 404


class PersistenceError(TaskError):
    """
    Exception raised when a store operation fails for any reason
    """
    status_code = 500
