"""
Request dependencies
Hand the objects built once by create_app() to route handlers
Reference: https://fastapi.tiangolo.com/tutorial/dependencies/
"""
from fastapi import Request

from taskboard.repositories.task import TaskGateway
from taskboard.services.task import TaskService
from taskboard.ui.view import TaskListView
from taskboard.web.guard import SubmissionGuard


def get_task_service(request: Request) -> TaskService:
    """
    Dependency that provides the application's TaskService

    Usage:
        @router.get("/tasks")
        async def list_tasks(service: TaskService = Depends(get_task_service)):
            return await service.list()
    """
    return request.app.state.task_service


def get_task_gateway(request: Request) -> TaskGateway:
    return request.app.state.task_gateway


def get_task_view(request: Request) -> TaskListView:
    return request.app.state.task_view


def get_submission_guard(request: Request) -> SubmissionGuard:
    return request.app.state.submission_guard
