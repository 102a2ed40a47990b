"""
Task API routes
CRUD endpoints for task management
Reference: https://fastapi.tiangolo.com/tutorial/sql-databases/
"""
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Response, status

from taskboard.api.v1.schemas.task import TaskCreate, TaskUpdate, TaskResponse
from taskboard.core.dependencies import get_task_service, get_task_view
from taskboard.services.task import TaskResult, TaskService
from taskboard.ui.view import TaskListView


# Create router for task endpoints
router = APIRouter(
    prefix="/tasks",
    tags=["tasks"],  # Groups endpoints in API documentation
    responses={
        404: {"description": "Task not found"},
        500: {"description": "Internal server error"}
    }
)


def _raise_for_error(result: TaskResult) -> None:
    """Turn a failed service result into the matching HTTP error"""
    if not result.ok:
        raise HTTPException(
            status_code=result.error.status_code,
            detail=result.error.message,
        )


@router.get(
    "",
    response_model=List[TaskResponse],
    summary="List tasks",
    description="Retrieve every task, most recent first",
    status_code=status.HTTP_200_OK
)
async def get_tasks(
    response: Response,
    service: TaskService = Depends(get_task_service),
    view: TaskListView = Depends(get_task_view),
) -> List[TaskResponse]:
    """
    Get all tasks

    The X-Tasks-Revision header counts task list changes since startup.

    Returns:
        List of TaskResponse objects (empty if the store is unavailable)
    """
    response.headers["X-Tasks-Revision"] = str(view.revision)
    return await service.list()


@router.get(
    "/{task_id}",
    response_model=TaskResponse,
    summary="Get task by ID",
    description="Retrieve a single task by its ID",
    status_code=status.HTTP_200_OK,
    responses={
        404: {"description": "Task not found"}
    }
)
async def get_task(
    task_id: int,
    service: TaskService = Depends(get_task_service),
) -> TaskResponse:
    """
    Get a single task by ID

    Raises:
        HTTPException: If task is not found
    """
    result = await service.get(task_id)
    _raise_for_error(result)
    return result.task


@router.post(
    "",
    response_model=TaskResponse,
    summary="Create task",
    description="Create a new task",
    status_code=status.HTTP_201_CREATED,
    responses={
        422: {"description": "Title is missing or a field is invalid"}
    }
)
async def create_task(
    task_data: TaskCreate,
    service: TaskService = Depends(get_task_service),
) -> TaskResponse:
    """
    Create a new task

    Raises:
        HTTPException: 422 on validation error, 500 if the store fails
    """
    result = await service.create(task_data.title, task_data.description, task_data.priority)
    _raise_for_error(result)
    return result.task


@router.put(
    "/{task_id}",
    response_model=TaskResponse,
    summary="Update task",
    description="Overwrite title, description and priority of a task",
    status_code=status.HTTP_200_OK,
    responses={
        404: {"description": "Task not found"},
        422: {"description": "Title is missing or a field is invalid"}
    }
)
async def update_task(
    task_id: int,
    task_data: TaskUpdate,
    service: TaskService = Depends(get_task_service),
) -> TaskResponse:
    """
    Update an existing task

    The completed flag is not changed; use the toggle endpoint for that.

    Raises:
        HTTPException: If task is not found or the input is invalid
    """
    result = await service.update(task_id, task_data.title, task_data.description, task_data.priority)
    _raise_for_error(result)
    return result.task


@router.post(
    "/{task_id}/toggle",
    response_model=TaskResponse,
    summary="Toggle task completion",
    description="Flip the completed flag of a task",
    status_code=status.HTTP_200_OK,
    responses={
        404: {"description": "Task not found"}
    }
)
async def toggle_task(
    task_id: int,
    service: TaskService = Depends(get_task_service),
) -> TaskResponse:
    """
    Toggle a task between pending and completed

    Raises:
        HTTPException: If task is not found
    """
    result = await service.toggle_complete(task_id)
    _raise_for_error(result)
    return result.task


@router.delete(
    "/{task_id}",
    summary="Delete task",
    description="Delete a task by ID",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={
        404: {"description": "Task not found"},
        204: {"description": "Task deleted successfully"}
    }
)
async def delete_task(
    task_id: int,
    service: TaskService = Depends(get_task_service),
):
    """
    Delete a task

    Raises:
        HTTPException: If task is not found
    """
    result = await service.delete(task_id)
    _raise_for_error(result)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
