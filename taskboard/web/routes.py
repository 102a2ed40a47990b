"""
Page routes
Server-rendered task page: header, add control and the task list.
Mutations are plain HTML form posts answered with 303 redirects back to /.
Each form carries a one-time token so repeated posts are dropped.
Reference: https://fastapi.tiangolo.com/advanced/templates/
"""
import logging
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Depends, Form, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from taskboard.core.dependencies import get_submission_guard, get_task_service, get_task_view
from taskboard.models.task import Priority
from taskboard.services.task import TASK_LIST_PATH, TaskService
from taskboard.ui.form import BUSY_LABEL, TaskForm
from taskboard.ui.row import TaskRow
from taskboard.ui.view import TaskListView
from taskboard.web.guard import SubmissionGuard

logger = logging.getLogger(__name__)

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))

router = APIRouter(tags=["pages"], include_in_schema=False)

EXPIRED_FORM = "This form has expired, please submit it again"


def _back_to_list() -> RedirectResponse:
    # 303 so the browser follows up with a GET
    return RedirectResponse(TASK_LIST_PATH, status_code=status.HTTP_303_SEE_OTHER)


async def _render_page(
    request: Request,
    service: TaskService,
    view: TaskListView,
    add_form: Optional[TaskForm] = None,
    edit_id: Optional[int] = None,
    edit_row: Optional[TaskRow] = None,
    status_code: int = status.HTTP_200_OK,
) -> HTMLResponse:
    """
    Render the task page

    Args:
        add_form: Open add form (None shows the "Add New Task" button)
        edit_id: Task to show in edit mode with a fresh form
        edit_row: Row already in edit mode (e.g. after a failed update)
    """
    listing = await view.load()

    def build_row(task) -> TaskRow:
        if edit_row is not None and edit_row.task.id == task.id:
            return edit_row
        row = TaskRow(task, service)
        if edit_id is not None and task.id == edit_id:
            row.start_editing()
        return row

    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "title": request.app.title,
            "add_form": add_form,
            "is_empty": listing.is_empty,
            "pending_rows": [build_row(task) for task in listing.pending],
            "completed_rows": [build_row(task) for task in listing.completed],
            "priorities": [p.value for p in Priority],
            "revision": view.revision,
            "new_token": request.app.state.submission_guard.issue,
            "busy_label": BUSY_LABEL,
        },
        status_code=status_code,
    )


@router.get("/", response_class=HTMLResponse)
async def index(
    request: Request,
    adding: bool = False,
    edit: Optional[int] = None,
    service: TaskService = Depends(get_task_service),
    view: TaskListView = Depends(get_task_view),
) -> HTMLResponse:
    """Task page; ?adding=1 opens the add form, ?edit=<id> edits a row"""
    add_form = TaskForm(service) if adding else None
    return await _render_page(request, service, view, add_form=add_form, edit_id=edit)


@router.post("/tasks")
async def create_task(
    request: Request,
    title: str = Form(""),
    description: str = Form(""),
    priority: str = Form(""),
    form_token: str = Form(""),
    service: TaskService = Depends(get_task_service),
    view: TaskListView = Depends(get_task_view),
    guard: SubmissionGuard = Depends(get_submission_guard),
):
    """Submit the add form"""
    data = {"title": title, "description": description, "priority": priority}
    form = TaskForm(service)
    if not form_token:
        form.reject(data, EXPIRED_FORM)
    elif not guard.claim(form_token):
        # Repeat of a submission already being handled
        return _back_to_list()
    else:
        await form.submit(data)

    if form.error is not None:
        return await _render_page(
            request, service, view, add_form=form, status_code=status.HTTP_400_BAD_REQUEST
        )
    return _back_to_list()


@router.post("/tasks/{task_id}/edit")
async def update_task(
    request: Request,
    task_id: int,
    title: str = Form(""),
    description: str = Form(""),
    priority: str = Form(""),
    form_token: str = Form(""),
    service: TaskService = Depends(get_task_service),
    view: TaskListView = Depends(get_task_view),
    guard: SubmissionGuard = Depends(get_submission_guard),
):
    """Submit a row's edit form"""
    result = await service.get(task_id)
    if not result.ok:
        return _back_to_list()

    data = {"title": title, "description": description, "priority": priority}
    row = TaskRow(result.task, service)
    form = row.start_editing()
    if not form_token:
        form.reject(data, EXPIRED_FORM)
    elif not guard.claim(form_token):
        return _back_to_list()
    else:
        await form.submit(data)

    if row.is_editing:
        # on_success was not called; keep the row open with the error banner
        return await _render_page(
            request, service, view, edit_row=row, status_code=status.HTTP_400_BAD_REQUEST
        )
    return _back_to_list()


@router.post("/tasks/{task_id}/toggle")
async def toggle_task(
    task_id: int,
    form_token: str = Form(""),
    service: TaskService = Depends(get_task_service),
    guard: SubmissionGuard = Depends(get_submission_guard),
):
    """Toggle a row's completion; repeats and failures leave the list as it was"""
    if not guard.claim(form_token):
        return _back_to_list()
    result = await service.get(task_id)
    if result.ok:
        await TaskRow(result.task, service).toggle()
    return _back_to_list()


@router.get("/tasks/{task_id}/delete", response_class=HTMLResponse)
async def confirm_delete(
    request: Request,
    task_id: int,
    service: TaskService = Depends(get_task_service),
    guard: SubmissionGuard = Depends(get_submission_guard),
):
    """Ask the user to confirm a delete"""
    result = await service.get(task_id)
    if not result.ok:
        return _back_to_list()
    return templates.TemplateResponse(
        request,
        "confirm_delete.html",
        {"title": request.app.title, "task": result.task, "new_token": guard.issue},
    )


@router.post("/tasks/{task_id}/delete")
async def delete_task(
    task_id: int,
    confirm: str = Form(""),
    form_token: str = Form(""),
    service: TaskService = Depends(get_task_service),
    guard: SubmissionGuard = Depends(get_submission_guard),
):
    """Delete a task once the confirmation form says yes"""
    if not guard.claim(form_token):
        return _back_to_list()
    result = await service.get(task_id)
    if result.ok:
        await TaskRow(result.task, service).delete(lambda: confirm == "yes")
    return _back_to_list()
