"""Task API routes.

Learn: Every route receives the AuthenticatedPrincipal. Single-task
routes always run the same sequence before doing anything:

    1. authenticate        (get_current_user → 401)
    2. locate the task     (missing or malformed id → 404)
    3. check ownership     (someone else's task → 403, no content)
    4. read / mutate

Listing and creation are implicitly scoped to the principal.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.auth.dependencies import AuthenticatedPrincipal, get_current_user
from taskboard.auth.ownership import require_owner
from taskboard.db.engine import get_db
from taskboard.db.models import Task
from taskboard.errors import NotFoundError
from taskboard.schemas.task import TaskCreate, TaskUpdate, task_payload
from taskboard.services.task_service import UNSET, TaskService

router = APIRouter(prefix="/tasks")


def _task_svc(db: AsyncSession = Depends(get_db)) -> TaskService:
    return TaskService(db)


async def _load_owned_task(
    task_id: str, principal: AuthenticatedPrincipal, svc: TaskService
) -> Task:
    task = await svc.get_task(task_id)
    if task is None:
        raise NotFoundError("Task not found")
    require_owner(principal, task.user_id)
    return task


@router.get("")
async def list_tasks(
    status: Optional[str] = Query(None, pattern=r"^(Pending|Completed)$"),
    search: Optional[str] = Query(None, max_length=200),
    principal: AuthenticatedPrincipal = Depends(get_current_user),
    svc: TaskService = Depends(_task_svc),
):
    """List the caller's own tasks, newest first."""
    tasks = await svc.list_tasks(principal.user_id, status=status, search=search)
    return {"success": True, "tasks": [task_payload(t) for t in tasks]}


@router.post("", status_code=201)
async def create_task(
    body: TaskCreate,
    principal: AuthenticatedPrincipal = Depends(get_current_user),
    svc: TaskService = Depends(_task_svc),
):
    """Create a new task in 'Pending' status owned by the caller."""
    task = await svc.create_task(
        user_id=principal.user_id,
        title=body.title,
        description=body.description,
        deadline=body.deadline,
    )
    return {"success": True, "task": task_payload(task)}


@router.get("/{task_id}")
async def get_task(
    task_id: str,
    principal: AuthenticatedPrincipal = Depends(get_current_user),
    svc: TaskService = Depends(_task_svc),
):
    task = await _load_owned_task(task_id, principal, svc)
    return {"success": True, "task": task_payload(task)}


@router.patch("/{task_id}")
async def update_task(
    task_id: str,
    body: TaskUpdate,
    principal: AuthenticatedPrincipal = Depends(get_current_user),
    svc: TaskService = Depends(_task_svc),
):
    """Partially update a task (title, description, status, deadline)."""
    task = await _load_owned_task(task_id, principal, svc)
    task = await svc.update_task(
        task,
        title=body.title,
        description=body.description,
        status=body.status,
        deadline=body.deadline if "deadline" in body.model_fields_set else UNSET,
    )
    return {"success": True, "task": task_payload(task)}


@router.delete("/{task_id}")
async def delete_task(
    task_id: str,
    principal: AuthenticatedPrincipal = Depends(get_current_user),
    svc: TaskService = Depends(_task_svc),
):
    task = await _load_owned_task(task_id, principal, svc)
    await svc.delete_task(task)
    return {"success": True}
