"""Task service — CRUD for personal to-do items.

Learn: Every query here is scoped by owner or returns a single row for
the caller to ownership-check. The route layer enforces the fixed order:
authenticate → get_task → 404 if absent → 403 if not owned → mutate.
Mutating methods therefore take an already-loaded Task, never a bare id.
"""

import uuid
from datetime import datetime
from typing import Any, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.db.models import Task
from taskboard.errors import collaborator_errors

# Marks a field the caller did not supply, as opposed to an explicit None.
UNSET: Any = object()


class TaskService:
    """Business logic for task CRUD."""

    def __init__(self, db: AsyncSession):
        self.db = db

    # ─── Create ──────────────────────────────────────────

    async def create_task(
        self,
        user_id: str,
        title: str,
        description: str = "",
        deadline: Optional[datetime] = None,
    ) -> Task:
        """Create a new task in 'Pending' status, owned by user_id."""
        task = Task(
            user_id=uuid.UUID(str(user_id)),
            title=title,
            description=description,
            status="Pending",
            deadline=deadline,
        )
        with collaborator_errors("task insert"):
            self.db.add(task)
            await self.db.commit()
            await self.db.refresh(task)
        return task

    # ─── Read ────────────────────────────────────────────

    async def get_task(self, task_id: str) -> Optional[Task]:
        """Fetch one task by id. A malformed id is simply not found."""
        try:
            key = uuid.UUID(str(task_id))
        except ValueError:
            return None
        with collaborator_errors("task lookup"):
            return await self.db.get(Task, key)

    async def list_tasks(
        self,
        user_id: str,
        status: Optional[str] = None,
        search: Optional[str] = None,
    ) -> list[Task]:
        """List a user's tasks, newest first.

        Learn: Filters are applied only when given. `search` is a
        case-insensitive substring match on the title.
        """
        query = (
            select(Task)
            .where(Task.user_id == uuid.UUID(str(user_id)))
            .order_by(Task.created_at.desc())
        )
        if status:
            query = query.where(Task.status == status)
        if search:
            query = query.where(Task.title.icontains(search, autoescape=True))
        with collaborator_errors("task list"):
            result = await self.db.execute(query)
            return list(result.scalars().all())

    # ─── Update / Delete ─────────────────────────────────

    async def update_task(
        self,
        task: Task,
        title: Optional[str] = None,
        description: Optional[str] = None,
        status: Optional[str] = None,
        deadline: Optional[datetime] = UNSET,
    ) -> Task:
        """Partially update a task.

        Title, description and status change only when not None. The
        deadline changes whenever it is supplied, so None clears it.
        """
        if title is not None:
            task.title = title
        if description is not None:
            task.description = description
        if status is not None:
            task.status = status
        if deadline is not UNSET:
            task.deadline = deadline
        with collaborator_errors("task update"):
            await self.db.commit()
            await self.db.refresh(task)
        return task

    async def delete_task(self, task: Task) -> None:
        with collaborator_errors("task delete"):
            await self.db.delete(task)
            await self.db.commit()
