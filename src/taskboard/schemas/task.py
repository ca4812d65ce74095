"""Pydantic schemas for tasks.

Learn: Separate schemas for create/update/read keeps the API clean.
- TaskCreate: what you POST to create a task (always starts Pending)
- TaskUpdate: what you PATCH to modify a task (all optional)
- TaskRead: what the API returns
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

_STATUS_PATTERN = r"^(Pending|Completed)$"


class TaskCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=500)
    description: str = Field(default="")
    deadline: Optional[datetime] = None


class TaskUpdate(BaseModel):
    """Partial update. An explicit null deadline clears it; other nulls are ignored."""
    title: Optional[str] = Field(None, min_length=1, max_length=500)
    description: Optional[str] = None
    status: Optional[str] = Field(None, pattern=_STATUS_PATTERN)
    deadline: Optional[datetime] = None


class TaskRead(BaseModel):
    id: uuid.UUID
    user_id: uuid.UUID
    title: str
    description: str
    status: str
    deadline: Optional[datetime]
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )


def task_payload(task) -> dict:
    return TaskRead.model_validate(task).model_dump(mode="json", by_alias=True)
