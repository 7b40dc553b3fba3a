from datetime import datetime
from enum import StrEnum
from uuid import UUID

from pydantic import Field

from kanban.core.api_model import ApiModel
from kanban.core.db import MongoModel
from kanban.utils import now


class TaskPriority(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ColumnId(StrEnum):
    """Board columns, left to right."""

    BACKLOG = "backlog"
    IN_PROGRESS = "in-progress"
    REVIEW = "review"
    DONE = "done"


class Task(MongoModel):
    """Card on the board."""

    title: str
    description: str | None = None
    priority: TaskPriority = TaskPriority.MEDIUM
    column_id: ColumnId = ColumnId.BACKLOG
    epic_id: UUID | None = None  # Cleared when the epic is deleted
    pr_url: str | None = None
    image_urls: list[str] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=now)


class TaskView(ApiModel):
    id: UUID
    title: str
    description: str | None
    priority: TaskPriority
    column_id: ColumnId
    epic_id: UUID | None
    pr_url: str | None
    image_urls: list[str]
    created_at: datetime

    @classmethod
    def from_domain(cls, task: Task) -> "TaskView":
        return cls(**task.model_dump())
