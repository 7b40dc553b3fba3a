"""Outbound task change notifications."""

from datetime import datetime
from enum import StrEnum

from pydantic import Field

from kanban.core.api_model import ApiModel
from kanban.utils import now


class WebhookEvent(StrEnum):
    TASK_CREATED = "task.created"
    TASK_UPDATED = "task.updated"
    TASK_DELETED = "task.deleted"
    TASK_MOVED = "task.moved"  # Column changed


class WebhookTask(ApiModel):
    id: str
    title: str
    description: str | None = None
    priority: str
    column_id: str


class WebhookChanges(ApiModel):
    from_: str | None = Field(None, alias="from")
    to: str | None = None


class WebhookPayload(ApiModel):
    event: WebhookEvent
    timestamp: datetime = Field(default_factory=now)
    task: WebhookTask
    changes: WebhookChanges | None = None
