from typing import Any
from uuid import UUID

import structlog
from pydantic import ValidationError as PydanticValidationError
from pymongo.asynchronous.database import AsyncDatabase

from kanban.core.core import Service
from kanban.core.modules.task.models import ColumnId, Task, TaskPriority
from kanban.core.modules.task.store import create_task_store
from kanban.core.modules.webhook.models import WebhookEvent
from kanban.errors import NotFoundError, ValidationError

logger = structlog.get_logger(__name__)

EDITABLE_FIELDS = frozenset({"title", "description", "priority", "column_id", "epic_id", "pr_url", "image_urls"})


class TaskService(Service):
    """Manages board tasks and announces changes to the webhook."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]] | None) -> None:
        super().__init__(database)
        self._store = create_task_store(database)

    async def on_start(self) -> None:
        await self._store.setup()

    async def list_tasks(self) -> list[Task]:
        return await self._store.list_all()

    async def get_task(self, task_id: UUID) -> Task:
        task = await self._store.get(task_id)
        if task is None:
            raise NotFoundError("Task not found")
        return task

    async def create_task(
        self,
        title: str,
        description: str | None = None,
        priority: TaskPriority = TaskPriority.MEDIUM,
        column_id: ColumnId = ColumnId.BACKLOG,
        epic_id: UUID | None = None,
        pr_url: str | None = None,
        image_urls: list[str] | None = None,
    ) -> Task:
        title = title.strip()
        if not title:
            raise ValidationError("Title is required")
        if epic_id is not None:
            await self.core.services.epic.get_epic(epic_id)

        task = Task(
            title=title,
            description=description or None,
            priority=priority,
            column_id=column_id,
            epic_id=epic_id,
            pr_url=pr_url or None,
            image_urls=image_urls or [],
        )
        await self._store.insert(task)
        logger.info("task_created", task_id=task.id, column_id=task.column_id)
        self.core.services.webhook.notify(WebhookEvent.TASK_CREATED, task)
        return task

    async def update_task(self, task_id: UUID, changes: dict[str, Any]) -> Task:
        """Partially update a task. Keys absent from ``changes`` are left untouched.

        A column change is announced as ``task.moved``, anything else as ``task.updated``.
        """
        unknown = set(changes) - EDITABLE_FIELDS
        if unknown:
            raise ValidationError(f"Unknown task fields: {', '.join(sorted(unknown))}")

        current = await self.get_task(task_id)
        if "title" in changes:
            changes["title"] = (changes["title"] or "").strip()
            if not changes["title"]:
                raise ValidationError("Title is required")
        if changes.get("epic_id") is not None:
            await self.core.services.epic.get_epic(changes["epic_id"])
        if changes.get("image_urls") is None and "image_urls" in changes:
            changes["image_urls"] = []

        # Validate through the model so enum values and types are checked before the write
        try:
            merged = Task.model_validate({**current.model_dump(), **changes})
        except PydanticValidationError as e:
            raise ValidationError(f"Invalid task fields: {e.error_count()} error(s)") from e
        to_write = {key: getattr(merged, key) for key in changes}

        updated = await self._store.update(task_id, to_write)
        if updated is None:
            raise NotFoundError("Task not found")

        if updated.column_id != current.column_id:
            logger.info("task_moved", task_id=task_id, from_column=current.column_id, to_column=updated.column_id)
            self.core.services.webhook.notify(
                WebhookEvent.TASK_MOVED, updated, from_column=current.column_id, to_column=updated.column_id
            )
        else:
            logger.info("task_updated", task_id=task_id, fields=sorted(changes))
            self.core.services.webhook.notify(WebhookEvent.TASK_UPDATED, updated)
        return updated

    async def delete_task(self, task_id: UUID) -> None:
        """Delete a task together with its comments."""
        task = await self.get_task(task_id)
        await self._store.delete(task_id)
        removed_comments = await self.core.services.comment.delete_comments_by_task(task_id)
        logger.info("task_deleted", task_id=task_id, removed_comments=removed_comments)
        self.core.services.webhook.notify(WebhookEvent.TASK_DELETED, task)

    async def detach_epic(self, epic_id: UUID) -> int:
        return await self._store.clear_epic(epic_id)
