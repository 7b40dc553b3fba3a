from typing import Any
from uuid import UUID

import structlog
from pymongo.asynchronous.database import AsyncDatabase

from kanban.core.core import Service
from kanban.core.modules.comment.models import ANONYMOUS_AUTHOR, Comment
from kanban.core.modules.comment.store import create_comment_store
from kanban.errors import NotFoundError, ValidationError

logger = structlog.get_logger(__name__)


class CommentService(Service):
    """Manages comments on tasks."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]] | None) -> None:
        super().__init__(database)
        self._store = create_comment_store(database)

    async def on_start(self) -> None:
        await self._store.setup()

    async def get_task_comments(self, task_id: UUID) -> list[Comment]:
        await self.core.services.task.get_task(task_id)
        return await self._store.list_by_task(task_id)

    async def create_comment(self, task_id: UUID, content: str, author: str | None = None) -> Comment:
        content = content.strip()
        if not content:
            raise ValidationError("Content is required")
        await self.core.services.task.get_task(task_id)

        comment = Comment(task_id=task_id, content=content, author=(author or "").strip() or ANONYMOUS_AUTHOR)
        await self._store.insert(comment)
        logger.info("comment_created", comment_id=comment.id, task_id=task_id)
        return comment

    async def delete_comment(self, comment_id: UUID) -> None:
        if not await self._store.delete(comment_id):
            raise NotFoundError("Comment not found")
        logger.info("comment_deleted", comment_id=comment_id)

    async def delete_comments_by_task(self, task_id: UUID) -> int:
        """Delete all comments of a task and return how many were removed."""
        return await self._store.delete_by_task(task_id)
