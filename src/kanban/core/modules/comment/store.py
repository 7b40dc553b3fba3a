from typing import Any, Protocol
from uuid import UUID

from pymongo.asynchronous.database import AsyncDatabase

from kanban.core.modules.comment.models import Comment


class CommentStore(Protocol):
    async def setup(self) -> None: ...

    async def insert(self, comment: Comment) -> None: ...

    async def list_by_task(self, task_id: UUID) -> list[Comment]:
        """Comments of a task, oldest first."""

    async def delete(self, comment_id: UUID) -> bool: ...

    async def delete_by_task(self, task_id: UUID) -> int: ...


class MongoCommentStore:
    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        self._collection = database.get_collection("comments")

    async def setup(self) -> None:
        await self._collection.create_index([("task_id", 1), ("created_at", 1)])

    async def insert(self, comment: Comment) -> None:
        await self._collection.insert_one(comment.to_mongo())

    async def list_by_task(self, task_id: UUID) -> list[Comment]:
        return await Comment.list_cursor(self._collection.find({"task_id": task_id}).sort("created_at", 1))

    async def delete(self, comment_id: UUID) -> bool:
        result = await self._collection.delete_one({"_id": comment_id})
        return result.deleted_count > 0

    async def delete_by_task(self, task_id: UUID) -> int:
        result = await self._collection.delete_many({"task_id": task_id})
        return result.deleted_count


class MemoryCommentStore:
    def __init__(self) -> None:
        self._comments: dict[UUID, Comment] = {}

    async def setup(self) -> None:
        pass

    async def insert(self, comment: Comment) -> None:
        self._comments[comment.id] = comment.model_copy()

    async def list_by_task(self, task_id: UUID) -> list[Comment]:
        matching = [c for c in self._comments.values() if c.task_id == task_id]
        return [c.model_copy() for c in sorted(matching, key=lambda c: c.created_at)]

    async def delete(self, comment_id: UUID) -> bool:
        return self._comments.pop(comment_id, None) is not None

    async def delete_by_task(self, task_id: UUID) -> int:
        ids = [comment_id for comment_id, c in self._comments.items() if c.task_id == task_id]
        for comment_id in ids:
            del self._comments[comment_id]
        return len(ids)


def create_comment_store(database: AsyncDatabase[dict[str, Any]] | None) -> CommentStore:
    if database is None:
        return MemoryCommentStore()
    return MongoCommentStore(database)
