from typing import Any, Protocol
from uuid import UUID

from pymongo.asynchronous.database import AsyncDatabase

from kanban.core.modules.task.models import Task


class TaskStore(Protocol):
    async def setup(self) -> None: ...

    async def insert(self, task: Task) -> None: ...

    async def get(self, task_id: UUID) -> Task | None: ...

    async def list_all(self) -> list[Task]:
        """All tasks, oldest first."""

    async def update(self, task_id: UUID, changes: dict[str, Any]) -> Task | None:
        """Apply field changes and return the updated task, or None if it does not exist."""

    async def delete(self, task_id: UUID) -> bool: ...

    async def clear_epic(self, epic_id: UUID) -> int:
        """Detach every task from ``epic_id``; returns the number of tasks changed."""


class MongoTaskStore:
    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        self._collection = database.get_collection("tasks")

    async def setup(self) -> None:
        await self._collection.create_index([("column_id", 1)])
        await self._collection.create_index([("epic_id", 1)])
        await self._collection.create_index([("created_at", 1)])

    async def insert(self, task: Task) -> None:
        await self._collection.insert_one(task.to_mongo())

    async def get(self, task_id: UUID) -> Task | None:
        doc = await self._collection.find_one({"_id": task_id})
        return None if doc is None else Task.model_validate(doc)

    async def list_all(self) -> list[Task]:
        return await Task.list_cursor(self._collection.find().sort("created_at", 1))

    async def update(self, task_id: UUID, changes: dict[str, Any]) -> Task | None:
        if changes:
            await self._collection.update_one({"_id": task_id}, {"$set": changes})
        return await self.get(task_id)

    async def delete(self, task_id: UUID) -> bool:
        result = await self._collection.delete_one({"_id": task_id})
        return result.deleted_count > 0

    async def clear_epic(self, epic_id: UUID) -> int:
        result = await self._collection.update_many({"epic_id": epic_id}, {"$set": {"epic_id": None}})
        return result.modified_count


class MemoryTaskStore:
    def __init__(self) -> None:
        self._tasks: dict[UUID, Task] = {}

    async def setup(self) -> None:
        pass

    async def insert(self, task: Task) -> None:
        self._tasks[task.id] = task.model_copy(deep=True)

    async def get(self, task_id: UUID) -> Task | None:
        task = self._tasks.get(task_id)
        return None if task is None else task.model_copy(deep=True)

    async def list_all(self) -> list[Task]:
        return [t.model_copy(deep=True) for t in sorted(self._tasks.values(), key=lambda t: t.created_at)]

    async def update(self, task_id: UUID, changes: dict[str, Any]) -> Task | None:
        if task_id not in self._tasks:
            return None
        self._tasks[task_id] = Task.model_validate({**self._tasks[task_id].model_dump(), **changes})
        return await self.get(task_id)

    async def delete(self, task_id: UUID) -> bool:
        return self._tasks.pop(task_id, None) is not None

    async def clear_epic(self, epic_id: UUID) -> int:
        changed = 0
        for task_id, task in self._tasks.items():
            if task.epic_id == epic_id:
                self._tasks[task_id] = task.model_copy(update={"epic_id": None})
                changed += 1
        return changed


def create_task_store(database: AsyncDatabase[dict[str, Any]] | None) -> TaskStore:
    if database is None:
        return MemoryTaskStore()
    return MongoTaskStore(database)
