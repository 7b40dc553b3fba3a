from typing import Any, Protocol
from uuid import UUID

from pymongo.asynchronous.database import AsyncDatabase

from kanban.core.modules.epic.models import Epic


class EpicStore(Protocol):
    async def setup(self) -> None: ...

    async def insert(self, epic: Epic) -> None: ...

    async def get(self, epic_id: UUID) -> Epic | None: ...

    async def list_all(self) -> list[Epic]:
        """All epics ordered by position, then creation time."""

    async def max_position(self) -> int | None: ...

    async def update(self, epic_id: UUID, changes: dict[str, Any]) -> Epic | None: ...

    async def delete(self, epic_id: UUID) -> bool: ...


class MongoEpicStore:
    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        self._collection = database.get_collection("epics")

    async def setup(self) -> None:
        await self._collection.create_index([("position", 1), ("created_at", 1)])

    async def insert(self, epic: Epic) -> None:
        await self._collection.insert_one(epic.to_mongo())

    async def get(self, epic_id: UUID) -> Epic | None:
        doc = await self._collection.find_one({"_id": epic_id})
        return None if doc is None else Epic.model_validate(doc)

    async def list_all(self) -> list[Epic]:
        return await Epic.list_cursor(self._collection.find().sort([("position", 1), ("created_at", 1)]))

    async def max_position(self) -> int | None:
        doc = await self._collection.find_one({}, sort=[("position", -1)], projection={"position": 1})
        return None if doc is None else int(doc["position"])

    async def update(self, epic_id: UUID, changes: dict[str, Any]) -> Epic | None:
        if changes:
            await self._collection.update_one({"_id": epic_id}, {"$set": changes})
        return await self.get(epic_id)

    async def delete(self, epic_id: UUID) -> bool:
        result = await self._collection.delete_one({"_id": epic_id})
        return result.deleted_count > 0


class MemoryEpicStore:
    def __init__(self) -> None:
        self._epics: dict[UUID, Epic] = {}

    async def setup(self) -> None:
        pass

    async def insert(self, epic: Epic) -> None:
        self._epics[epic.id] = epic.model_copy()

    async def get(self, epic_id: UUID) -> Epic | None:
        epic = self._epics.get(epic_id)
        return None if epic is None else epic.model_copy()

    async def list_all(self) -> list[Epic]:
        ordered = sorted(self._epics.values(), key=lambda e: (e.position, e.created_at))
        return [e.model_copy() for e in ordered]

    async def max_position(self) -> int | None:
        return max((e.position for e in self._epics.values()), default=None)

    async def update(self, epic_id: UUID, changes: dict[str, Any]) -> Epic | None:
        if epic_id not in self._epics:
            return None
        self._epics[epic_id] = self._epics[epic_id].model_copy(update=changes)
        return await self.get(epic_id)

    async def delete(self, epic_id: UUID) -> bool:
        return self._epics.pop(epic_id, None) is not None


def create_epic_store(database: AsyncDatabase[dict[str, Any]] | None) -> EpicStore:
    if database is None:
        return MemoryEpicStore()
    return MongoEpicStore(database)
