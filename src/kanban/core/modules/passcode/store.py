"""Credential store: persisted passcode records."""

from datetime import datetime
from typing import Any, Protocol
from uuid import UUID

from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import DuplicateKeyError

from kanban.core.db import ConstraintViolation
from kanban.core.modules.passcode.models import Passcode


class PasscodeStore(Protocol):
    async def setup(self) -> None: ...

    async def insert(self, passcode: Passcode) -> None:
        """Persist a new passcode. Raises ConstraintViolation if the code hash is taken."""

    async def get(self, passcode_id: UUID) -> Passcode | None: ...

    async def find_by_code_hash(self, code_hash: str) -> Passcode | None: ...

    async def list_all(self) -> list[Passcode]:
        """All passcodes, oldest first."""

    async def exists_any(self) -> bool: ...

    async def count_admins(self) -> int: ...

    async def touch(self, passcode_id: UUID, used_at: datetime) -> None: ...

    async def delete(self, passcode_id: UUID) -> bool:
        """Delete a passcode; returns False when no row matched."""


class MongoPasscodeStore:
    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        self._collection = database.get_collection("passcodes")

    async def setup(self) -> None:
        await self._collection.create_index([("code_hash", 1)], unique=True)
        await self._collection.create_index([("is_admin", 1)])

    async def insert(self, passcode: Passcode) -> None:
        try:
            await self._collection.insert_one(passcode.to_mongo())
        except DuplicateKeyError as e:
            raise ConstraintViolation("passcodes.code_hash") from e

    async def get(self, passcode_id: UUID) -> Passcode | None:
        doc = await self._collection.find_one({"_id": passcode_id})
        return None if doc is None else Passcode.model_validate(doc)

    async def find_by_code_hash(self, code_hash: str) -> Passcode | None:
        doc = await self._collection.find_one({"code_hash": code_hash})
        return None if doc is None else Passcode.model_validate(doc)

    async def list_all(self) -> list[Passcode]:
        return await Passcode.list_cursor(self._collection.find().sort("created_at", 1))

    async def exists_any(self) -> bool:
        return await self._collection.find_one({}, projection={"_id": 1}) is not None

    async def count_admins(self) -> int:
        return await self._collection.count_documents({"is_admin": True})

    async def touch(self, passcode_id: UUID, used_at: datetime) -> None:
        await self._collection.update_one({"_id": passcode_id}, {"$set": {"last_used_at": used_at}})

    async def delete(self, passcode_id: UUID) -> bool:
        result = await self._collection.delete_one({"_id": passcode_id})
        return result.deleted_count > 0


class MemoryPasscodeStore:
    def __init__(self) -> None:
        self._passcodes: dict[UUID, Passcode] = {}

    async def setup(self) -> None:
        pass

    async def insert(self, passcode: Passcode) -> None:
        if any(p.code_hash == passcode.code_hash for p in self._passcodes.values()):
            raise ConstraintViolation("passcodes.code_hash")
        self._passcodes[passcode.id] = passcode.model_copy()

    async def get(self, passcode_id: UUID) -> Passcode | None:
        passcode = self._passcodes.get(passcode_id)
        return None if passcode is None else passcode.model_copy()

    async def find_by_code_hash(self, code_hash: str) -> Passcode | None:
        passcode = next((p for p in self._passcodes.values() if p.code_hash == code_hash), None)
        return None if passcode is None else passcode.model_copy()

    async def list_all(self) -> list[Passcode]:
        return [p.model_copy() for p in sorted(self._passcodes.values(), key=lambda p: p.created_at)]

    async def exists_any(self) -> bool:
        return bool(self._passcodes)

    async def count_admins(self) -> int:
        return sum(1 for p in self._passcodes.values() if p.is_admin)

    async def touch(self, passcode_id: UUID, used_at: datetime) -> None:
        if passcode_id in self._passcodes:
            self._passcodes[passcode_id] = self._passcodes[passcode_id].model_copy(update={"last_used_at": used_at})

    async def delete(self, passcode_id: UUID) -> bool:
        return self._passcodes.pop(passcode_id, None) is not None


def create_passcode_store(database: AsyncDatabase[dict[str, Any]] | None) -> PasscodeStore:
    if database is None:
        return MemoryPasscodeStore()
    return MongoPasscodeStore(database)
