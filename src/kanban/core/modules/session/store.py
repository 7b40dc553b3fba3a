"""Session store: persisted session tokens."""

from datetime import datetime
from typing import Any, Protocol
from uuid import UUID

from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import DuplicateKeyError

from kanban.core.db import ConstraintViolation
from kanban.core.modules.session.models import Session


class SessionStore(Protocol):
    async def setup(self) -> None: ...

    async def insert(self, session: Session) -> None:
        """Persist a new session. Raises ConstraintViolation if the token is taken."""

    async def find_active(self, token: str, moment: datetime) -> Session | None:
        """Session with exactly this token whose expiry is strictly after ``moment``."""

    async def delete_by_token(self, token: str) -> bool: ...

    async def delete_by_passcode(self, passcode_id: UUID) -> int: ...

    async def delete_expired(self, moment: datetime) -> int: ...


class MongoSessionStore:
    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        self._collection = database.get_collection("sessions")

    async def setup(self) -> None:
        await self._collection.create_index([("token", 1)], unique=True)
        await self._collection.create_index([("passcode_id", 1)])
        # Background cleanup only; validity is always checked against expires_at on read
        await self._collection.create_index([("expires_at", 1)], expireAfterSeconds=0)

    async def insert(self, session: Session) -> None:
        try:
            await self._collection.insert_one(session.to_mongo())
        except DuplicateKeyError as e:
            raise ConstraintViolation("sessions.token") from e

    async def find_active(self, token: str, moment: datetime) -> Session | None:
        doc = await self._collection.find_one({"token": token, "expires_at": {"$gt": moment}})
        return None if doc is None else Session.model_validate(doc)

    async def delete_by_token(self, token: str) -> bool:
        result = await self._collection.delete_one({"token": token})
        return result.deleted_count > 0

    async def delete_by_passcode(self, passcode_id: UUID) -> int:
        result = await self._collection.delete_many({"passcode_id": passcode_id})
        return result.deleted_count

    async def delete_expired(self, moment: datetime) -> int:
        result = await self._collection.delete_many({"expires_at": {"$lte": moment}})
        return result.deleted_count


class MemorySessionStore:
    def __init__(self) -> None:
        self._sessions: dict[str, Session] = {}  # keyed by token

    async def setup(self) -> None:
        pass

    async def insert(self, session: Session) -> None:
        if session.token in self._sessions:
            raise ConstraintViolation("sessions.token")
        self._sessions[session.token] = session.model_copy()

    async def find_active(self, token: str, moment: datetime) -> Session | None:
        session = self._sessions.get(token)
        if session is None or not session.is_active(moment):
            return None
        return session.model_copy()

    async def delete_by_token(self, token: str) -> bool:
        return self._sessions.pop(token, None) is not None

    async def delete_by_passcode(self, passcode_id: UUID) -> int:
        tokens = [token for token, s in self._sessions.items() if s.passcode_id == passcode_id]
        for token in tokens:
            del self._sessions[token]
        return len(tokens)

    async def delete_expired(self, moment: datetime) -> int:
        tokens = [token for token, s in self._sessions.items() if not s.is_active(moment)]
        for token in tokens:
            del self._sessions[token]
        return len(tokens)


def create_session_store(database: AsyncDatabase[dict[str, Any]] | None) -> SessionStore:
    if database is None:
        return MemorySessionStore()
    return MongoSessionStore(database)
