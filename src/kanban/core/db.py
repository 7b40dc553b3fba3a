from typing import Any, Self
from urllib.parse import urlparse
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field
from pymongo.asynchronous.cursor import AsyncCursor

MEMORY_SCHEME = "memory"


class ConstraintViolation(Exception):
    """Raised by stores when a write breaks a unique constraint."""


class MongoModel(BaseModel):
    """Persisted record; the id is stored as ``_id`` in MongoDB and kept in memory as ``id``."""

    id: UUID = Field(alias="_id", serialization_alias="id", default_factory=uuid4)

    model_config = ConfigDict(
        populate_by_name=True,
        arbitrary_types_allowed=True,
    )

    def to_mongo(self) -> dict[str, Any]:
        """Convert the model to a dictionary for MongoDB storage with _id field."""
        data = self.model_dump()
        data["_id"] = data.pop("id")
        return data

    @classmethod
    async def list_cursor(cls, cursor: AsyncCursor[dict[str, Any]]) -> list[Self]:
        """Iterate over an AsyncCursor and return a list of model instances."""
        return [cls.model_validate(item) async for item in cursor]


def is_memory_database(database_url: str) -> bool:
    return urlparse(database_url).scheme == MEMORY_SCHEME
