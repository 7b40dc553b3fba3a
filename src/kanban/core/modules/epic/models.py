from datetime import datetime
from uuid import UUID

from pydantic import Field

from kanban.core.api_model import ApiModel
from kanban.core.db import MongoModel
from kanban.utils import now

DEFAULT_EPIC_COLOR = "#3b82f6"


class Epic(MongoModel):
    """Group of related tasks, shown as a colored label."""

    name: str
    color: str = DEFAULT_EPIC_COLOR
    position: int = 0  # Display order; new epics are appended
    created_at: datetime = Field(default_factory=now)


class EpicView(ApiModel):
    id: UUID
    name: str
    color: str
    position: int
    created_at: datetime

    @classmethod
    def from_domain(cls, epic: Epic) -> "EpicView":
        return cls(**epic.model_dump())
