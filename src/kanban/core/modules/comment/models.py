from datetime import datetime
from uuid import UUID

from pydantic import Field

from kanban.core.api_model import ApiModel
from kanban.core.db import MongoModel
from kanban.utils import now

ANONYMOUS_AUTHOR = "Anonymous"


class Comment(MongoModel):
    """Comment on a task, removed together with the task."""

    task_id: UUID
    content: str
    author: str = ANONYMOUS_AUTHOR  # Free-text name typed by the commenter
    created_at: datetime = Field(default_factory=now)


class CommentView(ApiModel):
    id: UUID
    task_id: UUID
    content: str
    author: str
    created_at: datetime

    @classmethod
    def from_domain(cls, comment: Comment) -> "CommentView":
        return cls(**comment.model_dump())
