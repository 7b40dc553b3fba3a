"""Session management models."""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import NewType
from uuid import UUID

from pydantic import Field

from kanban.core.db import MongoModel
from kanban.utils import now

AuthToken = NewType("AuthToken", str)

SESSION_COOKIE = "kanban_session"
SESSION_DURATION = timedelta(days=30)


class Session(MongoModel):
    """Browser session bound to a passcode.

    Indexed on token - unique, passcode_id, expires_at (TTL).
    """

    passcode_id: UUID
    token: str
    expires_at: datetime
    created_at: datetime = Field(default_factory=now)

    def is_active(self, moment: datetime) -> bool:
        return self.expires_at > moment


@dataclass(frozen=True, slots=True)
class SessionInfo:
    """Identity behind a valid session token."""

    passcode_id: UUID
    name: str
    is_admin: bool
    authenticated: bool = True


@dataclass(frozen=True, slots=True)
class LoginSuccess:
    """Everything the HTTP layer needs to set the session cookie."""

    token: AuthToken
    expires_at: datetime
    is_admin: bool
    name: str
