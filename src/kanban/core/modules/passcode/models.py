"""Passcode models: shared 6-digit secrets granting board access."""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from kanban.core.api_model import ApiModel
from kanban.core.db import MongoModel
from kanban.utils import now


class Passcode(MongoModel):
    """Stored passcode. The plaintext code is never persisted.

    Indexed on code_hash - unique, is_admin.
    """

    code_hash: str
    name: str  # Human label, e.g. "Lucas" or "Guest"; not unique
    is_admin: bool = False
    created_at: datetime = Field(default_factory=now)
    last_used_at: datetime | None = None  # Updated on every successful login


class PasscodeView(ApiModel):
    """Passcode as listed in the admin panel (no hash)."""

    id: UUID = Field(..., description="Passcode ID")
    name: str = Field(..., description="Display name")
    is_admin: bool = Field(..., description="Whether the passcode can manage other passcodes")
    created_at: datetime = Field(..., description="Creation time")
    last_used_at: datetime | None = Field(None, description="Last successful login")

    @classmethod
    def from_domain(cls, passcode: Passcode) -> "PasscodeView":
        return cls(
            id=passcode.id,
            name=passcode.name,
            is_admin=passcode.is_admin,
            created_at=passcode.created_at,
            last_used_at=passcode.last_used_at,
        )
