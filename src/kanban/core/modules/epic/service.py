import re
from typing import Any
from uuid import UUID

import structlog
from pymongo.asynchronous.database import AsyncDatabase

from kanban.core.core import Service
from kanban.core.modules.epic.models import DEFAULT_EPIC_COLOR, Epic
from kanban.core.modules.epic.store import create_epic_store
from kanban.errors import NotFoundError, ValidationError

logger = structlog.get_logger(__name__)

COLOR_RE = re.compile(r"#[0-9a-fA-F]{6}")


def validate_color(color: str) -> str:
    if not COLOR_RE.fullmatch(color):
        raise ValidationError("Color must be a hex value like #3b82f6")
    return color.lower()


class EpicService(Service):
    """Manages epics; deleting one detaches its tasks rather than deleting them."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]] | None) -> None:
        super().__init__(database)
        self._store = create_epic_store(database)

    async def on_start(self) -> None:
        await self._store.setup()

    async def list_epics(self) -> list[Epic]:
        return await self._store.list_all()

    async def get_epic(self, epic_id: UUID) -> Epic:
        epic = await self._store.get(epic_id)
        if epic is None:
            raise NotFoundError("Epic not found")
        return epic

    async def create_epic(self, name: str, color: str | None = None) -> Epic:
        """Create an epic at the end of the list."""
        name = name.strip()
        if not name:
            raise ValidationError("Name is required")
        max_position = await self._store.max_position()
        epic = Epic(
            name=name,
            color=validate_color(color) if color else DEFAULT_EPIC_COLOR,
            position=0 if max_position is None else max_position + 1,
        )
        await self._store.insert(epic)
        logger.info("epic_created", epic_id=epic.id, position=epic.position)
        return epic

    async def update_epic(
        self, epic_id: UUID, name: str | None = None, color: str | None = None, position: int | None = None
    ) -> Epic:
        """Update an epic. None parameters are left unchanged."""
        await self.get_epic(epic_id)
        changes: dict[str, Any] = {}
        if name is not None:
            changes["name"] = name.strip()
            if not changes["name"]:
                raise ValidationError("Name is required")
        if color is not None:
            changes["color"] = validate_color(color)
        if position is not None:
            if position < 0:
                raise ValidationError("Position must not be negative")
            changes["position"] = position

        epic = await self._store.update(epic_id, changes)
        if epic is None:
            raise NotFoundError("Epic not found")
        logger.info("epic_updated", epic_id=epic_id, fields=sorted(changes))
        return epic

    async def delete_epic(self, epic_id: UUID) -> None:
        await self.get_epic(epic_id)
        await self._store.delete(epic_id)
        detached = await self.core.services.task.detach_epic(epic_id)
        logger.info("epic_deleted", epic_id=epic_id, detached_tasks=detached)
