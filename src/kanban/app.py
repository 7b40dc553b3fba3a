from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any
from uuid import UUID

import structlog

from kanban.config import Config
from kanban.core.core import Core
from kanban.core.modules.access.authorizer import AuthContext
from kanban.core.modules.comment.models import Comment
from kanban.core.modules.epic.models import Epic
from kanban.core.modules.passcode.models import PasscodeView
from kanban.core.modules.session.models import LoginSuccess, SessionInfo
from kanban.core.modules.task.models import ColumnId, Task, TaskPriority
from kanban.core.result import unwrap

logger = structlog.get_logger(__name__)


@dataclass(frozen=True, slots=True)
class LoginOutcome:
    session: LoginSuccess
    setup_completed: bool  # True when this login created the first admin passcode


@dataclass(frozen=True, slots=True)
class SessionStatus:
    authenticated: bool
    needs_setup: bool = False
    info: SessionInfo | None = None


class App:
    """Facade for all application operations; turns service results into user errors."""

    def __init__(self, config: Config) -> None:
        self._core = Core(config)

    @property
    def config(self) -> Config:
        return self._core.config

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Application lifespan management - delegates to Core."""
        async with self._core.lifespan():
            yield

    # === Authentication ===
    async def authorize_request(
        self, authorization: str | None, x_api_token: str | None, session_token: str | None
    ) -> AuthContext:
        """Gate for board routes: static API token, open mode, or a valid session."""
        return unwrap(await self._core.services.access.authorize_request(authorization, x_api_token, session_token))

    async def login(self, code: str) -> LoginOutcome:
        """Log in with a passcode; while no passcode exists, the code becomes the admin passcode."""
        setup_completed = False
        if not await self._core.services.session.has_any_credential():
            setup_completed = unwrap(await self._core.services.passcode.create_first_admin(code))
        session = unwrap(await self._core.services.session.login(code))
        return LoginOutcome(session=session, setup_completed=setup_completed)

    async def get_session_status(self, session_token: str | None) -> SessionStatus:
        if not await self._core.services.session.has_any_credential():
            return SessionStatus(authenticated=False, needs_setup=True)
        info = await self._core.services.session.validate_session(session_token)
        if info is None:
            return SessionStatus(authenticated=False)
        return SessionStatus(authenticated=True, info=info)

    async def logout(self, session_token: str | None) -> None:
        await self._core.services.session.logout(session_token)

    # === Passcode administration (admin session only) ===
    async def list_passcodes(self, session_token: str | None) -> list[PasscodeView]:
        unwrap(await self._core.services.access.ensure_admin(session_token))
        passcodes = await self._core.services.passcode.list_passcodes()
        return [PasscodeView.from_domain(p) for p in passcodes]

    async def create_passcode(self, session_token: str | None, code: str, name: str, is_admin: bool) -> PasscodeView:
        admin = unwrap(await self._core.services.access.ensure_admin(session_token))
        passcode = unwrap(await self._core.services.passcode.create_passcode(code, name, is_admin))
        logger.info("passcode_created_by_admin", admin_id=admin.passcode_id, passcode_id=passcode.id)
        return PasscodeView.from_domain(passcode)

    async def delete_passcode(self, session_token: str | None, passcode_id: UUID) -> None:
        unwrap(await self._core.services.access.ensure_admin(session_token))
        unwrap(await self._core.services.passcode.delete_passcode(passcode_id))

    # === Tasks ===
    async def get_tasks(self) -> list[Task]:
        return await self._core.services.task.list_tasks()

    async def get_task(self, task_id: UUID) -> Task:
        return await self._core.services.task.get_task(task_id)

    async def create_task(
        self,
        title: str,
        description: str | None,
        priority: TaskPriority,
        column_id: ColumnId,
        epic_id: UUID | None,
        pr_url: str | None,
        image_urls: list[str] | None,
    ) -> Task:
        return await self._core.services.task.create_task(
            title, description, priority, column_id, epic_id, pr_url, image_urls
        )

    async def update_task(self, task_id: UUID, changes: dict[str, Any]) -> Task:
        """Partial update; only keys present in ``changes`` are written."""
        return await self._core.services.task.update_task(task_id, changes)

    async def delete_task(self, task_id: UUID) -> None:
        await self._core.services.task.delete_task(task_id)

    # === Epics ===
    async def get_epics(self) -> list[Epic]:
        return await self._core.services.epic.list_epics()

    async def create_epic(self, name: str, color: str | None) -> Epic:
        return await self._core.services.epic.create_epic(name, color)

    async def update_epic(self, epic_id: UUID, name: str | None, color: str | None, position: int | None) -> Epic:
        return await self._core.services.epic.update_epic(epic_id, name, color, position)

    async def delete_epic(self, epic_id: UUID) -> None:
        await self._core.services.epic.delete_epic(epic_id)

    # === Comments ===
    async def get_task_comments(self, task_id: UUID) -> list[Comment]:
        return await self._core.services.comment.get_task_comments(task_id)

    async def create_comment(self, task_id: UUID, content: str, author: str | None) -> Comment:
        return await self._core.services.comment.create_comment(task_id, content, author)

    async def delete_comment(self, comment_id: UUID) -> None:
        await self._core.services.comment.delete_comment(comment_id)

    # === Uploads ===
    async def upload_image(self, filename: str, content: bytes, mime_type: str) -> str:
        return await self._core.services.upload.save_image(filename, content, mime_type)
