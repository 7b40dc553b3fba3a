import secrets
import string
from typing import Any
from uuid import UUID

import structlog
from pymongo.asynchronous.database import AsyncDatabase

from kanban.core.core import Service
from kanban.core.db import ConstraintViolation
from kanban.core.modules.session.models import SESSION_DURATION, AuthToken, LoginSuccess, Session, SessionInfo
from kanban.core.modules.session.store import create_session_store
from kanban.core.result import Err, ErrorKind, Ok, Result
from kanban.utils import now

logger = structlog.get_logger(__name__)

TOKEN_ALPHABET = string.ascii_letters + string.digits
TOKEN_LENGTH = 64


def generate_token() -> AuthToken:
    """Random alphanumeric session token drawn from the OS CSPRNG."""
    return AuthToken("".join(secrets.choice(TOKEN_ALPHABET) for _ in range(TOKEN_LENGTH)))


class SessionService(Service):
    """Creates, validates, and destroys passcode sessions.

    Nothing is cached between calls: every validation reads the stores.
    """

    def __init__(self, database: AsyncDatabase[dict[str, Any]] | None) -> None:
        super().__init__(database)
        self._store = create_session_store(database)

    async def on_start(self) -> None:
        await self._store.setup()
        purged = await self.purge_expired()
        logger.debug("session_service_started", purged_expired=purged)

    async def login(self, code: str) -> Result[LoginSuccess]:
        """Exchange a plaintext passcode for a new session.

        At most one session is created per successful call and none on failure.
        """
        passcode = await self.core.services.passcode.find_by_code(code)
        if passcode is None:
            logger.info("login_failed")
            return Err(ErrorKind.INVALID_CREDENTIAL, "Invalid passcode")

        try:
            await self.core.services.passcode.touch_last_used(passcode.id)
        except Exception:
            logger.exception("session_touch_failed", passcode_id=passcode.id)

        session = Session(passcode_id=passcode.id, token=generate_token(), expires_at=now() + SESSION_DURATION)
        try:
            await self._store.insert(session)
        except ConstraintViolation:
            logger.warning("session_token_collision", passcode_id=passcode.id)
            return Err(ErrorKind.SESSION_CONFLICT, "Could not create session, please retry")

        logger.info("login_succeeded", passcode_id=passcode.id, is_admin=passcode.is_admin)
        return Ok(
            LoginSuccess(
                token=AuthToken(session.token),
                expires_at=session.expires_at,
                is_admin=passcode.is_admin,
                name=passcode.name,
            )
        )

    async def validate_session(self, token: str | None) -> SessionInfo | None:
        """Resolve a token to its passcode; None if missing, unknown, expired, or orphaned."""
        if not token:
            return None
        session = await self._store.find_active(token, now())
        if session is None:
            return None
        passcode = await self.core.services.passcode.get_passcode(session.passcode_id)
        if passcode is None:
            return None
        return SessionInfo(passcode_id=passcode.id, name=passcode.name, is_admin=passcode.is_admin)

    async def logout(self, token: str | None) -> None:
        """Delete the session for ``token`` if there is one. Idempotent."""
        if token and await self._store.delete_by_token(token):
            logger.info("logout")

    async def has_any_credential(self) -> bool:
        return await self.core.services.passcode.has_any()

    async def delete_sessions_for_passcode(self, passcode_id: UUID) -> int:
        return await self._store.delete_by_passcode(passcode_id)

    async def purge_expired(self) -> int:
        return await self._store.delete_expired(now())
