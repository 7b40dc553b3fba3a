from typing import Any
from uuid import UUID

import structlog
from pymongo.asynchronous.database import AsyncDatabase

from kanban.core.core import Service
from kanban.core.db import ConstraintViolation
from kanban.core.modules.passcode.hasher import hash_passcode
from kanban.core.modules.passcode.models import Passcode
from kanban.core.modules.passcode.store import create_passcode_store
from kanban.core.modules.passcode.validators import validate_code, validate_name
from kanban.core.result import Err, ErrorKind, Ok, Result
from kanban.utils import now

logger = structlog.get_logger(__name__)

FIRST_ADMIN_NAME = "Admin"


class PasscodeService(Service):
    """Manages passcodes and guards the last-admin invariant."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]] | None) -> None:
        super().__init__(database)
        self._store = create_passcode_store(database)

    async def on_start(self) -> None:
        await self._store.setup()
        logger.debug("passcode_service_started", has_passcodes=await self._store.exists_any())

    async def has_any(self) -> bool:
        """True once at least one passcode exists (setup is complete)."""
        return await self._store.exists_any()

    async def find_by_code(self, code: str) -> Passcode | None:
        """Look up a passcode by plaintext code, via its digest."""
        return await self._store.find_by_code_hash(hash_passcode(code))

    async def get_passcode(self, passcode_id: UUID) -> Passcode | None:
        return await self._store.get(passcode_id)

    async def list_passcodes(self) -> list[Passcode]:
        return await self._store.list_all()

    async def touch_last_used(self, passcode_id: UUID) -> None:
        await self._store.touch(passcode_id, now())

    async def create_passcode(self, code: str, name: str, is_admin: bool) -> Result[Passcode]:
        match validate_code(code), validate_name(name):
            case Err() as err, _:
                return err
            case _, Err() as err:
                return err
            case Ok(code), Ok(name):
                pass

        code_hash = hash_passcode(code)
        if await self._store.find_by_code_hash(code_hash) is not None:
            return Err(ErrorKind.DUPLICATE_CREDENTIAL, "This passcode already exists")

        passcode = Passcode(code_hash=code_hash, name=name, is_admin=is_admin)
        try:
            await self._store.insert(passcode)
        except ConstraintViolation:
            return Err(ErrorKind.DUPLICATE_CREDENTIAL, "This passcode already exists")

        logger.info("passcode_created", passcode_id=passcode.id, is_admin=is_admin)
        return Ok(passcode)

    async def create_first_admin(self, code: str) -> Result[bool]:
        """Create the initial admin passcode while no passcode exists.

        Returns Ok(False) when setup was already completed, so the caller falls
        back to a normal login instead of creating a second admin.
        """
        match validate_code(code):
            case Err() as err:
                return err
        if await self._store.exists_any():
            return Ok(False)

        match await self.create_passcode(code, FIRST_ADMIN_NAME, is_admin=True):
            case Err() as err:
                return err
        logger.info("initial_setup_completed")
        return Ok(True)

    async def delete_passcode(self, passcode_id: UUID) -> Result[None]:
        """Delete a passcode and its sessions, refusing to remove the last admin.

        The admin count and the delete are separate store calls, so two concurrent
        deletions of the last two admins can both pass the check.
        """
        admin_count = await self._store.count_admins()
        passcode = await self._store.get(passcode_id)
        if passcode is None:
            return Err(ErrorKind.NOT_FOUND, "Passcode not found")

        if passcode.is_admin and admin_count <= 1:
            logger.warning("passcode_delete_refused", passcode_id=passcode_id, reason="last_admin")
            return Err(ErrorKind.LAST_ADMIN_PROTECTED, "Cannot delete the last admin passcode")

        await self._store.delete(passcode_id)
        removed_sessions = await self.core.services.session.delete_sessions_for_passcode(passcode_id)
        logger.info("passcode_deleted", passcode_id=passcode_id, removed_sessions=removed_sessions)
        return Ok(None)
