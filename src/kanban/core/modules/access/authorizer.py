"""Per-request gate: static API token first, then session cookie."""

import secrets
from dataclasses import dataclass
from enum import StrEnum

from kanban.core.modules.session.models import SessionInfo
from kanban.core.modules.session.service import SessionService
from kanban.core.result import Err, ErrorKind, Ok, Result


class AuthMethod(StrEnum):
    OPEN = "open"  # No API token configured; every request passes
    API_TOKEN = "api_token"
    SESSION = "session"


@dataclass(frozen=True, slots=True)
class AuthContext:
    method: AuthMethod
    session: SessionInfo | None = None


def api_token_candidates(authorization: str | None, x_api_token: str | None) -> list[str]:
    """Collect presented API tokens from ``Authorization: Bearer`` and ``x-api-token``.

    The scheme match is case-sensitive.
    """
    candidates: list[str] = []
    if authorization:
        scheme, _, credentials = authorization.partition(" ")
        if scheme == "Bearer" and credentials:
            candidates.append(credentials)
    if x_api_token:
        candidates.append(x_api_token)
    return candidates


class RequestAuthorizer:
    """Decides whether a request may reach a handler.

    ``api_token`` is fixed at construction; the environment is never read per request.
    """

    def __init__(self, api_token: str | None, sessions: SessionService) -> None:
        self._api_token = api_token or None
        self._sessions = sessions

    @property
    def is_open(self) -> bool:
        return self._api_token is None

    def matches_api_token(self, candidate: str) -> bool:
        if self._api_token is None:
            return False
        return secrets.compare_digest(candidate.encode(), self._api_token.encode())

    async def authorize(
        self, authorization: str | None, x_api_token: str | None, session_token: str | None
    ) -> Result[AuthContext]:
        if self._api_token is None:
            return Ok(AuthContext(AuthMethod.OPEN))

        if any(self.matches_api_token(c) for c in api_token_candidates(authorization, x_api_token)):
            return Ok(AuthContext(AuthMethod.API_TOKEN))

        info = await self._sessions.validate_session(session_token)
        if info is not None:
            return Ok(AuthContext(AuthMethod.SESSION, info))

        return Err(ErrorKind.UNAUTHORIZED, "Unauthorized")
