import structlog

from kanban.core.core import Service
from kanban.core.modules.access.authorizer import AuthContext, RequestAuthorizer
from kanban.core.modules.session.models import SessionInfo
from kanban.core.result import Err, ErrorKind, Ok, Result

logger = structlog.get_logger(__name__)


class AccessService(Service):
    """Request authorization and the admin-only check for passcode management."""

    _authorizer: RequestAuthorizer | None = None

    async def on_start(self) -> None:
        self._authorizer = RequestAuthorizer(self.core.config.api_token, self.core.services.session)
        logger.debug("access_service_started", open_mode=self._authorizer.is_open)

    @property
    def authorizer(self) -> RequestAuthorizer:
        if self._authorizer is None:
            raise RuntimeError("Access service not started")
        return self._authorizer

    async def authorize_request(
        self, authorization: str | None, x_api_token: str | None, session_token: str | None
    ) -> Result[AuthContext]:
        result = await self.authorizer.authorize(authorization, x_api_token, session_token)
        if isinstance(result, Err):
            logger.info("request_unauthorized")
        return result

    async def ensure_admin(self, session_token: str | None) -> Result[SessionInfo]:
        """Require an authenticated admin session. An API token alone never qualifies."""
        info = await self.core.services.session.validate_session(session_token)
        if info is None or not info.is_admin:
            return Err(ErrorKind.UNAUTHORIZED, "Unauthorized")
        return Ok(info)
