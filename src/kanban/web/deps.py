from typing import Annotated, cast

from fastapi import Depends, Header, Request
from fastapi.security import APIKeyCookie

from kanban.app import App
from kanban.core.modules.access.authorizer import AuthContext
from kanban.core.modules.session.models import SESSION_COOKIE

session_cookie_scheme = APIKeyCookie(name=SESSION_COOKIE, auto_error=False)


async def get_app(request: Request) -> App:
    return cast(App, request.app.state.app)


async def get_session_token(token_cookie: Annotated[str | None, Depends(session_cookie_scheme)] = None) -> str | None:
    """Session token from the HTTP-only cookie, if the browser sent one."""
    return token_cookie or None


async def authorize_request(
    app: Annotated[App, Depends(get_app)],
    session_token: Annotated[str | None, Depends(get_session_token)],
    authorization: Annotated[str | None, Header()] = None,
    x_api_token: Annotated[str | None, Header(alias="x-api-token")] = None,
) -> AuthContext:
    """Router-level gate: raises AuthenticationError before any handler runs."""
    return await app.authorize_request(authorization, x_api_token, session_token)


# Type aliases for dependencies
AppDep = Annotated[App, Depends(get_app)]
SessionTokenDep = Annotated[str | None, Depends(get_session_token)]
