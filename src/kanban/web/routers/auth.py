from fastapi import APIRouter, Response
from pydantic import Field

from kanban.core.api_model import ApiModel
from kanban.core.modules.session.models import SESSION_COOKIE
from kanban.web.deps import AppDep, SessionTokenDep
from kanban.web.openapi import ErrorResponse, SuccessResponse

router = APIRouter(tags=["auth"])


class LoginRequest(ApiModel):
    """Passcode login. While no passcode exists, the code becomes the admin passcode."""

    code: str = Field(..., min_length=1, description="6-digit passcode")


class LoginResponse(ApiModel):
    success: bool = Field(True, description="Always true on success")
    is_admin: bool = Field(..., description="Whether the passcode can manage other passcodes")
    message: str | None = Field(None, description="Set when this login completed first-run setup")


class SessionStatusResponse(ApiModel):
    authenticated: bool = Field(..., description="Whether the session cookie is valid")
    is_admin: bool | None = Field(None, description="Admin flag of the logged-in passcode")
    name: str | None = Field(None, description="Name of the logged-in passcode")
    needs_setup: bool | None = Field(None, description="True when no passcode exists yet")


@router.post(
    "/auth/login",
    summary="Log in with a passcode",
    description=(
        "Exchange a 6-digit passcode for a session cookie. "
        "When no passcode exists yet, the submitted code is stored as the admin passcode."
    ),
    operation_id="login",
    response_model_exclude_none=True,
    responses={
        200: {"description": "Logged in; session cookie set"},
        400: {"model": ErrorResponse, "description": "Missing passcode, or malformed passcode during setup"},
        401: {"model": ErrorResponse, "description": "Invalid passcode"},
        409: {"model": ErrorResponse, "description": "Session could not be created, retry"},
    },
)
async def login(login_data: LoginRequest, app: AppDep, response: Response) -> LoginResponse:
    outcome = await app.login(login_data.code)

    response.set_cookie(
        key=SESSION_COOKIE,
        value=outcome.session.token,
        expires=outcome.session.expires_at,
        path="/",
        httponly=True,
        secure=app.config.secure_cookies,
        samesite="lax",
    )

    return LoginResponse(
        is_admin=outcome.session.is_admin,
        message="Admin passcode created successfully" if outcome.setup_completed else None,
    )


@router.get(
    "/auth/session",
    summary="Session status",
    description="Report whether the caller has a valid session, or whether first-run setup is pending.",
    operation_id="getSession",
    response_model_exclude_none=True,
    responses={200: {"description": "Session status"}},
)
async def get_session(app: AppDep, session_token: SessionTokenDep) -> SessionStatusResponse:
    status = await app.get_session_status(session_token)
    if status.needs_setup:
        return SessionStatusResponse(authenticated=False, needs_setup=True)
    if status.info is None:
        return SessionStatusResponse(authenticated=False)
    return SessionStatusResponse(authenticated=True, is_admin=status.info.is_admin, name=status.info.name)


@router.post(
    "/auth/logout",
    summary="Log out",
    description="Delete the current session, if any, and clear the cookie. Safe to call repeatedly.",
    operation_id="logout",
    responses={200: {"description": "Logged out"}},
)
async def logout(app: AppDep, session_token: SessionTokenDep, response: Response) -> SuccessResponse:
    await app.logout(session_token)
    response.delete_cookie(SESSION_COOKIE, path="/", httponly=True, secure=app.config.secure_cookies, samesite="lax")
    return SuccessResponse()
