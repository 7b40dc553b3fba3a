"""Passcode management. Requires an admin session; the static API token is not enough."""

from uuid import UUID

from fastapi import APIRouter
from pydantic import Field

from kanban.core.api_model import ApiModel
from kanban.core.modules.passcode.models import PasscodeView
from kanban.web.deps import AppDep, SessionTokenDep
from kanban.web.openapi import ErrorResponse, SuccessResponse

router = APIRouter(tags=["admin"])


class CreatePasscodeRequest(ApiModel):
    code: str = Field(..., min_length=1, description="6-digit passcode")
    name: str = Field(..., min_length=1, description="Display name, e.g. 'Guest'")
    is_admin: bool = Field(False, description="Grant passcode management rights")


@router.get(
    "/admin/passcodes",
    summary="List passcodes",
    description="List all passcodes, oldest first. Codes are never returned.",
    operation_id="listPasscodes",
    responses={
        200: {"description": "All passcodes"},
        401: {"model": ErrorResponse, "description": "Not an admin session"},
    },
)
async def list_passcodes(app: AppDep, session_token: SessionTokenDep) -> list[PasscodeView]:
    return await app.list_passcodes(session_token)


@router.post(
    "/admin/passcodes",
    summary="Create passcode",
    operation_id="createPasscode",
    responses={
        200: {"description": "Passcode created"},
        400: {"model": ErrorResponse, "description": "Invalid code format or duplicate code"},
        401: {"model": ErrorResponse, "description": "Not an admin session"},
    },
)
async def create_passcode(
    request: CreatePasscodeRequest, app: AppDep, session_token: SessionTokenDep
) -> SuccessResponse:
    await app.create_passcode(session_token, request.code, request.name, request.is_admin)
    return SuccessResponse()


@router.delete(
    "/admin/passcodes/{passcode_id}",
    summary="Delete passcode",
    description="Delete a passcode and end its sessions. The last admin passcode cannot be deleted.",
    operation_id="deletePasscode",
    responses={
        200: {"description": "Passcode deleted"},
        400: {"model": ErrorResponse, "description": "Last admin passcode"},
        401: {"model": ErrorResponse, "description": "Not an admin session"},
        404: {"model": ErrorResponse, "description": "Passcode not found"},
    },
)
async def delete_passcode(passcode_id: UUID, app: AppDep, session_token: SessionTokenDep) -> SuccessResponse:
    await app.delete_passcode(session_token, passcode_id)
    return SuccessResponse()
