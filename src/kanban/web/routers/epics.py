from uuid import UUID

from fastapi import APIRouter, Depends
from pydantic import Field

from kanban.core.api_model import ApiModel
from kanban.core.modules.epic.models import EpicView
from kanban.web.deps import AppDep, authorize_request
from kanban.web.openapi import ErrorResponse, SuccessResponse

router: APIRouter = APIRouter(tags=["epics"], dependencies=[Depends(authorize_request)])


class CreateEpicRequest(ApiModel):
    name: str = Field(..., min_length=1, description="Epic name")
    color: str | None = Field(None, description="Hex color, defaults to #3b82f6")


class UpdateEpicRequest(ApiModel):
    name: str | None = None
    color: str | None = None
    position: int | None = Field(None, ge=0)


@router.get(
    "/epics",
    summary="List epics",
    operation_id="listEpics",
    responses={
        200: {"description": "Epics ordered by position"},
        401: {"model": ErrorResponse, "description": "Not authorized"},
    },
)
async def list_epics(app: AppDep) -> list[EpicView]:
    return [EpicView.from_domain(epic) for epic in await app.get_epics()]


@router.post(
    "/epics",
    summary="Create epic",
    operation_id="createEpic",
    status_code=201,
    responses={
        201: {"description": "Epic created at the end of the list"},
        400: {"model": ErrorResponse, "description": "Invalid epic data"},
        401: {"model": ErrorResponse, "description": "Not authorized"},
    },
)
async def create_epic(request: CreateEpicRequest, app: AppDep) -> EpicView:
    return EpicView.from_domain(await app.create_epic(request.name, request.color))


@router.patch(
    "/epics/{epic_id}",
    summary="Update epic",
    operation_id="updateEpic",
    responses={
        200: {"description": "Updated epic"},
        400: {"model": ErrorResponse, "description": "Invalid epic data"},
        401: {"model": ErrorResponse, "description": "Not authorized"},
        404: {"model": ErrorResponse, "description": "Epic not found"},
    },
)
async def update_epic(epic_id: UUID, request: UpdateEpicRequest, app: AppDep) -> EpicView:
    epic = await app.update_epic(epic_id, request.name, request.color, request.position)
    return EpicView.from_domain(epic)


@router.delete(
    "/epics/{epic_id}",
    summary="Delete epic",
    description="Delete an epic. Its tasks are kept and lose their epic.",
    operation_id="deleteEpic",
    responses={
        200: {"description": "Epic deleted"},
        401: {"model": ErrorResponse, "description": "Not authorized"},
        404: {"model": ErrorResponse, "description": "Epic not found"},
    },
)
async def delete_epic(epic_id: UUID, app: AppDep) -> SuccessResponse:
    await app.delete_epic(epic_id)
    return SuccessResponse()
