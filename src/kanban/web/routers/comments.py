"""Comment-related API endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends
from pydantic import Field

from kanban.core.api_model import ApiModel
from kanban.core.modules.comment.models import CommentView
from kanban.web.deps import AppDep, authorize_request
from kanban.web.openapi import ErrorResponse, SuccessResponse

router: APIRouter = APIRouter(tags=["comments"], dependencies=[Depends(authorize_request)])


class CreateCommentRequest(ApiModel):
    """Request to create a new comment."""

    content: str = Field(..., min_length=1, description="The comment text")
    author: str | None = Field(None, description="Commenter name, defaults to 'Anonymous'")


@router.get(
    "/tasks/{task_id}/comments",
    summary="List task comments",
    operation_id="listComments",
    responses={
        200: {"description": "Comments, oldest first"},
        401: {"model": ErrorResponse, "description": "Not authorized"},
        404: {"model": ErrorResponse, "description": "Task not found"},
    },
)
async def list_comments(task_id: UUID, app: AppDep) -> list[CommentView]:
    return [CommentView.from_domain(c) for c in await app.get_task_comments(task_id)]


@router.post(
    "/tasks/{task_id}/comments",
    summary="Create comment",
    operation_id="createComment",
    status_code=201,
    responses={
        201: {"description": "Comment created"},
        400: {"model": ErrorResponse, "description": "Empty comment"},
        401: {"model": ErrorResponse, "description": "Not authorized"},
        404: {"model": ErrorResponse, "description": "Task not found"},
    },
)
async def create_comment(task_id: UUID, request: CreateCommentRequest, app: AppDep) -> CommentView:
    comment = await app.create_comment(task_id, request.content, request.author)
    return CommentView.from_domain(comment)


@router.delete(
    "/comments/{comment_id}",
    summary="Delete comment",
    operation_id="deleteComment",
    responses={
        200: {"description": "Comment deleted"},
        401: {"model": ErrorResponse, "description": "Not authorized"},
        404: {"model": ErrorResponse, "description": "Comment not found"},
    },
)
async def delete_comment(comment_id: UUID, app: AppDep) -> SuccessResponse:
    await app.delete_comment(comment_id)
    return SuccessResponse()
