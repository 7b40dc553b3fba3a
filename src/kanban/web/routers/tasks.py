from uuid import UUID

from fastapi import APIRouter, Depends
from pydantic import Field

from kanban.core.api_model import ApiModel
from kanban.core.modules.task.models import ColumnId, TaskPriority, TaskView
from kanban.web.deps import AppDep, authorize_request
from kanban.web.openapi import ErrorResponse, SuccessResponse

router: APIRouter = APIRouter(tags=["tasks"], dependencies=[Depends(authorize_request)])


class CreateTaskRequest(ApiModel):
    title: str = Field(..., min_length=1, description="Task title")
    description: str | None = Field(None, description="Optional longer description")
    priority: TaskPriority = Field(TaskPriority.MEDIUM, description="low, medium, or high")
    column_id: ColumnId = Field(ColumnId.BACKLOG, description="Board column")
    epic_id: UUID | None = Field(None, description="Epic the task belongs to")
    pr_url: str | None = Field(None, description="Link to the related pull request")
    image_urls: list[str] | None = Field(None, description="URLs returned by the upload endpoint")


class UpdateTaskRequest(ApiModel):
    """Partial update: only the keys present in the body are changed. Send null to clear optional fields."""

    title: str | None = None
    description: str | None = None
    priority: TaskPriority | None = None
    column_id: ColumnId | None = None
    epic_id: UUID | None = None
    pr_url: str | None = None
    image_urls: list[str] | None = None


@router.get(
    "/tasks",
    summary="List tasks",
    operation_id="listTasks",
    responses={
        200: {"description": "All tasks, oldest first"},
        401: {"model": ErrorResponse, "description": "Not authorized"},
    },
)
async def list_tasks(app: AppDep) -> list[TaskView]:
    return [TaskView.from_domain(task) for task in await app.get_tasks()]


@router.post(
    "/tasks",
    summary="Create task",
    operation_id="createTask",
    status_code=201,
    responses={
        201: {"description": "Task created"},
        400: {"model": ErrorResponse, "description": "Invalid task data"},
        401: {"model": ErrorResponse, "description": "Not authorized"},
        404: {"model": ErrorResponse, "description": "Epic not found"},
    },
)
async def create_task(request: CreateTaskRequest, app: AppDep) -> TaskView:
    task = await app.create_task(
        request.title,
        request.description,
        request.priority,
        request.column_id,
        request.epic_id,
        request.pr_url,
        request.image_urls,
    )
    return TaskView.from_domain(task)


@router.get(
    "/tasks/{task_id}",
    summary="Get task",
    operation_id="getTask",
    responses={
        200: {"description": "Task"},
        401: {"model": ErrorResponse, "description": "Not authorized"},
        404: {"model": ErrorResponse, "description": "Task not found"},
    },
)
async def get_task(task_id: UUID, app: AppDep) -> TaskView:
    return TaskView.from_domain(await app.get_task(task_id))


@router.patch(
    "/tasks/{task_id}",
    summary="Update task",
    description="Change task fields. Moving a task to another column is a `columnId` update.",
    operation_id="updateTask",
    responses={
        200: {"description": "Updated task"},
        400: {"model": ErrorResponse, "description": "Invalid task data"},
        401: {"model": ErrorResponse, "description": "Not authorized"},
        404: {"model": ErrorResponse, "description": "Task or epic not found"},
    },
)
async def update_task(task_id: UUID, request: UpdateTaskRequest, app: AppDep) -> TaskView:
    task = await app.update_task(task_id, request.model_dump(exclude_unset=True))
    return TaskView.from_domain(task)


@router.delete(
    "/tasks/{task_id}",
    summary="Delete task",
    description="Delete a task and all of its comments.",
    operation_id="deleteTask",
    responses={
        200: {"description": "Task deleted"},
        401: {"model": ErrorResponse, "description": "Not authorized"},
        404: {"model": ErrorResponse, "description": "Task not found"},
    },
)
async def delete_task(task_id: UUID, app: AppDep) -> SuccessResponse:
    await app.delete_task(task_id)
    return SuccessResponse()
