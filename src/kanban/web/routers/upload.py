from fastapi import APIRouter, Depends, UploadFile
from pydantic import BaseModel, Field

from kanban.web.deps import AppDep, authorize_request
from kanban.web.openapi import ErrorResponse

router = APIRouter(tags=["upload"], dependencies=[Depends(authorize_request)])


class UploadResponse(BaseModel):
    url: str = Field(..., description="Public URL of the stored image")


@router.post(
    "/upload",
    summary="Upload image",
    description="Upload one image (max 5MB by default) for use in a task's `imageUrls`.",
    operation_id="uploadImage",
    responses={
        200: {"description": "Image stored"},
        400: {"model": ErrorResponse, "description": "Not an image, too large, or unreadable"},
        401: {"model": ErrorResponse, "description": "Not authorized"},
    },
)
async def upload_image(file: UploadFile, app: AppDep) -> UploadResponse:
    # Read at most one byte past the limit
    content = await file.read(app.config.upload_max_bytes + 1)
    filename = file.filename or "image"
    mime_type = file.content_type or "application/octet-stream"
    return UploadResponse(url=await app.upload_image(filename, content, mime_type))
