from typing import Any

from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi
from pydantic import BaseModel, Field

from kanban.core.modules.session.models import SESSION_COOKIE

# Reachable without credentials so clients can bootstrap authentication
PUBLIC_ENDPOINTS = {
    ("POST", "/api/auth/login"),
    ("GET", "/api/auth/session"),
    ("POST", "/api/auth/logout"),
    ("GET", "/health"),
}

ADMIN_PATH_PREFIX = "/api/admin/"


def set_custom_openapi(app: FastAPI) -> None:
    def custom_openapi() -> dict[str, Any]:
        if app.openapi_schema:
            return app.openapi_schema

        openapi_schema = get_openapi(
            title="Kanban API",
            version="0.1.0",
            summary="Task board with epics, comments, and passcode authentication",
            routes=app.routes,
        )

        openapi_schema.setdefault("components", {})["securitySchemes"] = {
            "BearerAuth": {
                "type": "http",
                "scheme": "bearer",
                "description": "Static API token (only when the server sets KANBAN_API_TOKEN)",
            },
            "ApiTokenHeader": {
                "type": "apiKey",
                "in": "header",
                "name": "x-api-token",
                "description": "Static API token in a custom header",
            },
            "SessionCookie": {
                "type": "apiKey",
                "in": "cookie",
                "name": SESSION_COOKIE,
                "description": "Session token set by /api/auth/login",
            },
        }

        openapi_schema["security"] = [
            {"BearerAuth": []},
            {"ApiTokenHeader": []},
            {"SessionCookie": []},
        ]

        for path, path_item in openapi_schema["paths"].items():
            for method, operation in path_item.items():
                if (method.upper(), path) in PUBLIC_ENDPOINTS:
                    operation["security"] = []
                elif path.startswith(ADMIN_PATH_PREFIX):
                    # Passcode management accepts an admin session only
                    operation["security"] = [{"SessionCookie": []}]

        app.openapi_schema = openapi_schema
        return app.openapi_schema

    app.openapi = custom_openapi  # type: ignore[method-assign]


class ErrorResponse(BaseModel):
    """Standard error response format."""

    error: str = Field(..., description="Human-readable error message")
    type: str = Field(..., description="Machine-readable error type")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"error": "Invalid passcode", "type": "authentication_error"},
                {"error": "Cannot delete the last admin passcode", "type": "validation_error"},
                {"error": "Task not found", "type": "not_found"},
            ]
        }
    }


class SuccessResponse(BaseModel):
    """Acknowledgement for operations without a resource body."""

    success: bool = Field(True, description="Always true on success")
