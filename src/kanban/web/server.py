from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from kanban.app import App
from kanban.config import Config
from kanban.errors import UserError
from kanban.web.error_handlers import general_exception_handler, request_validation_handler, user_error_handler
from kanban.web.openapi import set_custom_openapi
from kanban.web.routers import (
    admin_router,
    auth_router,
    comments_router,
    epics_router,
    tasks_router,
    upload_router,
)


def create_fastapi_app(app_instance: App, config: Config) -> FastAPI:
    """Create and configure FastAPI application."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
        """FastAPI application lifespan management."""
        app.state.app = app_instance
        app.state.config = config
        async with app_instance.lifespan():
            yield

    app = FastAPI(
        title="Kanban API",
        lifespan=lifespan,
        openapi_tags=[],  # Tags will be added by custom OpenAPI function
    )

    if config.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=config.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        return {"status": "healthy"}

    # Public auth routes and admin routes do their own checks; the rest sit behind the request gate
    app.include_router(auth_router, prefix="/api")
    app.include_router(admin_router, prefix="/api")
    app.include_router(tasks_router, prefix="/api")
    app.include_router(epics_router, prefix="/api")
    app.include_router(comments_router, prefix="/api")
    app.include_router(upload_router, prefix="/api")

    Path(config.uploads_path).mkdir(parents=True, exist_ok=True)
    app.mount(config.uploads_url.rstrip("/"), StaticFiles(directory=config.uploads_path), name="uploads")

    app.add_exception_handler(UserError, user_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    set_custom_openapi(app)

    return app
