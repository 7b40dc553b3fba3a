from __future__ import annotations

import importlib
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any, cast
from urllib.parse import urlparse

import structlog
from pymongo import AsyncMongoClient
from pymongo.asynchronous.database import AsyncDatabase

from kanban.config import Config
from kanban.core.db import is_memory_database

logger = structlog.get_logger(__name__)


class Service:
    """Base class for services.

    ``database`` is None when the application runs on the in-memory backend;
    services pick their store implementation from it.
    """

    def __init__(self, database: AsyncDatabase[dict[str, Any]] | None) -> None:
        self.database = database
        self._core: Core | None = None

    async def on_start(self) -> None:
        """Initialize service on application startup."""

    async def on_stop(self) -> None:
        """Cleanup service on application shutdown."""

    @property
    def core(self) -> Core:
        """Get the core application context."""
        if self._core is None:
            raise RuntimeError("Core not set for service")
        return self._core

    def set_core(self, core: Core) -> None:
        """Set the core application context."""
        self._core = core


class Services:
    """Service registry that imports and initializes services in dependency order."""

    from kanban.core.modules.access.service import AccessService  # noqa: PLC0415
    from kanban.core.modules.comment.service import CommentService  # noqa: PLC0415
    from kanban.core.modules.epic.service import EpicService  # noqa: PLC0415
    from kanban.core.modules.passcode.service import PasscodeService  # noqa: PLC0415
    from kanban.core.modules.session.service import SessionService  # noqa: PLC0415
    from kanban.core.modules.task.service import TaskService  # noqa: PLC0415
    from kanban.core.modules.upload.service import UploadService  # noqa: PLC0415
    from kanban.core.modules.webhook.service import WebhookService  # noqa: PLC0415

    passcode: PasscodeService
    session: SessionService
    access: AccessService
    webhook: WebhookService
    epic: EpicService
    task: TaskService
    comment: CommentService
    upload: UploadService

    def __init__(self, database: AsyncDatabase[dict[str, Any]] | None) -> None:
        self._services: list[Service] = []

        # (attribute_name, module_path, class_name); passcodes before sessions
        service_configs = [
            ("passcode", "kanban.core.modules.passcode.service", "PasscodeService"),
            ("session", "kanban.core.modules.session.service", "SessionService"),
            ("access", "kanban.core.modules.access.service", "AccessService"),
            ("webhook", "kanban.core.modules.webhook.service", "WebhookService"),
            ("epic", "kanban.core.modules.epic.service", "EpicService"),
            ("task", "kanban.core.modules.task.service", "TaskService"),
            ("comment", "kanban.core.modules.comment.service", "CommentService"),
            ("upload", "kanban.core.modules.upload.service", "UploadService"),
        ]

        for attr_name, module_path, class_name in service_configs:
            module = importlib.import_module(module_path)
            service_class = cast(type[Service], getattr(module, class_name))
            service_instance = service_class(database)
            setattr(self, attr_name, service_instance)
            self._services.append(service_instance)

    def set_core(self, core: Core) -> None:
        """Set core reference for all services."""
        for service in self._services:
            service.set_core(core)

    async def start_all(self) -> None:
        for service in self._services:
            await service.on_start()

    async def stop_all(self) -> None:
        for service in reversed(self._services):
            await service.on_stop()


class Core:
    """Container providing config, database, and all service instances."""

    config: Config
    mongo_client: AsyncMongoClient[dict[str, Any]] | None
    database: AsyncDatabase[dict[str, Any]] | None
    services: Services

    def __init__(self, config: Config) -> None:
        """Initialize core with config, the selected backend, and all services."""
        self.config = config
        if is_memory_database(config.database_url):
            self.mongo_client = None
            self.database = None
        else:
            self.mongo_client = AsyncMongoClient(config.database_url, uuidRepresentation="standard", tz_aware=True)
            self.database = self.mongo_client.get_database(urlparse(config.database_url).path[1:])
        self.services = Services(self.database)
        self.services.set_core(self)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Manage application lifecycle - startup and shutdown."""
        await self.on_start()
        try:
            yield
        finally:
            await self.on_stop()

    async def on_start(self) -> None:
        await self.services.start_all()
        logger.info("core_started", backend="memory" if self.database is None else "mongodb")

    async def on_stop(self) -> None:
        """Stop services and close the MongoDB connection on shutdown."""
        await self.services.stop_all()
        if self.mongo_client is not None:
            await self.mongo_client.aclose()
