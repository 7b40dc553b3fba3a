"""Shared pytest fixtures."""

from collections.abc import AsyncGenerator, Callable, Iterator
from io import BytesIO
from typing import Any

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from kanban.app import App
from kanban.config import Config
from kanban.core.core import Core
from kanban.web.server import create_fastapi_app


@pytest.fixture
def make_config(tmp_path) -> Callable[..., Config]:
    """Build a memory-backed config; keyword arguments override fields."""

    def factory(**overrides: Any) -> Config:
        values: dict[str, Any] = {
            "database_url": "memory://",
            "host": "127.0.0.1",
            "port": 8000,
            "debug": True,
            "api_token": None,
            "webhook_url": None,
            "uploads_path": str(tmp_path / "uploads"),
        }
        values.update(overrides)
        return Config(**values)

    return factory


@pytest.fixture
def config(make_config) -> Config:
    return make_config()


@pytest.fixture
async def core(config) -> AsyncGenerator[Core]:
    """Started core on the in-memory backend."""
    core = Core(config)
    async with core.lifespan():
        yield core


@pytest.fixture
def make_client(make_config) -> Iterator[Callable[..., TestClient]]:
    """Create started TestClients; keyword arguments override config fields."""
    clients: list[TestClient] = []

    def factory(**overrides: Any) -> TestClient:
        config = make_config(**overrides)
        client = TestClient(create_fastapi_app(App(config), config))
        client.__enter__()
        clients.append(client)
        return client

    yield factory

    for client in clients:
        client.__exit__(None, None, None)


@pytest.fixture
def client(make_client) -> TestClient:
    """Client for an open deployment (no API token configured)."""
    return make_client()


@pytest.fixture
def png_bytes() -> bytes:
    """A tiny valid PNG image."""
    buffer = BytesIO()
    Image.new("RGB", (4, 4), color=(255, 0, 0)).save(buffer, format="PNG")
    return buffer.getvalue()
