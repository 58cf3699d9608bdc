"""Fixtures for end-to-end API tests over an in-process ASGI transport."""

from collections.abc import AsyncIterator, Callable
from contextlib import AbstractAsyncContextManager, asynccontextmanager
from pathlib import Path

import httpx
import pytest
import pytest_asyncio

from surprise.application.api.rest.app import create_app
from surprise.config import Config, DatabaseConfig, StorageConfig


@asynccontextmanager
async def _api_client(config: Config) -> AsyncIterator[httpx.AsyncClient]:
    app = create_app(config)
    transport = httpx.ASGITransport(app=app)
    try:
        async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
            yield client
    finally:
        await app.state.dishka_container.close()


@pytest.fixture
def memory_config(tmp_path: Path) -> Callable[..., Config]:
    """Build a Config using the in-memory record store and a temp blob directory."""

    def build(**overrides) -> Config:
        overrides.setdefault("database", DatabaseConfig(backend="memory"))
        overrides.setdefault("storage", StorageConfig(base_path=str(tmp_path / "files")))
        return Config(**overrides)

    return build


@pytest.fixture
def api_client() -> Callable[[Config], AbstractAsyncContextManager[httpx.AsyncClient]]:
    return _api_client


@pytest_asyncio.fixture
async def client(memory_config):
    async with _api_client(memory_config()) as c:
        yield c
