"""Pytest configuration and fixtures."""

from typing import AsyncGenerator, Iterable

import httpx
import pytest

from shortlink.config import Config
from shortlink.database.memory import MemoryLinkStore
from shortlink.service import ShortlinkService
from shortlink.shortcode import ShortCodeGenerator
from shortlink.common.logging_config import setup_logging
from web_app import create_app


class ScriptedCodeGenerator(ShortCodeGenerator):
    """Returns the given codes in order, repeating the last one."""

    def __init__(self, codes: Iterable[str]):
        super().__init__()
        self.codes = list(codes)
        self.calls = 0

    def generate(self) -> str:
        code = self.codes[min(self.calls, len(self.codes) - 1)]
        self.calls += 1
        return code


@pytest.fixture
def logger():
    """Create test logger."""
    return setup_logging(level="DEBUG")


@pytest.fixture
def store(logger) -> MemoryLinkStore:
    """Create an empty in-memory store."""
    return MemoryLinkStore(logger=logger)


@pytest.fixture
def short_code_generator():
    """Create short code generator."""
    return ShortCodeGenerator()


@pytest.fixture
def scripted_generator():
    """Factory for generators that return a fixed sequence of codes."""
    return ScriptedCodeGenerator


@pytest.fixture
def service(store, short_code_generator, logger) -> ShortlinkService:
    """Create service instance."""
    return ShortlinkService(
        store=store,
        cache=None,  # No cache for tests
        short_code_generator=short_code_generator,
        logger=logger,
    )


@pytest.fixture
def config() -> Config:
    """Configuration for the test app."""
    return Config(database_url="memory://", base_url="http://testserver")


@pytest.fixture
def app(store, service, config):
    """Create test FastAPI app."""
    return create_app(
        store_instance=store,
        cache_instance=None,
        service_instance=service,
        config=config,
    )


@pytest.fixture
async def client(app) -> AsyncGenerator[httpx.AsyncClient, None]:
    """Create test client."""
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://example.org") as ac:
        yield ac


@pytest.fixture
def sample_urls():
    """Sample URLs for testing."""
    return [
        "https://example.com/test",
        "https://github.com/user/repo",
        "https://stackoverflow.com/questions/123456",
    ]
