"""
Shared test fixtures.

Every test that talks HTTP gets its own fake provider and, where needed, an application
instance configured against it.
"""

import pytest
import pytest_asyncio
from aiohttp import ClientSession
from aiohttp.test_utils import TestClient, TestServer

from bonestrength.app.metrics import NoOpMetricsClient
from bonestrength.app.server import start_web_server
from tests.helpers import FakeProvider, make_settings


@pytest_asyncio.fixture
async def provider():
    """Start a fake provider for each test."""
    fake = FakeProvider()
    async with TestServer(fake.make_app()) as server:
        fake.server = server
        yield fake


@pytest.fixture
def settings(provider):
    return make_settings(provider.api_uri)


@pytest_asyncio.fixture
async def client(settings):
    """Run the application against the fake provider."""
    app = await start_web_server(settings)
    async with TestClient(TestServer(app)) as test_client:
        yield test_client


@pytest_asyncio.fixture
async def http_session():
    async with ClientSession() as session:
        yield session


@pytest.fixture
def metrics_client():
    return NoOpMetricsClient()
