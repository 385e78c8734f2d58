"""
Test Configuration
==================

Pytest fixtures: test settings, an initialized kernel, and an in-process
fake Nfield server with connections bound to it.
"""

from typing import AsyncGenerator, Generator

import pytest
import pytest_asyncio
from aiohttp.test_utils import TestServer

from nfield.config.settings import NfieldSettings
from nfield.infrastructure.connection import NfieldConnection, NfieldConnectionFactory
from nfield.infrastructure.container import Kernel
from nfield.infrastructure.dependency_resolver import DependencyResolver
from nfield.samples.program import initialize_nfield

from tests.utils.fake_nfield import FakeNfieldBackend


@pytest.fixture(autouse=True)
def reset_dependency_resolver() -> Generator[None, None, None]:
    """Keep resolver registrations from leaking between tests."""
    DependencyResolver.reset()
    yield
    DependencyResolver.reset()


@pytest.fixture
def test_settings() -> NfieldSettings:
    """Test settings fixture."""
    return NfieldSettings(
        _env_file=None,
        environment="testing",
        log_level="DEBUG",
        request_timeout=5,
        connect_timeout=2,
    )


@pytest.fixture
def kernel(test_settings: NfieldSettings) -> Generator[Kernel, None, None]:
    """Kernel with the SDK registered and the resolver pointing at it."""
    with Kernel() as kernel:
        initialize_nfield(kernel, test_settings)
        yield kernel


@pytest.fixture
def fake_backend() -> FakeNfieldBackend:
    return FakeNfieldBackend()


@pytest_asyncio.fixture
async def fake_server(fake_backend: FakeNfieldBackend) -> AsyncGenerator[TestServer, None]:
    """Fake Nfield server running on a free local port."""
    server = TestServer(fake_backend.create_app())
    await server.start_server()
    yield server
    await server.close()


@pytest.fixture
def server_url(fake_server: TestServer) -> str:
    return str(fake_server.make_url("/v1"))


@pytest_asyncio.fixture
async def connection(kernel: Kernel, server_url: str) -> AsyncGenerator[NfieldConnection, None]:
    """Connection to the fake server, not yet signed in."""
    connection = NfieldConnectionFactory.create(server_url)
    yield connection
    await connection.close()


@pytest_asyncio.fixture
async def signed_in_connection(connection: NfieldConnection) -> NfieldConnection:
    assert await connection.sign_in("testdomain", "user1", "password123")
    return connection
