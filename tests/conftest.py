"""Pytest fixtures for testing"""

import httpx
import pytest
from fastapi.testclient import TestClient
from affordability_gateway.api.main import create_app
from affordability_gateway.api.dependencies import get_mono_client
from affordability_gateway.infrastructure.clients.mono import MonoClient
from mocks.mono_server.main import SECRET_KEY, app as mono_app

MONO_TEST_BASE = "http://mono.test"


@pytest.fixture
def mono_client() -> MonoClient:
    """Mono client wired to the in-process mock Mono API"""
    return MonoClient(
        base_url=MONO_TEST_BASE,
        secret_key=SECRET_KEY,
        transport=httpx.ASGITransport(app=mono_app),
    )


@pytest.fixture
def client() -> TestClient:
    """Create FastAPI test client"""
    return TestClient(create_app())


@pytest.fixture
def linked_client(mono_client: MonoClient) -> TestClient:
    """FastAPI test client whose Mono dependency talks to the mock Mono API"""
    app = create_app()
    app.dependency_overrides[get_mono_client] = lambda: mono_client
    return TestClient(app)
