"""
Pytest fixtures for proxy gateway tests
"""

import json
from typing import Any, Callable, List

import httpx
import pytest
from fastapi.testclient import TestClient

from proxy_service.utils.backend_client import BackendClient, get_backend_client

BACKEND_URL = "https://backend.test"


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "asyncio: mark test as an asyncio test."
    )


class FakeBackend:
    """Records every outbound request and answers with the configured handler"""

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self.handler: Callable[[httpx.Request], httpx.Response] = (
            lambda request: httpx.Response(200, json={"ok": True})
        )

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)

    def respond(self, status_code: int = 200, json_body: Any = None, **kwargs):
        if json_body is not None:
            kwargs["content"] = json.dumps(json_body).encode()
            kwargs.setdefault("headers", {"content-type": "application/json"})
        self.handler = lambda request: httpx.Response(status_code, **kwargs)

    def fail(self, exc_type=httpx.ConnectError, message: str = "connection refused"):
        def handler(request):
            raise exc_type(message, request=request)
        self.handler = handler

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture(autouse=True)
def gateway_env(monkeypatch):
    """Point the gateway at a fake backend"""
    monkeypatch.delenv("NEXT_PUBLIC_API_URL", raising=False)
    monkeypatch.setenv("BACKEND_API_URL", BACKEND_URL + "/")


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def client(backend):
    """Test client whose backend calls go to the FakeBackend"""
    from proxy_service.main import app

    test_backend_client = BackendClient(transport=httpx.MockTransport(backend))
    app.dependency_overrides[get_backend_client] = lambda: test_backend_client

    yield TestClient(app)

    app.dependency_overrides.clear()
