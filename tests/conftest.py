import json
from collections.abc import Callable

import httpx
import pytest
from fastapi.testclient import TestClient

from supportbot.main import app
from supportbot.services.credentials import CredentialBundle


@pytest.fixture
def credentials() -> CredentialBundle:
    return CredentialBundle(
        api_key="llx-test-key",
        index_id="pipe-123",
        project_id="proj-1",
        organization_id="org-1",
    )


@pytest.fixture
def headers(credentials) -> dict[str, str]:
    return credentials.request_headers()


@pytest.fixture
def client() -> TestClient:
    return TestClient(app, raise_server_exceptions=False)


class Recorder:
    """Collects requests seen by an ``httpx.MockTransport``."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.handler = handler
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)

    def json_body(self, index: int = 0):
        return json.loads(self.requests[index].content)

    def client(self, **kwargs) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self), **kwargs)


@pytest.fixture
def recorder():
    def make(handler):
        return Recorder(handler)

    return make
