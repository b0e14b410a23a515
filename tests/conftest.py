"""
Pytest configuration and common fixtures for evolution_api tests.

The remote service is replaced by ``StubServer``, plugged into the client
through ``httpx.MockTransport``; retry sleeps are recorded instead of slept.
"""

import json
from dataclasses import dataclass
from typing import Any

import httpx
import pytest

from evolution_api.client.evolution_client import EvolutionClient
from evolution_api.client.transport import HttpTransport
from evolution_api.core.config.settings import EvolutionConfig
from evolution_api.core.logging.context import clear_instance_context


@dataclass
class Reply:
    """Canned response; a fresh ``httpx.Response`` is built per request."""

    status_code: int = 200
    body: Any = None
    headers: dict[str, str] | None = None

    def build(self) -> httpx.Response:
        if self.body is None:
            return httpx.Response(self.status_code, headers=self.headers)
        if isinstance(self.body, bytes):
            return httpx.Response(
                self.status_code, headers=self.headers, content=self.body
            )
        if isinstance(self.body, str):
            return httpx.Response(self.status_code, headers=self.headers, text=self.body)
        return httpx.Response(self.status_code, headers=self.headers, json=self.body)


class StubServer:
    """Records requests and answers from a queue, then from ``default``."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.queue: list[Reply | Exception] = []
        self.default: Reply | Exception = Reply(200, {})

    def reply(
        self,
        status_code: int = 200,
        body: Any = None,
        headers: dict[str, str] | None = None,
    ) -> "StubServer":
        self.queue.append(Reply(status_code, body, headers))
        return self

    def fail(self, error: Exception) -> "StubServer":
        self.queue.append(error)
        return self

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        item = self.queue.pop(0) if self.queue else self.default
        if isinstance(item, Exception):
            raise item
        return item.build()

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Any:
        content = self.last.content
        return json.loads(content) if content else None


@pytest.fixture
def server() -> StubServer:
    return StubServer()


@pytest.fixture
def config() -> EvolutionConfig:
    return EvolutionConfig(
        base_url="http://localhost:8080",
        api_key="test-key",
        timeout=5,
        retry_attempts=2,
        retry_delay=0.1,
    )


@pytest.fixture
def sleeps() -> list[float]:
    return []


@pytest.fixture
def http_client(server: StubServer) -> httpx.Client:
    client = httpx.Client(transport=httpx.MockTransport(server.handler))
    yield client
    client.close()


@pytest.fixture
def transport(config, http_client, sleeps) -> HttpTransport:
    return HttpTransport(config, http_client=http_client, sleep=sleeps.append)


@pytest.fixture
def client(config, transport) -> EvolutionClient:
    return EvolutionClient(config, transport=transport)


@pytest.fixture(autouse=True)
def setup_test_env(monkeypatch):
    """Isolate tests from the developer's environment and log context."""
    for name in (
        "EVOLUTION_API_BASE_URL",
        "EVOLUTION_API_KEY",
        "EVOLUTION_API_TIMEOUT",
        "EVOLUTION_API_RETRY_ATTEMPTS",
        "EVOLUTION_API_RETRY_DELAY",
        "EVOLUTION_WEBHOOK_URL",
        "EVOLUTION_WEBHOOK_EVENTS",
        "LOG_LEVEL",
        "ENVIRONMENT",
    ):
        monkeypatch.delenv(name, raising=False)
    clear_instance_context()
    yield
    clear_instance_context()
