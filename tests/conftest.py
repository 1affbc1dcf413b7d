from __future__ import annotations

import json
from collections.abc import Callable

import httpx
import pytest

_ENV_VARS = (
    "OPENROUTER_API_KEY",
    "OPENROUTER_TERRAFORM_PLAN_SUMMARIZER_SYSTEM_PROMPT",
    "LOG_LEVEL",
    "APP_ENV",
)


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    # Settings read `.env` from the working directory; keep a developer's file out of tests.
    monkeypatch.chdir(tmp_path)

    from plan_summarizer.core.settings import get_settings

    get_settings.cache_clear()


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it served."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.requests: list[httpx.Request] = []

        def _record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(_record)

    def sent_json(self, index: int = 0) -> dict:
        return json.loads(self.requests[index].content)


@pytest.fixture
def completion_body() -> Callable[[str | None], dict]:
    """Build a minimal OpenRouter chat completion body with one choice."""

    def _make(content: str | None) -> dict:
        return {
            "id": "gen-123",
            "model": "anthropic/claude-sonnet-4.5",
            "choices": [{"message": {"role": "assistant", "content": content}}],
        }

    return _make


@pytest.fixture
def respond_with() -> Callable[..., RecordingTransport]:
    """Build a transport that answers every request with a fixed response."""

    def _make(status_code: int = 200, *, json_body=None, text: str | None = None):
        def handler(request: httpx.Request) -> httpx.Response:
            if text is not None:
                return httpx.Response(status_code, text=text)
            return httpx.Response(status_code, json=json_body)

        return RecordingTransport(handler)

    return _make


@pytest.fixture
def client():
    from fastapi.testclient import TestClient

    from plan_summarizer.main import create_app

    app = create_app()
    with TestClient(app) as c:
        yield c
