from __future__ import annotations

import time
from dataclasses import dataclass

import httpx
from pydantic import BaseModel, ValidationError
from pydantic_core import PydanticSerializationError

OPENROUTER_URL = "https://openrouter.ai/api/v1/chat/completions"
OPENROUTER_MODEL = "anthropic/claude-sonnet-4.5"
OPENROUTER_REFERER = "https://github.com/memfault/atlantis-openrouter-summarizer"
OPENROUTER_TIMEOUT_SECONDS = 30.0


class OpenRouterError(Exception):
    """Base error for OpenRouter client failures."""


class OpenRouterTransportError(OpenRouterError):
    """Raised when the request cannot be built, sent, or its body read."""


class OpenRouterStatusError(OpenRouterError):
    """Raised when OpenRouter answers with a non-200 status."""

    def __init__(self, status_code: int, body: str):
        super().__init__(f"OpenRouter API returned status {status_code}")
        self.status_code = status_code
        self.body = body


class OpenRouterResponseError(OpenRouterError):
    """Raised when the response body does not match the chat completion shape."""


class ChatMessage(BaseModel):
    role: str
    content: str


class ChatCompletionRequest(BaseModel):
    model: str
    messages: list[ChatMessage]


class ChoiceMessage(BaseModel):
    role: str = ""
    # Providers send null content for tool-call-only turns.
    content: str | None = None


class ChatChoice(BaseModel):
    message: ChoiceMessage


class APIError(BaseModel):
    message: str = ""
    type: str = ""


class ChatCompletionResponse(BaseModel):
    """Subset of the OpenRouter response we read; unknown fields are ignored."""

    choices: list[ChatChoice] | None = None
    error: APIError | None = None


@dataclass(frozen=True)
class OpenRouterConfig:
    api_key: str
    endpoint_url: str = OPENROUTER_URL
    referer: str = OPENROUTER_REFERER
    timeout_seconds: float = OPENROUTER_TIMEOUT_SECONDS
    # Tests swap in httpx.MockTransport.
    transport: httpx.BaseTransport | None = None


class OpenRouterClient:
    """
    Minimal synchronous OpenRouter chat completion client.

    Design notes:
    - One request per call, no retries; a fresh httpx.Client is opened and
      closed around every request so instances hold no connection state.
    - `timeout_seconds` bounds the whole exchange, body included, not each read.
    - Failures are raised as OpenRouterError subclasses; callers decide how to degrade.
    """

    def __init__(self, *, config: OpenRouterConfig):
        self._config = config

    def create_chat_completion(self, request: ChatCompletionRequest) -> ChatCompletionResponse:
        timeout = self._config.timeout_seconds
        deadline = time.monotonic() + timeout
        headers = {
            "Authorization": f"Bearer {self._config.api_key}",
            "Content-Type": "application/json",
            "HTTP-Referer": self._config.referer,
        }

        try:
            body = request.model_dump_json().encode("utf-8")
        except (PydanticSerializationError, UnicodeEncodeError) as exc:
            raise OpenRouterTransportError(f"failed to marshal request: {exc}") from exc

        try:
            with httpx.Client(timeout=timeout, transport=self._config.transport) as client:
                with client.stream(
                    "POST", self._config.endpoint_url, headers=headers, content=body
                ) as resp:
                    status_code = resp.status_code
                    content = _read_before_deadline(resp, deadline=deadline, timeout=timeout)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise OpenRouterTransportError(str(exc) or type(exc).__name__) from exc
        except ValueError as exc:
            # Header values that are not valid ASCII (e.g. a pasted key with stray characters).
            raise OpenRouterTransportError(f"invalid request: {exc}") from exc

        if status_code != 200:
            raise OpenRouterStatusError(status_code, content.decode("utf-8", errors="replace"))

        try:
            return ChatCompletionResponse.model_validate_json(content)
        except ValidationError as exc:
            raise OpenRouterResponseError(str(exc)) from exc


def _read_before_deadline(resp: httpx.Response, *, deadline: float, timeout: float) -> bytes:
    """Read the whole body, failing once the request as a whole outlives `timeout`.

    httpx timeouts apply per network operation, so a server that trickles bytes
    never trips them; the deadline is checked after headers and every chunk.
    """

    chunks: list[bytes] = []
    if time.monotonic() > deadline:
        raise OpenRouterTransportError(f"request timed out after {timeout:g}s")
    for chunk in resp.iter_bytes():
        chunks.append(chunk)
        if time.monotonic() > deadline:
            raise OpenRouterTransportError(f"request timed out after {timeout:g}s")
    return b"".join(chunks)
