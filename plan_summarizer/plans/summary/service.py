from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Protocol

import httpx

from plan_summarizer.core.llm.openrouter_client import (
    OPENROUTER_MODEL,
    OPENROUTER_REFERER,
    OPENROUTER_TIMEOUT_SECONDS,
    OPENROUTER_URL,
    ChatCompletionRequest,
    OpenRouterClient,
    OpenRouterConfig,
    OpenRouterResponseError,
    OpenRouterStatusError,
    OpenRouterTransportError,
)
from plan_summarizer.core.settings import Settings, load_settings
from plan_summarizer.plans.summary.prompt import build_plan_summary_messages
from plan_summarizer.plans.summary.schemas import SummaryOutcome

logger = logging.getLogger("plan_summarizer.plans.summary")


class LogSink(Protocol):
    """Leveled, printf-style logger. `logging.Logger` and `LoggerAdapter` both fit."""

    def debug(self, msg: str, *args: Any) -> None: ...

    def warning(self, msg: str, *args: Any) -> None: ...


@dataclass(frozen=True)
class SummarizerConfig:
    api_key: str | None = None
    system_prompt: str | None = None
    model: str = OPENROUTER_MODEL
    endpoint_url: str = OPENROUTER_URL
    referer: str = OPENROUTER_REFERER
    timeout_seconds: float = OPENROUTER_TIMEOUT_SECONDS
    transport: httpx.BaseTransport | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> SummarizerConfig:
        return cls(
            api_key=settings.openrouter_api_key,
            system_prompt=settings.openrouter_system_prompt,
        )


class PlanSummarizer:
    """Summarize Terraform plan outputs with one OpenRouter chat completion.

    Every failure degrades to a non-`summarized` outcome plus one log line;
    `summarize` never raises.
    """

    def __init__(self, *, config: SummarizerConfig):
        self._config = config

    def summarize(
        self, plan_outputs: Sequence[str], log: LogSink | None = None
    ) -> SummaryOutcome:
        log = log or logger

        if not plan_outputs:
            log.debug("no terraform outputs to summarize")
            return SummaryOutcome.disabled("no terraform outputs")

        api_key = self._config.api_key
        if not api_key:
            log.debug("OPENROUTER_API_KEY not set, skipping plan summarization")
            return SummaryOutcome.disabled("OPENROUTER_API_KEY not set")

        request = ChatCompletionRequest(
            model=self._config.model,
            messages=build_plan_summary_messages(
                plan_outputs=plan_outputs, system_prompt=self._config.system_prompt
            ),
        )
        client = OpenRouterClient(
            config=OpenRouterConfig(
                api_key=api_key,
                endpoint_url=self._config.endpoint_url,
                referer=self._config.referer,
                timeout_seconds=self._config.timeout_seconds,
                transport=self._config.transport,
            )
        )

        log.debug("sending plan to OpenRouter for summarization")
        try:
            response = client.create_chat_completion(request)
        except OpenRouterTransportError as exc:
            log.warning("failed to send request to OpenRouter: %s", exc)
            return SummaryOutcome.failed(f"request failed: {exc}")
        except OpenRouterStatusError as exc:
            log.warning("OpenRouter API returned status %d: %s", exc.status_code, exc.body)
            return SummaryOutcome.failed(f"OpenRouter returned status {exc.status_code}")
        except OpenRouterResponseError as exc:
            log.warning("failed to parse OpenRouter response: %s", exc)
            return SummaryOutcome.failed("invalid response body")

        # An explicit error object wins over any choices sent alongside it.
        if response.error is not None:
            log.warning(
                "OpenRouter API error: %s (type: %s)", response.error.message, response.error.type
            )
            return SummaryOutcome.failed(f"OpenRouter API error: {response.error.message}")

        if not response.choices:
            log.warning("OpenRouter response contained no choices")
            return SummaryOutcome.failed("no choices in response")

        summary = (response.choices[0].message.content or "").strip()
        if not summary:
            log.warning("OpenRouter returned empty summary")
            return SummaryOutcome.failed("empty summary")

        log.debug("successfully received summary from OpenRouter")
        return SummaryOutcome.summarized(summary)


def summarize_plan_outcome(
    plan_outputs: Sequence[str], log: LogSink | None = None
) -> SummaryOutcome:
    """Like `summarize_plans`, but keeps the disabled/failed distinction."""

    if not plan_outputs:
        # Skip reading the environment when there is nothing to send.
        return PlanSummarizer(config=SummarizerConfig()).summarize(plan_outputs, log)

    config = SummarizerConfig.from_settings(load_settings())
    return PlanSummarizer(config=config).summarize(plan_outputs, log)


def summarize_plans(plan_outputs: Sequence[str], log: LogSink | None = None) -> str:
    """
    Send Terraform plan outputs to OpenRouter and return the summary.

    All outputs are combined into a single request. The API key and the
    optional system prompt override are read from the environment on every
    call. Returns "" when there is nothing to summarize, when no API key is
    configured, or when anything goes wrong; the reason is logged.
    """

    return summarize_plan_outcome(plan_outputs, log).text
