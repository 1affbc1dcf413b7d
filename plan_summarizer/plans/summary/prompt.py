from __future__ import annotations

from collections.abc import Sequence

from plan_summarizer.core.llm.openrouter_client import ChatMessage

PLAN_SEPARATOR = "\n\n---\n\n"

DEFAULT_SYSTEM_PROMPT = (
    "You are giving a summary of the changes in this terraform plan to a senior engineer. "
    "They are looking to know at a glance what is in this plan. "
    "Especially highlight any differences between environments; this is very important. "
    "For example, if a change is only being applied to one environment this MUST be called out. "
    "Your output should be a one-sentence summary followed by detailed bullet points of the "
    "changes to be made. Use as many bullet points as you need; the bullet points must cover "
    "every change. You may summarize a change, such as \"the AMI is being updated from X to Y "
    "in all environments\"; these would not need to be individual bullets. If a change is "
    "happening to every environment in the output, do not enumerate environments, just say "
    "\"all environments\" or \"all worker_generic\" environments."
)


def to_valid_utf8(text: str) -> str:
    """Replace lone surrogates with U+FFFD.

    Plan output captured from subprocesses with `surrogateescape` (and values
    from `os.environ`) can carry surrogates that cannot be encoded as JSON UTF-8.
    """

    return text.encode("utf-8", errors="surrogatepass").decode("utf-8", errors="replace")


def combine_plan_outputs(plan_outputs: Sequence[str]) -> str:
    """Join plan outputs in order, separated by a markdown horizontal rule."""

    return PLAN_SEPARATOR.join(plan_outputs)


def resolve_system_prompt(override: str | None) -> str:
    # An empty override means "not set", same as a missing variable.
    return override if override else DEFAULT_SYSTEM_PROMPT


def build_plan_summary_messages(
    *,
    plan_outputs: Sequence[str],
    system_prompt: str | None = None,
) -> list[ChatMessage]:
    """
    Create the [system, user] message pair for plan summarization.

    The system message carries the instructions; the user message carries
    nothing but the combined plan text so overrides never mix with plan content.
    """

    return [
        ChatMessage(role="system", content=to_valid_utf8(resolve_system_prompt(system_prompt))),
        ChatMessage(role="user", content=to_valid_utf8(combine_plan_outputs(plan_outputs))),
    ]
