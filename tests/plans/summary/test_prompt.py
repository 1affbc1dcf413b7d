from __future__ import annotations

from plan_summarizer.plans.summary.prompt import (
    DEFAULT_SYSTEM_PROMPT,
    build_plan_summary_messages,
    combine_plan_outputs,
    resolve_system_prompt,
    to_valid_utf8,
)


def test_combine_keeps_order_and_uses_exact_separator() -> None:
    assert combine_plan_outputs(["planA", "planB"]) == "planA\n\n---\n\nplanB"
    assert combine_plan_outputs(["b", "a", "c"]) == "b\n\n---\n\na\n\n---\n\nc"


def test_combine_single_plan_has_no_separator() -> None:
    assert combine_plan_outputs(["only"]) == "only"


def test_empty_override_falls_back_to_default() -> None:
    assert resolve_system_prompt(None) == DEFAULT_SYSTEM_PROMPT
    assert resolve_system_prompt("") == DEFAULT_SYSTEM_PROMPT
    assert resolve_system_prompt("X") == "X"


def test_default_prompt_asks_for_summary_and_environment_differences() -> None:
    assert "one-sentence summary" in DEFAULT_SYSTEM_PROMPT
    assert "bullet points" in DEFAULT_SYSTEM_PROMPT
    assert "differences between environments" in DEFAULT_SYSTEM_PROMPT
    assert "all environments" in DEFAULT_SYSTEM_PROMPT


def test_messages_are_system_then_user() -> None:
    messages = build_plan_summary_messages(plan_outputs=["p1", "p2"], system_prompt="custom")

    assert [m.role for m in messages] == ["system", "user"]
    assert messages[0].content == "custom"
    assert messages[1].content == "p1\n\n---\n\np2"


def test_lone_surrogates_become_replacement_characters() -> None:
    cleaned = to_valid_utf8("caf\udce9 \ud800!")

    assert "\udce9" not in cleaned and "\ud800" not in cleaned
    assert cleaned.startswith("caf\ufffd")
    assert cleaned.endswith("!")
    cleaned.encode("utf-8")


def test_valid_text_is_unchanged() -> None:
    assert to_valid_utf8("résumé ✓ plan") == "résumé ✓ plan"


def test_messages_are_cleaned_for_json() -> None:
    messages = build_plan_summary_messages(plan_outputs=["a\udce9"], system_prompt="s\udcff")

    for message in messages:
        message.content.encode("utf-8")
