from __future__ import annotations

from plan_summarizer.core.settings import get_settings, load_settings


def test_defaults_leave_summarization_disabled() -> None:
    settings = load_settings()

    assert settings.openrouter_api_key is None
    assert settings.openrouter_system_prompt is None
    assert settings.is_development is False


def test_reads_openrouter_variables(monkeypatch) -> None:
    monkeypatch.setenv("OPENROUTER_API_KEY", "sk-env")
    monkeypatch.setenv("OPENROUTER_TERRAFORM_PLAN_SUMMARIZER_SYSTEM_PROMPT", "Be brief.")

    settings = load_settings()

    assert settings.openrouter_api_key == "sk-env"
    assert settings.openrouter_system_prompt == "Be brief."


def test_dotenv_is_read_only_by_service_settings(tmp_path) -> None:
    # The autouse fixture chdirs into tmp_path.
    (tmp_path / ".env").write_text(
        "OPENROUTER_API_KEY=sk-dotenv\nLOG_LEVEL=debug\n", encoding="utf-8"
    )

    assert get_settings().log_level == "debug"
    assert get_settings().openrouter_api_key == "sk-dotenv"
    assert load_settings().openrouter_api_key is None
    assert load_settings().log_level == "INFO"


def test_load_settings_is_not_cached(monkeypatch) -> None:
    assert load_settings().openrouter_api_key is None
    monkeypatch.setenv("OPENROUTER_API_KEY", "sk-later")
    assert load_settings().openrouter_api_key == "sk-later"


def test_get_settings_is_cached() -> None:
    assert get_settings() is get_settings()
