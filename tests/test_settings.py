import pytest
from pydantic import ValidationError

from voicescreen.config.settings import Settings


def test_defaults(settings) -> None:
    assert settings.openai_model == "gpt-4o-mini"
    assert settings.openai_tts_model == "gpt-4o-mini-tts"
    assert settings.openai_tts_voice == "coral"
    assert settings.openai_tts_speed == 1.0
    assert settings.session_max_age_seconds == 3600
    assert settings.recent_history_window == 5
    assert not settings.is_production


@pytest.mark.parametrize(
    "kwargs",
    [
        {"session_secret": "s"},
        {"openai_api_key": "k"},
        {"openai_api_key": "   ", "session_secret": "s"},
    ],
)
def test_refuses_to_load_without_credentials(monkeypatch, kwargs) -> None:
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    monkeypatch.delenv("SESSION_SECRET", raising=False)

    with pytest.raises(ValidationError):
        Settings(_env_file=None, **kwargs)


def test_reads_environment(monkeypatch) -> None:
    monkeypatch.setenv("OPENAI_API_KEY", "env-key")
    monkeypatch.setenv("SESSION_SECRET", "env-secret")
    monkeypatch.setenv("OPENAI_TTS_SPEED", "1.3")
    monkeypatch.setenv("ENVIRONMENT", "Production")
    monkeypatch.setenv("CORS_ORIGINS", "https://a.example, https://b.example")

    settings = Settings(_env_file=None)

    assert settings.openai_api_key == "env-key"
    assert settings.openai_tts_speed == 1.3
    assert settings.is_production
    assert settings.cors_origins == ["https://a.example", "https://b.example"]
