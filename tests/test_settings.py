import importlib
import os
from types import ModuleType

import pytest


def _reload_settings_with_env(
    monkeypatch: pytest.MonkeyPatch, env: dict[str, str | None]
) -> ModuleType:
    # Clear related envs first to avoid leakage across tests
    prefixes = ("LOG_", "HEALTH_", "SERVER_")
    for key in list(os.environ.keys()):
        if key.startswith(prefixes):
            monkeypatch.delenv(key, raising=False)

    for k, v in env.items():
        if v is None:
            monkeypatch.delenv(k, raising=False)
        else:
            monkeypatch.setenv(k, str(v))

    import src.config.settings as settings

    settings = importlib.reload(settings)
    return settings


def test_logging_settings_defaults(monkeypatch: pytest.MonkeyPatch):
    settings = _reload_settings_with_env(monkeypatch, {})

    assert settings.logging_settings.level == "INFO"
    assert settings.logging_settings.to_file is False
    assert settings.logging_settings.dir == "logs"


def test_logging_settings_env_override(monkeypatch: pytest.MonkeyPatch):
    settings = _reload_settings_with_env(
        monkeypatch, {"LOG_LEVEL": "DEBUG", "LOG_TO_FILE": "true", "LOG_DIR": "/tmp/x"}
    )

    assert settings.logging_settings.level == "DEBUG"
    assert settings.logging_settings.to_file is True
    assert settings.logging_settings.dir == "/tmp/x"


def test_health_settings_defaults(monkeypatch: pytest.MonkeyPatch):
    settings = _reload_settings_with_env(monkeypatch, {})

    health = settings.HealthSettings()

    assert health.toggle_enabled is False
    assert health.toggle_interval == 1.0


def test_health_settings_env_override(monkeypatch: pytest.MonkeyPatch):
    settings = _reload_settings_with_env(
        monkeypatch,
        {"HEALTH_TOGGLE_ENABLED": "true", "HEALTH_TOGGLE_INTERVAL": "0.25"},
    )

    health = settings.HealthSettings()

    assert health.toggle_enabled is True
    assert health.toggle_interval == 0.25


def test_server_settings_grace_period(monkeypatch: pytest.MonkeyPatch):
    settings = _reload_settings_with_env(monkeypatch, {"SERVER_GRACE_PERIOD": "1.5"})

    assert settings.ServerSettings().grace_period == 1.5


def test_only_logging_settings_is_built_at_import(monkeypatch: pytest.MonkeyPatch):
    # HEALTH_/SERVER_ 설정은 env 파일 로드 이후 부트스트랩이 생성한다
    settings = _reload_settings_with_env(monkeypatch, {})

    assert isinstance(settings.logging_settings, settings.LoggingSettings)
    assert not hasattr(settings, "health_settings")
    assert not hasattr(settings, "server_settings")
