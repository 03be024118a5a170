from pathlib import Path

import pytest
from pydantic import ValidationError

from utils.settings import DEFAULT_MAX_UPLOAD_BYTES, DEFAULT_MODEL, Settings

ENV_NAMES = (
    "OPENAI_API_KEY",
    "OPENAI_MODEL",
    "MODEL_MAX_ATTEMPTS",
    "MODEL_BASE_DELAY_MS",
    "DATABASE_DIR",
    "MAX_UPLOAD_BYTES",
    "CORS_ORIGINS",
    "LOG_LEVEL",
)


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_NAMES:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults(clean_env):
    settings = Settings(_env_file=None)
    assert settings.openai_api_key is None
    assert settings.model_id == DEFAULT_MODEL
    assert settings.max_attempts == 3
    assert settings.base_delay_seconds == 1.0
    assert settings.database_dir == Path("data")
    assert settings.max_upload_bytes == DEFAULT_MAX_UPLOAD_BYTES
    assert settings.allowed_origins == ["*"]
    assert settings.log_level == "INFO"


def test_reads_environment(clean_env):
    clean_env.setenv("OPENAI_API_KEY", "sk-test")
    clean_env.setenv("OPENAI_MODEL", "gpt-5")
    clean_env.setenv("MODEL_MAX_ATTEMPTS", "5")
    clean_env.setenv("MODEL_BASE_DELAY_MS", "250")
    clean_env.setenv("DATABASE_DIR", "/tmp/skin")
    clean_env.setenv("CORS_ORIGINS", "http://localhost:3000, https://app.example.com,")
    clean_env.setenv("LOG_LEVEL", "debug")

    settings = Settings(_env_file=None)

    assert settings.openai_api_key == "sk-test"
    assert settings.model_id == "gpt-5"
    assert settings.max_attempts == 5
    assert settings.base_delay_seconds == 0.25
    assert settings.database_dir == Path("/tmp/skin")
    assert settings.allowed_origins == ["http://localhost:3000", "https://app.example.com"]
    assert settings.log_level == "DEBUG"


def test_blank_api_key_counts_as_missing(clean_env):
    clean_env.setenv("OPENAI_API_KEY", "")
    assert Settings(_env_file=None).openai_api_key is None


def test_keyword_arguments_override_environment(clean_env):
    clean_env.setenv("MODEL_MAX_ATTEMPTS", "7")
    assert Settings(_env_file=None, max_attempts=2).max_attempts == 2


@pytest.mark.parametrize(
    "name, value",
    [("MODEL_MAX_ATTEMPTS", "0"), ("MODEL_MAX_ATTEMPTS", "three"), ("MODEL_BASE_DELAY_MS", "-1")],
)
def test_invalid_values_are_rejected(clean_env, name, value):
    clean_env.setenv(name, value)
    with pytest.raises(ValidationError):
        Settings(_env_file=None)
