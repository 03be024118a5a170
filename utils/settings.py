"""Environment-driven configuration for the skin assessment service."""

from pathlib import Path
from typing import List, Optional

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_MODEL = "gpt-5-mini"
DEFAULT_MAX_UPLOAD_BYTES = 10 * 1024 * 1024


class Settings(BaseSettings):
    """Runtime configuration, read once at application start.

    Values come from the process environment or a root-level ``.env`` file;
    keyword arguments take precedence, which is how tests build their own.
    """

    # model
    openai_api_key: Optional[str] = None
    model_id: str = Field(default=DEFAULT_MODEL, validation_alias=AliasChoices("model_id", "OPENAI_MODEL"))
    max_attempts: int = Field(
        default=3, ge=1, validation_alias=AliasChoices("max_attempts", "MODEL_MAX_ATTEMPTS")
    )
    base_delay_ms: int = Field(
        default=1000, ge=0, validation_alias=AliasChoices("base_delay_ms", "MODEL_BASE_DELAY_MS")
    )

    # storage and uploads
    database_dir: Path = Path("data")
    max_upload_bytes: int = Field(default=DEFAULT_MAX_UPLOAD_BYTES, ge=1)

    # http
    cors_origins: str = "*"
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        frozen=True,
        protected_namespaces=("settings_",),
    )

    @field_validator("openai_api_key")
    @classmethod
    def _blank_key_is_missing(cls, value: Optional[str]) -> Optional[str]:
        return value or None

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.upper()

    @property
    def base_delay_seconds(self) -> float:
        return self.base_delay_ms / 1000.0

    @property
    def allowed_origins(self) -> List[str]:
        """`CORS_ORIGINS` split on commas; falls back to allowing any origin."""
        origins = [o.strip() for o in self.cors_origins.split(",") if o.strip()]
        return origins or ["*"]
