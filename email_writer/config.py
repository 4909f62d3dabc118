"""Application configuration."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_WEBHOOK_URL = "https://ksaremo23.app.n8n.cloud/webhook-test/ai-email-writer-n8n"


class Settings(BaseSettings):
    """Pydantic settings wrapper."""

    environment: str = Field(default="development", alias="ENVIRONMENT")
    webhook_url: str = Field(default=DEFAULT_WEBHOOK_URL, alias="WEBHOOK_URL")
    # None waits on the webhook until the transport gives up.
    request_timeout_seconds: float | None = Field(default=None, gt=0, alias="REQUEST_TIMEOUT_SECONDS")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_content_enabled: bool = Field(default=False, alias="LOG_CONTENT_ENABLED")
    max_form_sessions: int = Field(default=1000, ge=1, alias="MAX_FORM_SESSIONS")
    host: str = Field(default="127.0.0.1", alias="HOST")
    port: int = Field(default=8000, alias="PORT")

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


settings = Settings()
