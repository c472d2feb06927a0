"""Environment-driven service configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Self

from dotenv import load_dotenv

from stockbrief.errors import ConfigError

DEFAULT_POLYGON_BASE_URL = "https://api.polygon.io"
DEFAULT_HF_MODEL_URL = "https://api-inference.huggingface.co/models/microsoft/DialoGPT-medium"
PLACEHOLDER_HF_TOKEN = "YOUR_HUGGING_FACE_TOKEN"


def parse_symbols(value: str | None) -> list[str]:
    """Parse comma-separated symbols."""
    if not value:
        return []
    return [item.strip().upper() for item in value.split(",") if item.strip()]


@dataclass(frozen=True)
class Settings:
    """Immutable service settings, resolved once at startup."""

    polygon_api_key: str = ""
    polygon_base_url: str = DEFAULT_POLYGON_BASE_URL
    hugging_face_token: str = ""
    hf_model_url: str = DEFAULT_HF_MODEL_URL
    quote_timeout_seconds: float = 10.0
    quote_max_retries: int = 1
    ai_timeout_seconds: float = 30.0
    ai_min_report_chars: int = 50
    log_level: str = "INFO"
    log_file: str | None = None
    host: str = "0.0.0.0"
    port: int = 3000

    @property
    def ai_enabled(self) -> bool:
        """True when a real (non-placeholder) Hugging Face token is configured."""
        token = self.hugging_face_token.strip()
        return bool(token) and token != PLACEHOLDER_HF_TOKEN

    @classmethod
    def from_env(cls) -> Self:
        """Create settings from `.env` and process environment variables."""
        load_dotenv()
        try:
            raw = cls(
                polygon_api_key=str(os.getenv("POLYGON_API_KEY", "")).strip(),
                polygon_base_url=str(
                    os.getenv("POLYGON_BASE_URL", DEFAULT_POLYGON_BASE_URL)
                ).strip(),
                hugging_face_token=str(os.getenv("HUGGING_FACE_TOKEN", "")).strip(),
                hf_model_url=str(os.getenv("HF_MODEL_URL", DEFAULT_HF_MODEL_URL)).strip(),
                quote_timeout_seconds=float(os.getenv("QUOTE_TIMEOUT_SECONDS", "10")),
                quote_max_retries=int(os.getenv("QUOTE_MAX_RETRIES", "1")),
                ai_timeout_seconds=float(os.getenv("AI_TIMEOUT_SECONDS", "30")),
                ai_min_report_chars=int(os.getenv("AI_MIN_REPORT_CHARS", "50")),
                log_level=str(os.getenv("LOG_LEVEL", "INFO")).strip().upper(),
                log_file=str(os.getenv("LOG_FILE", "")).strip() or None,
                host=str(os.getenv("HOST", "0.0.0.0")).strip(),
                port=int(os.getenv("PORT", "3000")),
            )
        except ValueError as exc:
            raise ConfigError(
                "One or more numeric environment variables are invalid. "
                "Check the *_TIMEOUT_SECONDS, QUOTE_MAX_RETRIES, AI_MIN_REPORT_CHARS "
                "and PORT values in your .env file."
            ) from exc
        return raw.validate()

    def with_overrides(self, **kwargs: object) -> Self:
        """Return a new settings object with updated values."""
        updated = replace(self, **kwargs)
        return updated.validate()

    def validate(self) -> Self:
        """Validate settings fields and raise clear config errors."""
        if self.quote_timeout_seconds <= 0:
            raise ConfigError("QUOTE_TIMEOUT_SECONDS must be positive.")
        if self.ai_timeout_seconds <= 0:
            raise ConfigError("AI_TIMEOUT_SECONDS must be positive.")
        if self.quote_max_retries <= 0:
            raise ConfigError("QUOTE_MAX_RETRIES must be a positive integer.")
        if self.ai_min_report_chars < 0:
            raise ConfigError("AI_MIN_REPORT_CHARS must not be negative.")
        if not 0 < self.port < 65536:
            raise ConfigError("PORT must be between 1 and 65535.")
        if not self.polygon_base_url:
            raise ConfigError("POLYGON_BASE_URL must not be empty.")
        return self
