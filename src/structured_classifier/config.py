"""
Configuration settings for the structured classifier.

Settings are loaded from environment variables with sensible defaults.
Use a .env file for local development.

The classifier core never reads these settings directly: it receives an
explicit ClassifierConfig. Settings only produce the default config for
the command line and for callers that do not pass one.
"""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from structured_classifier.models.classification import ClassifierConfig


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Application ===
    APP_NAME: str = "Structured Classifier"
    APP_VERSION: str = "0.1.0"
    LOG_LEVEL: str = "INFO"
    ENVIRONMENT: str = "development"

    # === LM Studio Configuration ===
    LMSTUDIO_BASE_URL: str = "http://localhost:1234"
    LMSTUDIO_CHAT_ENDPOINT: str = "/v1/chat/completions"
    LMSTUDIO_MODEL: str = "gemma-3-270m-it"
    LMSTUDIO_TIMEOUT: float = 30.0  # seconds

    # === LLM Generation Parameters ===
    LLM_TEMPERATURE: float = 0.2  # Low for reproducible categorical output

    # === Structured Output ===
    SCHEMA_NAME: str = "classification"
    STRICT_LABEL_CHECK: bool = False  # Re-check returned label client-side
    PROMPT_TEMPLATES_DIR: Optional[str] = None  # None = packaged templates

    def classifier_config(self) -> ClassifierConfig:
        """Build the explicit classifier config from these settings."""
        return ClassifierConfig(
            base_url=self.LMSTUDIO_BASE_URL,
            endpoint=self.LMSTUDIO_CHAT_ENDPOINT,
            model=self.LMSTUDIO_MODEL,
            temperature=self.LLM_TEMPERATURE,
            timeout=self.LMSTUDIO_TIMEOUT,
            schema_name=self.SCHEMA_NAME,
            strict_labels=self.STRICT_LABEL_CHECK,
        )

