"""
Configuration settings for the content wizard core.

All settings are loaded from environment variables with sensible defaults.
Use .env file for local development. A Settings instance is built once at
process start and handed to GenerationFacade.from_settings() / create_app();
nothing in the package reads a module-level instance.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict

from content_wizard.resilience.policy import ModelTier, RetryPolicy


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Application ===
    APP_NAME: str = "Content Wizard"
    APP_VERSION: str = "0.1.0"
    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # === Gemini ===
    GEMINI_API_KEY: str = ""
    LLM_REQUEST_TIMEOUT_S: int = 120  # Per transport call, not per task
    PRIMARY_MODEL: str = "gemini-3-pro-preview"
    FALLBACK_MODEL: str = "gemini-2.5-flash"
    FAST_MODEL: str = "gemini-2.5-flash"
    FAST_FALLBACK_MODEL: str = "gemini-2.5-flash"
    IMAGE_MODEL: str = "gemini-2.5-flash-image"
    IMAGE_FALLBACK_MODEL: str = "imagen-4.0-generate-001"
    TTS_MODEL: str = "gemini-2.5-flash-preview-tts"

    # === Retry & Fallback ===
    PRIMARY_MAX_RETRIES: int = 1  # Shallow: fail fast into the fallback model
    PRIMARY_BASE_DELAY_MS: int = 1000
    FALLBACK_MAX_RETRIES: int = 3
    FALLBACK_BASE_DELAY_MS: int = 2000
    RETRY_BACKOFF_FACTOR: float = 2.0

    # === Webhook tool ===
    WEBHOOK_URL: str = ""
    WEBHOOK_TIMEOUT_S: int = 60
    WEBHOOK_MAX_RETRIES: int = 2
    WEBHOOK_BASE_DELAY_MS: int = 1000

    # === Content limits ===
    DRAFT_CONTEXT_LIMIT: int = 10000  # chars of draft given to chat
    TITLE_SNIPPET_LIMIT: int = 2000
    ADDITION_CONTEXT_CHARS: int = 300
    MAX_KEYWORD_SEEDS: int = 3
    MAX_TOOL_SUGGESTIONS: int = 50
    MAX_EXISTING_RANKINGS: int = 20

    # === Speech ===
    SPEECH_SAMPLE_RATE: int = 24000
    SPEECH_CHANNELS: int = 1
    SPEECH_DEFAULT_VOICE: str = "Kore"

    # === Prompts ===
    PROMPT_TEMPLATES_DIR: str = ""  # Empty: templates shipped with the package

    # === Monitoring ===
    PROMETHEUS_ENABLED: bool = True

    def primary_policy(self) -> RetryPolicy:
        """Shallow policy used against the primary model."""
        return RetryPolicy(
            max_retries=self.PRIMARY_MAX_RETRIES,
            base_delay_ms=self.PRIMARY_BASE_DELAY_MS,
            backoff_factor=self.RETRY_BACKOFF_FACTOR,
        )

    def fallback_policy(self) -> RetryPolicy:
        """Deeper policy used once a task has fallen back."""
        return RetryPolicy(
            max_retries=self.FALLBACK_MAX_RETRIES,
            base_delay_ms=self.FALLBACK_BASE_DELAY_MS,
            backoff_factor=self.RETRY_BACKOFF_FACTOR,
        )

    def webhook_policy(self) -> RetryPolicy:
        return RetryPolicy(
            max_retries=self.WEBHOOK_MAX_RETRIES,
            base_delay_ms=self.WEBHOOK_BASE_DELAY_MS,
            backoff_factor=self.RETRY_BACKOFF_FACTOR,
        )

    def model_tiers(self) -> dict[str, ModelTier]:
        """
        Model tiers keyed by logical task type.

        - quality: long-form writing, research, outlines, editing
        - fast: ideation, keyword work, titles, social copy
        - image: article imagery (fallback runs a different task, see facade)
        - image_edit: image editing; only the primary image model accepts an input image
        - speech: text-to-speech
        """
        primary = self.primary_policy()
        fallback = self.fallback_policy()
        return {
            "quality": ModelTier(self.PRIMARY_MODEL, self.FALLBACK_MODEL, primary, fallback),
            "fast": ModelTier(self.FAST_MODEL, self.FAST_FALLBACK_MODEL, primary, fallback),
            "image": ModelTier(self.IMAGE_MODEL, self.IMAGE_FALLBACK_MODEL, primary, fallback),
            "image_edit": ModelTier(self.IMAGE_MODEL, self.IMAGE_MODEL, primary, fallback),
            "speech": ModelTier(self.TTS_MODEL, self.TTS_MODEL, primary, fallback),
        }
