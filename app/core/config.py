"""Application configuration management."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API Configuration
    app_name: str = "Audio to SRT Service"
    app_version: str = "0.1.0"
    app_description: str = (
        "Transcribe audio with Google GenAI (Gemini), edit timing and export SRT subtitles"
    )

    # Environment
    environment: str = "development"  # development, staging, production

    # Server Configuration
    host: str = "0.0.0.0"
    port: int = 8000
    allowed_hosts: list[str] = ["*"]

    # Authentication
    api_key: str | None = None

    # CORS Configuration
    cors_enabled: bool = True
    cors_origins: list[str] = ["*"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    # Google GenAI Configuration
    google_api_key: str | None = None
    transcription_model: str = "gemini-2.5-flash"

    # Subtitle Configuration
    default_max_chars_per_line: int = 42  # 0 disables reflow
    chars_per_second: float = 15  # Fixed reading speed used by the timing advisor

    # Upload Limits
    max_file_size: int = 104_857_600  # 100MB in bytes
    allowed_audio_formats: set[str] = {".wav", ".mp3", ".m4a", ".flac", ".ogg", ".webm", ".aac"}

    # Sessions
    max_sessions: int = 100

    # Logging
    log_level: str = "INFO"
    enable_log_redaction: bool = True  # Redact sensitive data from logs

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )


@lru_cache
def get_settings() -> Settings:
    """Return the cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
