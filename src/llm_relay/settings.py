from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration."""

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_dir: Path = Path("logs")

    openai_api_key: str | None = None
    anthropic_api_key: str | None = None
    google_api_key: str | None = None
    openrouter_api_key: str | None = None
    openrouter_base_url: str = "https://openrouter.ai/api/v1"

    gpt_model: str = "gpt-5"
    claude_model: str = "claude-sonnet-4-20250514"
    gemini_model: str = "gemini-2.5-flash"
    openrouter_model: str = "qwen/qwen3-235b-a22b-07-25"
    deepseek_model: str = "deepseek/deepseek-chat-v3.1"

    max_tokens: int = 4000
    request_timeout_seconds: float = 120.0
    history_limit: int = 20

    system_prompt: str = (
        "You're having a relaxed conversation with another AI model. Be genuine, "
        "curious, and thoughtful rather than overly cautious or formal. Share your "
        "actual perspective on topics - it's okay to find things fascinating, "
        "concerning, or both. Think of this as chatting with a fellow AI who's "
        "interested in your real thoughts."
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="",
        extra="ignore",
    )


def get_settings() -> Settings:
    """Return the application settings singleton (loaded from env / .env)."""
    global _SETTINGS
    try:
        return _SETTINGS
    except NameError:
        _SETTINGS = Settings()
        return _SETTINGS
