from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings

DEFAULT_SYSTEM_PROMPT = (
    "You are a helpful AI assistant specializing in Grafana documentation and support. "
    "You also have access to video transcripts from YouTube. Provide clear, concise, "
    "and helpful responses based on the documentation and video content provided."
)


class Settings(BaseSettings):
    """Application settings validated via Pydantic.

    Values are loaded from environment variables and/or a .env file.
    """

    # Generation backend
    anthropic_api_key: str = ""
    llm_model: str = "claude-sonnet-4-20250514"
    llm_max_tokens: int = 1024
    llm_timeout_seconds: float = 30.0
    llm_max_retries: int = 2
    system_prompt: str = DEFAULT_SYSTEM_PROMPT

    # Supabase (conversation history); leave blank to disable persistence
    supabase_url: str = ""
    supabase_key: str = ""
    persistence_timeout_seconds: float = 10.0

    # Transcript ingestion
    caption_language: str = "en"
    caption_timeout_seconds: float = 15.0
    chunk_size: int = 500
    chunk_overlap: int = 50
    youtube_video_ids: str = ""  # comma-separated ids or URLs ingested at startup

    # Chat behaviour
    retrieval_limit: int = 3
    enable_follow_up_questions: bool = True
    enable_sources: bool = True
    debug_retrieval: bool = False

    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    @property
    def persistence_enabled(self) -> bool:
        return bool(self.supabase_url and self.supabase_key)

    def startup_video_ids(self) -> list[str]:
        """Split ``youtube_video_ids`` into trimmed, non-empty entries."""
        return [v.strip() for v in self.youtube_video_ids.split(",") if v.strip()]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached Settings instance.

    Gracefully handles missing .env files (e.g. in CI/testing) by falling
    back to environment variables and defaults.
    """
    try:
        return Settings()
    except Exception:
        # If .env is missing or unreadable, build settings from env vars only.
        return Settings(_env_file=None)  # type: ignore[call-arg]


settings = get_settings()
