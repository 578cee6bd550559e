"""Application settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration settings."""

    debug_mode: bool = False
    llm_backend: str = "ollama"  # ollama or openai
    ollama_base_url: str = "http://localhost:11434"
    openai_api_key: str = "ollama"  # Ollama's OpenAI-compatible endpoint ignores the key
    openai_base_url: str = "http://localhost:11434/v1"
    generation_timeout_seconds: float = 30.0
    warmup_timeout_seconds: float = 60.0
    repository_backend: str = "in_memory"  # in_memory or postgres
    database_url: str = ""  # Required when repository_backend=postgres
    generation_lock_backend: str = "in_memory"  # none, in_memory or redis
    redis_url: str = "redis://localhost:6379/0"
    generation_lock_ttl_seconds: int = 120
    lead_regeneration_policy: str = "overwrite"  # overwrite or preserve_active

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="",
    )


settings = Settings()
