## Application settings configuration
from functools import lru_cache

from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from pathfinder.errors import ConfigurationError

PROVIDERS = ("gemini", "openai", "ollama")


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    env: str = "dev"
    log_level: str = "INFO"

    llm_provider: str = "gemini"

    # Gemini (default provider)
    gemini_api_key: str | None = None
    gemini_model: str = "gemini-2.5-flash"

    # Any OpenAI-compatible endpoint, Groq by default
    openai_api_key: str | None = None
    openai_base_url: str = "https://api.groq.com/openai/v1"
    openai_model: str = "llama-3.1-8b-instant"

    # Ollama settings
    ollama_base_url: str = "http://localhost:11434/v1"
    ollama_model: str = "llama3.1"

    # Flat key-value store; redis_url wins when set
    storage_path: str = ".pathfinder_store.json"
    redis_url: str | None = None

    session_absolute_days: int = 7
    loading_delay_seconds: float = 5.0

    def api_key(self) -> str | None:
        if self.llm_provider == "gemini":
            return self.gemini_api_key
        if self.llm_provider == "openai":
            return self.openai_api_key
        return None

    def check(self) -> "Settings":
        if self.llm_provider not in PROVIDERS:
            raise ConfigurationError(
                f"Unknown LLM_PROVIDER {self.llm_provider!r}; expected one of {', '.join(PROVIDERS)}"
            )
        if self.llm_provider != "ollama" and not self.api_key():
            env_name = f"{self.llm_provider.upper()}_API_KEY"
            raise ConfigurationError(f"{env_name} environment variable not found.")
        return self


def load_settings(**overrides) -> Settings:
    """Build settings from the environment and fail fast when they are unusable."""
    try:
        settings = Settings(**overrides)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid settings: {e}") from e
    return settings.check()


@lru_cache
def get_settings() -> Settings:
    return load_settings()
