from pathfinder.settings import Settings, get_settings
from pathfinder.agents.llm.base import LLMClient
from pathfinder.agents.llm.gemini import GeminiClient
from pathfinder.agents.llm.ollama import OllamaOpenAIClient
from pathfinder.agents.llm.openai_compat import OpenAICompatibleClient


def get_llm_client(settings: Settings | None = None) -> LLMClient:
    settings = settings or get_settings()

    if settings.llm_provider == "openai":
        return OpenAICompatibleClient(
            api_key=settings.openai_api_key,
            base_url=settings.openai_base_url,
            model=settings.openai_model,
        )

    if settings.llm_provider == "ollama":
        return OllamaOpenAIClient(
            base_url = settings.ollama_base_url,
            model = settings.ollama_model,
        )

    return GeminiClient(
        api_key=settings.gemini_api_key,
        model=settings.gemini_model,
    )
