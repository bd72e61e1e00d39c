import httpx
from google import genai
from google.genai import errors, types

from pathfinder.agents.llm.base import LLMClient
from pathfinder.errors import GenerationFailed


class GeminiClient(LLMClient):
    def __init__(self, *, api_key: str, model: str, client=None):
        self.client = client or genai.Client(api_key=api_key)
        self.model = model

    def generate_text(self, *, system: str, user: str, temperature: float = 0.2,
    response_schema=None) -> str:
        config = {"system_instruction": system, "temperature": temperature}
        if response_schema is not None:
            # native JSON mode: the service itself enforces the shape
            config["response_mime_type"] = "application/json"
            config["response_schema"] = response_schema

        try:
            resp = self.client.models.generate_content(
                model=self.model,
                contents=user,
                config=types.GenerateContentConfig(**config),
            )
        except (errors.APIError, httpx.HTTPError) as e:
            raise GenerationFailed(f"Gemini request failed: {type(e).__name__}: {e}") from e

        return (resp.text or "").strip()
