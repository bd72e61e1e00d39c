from openai import OpenAI, OpenAIError

from .base import LLMClient, with_schema_instruction
from pathfinder.errors import GenerationFailed


class OpenAICompatibleClient(LLMClient):
    def __init__(self, *, api_key: str, base_url: str, model: str, client=None):
        self.client = client or OpenAI(api_key=api_key, base_url=base_url)
        self.model = model

    def generate_text(self, *, system: str, user: str, temperature: float = 0.2,
    response_schema=None) -> str:
        kwargs = {}
        if response_schema is not None:
            kwargs["response_format"] = {"type": "json_object"}

        try:
            resp = self.client.chat.completions.create(
                model=self.model,
                temperature=temperature,
                messages=[
                    {"role": "system", "content": with_schema_instruction(system, response_schema)},
                    {"role": "user", "content": user},
                ],
                **kwargs,
            )
        except OpenAIError as e:
            raise GenerationFailed(f"{type(e).__name__}: {e}") from e

        if not resp.choices:
            raise GenerationFailed("Completion returned no choices")
        return (resp.choices[0].message.content or "").strip()
