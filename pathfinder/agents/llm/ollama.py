import httpx

from pathfinder.agents.llm.base import LLMClient, with_schema_instruction
from pathfinder.errors import GenerationFailed


class OllamaOpenAIClient(LLMClient):
    def __init__(self, base_url: str, model: str, *, timeout: float = 120,
    transport: httpx.BaseTransport | None = None):
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.timeout = timeout
        self.transport = transport

    def generate_text(self, * , system: str, user: str, temperature: float = 0.2,
    response_schema=None) -> str:
        # Ollama OpenAI-compatible endpoint
        # POST {base_url}/chat/completions with OpenAI message format

        url = f"{self.base_url}/chat/completions"
        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": with_schema_instruction(system, response_schema)},
                {"role": "user", "content": user},
            ],
            "temperature": temperature,
        }
        if response_schema is not None:
            payload["response_format"] = {"type": "json_object"}

        headers = {
            "Content-Type": "application/json",
            #OpenAI-compatible clients require an api key field; Ollama ignores it
            "Authorization": "Bearer ollama",
        }

        try:
            with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
                r = client.post(url, json=payload, headers=headers)
                r.raise_for_status()
                data = r.json()
        except httpx.HTTPError as e:
            raise GenerationFailed(f"Ollama request failed: {type(e).__name__}: {e}") from e
        except ValueError as e:
            raise GenerationFailed(f"Ollama returned a non-JSON envelope: {e}") from e

        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            raise GenerationFailed(f"Unexpected Ollama response envelope: {data!r}") from e
        return (content or "").strip()
