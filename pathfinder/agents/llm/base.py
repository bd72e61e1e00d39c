## Base LLM Client Interface
import json
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional


class LLMClient(ABC):
    @abstractmethod
    def generate_text(self, *, system: str, user: str, temperature: float = 0.2,
    response_schema: Optional[Dict[str, Any]] = None) -> str:
        """
        One request to the remote service. Implementations raise
        GenerationFailed for any transport or service error.
        """
        raise NotImplementedError


def with_schema_instruction(system: str, response_schema: Optional[Dict[str, Any]]) -> str:
    """
    Fallback for providers without native schema support: ask for JSON only
    and spell the expected shape out in the system instruction.
    """
    if response_schema is None:
        return system
    return (
        f"{system}\n\n"
        "Return ONLY valid JSON (no markdown, no code fences, no commentary) "
        "matching this schema:\n"
        f"{json.dumps(response_schema, indent=2)}"
    )
