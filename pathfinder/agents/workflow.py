# pathfinder/agents/workflow.py
import logging
from typing import Sequence

from pydantic import ValidationError

from pathfinder.agents.llm.base import LLMClient
from pathfinder.agents.llm.client import get_llm_client
from pathfinder.agents.prompts import build_prompt
from pathfinder.agents.schemas import ChatMessage, Roadmap
from pathfinder.constants import DEFAULT_CHAT_TOPIC
from pathfinder.errors import InvalidResponseFormat

logger = logging.getLogger(__name__)

SPEAKERS = {"user": "User", "assistant": "Assistant"}


def parse_roadmap(raw_text: str) -> Roadmap:
    """Validate the service output as exactly one roadmap JSON document."""
    text = (raw_text or "").strip()
    try:
        return Roadmap.model_validate_json(text)
    except ValidationError as e:
        logger.error("Failed to parse roadmap response (%d chars): %s", len(text), text[:2000])
        raise InvalidResponseFormat(
            f"The AI returned an invalid response format: {e.error_count()} error(s)"
        ) from e


def generate_roadmap(role: str, llm: LLMClient | None = None) -> Roadmap:
    llm = llm or get_llm_client()
    spec = build_prompt(role, "roadmap")

    raw_text = llm.generate_text(
        system=spec.system_instruction,
        user=spec.instruction,
        temperature=spec.temperature,
        response_schema=spec.response_schema,
    )
    roadmap = parse_roadmap(raw_text)
    logger.info(
        "Roadmap for %r: %d phases, %d courses", role, len(roadmap.phases), len(roadmap.courses)
    )
    return roadmap


def build_chat_transcript(message: str, history: Sequence[ChatMessage]) -> str:
    lines = [f"{SPEAKERS[m.role]}: {m.content}" for m in history]
    lines.append(f"User: {message}")
    return "\n".join(lines)


def generate_chat_response(
    message: str,
    history: Sequence[ChatMessage],
    llm: LLMClient | None = None,
    *,
    topic: str = DEFAULT_CHAT_TOPIC,
) -> str:
    """
    Free-text answer to `message`. `history` must already be windowed by the
    caller and must not contain `message` itself.
    """
    llm = llm or get_llm_client()
    spec = build_prompt(topic, "chat")

    transcript = build_chat_transcript(message, history)
    text = llm.generate_text(
        system=spec.system_instruction,
        user=f"{spec.instruction}\n\n{transcript}",
        temperature=spec.temperature,
    )
    return text.strip()
