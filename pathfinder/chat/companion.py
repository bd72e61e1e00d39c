# pathfinder/chat/companion.py
import asyncio
import logging
from typing import Iterable, List, Sequence, Tuple

from pathfinder.agents.llm.base import LLMClient
from pathfinder.agents.schemas import ChatMessage
from pathfinder.agents.workflow import generate_chat_response
from pathfinder.constants import (
    CHAT_FALLBACK,
    CHAT_GREETING,
    CHAT_HISTORY_LIMIT,
    DEFAULT_CHAT_TOPIC,
)
from pathfinder.errors import PathfinderError

logger = logging.getLogger(__name__)


def truncate_history(messages: Sequence[ChatMessage], limit: int = CHAT_HISTORY_LIMIT) -> List[ChatMessage]:
    """Keep the newest `limit` messages, oldest dropped first."""
    if limit <= 0:
        return []
    return list(messages)[-limit:]


def greeting() -> ChatMessage:
    return ChatMessage(role="assistant", content=CHAT_GREETING)


class ChatCompanion:
    """
    Floating technical-assistant chat for one client.

    Two states: idle and awaiting a reply. A submit while awaiting is ignored,
    and a reply that arrives after clear() is dropped.
    """

    def __init__(
        self,
        llm: LLMClient | None = None,
        *,
        topic: str = DEFAULT_CHAT_TOPIC,
        history_limit: int = CHAT_HISTORY_LIMIT,
        messages: Iterable[ChatMessage] | None = None,
    ):
        self.llm = llm
        self.topic = topic
        self.history_limit = history_limit
        self._messages: List[ChatMessage] = list(messages) if messages is not None else [greeting()]
        self._token = 0
        self.awaiting = False

    @property
    def messages(self) -> Tuple[ChatMessage, ...]:
        return tuple(self._messages)

    async def submit(self, text: str) -> bool:
        text = (text or "").strip()
        if not text or self.awaiting:
            return False

        self._messages.append(ChatMessage(role="user", content=text))
        self.awaiting = True
        self._token += 1
        token = self._token

        # window includes the new message; the transcript adds it last
        window = truncate_history(self._messages, self.history_limit)
        reply = None
        try:
            reply = await asyncio.to_thread(
                generate_chat_response, text, window[:-1], self.llm, topic=self.topic
            )
        except PathfinderError as e:
            logger.warning("Chat reply failed: %s: %s", type(e).__name__, e)
        except Exception:
            logger.exception("Unexpected error while answering chat message")
        finally:
            # a cleared conversation owns the state now
            if token == self._token:
                self._messages.append(ChatMessage(role="assistant", content=reply or CHAT_FALLBACK))
                self.awaiting = False
            else:
                logger.info("Discarding chat reply for a cleared conversation")
        return True

    def clear(self) -> None:
        self._token += 1
        self._messages = [greeting()]
        self.awaiting = False
