## Per-browser UI contexts (roadmap page + chat widget)
import secrets
from collections import OrderedDict
from dataclasses import dataclass

from pathfinder.agents.llm.base import LLMClient
from pathfinder.chat.companion import ChatCompanion
from pathfinder.session.controller import DEFAULT_DELAY_SECONDS, RoadmapController

CLIENT_COOKIE_NAME = "pf_client"
MAX_CLIENTS = 1000


def new_client_id() -> str:
    return secrets.token_urlsafe(16)


@dataclass
class ClientContext:
    roadmap: RoadmapController
    chat: ChatCompanion


class ClientRegistry:
    def __init__(
        self,
        llm: LLMClient | None,
        *,
        delay_seconds: float = DEFAULT_DELAY_SECONDS,
        max_clients: int = MAX_CLIENTS,
    ):
        self.llm = llm
        self.delay_seconds = delay_seconds
        self.max_clients = max_clients
        self._contexts: "OrderedDict[str, ClientContext]" = OrderedDict()

    def get(self, client_id: str) -> ClientContext:
        ctx = self._contexts.get(client_id)
        if ctx is None:
            ctx = ClientContext(
                roadmap=RoadmapController(self.llm, delay_seconds=self.delay_seconds),
                chat=ChatCompanion(self.llm),
            )
            self._contexts[client_id] = ctx
            # least recently used clients are forgotten first
            while len(self._contexts) > self.max_clients:
                self._contexts.popitem(last=False)
        else:
            self._contexts.move_to_end(client_id)
        return ctx

    def __len__(self) -> int:
        return len(self._contexts)
