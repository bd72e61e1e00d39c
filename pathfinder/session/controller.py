# pathfinder/session/controller.py
"""
Roadmap page state for one browser client.

Status flow: idle -> loading -> displayed | error, back to idle on reset.
Every generation gets a request token; a result is applied only while its
token is still the current one, so Start Over or a newer request makes an
in-flight result harmless.
"""
import asyncio
import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from pathfinder.agents.llm.base import LLMClient
from pathfinder.agents.schemas import Roadmap
from pathfinder.agents.workflow import generate_roadmap
from pathfinder.constants import DELAY_MESSAGE, ROADMAP_ERROR_MESSAGE
from pathfinder.errors import PathfinderError

logger = logging.getLogger(__name__)

DEFAULT_DELAY_SECONDS = 5.0


class RoadmapStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    DISPLAYED = "displayed"
    ERROR = "error"


@dataclass(frozen=True)
class RoadmapView:
    status: RoadmapStatus
    selected_role: Optional[str]
    roadmap: Optional[Roadmap]
    error: Optional[str]
    delay_message: Optional[str]
    token: int

    def to_json_dict(self) -> dict:
        return {
            "status": self.status.value,
            "selectedRole": self.selected_role,
            "roadmap": self.roadmap.to_json_dict() if self.roadmap else None,
            "error": self.error,
            "delayMessage": self.delay_message,
            "token": self.token,
        }


class RoadmapController:
    def __init__(
        self,
        llm: LLMClient | None = None,
        *,
        delay_seconds: float = DEFAULT_DELAY_SECONDS,
        generate: Callable[..., Roadmap] = generate_roadmap,
    ):
        self.llm = llm
        self.delay_seconds = delay_seconds
        self._generate = generate

        self._token = 0
        self.status = RoadmapStatus.IDLE
        self.selected_role: Optional[str] = None
        self.roadmap: Optional[Roadmap] = None
        self.error: Optional[str] = None
        self.delay_message_visible = False
        self._task: Optional[asyncio.Task] = None

    @property
    def busy(self) -> bool:
        return self.status is RoadmapStatus.LOADING

    def view(self) -> RoadmapView:
        return RoadmapView(
            status=self.status,
            selected_role=self.selected_role,
            roadmap=self.roadmap,
            error=self.error,
            delay_message=DELAY_MESSAGE if self.delay_message_visible else None,
            token=self._token,
        )

    def _begin(self, role: str) -> Optional[int]:
        if self.busy:
            return None
        self._token += 1
        self.status = RoadmapStatus.LOADING
        self.selected_role = role
        self.roadmap = None
        self.error = None
        self.delay_message_visible = False
        return self._token

    def _is_current(self, token: int) -> bool:
        return token == self._token

    def _show_delay_message(self, token: int) -> None:
        if self._is_current(token) and self.busy:
            self.delay_message_visible = True

    def _fail(self) -> None:
        self.status = RoadmapStatus.ERROR
        self.roadmap = None
        self.error = ROADMAP_ERROR_MESSAGE
        self.delay_message_visible = False

    async def _run(self, token: int, role: str, *, reraise: bool = True) -> None:
        timer = asyncio.get_running_loop().call_later(
            self.delay_seconds, self._show_delay_message, token
        )
        start = time.perf_counter()
        try:
            roadmap = await asyncio.to_thread(self._generate, role, self.llm)
        except PathfinderError as e:
            logger.warning("Roadmap generation for %r failed: %s: %s", role, type(e).__name__, e)
            if self._is_current(token):
                self._fail()
            return
        except Exception:
            logger.exception("Unexpected error while generating roadmap for %r", role)
            if self._is_current(token):
                self._fail()
            if reraise:
                raise
            return
        finally:
            timer.cancel()

        logger.info("Generation for %r took %.2f ms", role, (time.perf_counter() - start) * 1000)
        if not self._is_current(token):
            logger.info("Discarding stale roadmap for %r (token %d)", role, token)
            return

        self.status = RoadmapStatus.DISPLAYED
        self.roadmap = roadmap
        self.delay_message_visible = False

    async def select_role(self, role: str) -> bool:
        """Generate and wait for the result. No-op (False) while busy."""
        token = self._begin(role)
        if token is None:
            return False
        await self._run(token, role)
        return True

    def start(self, role: str) -> bool:
        """Like select_role, but returns once loading has begun."""
        token = self._begin(role)
        if token is None:
            return False
        # nobody awaits this task, so failures end in the error state only
        self._task = asyncio.get_running_loop().create_task(self._run(token, role, reraise=False))
        return True

    async def retry(self) -> bool:
        if self.status is not RoadmapStatus.ERROR or not self.selected_role:
            return False
        return await self.select_role(self.selected_role)

    def start_retry(self) -> bool:
        if self.status is not RoadmapStatus.ERROR or not self.selected_role:
            return False
        return self.start(self.selected_role)

    def show(self, roadmap: Roadmap) -> None:
        self._token += 1
        self.status = RoadmapStatus.DISPLAYED
        self.selected_role = roadmap.career_path
        self.roadmap = roadmap
        self.error = None
        self.delay_message_visible = False

    def reset(self) -> None:
        self._token += 1
        self.status = RoadmapStatus.IDLE
        self.selected_role = None
        self.roadmap = None
        self.error = None
        self.delay_message_visible = False
