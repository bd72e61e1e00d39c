import copy
import json
import threading
import time

import pytest

from pathfinder.agents.llm.base import LLMClient
from pathfinder.agents.schemas import Roadmap
from pathfinder.settings import Settings
from pathfinder.storage.memory import InMemoryStore

SAMPLE_PAYLOAD = {
    "careerPath": "Full Stack Developer",
    "introduction": "Full stack developers build both the browser and the server side of web apps.",
    "phases": [
        {
            "phase": 1,
            "title": "Web Fundamentals",
            "description": "Learn how the web works.",
            "skills": [
                {
                    "name": "HTML",
                    "description": "Structure pages with semantic tags like `<main>`.\n```html\n<h1>Hello & welcome</h1>\n```",
                },
                {"name": "CSS", "description": "Style pages. **Flexbox** is a must."},
            ],
        },
        {
            "phase": 2,
            "title": "Backend Basics",
            "description": "Serve data over HTTP.",
            "skills": [
                {"name": "Node.js", "description": "```\nconsole.log('hi');\n```"},
            ],
        },
    ],
    "conclusion": "Keep building projects.",
    "courses": [
        {
            "name": "Responsive Web Design",
            "platform": "freeCodeCamp",
            "description": "HTML and CSS from scratch.",
            "icon": "HTML",
            "link": "https://www.freecodecamp.org/learn/2022/responsive-web-design/",
            "isFree": True,
        },
        {
            "name": "Mystery Course",
            "platform": "Udemy",
            "description": "Icon the renderer does not know.",
            "icon": "Unknown",
            "link": "https://www.udemy.com/",
            "isFree": False,
        },
    ],
}


def roadmap_payload(**overrides) -> dict:
    payload = copy.deepcopy(SAMPLE_PAYLOAD)
    payload.update(overrides)
    return payload


class FakeLLM(LLMClient):
    """
    Scripted LLM. Each call consumes the next outcome (the last one repeats);
    an outcome that is an exception instance is raised instead of returned.
    """

    def __init__(self, outcomes=None, *, delay: float = 0.0):
        self.outcomes = list(outcomes or [json.dumps(SAMPLE_PAYLOAD)])
        self.delay = delay
        self.calls = []
        self._lock = threading.Lock()

    def generate_text(self, *, system, user, temperature=0.2, response_schema=None):
        with self._lock:
            self.calls.append(
                {
                    "system": system,
                    "user": user,
                    "temperature": temperature,
                    "response_schema": response_schema,
                }
            )
            outcome = self.outcomes.pop(0) if len(self.outcomes) > 1 else self.outcomes[0]
        if self.delay:
            time.sleep(self.delay)
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


@pytest.fixture
def sample_payload():
    return roadmap_payload()


@pytest.fixture
def sample_roadmap():
    return Roadmap.model_validate(roadmap_payload())


@pytest.fixture
def fake_llm():
    return FakeLLM()


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def settings():
    return Settings(_env_file=None, llm_provider="gemini", gemini_api_key="test-key")
