## Pydantic Schemas for Structured Output
from datetime import datetime
from enum import Enum
from typing import Literal, Optional, Tuple
from urllib.parse import urlsplit

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    # snake_case in Python, camelCase on the wire and in the store
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_json_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class CourseIcon(str, Enum):
    HTML = "HTML"
    CSS = "CSS"
    JAVASCRIPT = "JavaScript"
    REACT = "React"
    PYTHON = "Python"
    DATABASE = "Database"
    BACKEND = "Backend"
    CAREER = "Career"
    DEFAULT = "Default"


class Skill(CamelModel):
    name: str
    description: str


class Phase(CamelModel):
    phase: int = Field(ge=1)
    title: str
    description: str
    skills: Tuple[Skill, ...] = Field(min_length=1)

    @model_validator(mode="after")
    def _unique_skill_names(self):
        names = [s.name for s in self.skills]
        if len(names) != len(set(names)):
            raise ValueError(f"Phase {self.phase} repeats a skill name: {names}")
        return self


class Course(CamelModel):
    name: str
    platform: str
    description: str
    # advisory; resolved to a CourseIcon only at render time
    icon: str
    link: str
    is_free: bool

    @field_validator("link")
    @classmethod
    def _web_link_only(cls, v: str) -> str:
        # rendered as an href, so no javascript:/data: links
        v = v.strip()
        parts = urlsplit(v)
        if parts.scheme.lower() not in ("http", "https") or not parts.netloc:
            raise ValueError(f"Course link must be an http(s) URL, got {v[:80]!r}")
        return v


class Roadmap(CamelModel):
    career_path: str
    introduction: str
    phases: Tuple[Phase, ...] = Field(min_length=1)
    conclusion: str
    courses: Tuple[Course, ...]

    @model_validator(mode="after")
    def _unique_phase_numbers(self):
        nums = [p.phase for p in self.phases]
        if len(nums) != len(set(nums)):
            raise ValueError(f"Phase numbers must be unique, got {nums}")
        return self


class ChatMessage(CamelModel):
    role: Literal["user", "assistant"]
    content: str


class SavedRoadmap(CamelModel):
    id: str
    user_id: str
    roadmap: Roadmap
    saved_at: datetime
    last_viewed: Optional[datetime] = None


class User(CamelModel):
    id: str
    email: str
    name: str
    created_at: datetime
