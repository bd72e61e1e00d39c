# pathfinder/agents/prompts.py
from dataclasses import dataclass
from typing import Any, Dict, Literal, Optional

from pathfinder.agents.schemas import CourseIcon

PromptMode = Literal["roadmap", "chat"]

ROADMAP_TEMPERATURE = 0.7
CHAT_TEMPERATURE = 0.7
RECOMMENDED_COURSES = 8

# Icons the model may pick; Default is only a render-time fallback.
COURSE_ICON_CHOICES = [i.value for i in CourseIcon if i is not CourseIcon.DEFAULT]

SYSTEM_ROADMAP = (
    "You are a senior career advisor in the tech industry. Your task is to generate "
    "comprehensive, structured career roadmaps for aspiring tech professionals. "
    "Respond only with the requested JSON object based on the provided schema."
)

SYSTEM_CHAT = """You are a friendly technical assistant for people learning {topic}.
Help with programming questions, explain concepts, suggest learning resources and give career guidance.
Keep answers concise and practical.
Use Markdown code fences (```language) for multi-line code and backticks for inline code.
"""

CHAT_INSTRUCTION = "Reply as the Assistant to the last User message of this conversation:"


def _string(description: str | None = None) -> Dict[str, Any]:
    field: Dict[str, Any] = {"type": "STRING"}
    if description:
        field["description"] = description
    return field


ROADMAP_RESPONSE_SCHEMA: Dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "careerPath": _string(),
        "introduction": _string(),
        "phases": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "phase": {"type": "INTEGER"},
                    "title": _string(),
                    "description": _string(),
                    "skills": {
                        "type": "ARRAY",
                        "items": {
                            "type": "OBJECT",
                            "properties": {
                                "name": _string(),
                                "description": _string(),
                            },
                            "required": ["name", "description"],
                        },
                    },
                },
                "required": ["phase", "title", "description", "skills"],
            },
        },
        "courses": {
            "type": "ARRAY",
            "description": "A list of recommended courses for this career path.",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "name": _string("The name of the course."),
                    "platform": _string(
                        "The platform offering the course (e.g., Coursera, Udemy, freeCodeCamp)."
                    ),
                    "description": _string("A brief description of what the course covers."),
                    "icon": _string(
                        "An icon name that best represents the course. Choose from: "
                        + ", ".join(COURSE_ICON_CHOICES)
                        + "."
                    ),
                    "link": _string("A valid, direct URL to the course page."),
                    "isFree": {
                        "type": "BOOLEAN",
                        "description": "True when the course can be taken without paying.",
                    },
                },
                "required": ["name", "platform", "description", "icon", "link", "isFree"],
            },
        },
        "conclusion": _string(),
    },
    "required": ["careerPath", "introduction", "phases", "conclusion", "courses"],
}


@dataclass(frozen=True)
class PromptSpec:
    instruction: str
    system_instruction: str
    response_schema: Optional[Dict[str, Any]]
    temperature: float


def build_roadmap_prompt(role: str) -> str:
    icons = ", ".join(f"'{i}'" for i in COURSE_ICON_CHOICES)
    return f"""
Generate a detailed, step-by-step career roadmap for an aspiring {role}.
Use exactly "{role}" as the careerPath.
The roadmap should be structured into logical phases, starting from absolute fundamentals and progressing to advanced, job-ready skills.
Number the phases 1, 2, 3, ... in learning order.

For each phase, provide:
- A clear title.
- A brief description of its goal.
- A list of key skills, technologies, or concepts to learn (at least one, no duplicate names).

For each skill, provide:
- A concise description explaining its importance in the context of the career path.
- Where appropriate, include a small, simple code snippet using Markdown format (e.g., ```javascript
console.log('Hello');
```) to illustrate the concept.

Additionally, generate a list of {RECOMMENDED_COURSES} recommended online courses relevant to this roadmap. For each course, provide:
1. The course name.
2. The platform (e.g., freeCodeCamp, Coursera, Udemy).
3. A brief description of what the course covers.
4. A relevant icon name from the following list: {icons}.
5. A valid, direct URL to access the course.
6. Whether the course is free (isFree).

Ensure the output is comprehensive and practical for a beginner.
""".strip()


def build_prompt(role: str, mode: PromptMode = "roadmap") -> PromptSpec:
    """
    Instruction + output shape for one call to the generative service.

    In "chat" mode the role only focuses the assistant persona; the
    conversation itself is sent as the user turn (see workflow.build_chat_transcript).
    """
    if not role or not role.strip():
        raise ValueError("role must be a non-empty string")
    role = role.strip()

    if mode == "roadmap":
        return PromptSpec(
            instruction=build_roadmap_prompt(role),
            system_instruction=SYSTEM_ROADMAP,
            response_schema=ROADMAP_RESPONSE_SCHEMA,
            temperature=ROADMAP_TEMPERATURE,
        )
    if mode == "chat":
        return PromptSpec(
            instruction=CHAT_INSTRUCTION,
            system_instruction=SYSTEM_CHAT.format(topic=role).strip(),
            response_schema=None,
            temperature=CHAT_TEMPERATURE,
        )
    raise ValueError(f"Unknown prompt mode: {mode!r}")
