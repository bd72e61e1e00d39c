from pathlib import Path

from fastapi.templating import Jinja2Templates

from pathfinder.constants import CAREER_PATHS
from pathfinder.rendering.icons import icon_glyph
from pathfinder.rendering.markdown import render_chat_message, render_markdown

PACKAGE_DIR = Path(__file__).resolve().parent
TEMPLATES_DIR = PACKAGE_DIR / "templates"
STATIC_DIR = PACKAGE_DIR / "static"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.filters["markdown"] = render_markdown
templates.env.filters["chat_markdown"] = render_chat_message
templates.env.globals["icon_glyph"] = icon_glyph
templates.env.globals["career_paths"] = CAREER_PATHS
