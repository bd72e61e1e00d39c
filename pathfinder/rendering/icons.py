from pathfinder.agents.schemas import CourseIcon

# Backend reuses the generic code glyph
ICON_GLYPHS = {
    CourseIcon.HTML: "html",
    CourseIcon.CSS: "css",
    CourseIcon.JAVASCRIPT: "javascript",
    CourseIcon.REACT: "react",
    CourseIcon.PYTHON: "python",
    CourseIcon.DATABASE: "database",
    CourseIcon.BACKEND: "code",
    CourseIcon.CAREER: "career",
    CourseIcon.DEFAULT: "code",
}

_BY_NAME = {icon.value: icon for icon in CourseIcon}


def resolve_icon(name) -> CourseIcon:
    if not isinstance(name, str):
        return CourseIcon.DEFAULT
    return _BY_NAME.get(name.strip(), CourseIcon.DEFAULT)


def icon_glyph(name) -> str:
    return ICON_GLYPHS[resolve_icon(name)]
