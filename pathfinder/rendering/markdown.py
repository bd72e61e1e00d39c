"""
Constrained markdown -> HTML for skill descriptions and chat messages.

Only fenced code blocks, inline code, **bold** and line breaks are
understood; everything else is shown as escaped text. Both call sites
(roadmap and chat) escape before transforming.
"""
import re

from markupsafe import Markup

ROADMAP_CODE_LANGUAGE = "javascript"
CHAT_CODE_LANGUAGE = "text"

_ESCAPES = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&#039;",
}

# a "&" that already starts an entity is not escaped again
_ESCAPE_RE = re.compile(r"&(?!(?:[a-zA-Z][a-zA-Z0-9]*|#[0-9]+|#[xX][0-9a-fA-F]+);)|[<>\"']")
_FENCE_RE = re.compile(r"```(\w+)?\n(.*?)```", re.DOTALL)
# spans stop at a stashed code block (NUL-delimited placeholder)
_INLINE_CODE_RE = re.compile(r"`([^`\n\x00]+)`")
_BOLD_RE = re.compile(r"\*\*([^\n\x00]+?)\*\*")
_PLACEHOLDER_RE = re.compile("\x00(\\d+)\x00")


def escape_html(text: str) -> str:
    return _ESCAPE_RE.sub(lambda m: _ESCAPES[m.group(0)], text)


def render_markdown(text: str | None, default_language: str = ROADMAP_CODE_LANGUAGE) -> Markup:
    if not text:
        return Markup("")

    # NUL delimits the code block placeholders below
    html = escape_html(text.replace("\x00", ""))

    blocks: list[str] = []

    def _stash_block(m: re.Match) -> str:
        language = m.group(1) or default_language
        code = m.group(2).rstrip("\n")
        blocks.append(f'<pre class="code-block"><code class="language-{language}">{code}</code></pre>')
        return f"\x00{len(blocks) - 1}\x00"

    html = _FENCE_RE.sub(_stash_block, html)
    html = _INLINE_CODE_RE.sub(r'<code class="inline-code">\1</code>', html)
    html = _BOLD_RE.sub(r"<strong>\1</strong>", html)
    html = html.replace("\n", "<br />")

    # code blocks go back in last so no later pass touches their contents
    html = _PLACEHOLDER_RE.sub(lambda m: blocks[int(m.group(1))], html)
    return Markup(html)


def render_chat_message(text: str | None) -> Markup:
    return render_markdown(text, default_language=CHAT_CODE_LANGUAGE)
