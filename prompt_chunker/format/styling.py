# styling.py
"""
Cosmetic post-processing of segmented or model output text.

Nothing here takes part in segmentation. The chunk boundary marker and the
context wrapper are ordinary text to these functions and pass through intact.
"""
from __future__ import annotations

import logging
import re
from typing import List

import markdown
from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import TextLexer, get_lexer_by_name
from pygments.util import ClassNotFound

from ..schema import OutputSettings
from .languages import detect_language

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"```(\w+)?[ \t]*\n?([\s\S]*?)```")
_FUNCTION_RESULTS_RE = re.compile(r"<function_results>([\s\S]*?)</function_results>")
_LEADING_WS_RE = re.compile(r"^[ \t]+", re.MULTILINE)


def _tag_fence(m: re.Match) -> str:
    language = m.group(1) or detect_language(m.group(2)) or ""
    return f"```{language}\n{m.group(2).strip()}\n```"


def _details(m: re.Match) -> str:
    return (
        "<details>\n<summary>Function Results</summary>\n\n"
        f"```\n{m.group(1).strip()}\n```\n</details>\n"
    )


def tag_code_fences(text: str) -> str:
    return _FENCE_RE.sub(_tag_fence, text)


def optimize_code_blocks(text: str) -> str:
    def _tidy(m: re.Match) -> str:
        language = m.group(1) or detect_language(m.group(2)) or ""
        code = m.group(2).strip()
        code = _LEADING_WS_RE.sub(lambda ws: ws.group(0).expandtabs(4), code)
        code = re.sub(r"\n{3,}", "\n\n", code)
        return f"```{language}\n{code}\n```"

    out = _FENCE_RE.sub(_tidy, text)
    logger.debug("Optimized code blocks in text of length %d", len(text))
    return out


# output themes -> pygments style names
PYGMENTS_STYLES = {
    "default": "default",
    "github": "friendly",
    "monokai": "monokai",
    "dracula": "dracula",
    "nord": "nord",
}
PAGE_CSS = "body{font-family:system-ui,Segoe UI,Arial,sans-serif;max-width:900px;margin:40px auto;padding:0 16px}"


def _formatter(theme: str) -> HtmlFormatter:
    return HtmlFormatter(style=PYGMENTS_STYLES.get(theme, "default"), cssclass="hljs")


def _lexer_for(language: str):
    if not language:
        return TextLexer()
    try:
        return get_lexer_by_name(language)
    except ClassNotFound:
        logger.debug("No lexer for %r, highlighting as plain text", language)
        return TextLexer()


def highlight_code(code: str, language: str = "", theme: str = "github") -> str:
    return highlight(code, _lexer_for(language), _formatter(theme))


def theme_css(theme: str) -> str:
    return _formatter(theme).get_style_defs(".hljs") + "\n" + PAGE_CSS


def to_html(text: str, theme: str = "github") -> str:
    """Markdown prose to HTML, fenced code through pygments, with the theme's stylesheet inlined."""
    parts: List[str] = []
    pos = 0
    for m in _FENCE_RE.finditer(text):
        parts.append(_prose_html(text[pos:m.start()]))
        language = m.group(1) or detect_language(m.group(2)) or ""
        parts.append(highlight_code(m.group(2).strip(), language, theme))
        pos = m.end()
    parts.append(_prose_html(text[pos:]))
    return f"<style>{theme_css(theme)}</style>\n" + "\n".join(p for p in parts if p)


def _prose_html(chunk: str) -> str:
    if not chunk.strip():
        return ""
    return markdown.markdown(chunk.strip())


def format_output(text: str, settings: OutputSettings) -> str:
    if settings.format == "default":
        return text

    if settings.format in ("enhanced", "markdown"):
        out = tag_code_fences(text)
        out = _FUNCTION_RESULTS_RE.sub(_details, out)
    else:
        out = to_html(text, settings.syntax_theme)

    logger.debug("Formatted output from %d to %d characters", len(text), len(out))
    return out
