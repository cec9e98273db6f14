"""Syntax highlighting for code blocks using Pygments.

Produces inline-styled HTML without the ``<pre>`` wrapper so callers can
supply their own container.
"""

import html
import logging
from functools import lru_cache

from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexer import Lexer
from pygments.lexers import TextLexer, get_lexer_by_name
from pygments.util import ClassNotFound

from mdx_docs.config import get_settings

logger = logging.getLogger(__name__)

# Short names used in docs -> Pygments lexer names.
LANGUAGE_ALIASES = {
    "js": "javascript",
    "javascript": "javascript",
    "jsx": "jsx",
    "ts": "typescript",
    "typescript": "typescript",
    "tsx": "tsx",
    "sh": "bash",
    "bash": "bash",
    "shell": "bash",
    "zsh": "bash",
    "env": "bash",
    "rs": "rust",
    "rust": "rust",
    "py": "python",
    "python": "python",
    "rb": "ruby",
    "ruby": "ruby",
    "go": "go",
    "golang": "go",
    "json": "json",
    "jsonc": "json",
    "yml": "yaml",
    "yaml": "yaml",
    "html": "html",
    "htm": "html",
    "css": "css",
    "scss": "scss",
    "sass": "sass",
    "toml": "toml",
    "ini": "ini",
    "md": "markdown",
    "markdown": "markdown",
    "sql": "sql",
    "c": "c",
    "h": "c",
    "cpp": "cpp",
    "cc": "cpp",
    "cxx": "cpp",
    "hpp": "cpp",
    "java": "java",
    "cs": "csharp",
    "csharp": "csharp",
    "php": "php",
    "swift": "swift",
    "kt": "kotlin",
    "kotlin": "kotlin",
    "dockerfile": "docker",
    "docker": "docker",
    "txt": "text",
    "text": "text",
}


def map_language(language: str) -> str:
    """Resolve a fence language to a Pygments lexer name (case-insensitive)."""
    return LANGUAGE_ALIASES.get(language.lower(), language)


@lru_cache(maxsize=64)
def _lexer_for(language: str) -> Lexer:
    for name in (map_language(language), language):
        try:
            return get_lexer_by_name(name)
        except ClassNotFound:
            continue
    return TextLexer()


@lru_cache(maxsize=4)
def _formatter(style: str) -> HtmlFormatter:
    return HtmlFormatter(style=style, nowrap=True, noclasses=True)


def highlight_code(code: str, language: str | None = None) -> str:
    """Highlight ``code`` and return inner HTML markup.

    Unknown languages fall back to plain text; any rendering failure falls
    back to the HTML-escaped source.
    """
    lexer = _lexer_for(language or "txt")
    try:
        return highlight(code, lexer, _formatter(get_settings().highlight_style)).strip("\n")
    except Exception as e:
        logger.warning(f"Highlighting failed for language {language!r}: {e}")
        return html.escape(code)
