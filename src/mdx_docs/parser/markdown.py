"""Plain Markdown helpers: fenced code splitting, heading slugs, HTML rendering."""

import re
from functools import lru_cache

from markdown_it import MarkdownIt

from .base import CodeBlockNode, DocNode, MarkdownNode

# Closing fence must sit on its own line; the filename separator is [ \t]+
# so a bare fence never swallows the next line as a filename.
CODE_FENCE_RE = re.compile(
    r"^[ \t]*```(\w+)?(?:[ \t]+([^\r\n]+?))?[ \t]*\r?\n([\s\S]*?)\r?\n[ \t]*```[ \t]*(?:\r?\n|$)",
    re.MULTILINE,
)

HEADING_RE = re.compile(r"^(#{2,4})[ \t]+(.+)$", re.MULTILINE)
HTML_HEADING_RE = re.compile(r"<(h[2-4])>(.*?)</h[2-4]>", re.DOTALL)
HTML_TAG_RE = re.compile(r"<[^>]+>")


def split_code_blocks(markdown: str) -> list[DocNode]:
    """Split markdown into alternating Markdown and CodeBlock nodes."""
    nodes: list[DocNode] = []
    last_end = 0

    for match in CODE_FENCE_RE.finditer(markdown):
        before = markdown[last_end:match.start()].strip()
        if before:
            nodes.append(MarkdownNode(text=before))
        nodes.append(
            CodeBlockNode(
                language=match.group(1),
                filename=match.group(2),
                code=(match.group(3) or "").strip(),
            )
        )
        last_end = match.end()

    after = markdown[last_end:].strip()
    if after:
        nodes.append(MarkdownNode(text=after))
    return nodes


def slugify(text: str) -> str:
    """Lowercase, collapse each run of non-alphanumerics to ``-``, trim dashes."""
    lowered = text.lower()
    # str.isalnum covers non-ASCII letters and digits too
    chars = [ch if ch.isalnum() else " " for ch in lowered]
    return re.sub(r"\s+", "-", "".join(chars).strip())


def extract_headers(markdown: str) -> list[tuple[str, str, int]]:
    """Return ``(id, title, level)`` for every ``##``-``####`` heading."""
    headers = []
    for match in HEADING_RE.finditer(markdown):
        title = match.group(2).strip()
        headers.append((slugify(title), title, len(match.group(1))))
    return headers


def inject_heading_ids(html: str) -> str:
    """Add ``id`` attributes to ``<h2>``-``<h4>`` so TOC anchors resolve."""

    def _with_id(match: re.Match) -> str:
        tag, inner = match.group(1), match.group(2)
        plain = HTML_TAG_RE.sub("", inner)
        return f'<{tag} id="{slugify(plain)}">{inner}</{tag}>'

    return HTML_HEADING_RE.sub(_with_id, html)


@lru_cache(maxsize=1)
def _markdown_renderer() -> MarkdownIt:
    md = MarkdownIt("commonmark", {"html": True})
    md.enable(["table", "strikethrough"])
    return md


def render_markdown(text: str) -> str:
    """Render markdown to HTML with heading anchors."""
    return inject_heading_ids(_markdown_renderer().render(text))
