"""Top-level entry point for parsing an MDX page."""

from .base import ParsedDoc
from .content import parse_content, strip_mdx_syntax, to_raw_markdown
from .frontmatter import extract_frontmatter


def parse_document(text: str) -> ParsedDoc:
    """Parse a full MDX page into frontmatter, node tree and flattened markdown."""
    frontmatter, body = extract_frontmatter(text)
    content = parse_content(strip_mdx_syntax(body))
    return ParsedDoc(
        frontmatter=frontmatter,
        content=content,
        raw_markdown=to_raw_markdown(content),
    )
