"""Callout (Tip, Note, Warning, Info) parser."""

import re

from .base import CalloutNode, CalloutType, DocNode

CALLOUT_OPEN_RE = re.compile(r"^<(Tip|Note|Warning|Info)>")


def try_parse_callout(text: str) -> tuple[DocNode, str] | None:
    """Parse a callout at the start of ``text``. The body is kept as raw markdown."""
    match = CALLOUT_OPEN_RE.match(text)
    if not match:
        return None

    tag_name = match.group(1)
    after_open = text[match.end():]
    close_tag = f"</{tag_name}>"
    close_idx = after_open.find(close_tag)
    if close_idx == -1:
        return None

    node = CalloutNode(callout_type=CalloutType(tag_name), content=after_open[:close_idx].strip())
    return node, after_open[close_idx + len(close_tag):]
