"""Tabs component parser."""

import re

from .base import DocNode, TabNode, TabsNode
from .utils import find_closing_tag

TABS_OPEN = "<Tabs>"
TABS_CLOSE = "</Tabs>"
TAB_OPEN_RE = re.compile(r'^<Tab\s+title="([^"]*)"\s*>')


def try_parse_tabs(text: str) -> tuple[DocNode, str] | None:
    if not text.startswith(TABS_OPEN):
        return None

    close_idx = find_closing_tag(text, "Tabs")
    if close_idx is None:
        return None
    inner = text[len(TABS_OPEN):close_idx]
    rest = text[close_idx + len(TABS_CLOSE):]
    return TabsNode(tabs=_parse_tabs(inner)), rest


def _parse_tabs(inner: str) -> list[TabNode]:
    from mdx_docs.parser.content import parse_content

    tabs = []
    remaining = inner.strip()
    while remaining:
        match = TAB_OPEN_RE.match(remaining)
        if match:
            close_idx = find_closing_tag(remaining, "Tab")
            if close_idx is not None:
                body = remaining[match.end():close_idx].strip()
                tabs.append(TabNode(title=match.group(1), content=parse_content(body)))
                remaining = remaining[close_idx + len("</Tab>"):].strip()
                continue

        next_tab = remaining.find("<Tab", 1)
        if next_tab == -1:
            break
        remaining = remaining[next_tab:]
    return tabs
