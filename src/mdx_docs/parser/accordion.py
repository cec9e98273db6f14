"""Accordion and AccordionGroup parser."""

from .base import AccordionGroupNode, AccordionNode, DocNode
from .utils import extract_attr, find_closing_tag

GROUP_OPEN = "<AccordionGroup>"
GROUP_CLOSE = "</AccordionGroup>"
ACCORDION_TAG = "<Accordion"
ACCORDION_CLOSE = "</Accordion>"


def try_parse_accordion_group(text: str) -> tuple[DocNode, str] | None:
    if not text.startswith(GROUP_OPEN):
        return None

    close_idx = find_closing_tag(text, "AccordionGroup")
    if close_idx is None:
        return None
    inner = text[len(GROUP_OPEN):close_idx]
    rest = text[close_idx + len(GROUP_CLOSE):]
    return AccordionGroupNode(items=_parse_accordions(inner)), rest


def try_parse_standalone_accordion(text: str) -> tuple[DocNode, str] | None:
    """A lone ``<Accordion>`` becomes a one-item group."""
    parsed = _parse_single_accordion(text)
    if parsed is None:
        return None
    item, end = parsed
    return AccordionGroupNode(items=[item]), text[end:]


def _parse_single_accordion(text: str) -> tuple[AccordionNode, int] | None:
    from mdx_docs.parser.content import parse_content

    if not text.startswith(ACCORDION_TAG):
        return None
    tag_end = text.find(">")
    if tag_end == -1:
        return None

    tag_source = text[len(ACCORDION_TAG):tag_end]
    title = extract_attr(tag_source, "title")
    if title is None:
        return None
    icon = extract_attr(tag_source, "icon")

    close_idx = find_closing_tag(text, "Accordion")
    if close_idx is None:
        return None
    body = text[tag_end + 1:close_idx].strip()
    item = AccordionNode(title=title, icon=icon, content=parse_content(body))
    return item, close_idx + len(ACCORDION_CLOSE)


def _parse_accordions(inner: str) -> list[AccordionNode]:
    items = []
    remaining = inner.strip()
    while remaining:
        parsed = _parse_single_accordion(remaining)
        if parsed is not None:
            item, end = parsed
            items.append(item)
            remaining = remaining[end:].strip()
            continue

        next_item = remaining.find(ACCORDION_TAG, 1)
        if next_item == -1:
            break
        remaining = remaining[next_item:]
    return items
