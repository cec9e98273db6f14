"""Changelog ``<Update>`` parser."""

from .base import DocNode, UpdateNode
from .utils import extract_attr, find_closing_tag

UPDATE_TAG = "<Update"


def try_parse_update(text: str) -> tuple[DocNode, str] | None:
    from mdx_docs.parser.content import parse_content

    if not text.startswith(UPDATE_TAG):
        return None
    tag_end = text.find(">")
    if tag_end == -1:
        return None
    tag_source = text[len(UPDATE_TAG):tag_end]

    label = extract_attr(tag_source, "label")
    if label is None:
        return None
    description = extract_attr(tag_source, "description") or ""

    close_idx = find_closing_tag(text, "Update")
    if close_idx is None:
        return None
    body = text[tag_end + 1:close_idx].strip()
    rest = text[close_idx + len("</Update>"):]
    return UpdateNode(label=label, description=description, content=parse_content(body)), rest
