"""ParamField, ResponseField and Expandable parsers."""

from .base import DocNode, ExpandableNode, ParamFieldNode, ParamLocation, ResponseFieldNode
from .utils import extract_attr, find_closing_tag, has_flag

PARAM_TAG = "<ParamField"
RESPONSE_TAG = "<ResponseField"
EXPANDABLE_TAG = "<Expandable"

# Checked in this order; the first attribute present names the parameter.
PARAM_LOCATIONS = (
    ParamLocation.HEADER,
    ParamLocation.PATH,
    ParamLocation.QUERY,
    ParamLocation.BODY,
)


def _is_self_closing(tag_source: str) -> bool:
    return tag_source.strip().endswith("/")


def try_parse_param_field(text: str) -> tuple[DocNode, str] | None:
    """Parse ``<ParamField path="id" type="string" required>...</ParamField>``."""
    from mdx_docs.parser.content import parse_content

    if not text.startswith(PARAM_TAG):
        return None
    tag_end = text.find(">")
    if tag_end == -1:
        return None
    tag_source = text[len(PARAM_TAG):tag_end]

    for location in PARAM_LOCATIONS:
        name = extract_attr(tag_source, location.value)
        if name is not None:
            break
    else:
        return None

    fields = {
        "name": name,
        "location": location,
        "param_type": extract_attr(tag_source, "type") or "string",
        "required": has_flag(tag_source, "required"),
        "default": extract_attr(tag_source, "default"),
    }
    if _is_self_closing(tag_source):
        return ParamFieldNode(**fields), text[tag_end + 1:]

    close_idx = find_closing_tag(text, "ParamField")
    if close_idx is None:
        return None
    body = text[tag_end + 1:close_idx].strip()
    rest = text[close_idx + len("</ParamField>"):]
    return ParamFieldNode(content=parse_content(body), **fields), rest


def _parse_response_field(text: str) -> tuple[ResponseFieldNode, str] | None:
    if not text.startswith(RESPONSE_TAG):
        return None
    tag_end = text.find(">")
    if tag_end == -1:
        return None
    tag_source = text[len(RESPONSE_TAG):tag_end]

    name = extract_attr(tag_source, "name")
    if name is None:
        return None
    fields = {
        "name": name,
        "field_type": extract_attr(tag_source, "type") or "any",
        "required": has_flag(tag_source, "required"),
    }
    if _is_self_closing(tag_source):
        return ResponseFieldNode(**fields), text[tag_end + 1:]

    close_idx = find_closing_tag(text, "ResponseField")
    if close_idx is None:
        return None
    body = text[tag_end + 1:close_idx]
    rest = text[close_idx + len("</ResponseField>"):]

    expandable = _parse_nested_expandable(body)
    if expandable is not None:
        body = body[:body.find(EXPANDABLE_TAG)]
    node = ResponseFieldNode(content=body.strip(), expandable=expandable, **fields)
    return node, rest


def try_parse_response_field(text: str) -> tuple[DocNode, str] | None:
    return _parse_response_field(text)


def _parse_expandable(text: str, default_title: str) -> tuple[ExpandableNode, str] | None:
    """Parse an Expandable starting at ``text``; returns the node and what follows it."""
    tag_end = text.find(">")
    if tag_end == -1:
        return None
    title = extract_attr(text[len(EXPANDABLE_TAG):tag_end], "title") or default_title

    close_idx = find_closing_tag(text, "Expandable")
    if close_idx is None:
        return None
    inner = text[tag_end + 1:close_idx]
    rest = text[close_idx + len("</Expandable>"):]
    return ExpandableNode(title=title, fields=parse_response_fields(inner)), rest


def try_parse_expandable(text: str) -> tuple[DocNode, str] | None:
    if not text.startswith(EXPANDABLE_TAG):
        return None
    return _parse_expandable(text, "Details")


def _parse_nested_expandable(body: str) -> ExpandableNode | None:
    start = body.find(EXPANDABLE_TAG)
    if start == -1:
        return None
    parsed = _parse_expandable(body[start:], "Properties")
    return parsed[0] if parsed else None


def parse_response_fields(text: str) -> list[ResponseFieldNode]:
    """Collect the ResponseFields in ``text``, ignoring anything between them."""
    fields = []
    remaining = text.strip()
    while remaining:
        parsed = _parse_response_field(remaining)
        if parsed is not None:
            field, rest = parsed
            fields.append(field)
            remaining = rest.strip()
            continue

        next_field = remaining.find(RESPONSE_TAG, 1)
        if next_field == -1:
            break
        remaining = remaining[next_field:]
    return fields
