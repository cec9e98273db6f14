"""Inline ``<OpenAPI>`` spec parser.

Only block form with the spec embedded between the tags is supported.
The self-closing ``<OpenAPI src="..." />`` form is left to the caller,
since nothing is fetched at parse time.
"""

import logging

from mdx_docs.openapi.errors import OpenApiError
from mdx_docs.openapi.swagger import parse_openapi

from .base import DocNode, OpenApiNode
from .utils import extract_attr, find_closing_tag, has_flag

logger = logging.getLogger(__name__)

OPENAPI_TAG = "<OpenAPI"


def try_parse_openapi(text: str) -> tuple[DocNode, str] | None:
    if not text.startswith(OPENAPI_TAG):
        return None
    tag_end = text.find(">")
    if tag_end == -1:
        return None
    tag_source = text[len(OPENAPI_TAG):tag_end]
    if tag_source.strip().endswith("/"):
        return None

    tags_attr = extract_attr(tag_source, "tags")
    tags = [t.strip() for t in tags_attr.split(",")] if tags_attr is not None else None

    close_idx = find_closing_tag(text, "OpenAPI")
    if close_idx is None:
        return None
    body = text[tag_end + 1:close_idx].strip()
    rest = text[close_idx + len("</OpenAPI>"):]

    try:
        spec = parse_openapi(body)
    except OpenApiError as e:
        logger.warning(f"Ignoring inline OpenAPI spec: {e}")
        return None

    node = OpenApiNode(spec=spec, tags=tags, show_schemas=not has_flag(tag_source, "hideSchemas"))
    return node, rest
