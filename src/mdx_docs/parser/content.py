"""MDX content dispatcher.

Walks the text, handing each position to the component parsers in
priority order. Whatever no parser claims is emitted as markdown, with
fenced code blocks split out.
"""

import re

from mdx_docs.config import get_settings

from .accordion import try_parse_accordion_group, try_parse_standalone_accordion
from .base import DocNode
from .callout import try_parse_callout
from .card import try_parse_card_group, try_parse_columns, try_parse_standalone_card
from .code_group import try_parse_code_group, try_parse_request_example, try_parse_response_example
from .fields import try_parse_expandable, try_parse_param_field, try_parse_response_field
from .frontmatter import extract_frontmatter
from .markdown import split_code_blocks
from .openapi_tag import try_parse_openapi
from .steps import try_parse_steps
from .tabs import try_parse_tabs
from .update import try_parse_update

# Order matters: CardGroup before Card, AccordionGroup before Accordion.
COMPONENT_PARSERS = (
    try_parse_callout,
    try_parse_card_group,
    try_parse_columns,
    try_parse_standalone_card,
    try_parse_tabs,
    try_parse_steps,
    try_parse_accordion_group,
    try_parse_standalone_accordion,
    try_parse_param_field,
    try_parse_response_field,
    try_parse_expandable,
    try_parse_code_group,
    try_parse_request_example,
    try_parse_response_example,
    try_parse_update,
    try_parse_openapi,
)

# Where markdown stops: the next place a component may start.
COMPONENT_MARKERS = (
    "<Tip>",
    "<Note>",
    "<Warning>",
    "<Info>",
    "<Card",
    "<CardGroup",
    "<Columns",
    "<Tabs>",
    "<Steps>",
    "<AccordionGroup>",
    "<Accordion",
    "<ParamField",
    "<ResponseField",
    "<Expandable",
    "<RequestExample>",
    "<ResponseExample>",
    "<CodeGroup>",
    "<Update",
    "<OpenAPI",
)

IMPORT_RE = re.compile(r"^import\s+.*?;\s*\n?", re.MULTILINE)


def _find_next_component(text: str) -> int | None:
    positions = [pos for pos in (text.find(m) for m in COMPONENT_MARKERS) if pos != -1]
    return min(positions) if positions else None


def _try_components(text: str) -> tuple[DocNode, str] | None:
    for parser in COMPONENT_PARSERS:
        parsed = parser(text)
        if parsed is not None:
            return parsed
    return None


def parse_content(text: str) -> list[DocNode]:
    """Parse MDX body text (no frontmatter) into a list of nodes."""
    nodes: list[DocNode] = []
    remaining = text.strip()

    while remaining:
        parsed = _try_components(remaining)
        if parsed is not None:
            node, rest = parsed
            nodes.append(node)
            remaining = rest.strip()
            continue

        next_idx = _find_next_component(remaining)
        if next_idx is None:
            markdown, remaining = remaining, ""
        elif next_idx == 0:
            # A marker nothing could parse; consume the tag as markdown so the loop advances.
            close = remaining.find(">")
            skip = close + 1 if close != -1 else 1
            markdown, remaining = remaining[:skip], remaining[skip:]
        else:
            markdown, remaining = remaining[:next_idx], remaining[next_idx:]

        if markdown.strip():
            nodes.extend(split_code_blocks(markdown.strip()))
        remaining = remaining.strip()

    return nodes


def _strip_widgets(text: str) -> str:
    for tag in get_settings().stripped_tags:
        text = re.sub(rf"<{re.escape(tag)}\s*/?>", "", text)
    return text


def strip_mdx_syntax(body: str) -> str:
    """Drop ``import`` lines and legacy widget tags from a frontmatter-free body."""
    return _strip_widgets(IMPORT_RE.sub("", body))


def parse_mdx(text: str) -> list[DocNode]:
    """Parse a full MDX page, ignoring its frontmatter."""
    _, body = extract_frontmatter(text)
    return parse_content(strip_mdx_syntax(body))


def _fence(language: str | None, code: str) -> str:
    return f"```{language or ''}\n{code}\n```\n\n"


def _required_marker(required: bool) -> str:
    return " *(required)*" if required else ""


def to_raw_markdown(nodes: list[DocNode]) -> str:
    """Flatten nodes back into plain markdown (lossy)."""
    out = []
    for node in nodes:
        kind = node.kind
        if kind == "markdown":
            out.append(f"{node.text}\n\n")
        elif kind == "callout":
            out.append(f"> **{node.callout_type.value}:** {node.content}\n\n")
        elif kind == "card":
            out.append(f"**{node.title}**\n{node.content}\n\n")
        elif kind == "card_group":
            out.extend(f"**{card.title}**\n{card.content}\n\n" for card in node.cards)
        elif kind == "tabs":
            for tab in node.tabs:
                out.append(f"#### {tab.title}\n")
                out.append(to_raw_markdown(tab.content))
        elif kind == "steps":
            for i, step in enumerate(node.steps, start=1):
                out.append(f"{i}. **{step.title}**\n")
                out.append(to_raw_markdown(step.content))
        elif kind == "accordion_group":
            for item in node.items:
                out.append(f"### {item.title}\n")
                out.append(to_raw_markdown(item.content))
        elif kind == "code_block":
            out.append(_fence(node.language, node.code))
        elif kind == "code_group":
            out.extend(_fence(b.language, b.code) for b in node.blocks)
        elif kind == "param_field":
            out.append(f"**`{node.name}`** _{node.param_type}_{_required_marker(node.required)}: ")
            out.append(to_raw_markdown(node.content))
        elif kind == "response_field":
            out.append(
                f"**`{node.name}`** _{node.field_type}_{_required_marker(node.required)}: {node.content}\n\n"
            )
            if node.expandable is not None:
                out.append(f"  **{node.expandable.title}**\n")
                out.extend(
                    f"  - `{f.name}` _{f.field_type}_: {f.content}\n" for f in node.expandable.fields
                )
                out.append("\n")
        elif kind == "expandable":
            out.append(f"**{node.title}**\n\n")
            out.extend(f"- `{f.name}` _{f.field_type}_: {f.content}\n" for f in node.fields)
            out.append("\n")
        elif kind in ("request_example", "response_example"):
            out.append("**Request:**\n\n" if kind == "request_example" else "**Response:**\n\n")
            out.extend(_fence(b.language, b.code) for b in node.blocks)
        elif kind == "update":
            out.append(f"### {node.label}\n\n")
            out.append(to_raw_markdown(node.content))
        elif kind == "openapi":
            info = node.spec.info
            out.append(f"# {info.title}\n\n")
            if info.description:
                out.append(f"{info.description}\n\n")
            for op in node.spec.operations:
                out.append(f"## {op.method.value} {op.path}\n\n")
                if op.summary:
                    out.append(f"{op.summary}\n\n")
    return "".join(out)
