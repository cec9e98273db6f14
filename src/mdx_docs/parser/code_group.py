"""CodeGroup, RequestExample and ResponseExample parsers.

These containers only hold fenced code blocks; their bodies are not
parsed for nested components.
"""

import re

from .base import CodeBlockNode, CodeGroupNode, DocNode, RequestExampleNode, ResponseExampleNode
from .utils import find_closing_tag

# ```lang optional-filename\n code ```
FENCE_RE = re.compile(r"```(\w+)?(?:[ \t]+([^\n]+?))?[ \t]*\r?\n([\s\S]*?)```")


def parse_code_blocks(text: str) -> list[CodeBlockNode]:
    return [
        CodeBlockNode(language=m.group(1), filename=m.group(2), code=(m.group(3) or "").strip())
        for m in FENCE_RE.finditer(text)
    ]


def _try_parse_container(text: str, tag_name: str) -> tuple[list[CodeBlockNode], str] | None:
    open_tag = f"<{tag_name}>"
    if not text.startswith(open_tag):
        return None

    close_idx = find_closing_tag(text, tag_name)
    if close_idx is None:
        return None
    inner = text[len(open_tag):close_idx]
    rest = text[close_idx + len(f"</{tag_name}>"):]
    return parse_code_blocks(inner), rest


def try_parse_code_group(text: str) -> tuple[DocNode, str] | None:
    parsed = _try_parse_container(text, "CodeGroup")
    if parsed is None:
        return None
    blocks, rest = parsed
    return CodeGroupNode(blocks=blocks), rest


def try_parse_request_example(text: str) -> tuple[DocNode, str] | None:
    parsed = _try_parse_container(text, "RequestExample")
    if parsed is None:
        return None
    blocks, rest = parsed
    return RequestExampleNode(blocks=blocks), rest


def try_parse_response_example(text: str) -> tuple[DocNode, str] | None:
    parsed = _try_parse_container(text, "ResponseExample")
    if parsed is None:
        return None
    blocks, rest = parsed
    return ResponseExampleNode(blocks=blocks), rest
