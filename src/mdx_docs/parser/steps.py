"""Steps component parser.

Steps are written either as ``<Step title="...">`` blocks or, failing
that, as ``###`` headings inside ``<Steps>``. The first form found wins.
"""

import re

from .base import DocNode, StepNode, StepsNode
from .utils import find_closing_tag

STEPS_OPEN = "<Steps>"
STEPS_CLOSE = "</Steps>"
STEP_RE = re.compile(r'<Step\s+title="([^"]*)"\s*>(.*?)</Step>', re.DOTALL)
STEP_HEADING_RE = re.compile(r"^###[ \t]+(.+)$", re.MULTILINE)


def try_parse_steps(text: str) -> tuple[DocNode, str] | None:
    if not text.startswith(STEPS_OPEN):
        return None

    close_idx = find_closing_tag(text, "Steps")
    if close_idx is None:
        return None
    inner = text[len(STEPS_OPEN):close_idx]
    rest = text[close_idx + len(STEPS_CLOSE):]
    return StepsNode(steps=_parse_steps(inner)), rest


def _parse_steps(inner: str) -> list[StepNode]:
    from mdx_docs.parser.content import parse_content

    steps = [
        StepNode(title=m.group(1), content=parse_content(m.group(2).strip()))
        for m in STEP_RE.finditer(inner)
    ]
    if steps:
        return steps

    headings = list(STEP_HEADING_RE.finditer(inner))
    for i, heading in enumerate(headings):
        end = headings[i + 1].start() if i + 1 < len(headings) else len(inner)
        body = inner[heading.end():end].strip()
        steps.append(StepNode(title=heading.group(1).strip(), content=parse_content(body)))
    return steps
