"""Card, CardGroup and Columns parser."""

import re

from .base import CardGroupNode, CardNode, DocNode
from .utils import extract_attr, find_closing_tag

CARD_TAG = "<Card"
CARD_CLOSE = "</Card>"

CARD_GROUP_DEFAULT_COLS = 2
COLUMNS_DEFAULT_COLS = 3


def _open_re(tag_name: str) -> re.Pattern:
    return re.compile(rf"""^<{tag_name}(?:\s+cols=[{{"']?(\d+)[}}"']?)?\s*>""")


CARD_GROUP_OPEN_RE = _open_re("CardGroup")
COLUMNS_OPEN_RE = _open_re("Columns")


def _try_parse_grid(text: str, tag_name: str, open_re: re.Pattern, default_cols: int):
    match = open_re.match(text)
    if not match:
        return None
    cols = int(match.group(1)) if match.group(1) else default_cols

    close_idx = find_closing_tag(text, tag_name)
    if close_idx is None:
        return None
    inner = text[match.end():close_idx]
    rest = text[close_idx + len(f"</{tag_name}>"):]
    return CardGroupNode(cols=cols, cards=_parse_cards(inner)), rest


def try_parse_card_group(text: str) -> tuple[DocNode, str] | None:
    return _try_parse_grid(text, "CardGroup", CARD_GROUP_OPEN_RE, CARD_GROUP_DEFAULT_COLS)


def try_parse_columns(text: str) -> tuple[DocNode, str] | None:
    """``<Columns>`` is laid out like a CardGroup with three columns by default."""
    return _try_parse_grid(text, "Columns", COLUMNS_OPEN_RE, COLUMNS_DEFAULT_COLS)


def try_parse_standalone_card(text: str) -> tuple[DocNode, str] | None:
    """A lone ``<Card>`` becomes a one-column group."""
    parsed = _parse_single_card(text)
    if parsed is None:
        return None
    card, end = parsed
    return CardGroupNode(cols=1, cards=[card]), text[end:]


def _is_card_start(text: str) -> bool:
    return (
        text.startswith(CARD_TAG)
        and len(text) > len(CARD_TAG)
        and text[len(CARD_TAG)] in " \t\r\n/>"
    )


def _parse_single_card(text: str) -> tuple[CardNode, int] | None:
    """Parse a Card at the start of ``text``; returns the card and its end offset."""
    if not _is_card_start(text):
        return None
    tag_end = text.find(">")
    if tag_end == -1:
        return None

    tag_source = text[len(CARD_TAG):tag_end]
    title = extract_attr(tag_source, "title") or ""
    icon = extract_attr(tag_source, "icon")
    href = extract_attr(tag_source, "href")

    if tag_source.strip().endswith("/"):
        return CardNode(title=title, icon=icon, href=href), tag_end + 1

    close_idx = find_closing_tag(text, "Card")
    if close_idx is None:
        return None
    body = text[tag_end + 1:close_idx].strip()
    return CardNode(title=title, icon=icon, href=href, content=body), close_idx + len(CARD_CLOSE)


def _parse_cards(inner: str) -> list[CardNode]:
    """Collect Cards from a group body, skipping anything between them."""
    cards = []
    remaining = inner.strip()
    while remaining:
        parsed = _parse_single_card(remaining)
        if parsed is not None:
            card, end = parsed
            cards.append(card)
            remaining = remaining[end:].strip()
            continue

        next_card = remaining.find(CARD_TAG, 1)
        if next_card == -1:
            break
        remaining = remaining[next_card:]
    return cards
