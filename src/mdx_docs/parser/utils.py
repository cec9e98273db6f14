"""Tag-matching helpers shared by the component parsers."""

import re


def _is_tag_boundary(text: str, pos: int) -> bool:
    """True if ``pos`` ends a tag name (``<Tab`` in ``<Tabs>`` is not one)."""
    return pos >= len(text) or not (text[pos].isalnum() or text[pos] in "_-.")


def _find_open(text: str, open_tag: str, start: int) -> int:
    pos = text.find(open_tag, start)
    while pos != -1 and not _is_tag_boundary(text, pos + len(open_tag)):
        pos = text.find(open_tag, pos + 1)
    return pos


def _is_self_closing(text: str, start: int) -> bool:
    tag_end = text.find(">", start)
    return tag_end != -1 and text[start:tag_end].rstrip().endswith("/")


def find_closing_tag(text: str, tag_name: str, inside: bool = False) -> int | None:
    """Find the offset of the ``</tag_name>`` that closes the current element.

    By default ``text`` starts with the element's opening tag. With
    ``inside=True`` it is the body that follows an already consumed opening
    tag, so scanning starts one level deep. Same-named tags opened in
    between are balanced against their own closing tags; nested self-closing
    tags (``<Tag ... />``) do not open a level. Returns None if unbalanced.
    """
    open_tag = f"<{tag_name}"
    close_tag = f"</{tag_name}>"

    depth = 1 if inside else 0
    pos = 0
    while pos < len(text):
        next_open = _find_open(text, open_tag, pos)
        next_close = text.find(close_tag, pos)
        if next_close == -1:
            return None
        if next_open != -1 and next_open < next_close:
            is_outer = next_open == 0 and not inside
            if is_outer or not _is_self_closing(text, next_open):
                depth += 1
            pos = next_open + len(open_tag)
            continue
        depth -= 1
        if depth <= 0:
            return next_close
        pos = next_close + len(close_tag)
    return None


def extract_attr(tag_source: str, name: str) -> str | None:
    """Return the value of a double-quoted ``name="value"`` attribute."""
    match = re.search(rf'(?<![\w-]){re.escape(name)}="([^"]*)"', tag_source)
    return match.group(1) if match else None


def has_flag(tag_source: str, name: str) -> bool:
    """Presence test for flag attributes such as ``required``.

    This is a plain substring check, so the word appearing inside another
    attribute's value also counts.
    """
    return name in tag_source
