"""YAML frontmatter extraction."""

import datetime
import logging

import yaml
from pydantic import ValidationError

from .base import DocFrontmatter

logger = logging.getLogger(__name__)

DELIMITER = "---"

# Text fields YAML may type as numbers or dates, e.g. `title: 1.0`
TEXT_FIELDS = ("title", "description", "sidebarTitle", "sidebar_title", "icon")


def _stringify_scalars(data: dict) -> dict:
    return {
        key: str(value)
        if key in TEXT_FIELDS and isinstance(value, (int, float, datetime.date))
        else value
        for key, value in data.items()
    }


def extract_frontmatter(text: str) -> tuple[DocFrontmatter, str]:
    """Split a leading ``---`` YAML block from the document body.

    Returns the parsed frontmatter and the remaining body. When there is no
    frontmatter, no closing delimiter, or the YAML is malformed, returns
    default frontmatter and the original text.
    """
    content = text.strip()
    if not content.startswith(DELIMITER):
        return DocFrontmatter(), text

    after_open = content[len(DELIMITER):]
    end = after_open.find("\n" + DELIMITER)
    if end == -1:
        return DocFrontmatter(), text

    yaml_text = after_open[:end].strip()
    remainder = after_open[end + len(DELIMITER) + 1:].lstrip()

    try:
        data = yaml.safe_load(yaml_text) if yaml_text else None
        if data is None:
            return DocFrontmatter(), remainder
        if not isinstance(data, dict):
            raise ValueError(f"expected a mapping, got {type(data).__name__}")
        return DocFrontmatter.model_validate(_stringify_scalars(data)), remainder
    except (yaml.YAMLError, ValidationError, ValueError) as e:
        logger.warning(f"Failed to parse frontmatter: {e}")
        return DocFrontmatter(), text
