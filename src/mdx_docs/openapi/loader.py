"""Load raw OpenAPI text into a plain mapping.

YAML is tried first, then JSON. Only mappings are accepted.
"""

import json
import logging

import yaml

from .errors import InvalidSpecError, OpenApiParseError

logger = logging.getLogger(__name__)


def load_document(text: str) -> dict:
    """Deserialize OpenAPI text, raising OpenApiParseError if it is not a mapping."""
    try:
        data = yaml.safe_load(text)
        if isinstance(data, dict):
            return data
    except yaml.YAMLError as e:
        logger.debug(f"OpenAPI text is not YAML: {e}")

    # JSON with tab indentation is not valid YAML
    try:
        data = json.loads(text)
        if isinstance(data, dict):
            return data
    except (json.JSONDecodeError, ValueError):
        pass

    raise OpenApiParseError("Failed to parse as YAML or JSON")


def check_document(doc: dict) -> None:
    """Reject documents that are not OpenAPI 3.x with an info block."""
    version = doc.get("openapi")
    if version is None:
        raise InvalidSpecError("Missing 'openapi' version field")
    if not str(version).startswith("3."):
        raise InvalidSpecError(f"Unsupported OpenAPI version: {version}")

    info = doc.get("info")
    if not isinstance(info, dict):
        raise InvalidSpecError("Missing 'info' object")
    for key in ("title", "version"):
        if info.get(key) is None:
            raise InvalidSpecError(f"Missing 'info.{key}'")

    paths = doc.get("paths", {})
    if paths is not None and not isinstance(paths, dict):
        raise InvalidSpecError("'paths' must be a mapping")
