"""Errors raised while loading an OpenAPI document."""


class OpenApiError(Exception):
    """Base class for OpenAPI loading failures."""


class OpenApiParseError(OpenApiError):
    """The text is neither a YAML nor a JSON mapping."""


class InvalidSpecError(OpenApiError):
    """The document parsed but is not a usable OpenAPI 3.x spec."""
