"""Display models for parsed OpenAPI specifications.

The transformer in ``mdx_docs.openapi.swagger`` converts an OpenAPI 3.x
document into these models. They are a simplified, render-ready view of
the spec: references are already resolved and every field has a default.
"""

import datetime
import json
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict

MAX_EXAMPLE_DEPTH = 5

STRING_FORMAT_EXAMPLES = {
    "uuid": "550e8400-e29b-41d4-a716-446655440000",
    "date-time": "2024-01-15T09:30:00Z",
    "date": "2024-01-15",
    "uri": "https://example.com",
    "url": "https://example.com",
    "email": "user@example.com",
}


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"


class ParameterLocation(str, Enum):
    PATH = "path"
    QUERY = "query"
    HEADER = "header"
    COOKIE = "cookie"


class SchemaType(str, Enum):
    STRING = "string"
    NUMBER = "number"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    ARRAY = "array"
    OBJECT = "object"
    NULL = "null"
    ANY = "any"


class _Model(BaseModel):
    model_config = ConfigDict(frozen=True)


class ApiInfo(_Model):
    """API title, version and description."""

    title: str = ""
    version: str = ""
    description: str | None = None


class ApiServer(_Model):
    url: str
    description: str | None = None


class ApiTag(_Model):
    name: str
    description: str | None = None


class SchemaDefinition(_Model):
    """A resolved schema. ``ref_name`` is set when it came from a ``$ref``."""

    schema_type: SchemaType = SchemaType.ANY
    format: str | None = None
    description: str | None = None
    items: "SchemaDefinition | None" = None
    properties: dict[str, "SchemaDefinition"] = {}
    required: list[str] = []
    ref_name: str | None = None
    enum_values: list[str] = []
    example: Any = None
    default: Any = None
    nullable: bool = False
    additional_properties: "SchemaDefinition | None" = None
    one_of: list["SchemaDefinition"] = []
    any_of: list["SchemaDefinition"] = []
    all_of: list["SchemaDefinition"] = []

    def display_type(self) -> str:
        """Short type label, e.g. ``string (uuid)``, ``array<Pet>`` or ``Pet``."""
        if self.ref_name:
            return self.ref_name

        if self.schema_type == SchemaType.ARRAY:
            if self.items is not None:
                return f"array<{self.items.display_type()}>"
            return "array"
        if self.schema_type == SchemaType.OBJECT and self.properties:
            return "object"

        label = self.schema_type.value
        if self.format:
            label += f" ({self.format})"
        return label

    def is_complex(self) -> bool:
        """True for objects, arrays and composed schemas."""
        return (
            self.schema_type in (SchemaType.OBJECT, SchemaType.ARRAY)
            or bool(self.one_of)
            or bool(self.any_of)
            or bool(self.all_of)
        )

    def generate_example_json(self, depth: int = 0) -> Any:
        """Build a JSON-compatible example value for this schema.

        An explicit ``example`` wins; otherwise a placeholder is derived from
        the type. Nesting deeper than ``MAX_EXAMPLE_DEPTH`` yields ``{}`` so
        that circular references terminate.
        """
        if depth > MAX_EXAMPLE_DEPTH:
            return {}

        if self.example is not None:
            return self.example

        if self.schema_type == SchemaType.STRING:
            if self.enum_values:
                return self.enum_values[0]
            return STRING_FORMAT_EXAMPLES.get(self.format or "", "string")
        if self.schema_type == SchemaType.INTEGER:
            return _integer_default(self.default)
        if self.schema_type == SchemaType.NUMBER:
            return 0.0
        if self.schema_type == SchemaType.BOOLEAN:
            return True
        if self.schema_type == SchemaType.ARRAY:
            if self.items is None:
                return []
            return [self.items.generate_example_json(depth + 1)]
        if self.schema_type == SchemaType.OBJECT:
            return {
                name: prop.generate_example_json(depth + 1)
                for name, prop in self.properties.items()
            }
        if self.schema_type == SchemaType.NULL:
            return None
        return self._composed_example(depth)

    def _composed_example(self, depth: int) -> Any:
        if self.all_of:
            merged: dict[str, Any] = {}
            for part in self.all_of:
                value = part.generate_example_json(depth + 1)
                if not isinstance(value, dict):
                    return value
                merged.update(value)
            return merged
        for variants in (self.one_of, self.any_of):
            if variants:
                return variants[0].generate_example_json(depth + 1)
        return "any"


def _integer_default(default: Any) -> int:
    if isinstance(default, int) and not isinstance(default, bool):
        return default
    if isinstance(default, str):
        try:
            return int(default)
        except ValueError:
            pass
    return 0


class MediaTypeContent(_Model):
    media_type: str
    schema_def: SchemaDefinition | None = None
    example: Any = None


class ApiParameter(_Model):
    name: str
    location: ParameterLocation
    description: str | None = None
    required: bool = False
    deprecated: bool = False
    schema_def: SchemaDefinition | None = None
    example: Any = None


class ApiRequestBody(_Model):
    description: str | None = None
    required: bool = False
    content: list[MediaTypeContent] = []


class ApiResponse(_Model):
    status_code: str  # "200", "4XX" or "default"
    description: str = ""
    content: list[MediaTypeContent] = []


class ApiOperation(_Model):
    """One HTTP method on one path."""

    operation_id: str | None = None
    method: HttpMethod
    path: str
    summary: str | None = None
    description: str | None = None
    tags: list[str] = []
    parameters: list[ApiParameter] = []
    request_body: ApiRequestBody | None = None
    responses: list[ApiResponse] = []
    deprecated: bool = False

    def slug(self) -> str:
        """URL slug: kebab-cased operationId, else ``method-path``."""
        if self.operation_id:
            return _kebab_case(self.operation_id)
        path_slug = self.path.strip("/").replace("/", "-").replace("{", "").replace("}", "")
        return f"{self.method.value.lower()}-{path_slug}"

    def generate_curl(self, base_url: str) -> str:
        """Build a multi-line curl command for this operation."""
        parts = ["curl"]
        if self.method != HttpMethod.GET:
            parts.append(f"-X {self.method.value}")

        url = base_url.rstrip("/") + self.path
        query_parts = []
        for param in self.parameters:
            if param.location == ParameterLocation.PATH:
                if param.schema_def is not None:
                    value = _query_value(param.schema_def.generate_example_json())
                else:
                    value = f"{{{param.name}}}"
                url = url.replace(f"{{{param.name}}}", value)
            elif param.location == ParameterLocation.QUERY and param.schema_def is not None:
                value = _query_value(param.schema_def.generate_example_json())
                query_parts.append(f"{param.name}={value}")

        if query_parts:
            url = f"{url}?{'&'.join(query_parts)}"
        parts.append(f'"{url}"')

        if self.request_body is not None:
            parts.append('-H "Content-Type: application/json"')
            for content in self.request_body.content:
                if "json" in content.media_type:
                    if content.schema_def is not None:
                        example = content.schema_def.generate_example_json()
                        parts.append(f"-d '{_pretty_json(example)}'")
                    break

        return " \\\n  ".join(parts)

    def generate_response_example(self) -> tuple[str, str] | None:
        """Return ``(status_code, pretty_json)`` for the first 2xx response with a schema."""
        for response in self.responses:
            if not response.status_code.startswith("2"):
                continue
            for content in response.content:
                if content.schema_def is not None:
                    example = content.schema_def.generate_example_json()
                    return response.status_code, _pretty_json(example)
        return None


class OpenApiSpec(_Model):
    info: ApiInfo
    servers: list[ApiServer] = []
    operations: list[ApiOperation] = []
    tags: list[ApiTag] = []
    schemas: dict[str, SchemaDefinition] = {}


def _kebab_case(operation_id: str) -> str:
    chars = []
    for i, ch in enumerate(operation_id):
        if ch.isupper() and i > 0:
            chars.append("-")
        chars.append(ch.lower())
    return "".join(chars)


def _query_value(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, datetime.date):
        return value.isoformat()
    return json.dumps(value, ensure_ascii=False, default=str)


def _pretty_json(value: Any) -> str:
    return json.dumps(value, indent=2, ensure_ascii=False, default=str)
