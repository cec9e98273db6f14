"""OpenAPI 3.x document transformer.

Parses OpenAPI YAML or JSON into the display models in ``base``, resolving
internal ``$ref`` pointers along the way.
"""

import datetime
import logging
from typing import Any

from pydantic import ValidationError

from .base import (
    ApiInfo,
    ApiOperation,
    ApiParameter,
    ApiRequestBody,
    ApiResponse,
    ApiServer,
    ApiTag,
    HttpMethod,
    MediaTypeContent,
    OpenApiSpec,
    ParameterLocation,
    SchemaDefinition,
    SchemaType,
)
from .errors import InvalidSpecError
from .loader import check_document, load_document

logger = logging.getLogger(__name__)

# Operation order within a path item.
METHODS = (
    HttpMethod.GET,
    HttpMethod.POST,
    HttpMethod.PUT,
    HttpMethod.DELETE,
    HttpMethod.PATCH,
    HttpMethod.HEAD,
    HttpMethod.OPTIONS,
)

SCHEMA_REF_PREFIX = "#/components/schemas/"


def parse_openapi(text: str) -> OpenApiSpec:
    """Parse OpenAPI text into an OpenApiSpec.

    Raises OpenApiParseError when the text is neither YAML nor JSON, and
    InvalidSpecError when it is not an OpenAPI 3.x document or a field has
    the wrong type.
    """
    doc = load_document(text)
    check_document(doc)
    return transform_spec(doc)


def transform_spec(doc: dict) -> OpenApiSpec:
    try:
        return _transform_spec(doc)
    except ValidationError as e:
        raise InvalidSpecError(f"Invalid field in OpenAPI document: {e}") from e


def _transform_spec(doc: dict) -> OpenApiSpec:
    info = doc["info"]
    api_info = ApiInfo(
        title=str(info["title"]),
        version=str(info["version"]),
        description=info.get("description"),
    )

    servers = [
        ApiServer(url=s.get("url", ""), description=s.get("description"))
        for s in doc.get("servers") or []
        if isinstance(s, dict)
    ]
    tags = [
        ApiTag(name=t["name"], description=t.get("description"))
        for t in doc.get("tags") or []
        if isinstance(t, dict) and "name" in t
    ]

    operations: list[ApiOperation] = []
    for path, item in (doc.get("paths") or {}).items():
        if isinstance(item, dict):
            operations.extend(_extract_operations(str(path), item, doc))

    schemas = {
        str(name): _resolve_schema(schema, doc, (str(name),))
        for name, schema in _components(doc, "schemas").items()
        if isinstance(schema, dict)
    }

    logger.debug(f"Transformed {len(operations)} operations from '{api_info.title}'")
    return OpenApiSpec(
        info=api_info,
        servers=servers,
        operations=operations,
        tags=tags,
        schemas=schemas,
    )


def _json_safe(value: Any) -> Any:
    """YAML loads unquoted dates as date objects; keep them as ISO strings."""
    if isinstance(value, (datetime.date, datetime.datetime)):
        return value.isoformat()
    if isinstance(value, dict):
        return {str(k): _json_safe(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_json_safe(v) for v in value]
    return value


def _components(doc: dict, section: str) -> dict:
    components = doc.get("components") or {}
    return components.get(section) or {}


def _ref_target(ref: str, doc: dict, section: str) -> dict | None:
    ref = str(ref)
    prefix = f"#/components/{section}/"
    if not ref.startswith(prefix):
        return None
    target = _components(doc, section).get(ref[len(prefix):])
    return target if isinstance(target, dict) and "$ref" not in target else None


def _extract_operations(path: str, item: dict, doc: dict) -> list[ApiOperation]:
    operations = []
    for method in METHODS:
        operation = item.get(method.value.lower())
        if isinstance(operation, dict):
            operations.append(
                _transform_operation(path, method, operation, item.get("parameters") or [], doc)
            )
    return operations


def _transform_operation(
    path: str, method: HttpMethod, operation: dict, path_params: list, doc: dict
) -> ApiOperation:
    parameters = _merge_parameters(path_params, operation.get("parameters") or [], doc)

    request_body = None
    if operation.get("requestBody") is not None:
        request_body = _transform_request_body(operation["requestBody"], doc)

    responses = [
        _transform_response(str(code), resp, doc)
        for code, resp in (operation.get("responses") or {}).items()
    ]

    return ApiOperation(
        operation_id=operation.get("operationId"),
        method=method,
        path=path,
        summary=operation.get("summary"),
        description=operation.get("description"),
        tags=[str(t) for t in operation.get("tags") or []],
        parameters=parameters,
        request_body=request_body,
        responses=responses,
        deprecated=bool(operation.get("deprecated", False)),
    )


def _merge_parameters(path_params: list, op_params: list, doc: dict) -> list[ApiParameter]:
    """Path-level parameters first; operation-level ones replace same-named entries."""
    merged: list[ApiParameter] = []
    for raw in list(path_params) + list(op_params):
        param = _transform_parameter(raw, doc)
        if param is None:
            continue
        for i, existing in enumerate(merged):
            if existing.name == param.name:
                merged[i] = param
                break
        else:
            merged.append(param)
    return merged


def _transform_parameter(raw: Any, doc: dict) -> ApiParameter | None:
    if not isinstance(raw, dict):
        return None
    param = raw
    if "$ref" in raw:
        param = _ref_target(raw["$ref"], doc, "parameters")
        if param is None:
            logger.warning(f"Unresolvable parameter reference: {raw['$ref']}")
            return None

    try:
        location = ParameterLocation(str(param.get("in", "")).lower())
    except ValueError:
        return None
    if "name" not in param:
        return None
    # Parameters described by `content` instead of `schema` are not rendered
    if "content" in param and "schema" not in param:
        return None

    schema = None
    if isinstance(param.get("schema"), dict):
        schema = _resolve_schema(param["schema"], doc, ())

    return ApiParameter(
        name=str(param["name"]),
        location=location,
        description=param.get("description"),
        required=bool(param.get("required", False)),
        deprecated=bool(param.get("deprecated", False)),
        schema_def=schema,
        example=_json_safe(param.get("example")),
    )


def _transform_content(content: Any, doc: dict) -> list[MediaTypeContent]:
    if not isinstance(content, dict):
        return []
    result = []
    for media_type, media in content.items():
        media = media if isinstance(media, dict) else {}
        schema = None
        if isinstance(media.get("schema"), dict):
            schema = _resolve_schema(media["schema"], doc, ())
        result.append(
            MediaTypeContent(
                media_type=str(media_type),
                schema_def=schema,
                example=_json_safe(media.get("example")),
            )
        )
    return result


def _transform_request_body(raw: Any, doc: dict) -> ApiRequestBody | None:
    if not isinstance(raw, dict):
        return None
    body = raw
    if "$ref" in raw:
        body = _ref_target(raw["$ref"], doc, "requestBodies")
        if body is None:
            logger.warning(f"Unresolvable request body reference: {raw['$ref']}")
            return None

    return ApiRequestBody(
        description=body.get("description"),
        required=bool(body.get("required", False)),
        content=_transform_content(body.get("content"), doc),
    )


def _transform_response(status_code: str, raw: Any, doc: dict) -> ApiResponse:
    resp = raw if isinstance(raw, dict) else None
    if resp is not None and "$ref" in resp:
        resp = _ref_target(raw["$ref"], doc, "responses")
        if resp is None:
            logger.warning(f"Unresolvable response reference: {raw['$ref']}")

    if resp is None:
        return ApiResponse(status_code=status_code)
    return ApiResponse(
        status_code=status_code,
        description=str(resp.get("description") or ""),
        content=_transform_content(resp.get("content"), doc),
    )


def _resolve_schema(schema: dict, doc: dict, resolving: tuple[str, ...]) -> SchemaDefinition:
    """Transform a schema, following ``$ref`` into components.

    ``resolving`` holds the reference names being expanded on the current
    path; meeting one of them again yields a stub so cycles terminate.
    """
    if "$ref" not in schema:
        return _transform_schema(schema, doc, resolving)

    ref = str(schema["$ref"])
    ref_name = ref.rsplit("/", 1)[-1]
    target = None
    if ref.startswith(SCHEMA_REF_PREFIX) and ref_name not in resolving:
        target = _components(doc, "schemas").get(ref_name)

    if not isinstance(target, dict):
        if ref_name not in resolving:
            logger.warning(f"Unresolvable schema reference: {ref}")
        return SchemaDefinition(ref_name=ref_name)

    resolved = _resolve_schema(target, doc, resolving + (ref_name,))
    return resolved.model_copy(update={"ref_name": ref_name})


def _schema_type(schema: dict) -> tuple[SchemaType, bool]:
    """Return the schema type and whether the type list allowed null."""
    raw = schema.get("type")
    nullable = False
    if isinstance(raw, list):
        nullable = "null" in raw
        non_null = [t for t in raw if t != "null"]
        raw = non_null[0] if non_null else "null"

    if raw is None:
        if "properties" in schema:
            return SchemaType.OBJECT, nullable
        if "items" in schema:
            return SchemaType.ARRAY, nullable
        return SchemaType.ANY, nullable
    try:
        return SchemaType(str(raw)), nullable
    except ValueError:
        return SchemaType.ANY, nullable


def _transform_schema(schema: dict, doc: dict, resolving: tuple[str, ...]) -> SchemaDefinition:
    schema_type, type_nullable = _schema_type(schema)

    def resolve(sub: Any) -> SchemaDefinition:
        if isinstance(sub, dict):
            return _resolve_schema(sub, doc, resolving)
        return SchemaDefinition()

    items = None
    properties: dict[str, SchemaDefinition] = {}
    required: list[str] = []
    additional = None
    if schema_type == SchemaType.ARRAY and isinstance(schema.get("items"), dict):
        items = resolve(schema["items"])
    if schema_type == SchemaType.OBJECT:
        required = [str(r) for r in schema.get("required") or []]
        for name, prop in (schema.get("properties") or {}).items():
            properties[str(name)] = resolve(prop)
        extra = schema.get("additionalProperties")
        if extra is True:
            additional = SchemaDefinition()
        elif isinstance(extra, dict):
            additional = resolve(extra)

    return SchemaDefinition(
        schema_type=schema_type,
        format=schema.get("format"),
        description=schema.get("description"),
        items=items,
        properties=properties,
        required=required,
        enum_values=[str(v) for v in schema.get("enum") or [] if v is not None],
        example=_json_safe(schema.get("example")),
        default=_json_safe(schema.get("default")),
        nullable=bool(schema.get("nullable", False)) or type_nullable,
        additional_properties=additional,
        one_of=[resolve(s) for s in schema.get("oneOf") or []],
        any_of=[resolve(s) for s in schema.get("anyOf") or []],
        all_of=[resolve(s) for s in schema.get("allOf") or []],
    )
