"""Parameter and schema model shared by every emitter.

A parameter list is built once per operation (usually from a resolved
OpenAPI document via ``parameter_from_openapi``) and is read-only while
fragments are emitted:

  - ParameterSpec   name, location, required flag, schema, media-type flag
  - SchemaType      Reference | Primitive | ArraySchema | ObjectSchema
  - GenerationMode  STANDARD or FOREIGN_SAFE (abi_stable types)

References are kept as names and never inlined, so self-referential
schemas cannot recurse.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

from .loader import resolve_ref

PRIMITIVE_KINDS = frozenset({"string", "integer", "number", "boolean"})


class Location(str, Enum):
    """Where a parameter travels in the HTTP request."""

    PATH = "path"
    QUERY = "query"
    HEADER = "header"
    COOKIE = "cookie"


# Rust spellings per mode: (some, option, text, sequence, mapping)
_MODE_IDIOMS: dict[str, tuple[str, str, str, str, str]] = {
    "standard": ("Some", "Option", "String", "Vec", "HashMap"),
    "foreign-safe": ("RSome", "ROption", "RString", "RVec", "RHashMap"),
}


class GenerationMode(Enum):
    """Selects plain Rust std types or abi_stable types for FFI clients."""

    STANDARD = "standard"
    FOREIGN_SAFE = "foreign-safe"

    @property
    def some(self) -> str:
        """Pattern used to unwrap a present optional value."""
        return _MODE_IDIOMS[self.value][0]

    @property
    def option(self) -> str:
        return _MODE_IDIOMS[self.value][1]

    @property
    def text(self) -> str:
        return _MODE_IDIOMS[self.value][2]

    @property
    def sequence(self) -> str:
        return _MODE_IDIOMS[self.value][3]

    @property
    def mapping(self) -> str:
        return _MODE_IDIOMS[self.value][4]

    @property
    def empty(self) -> str:
        """Expression substituted for an absent value once stringified."""
        return "String::new()"


@dataclass(frozen=True)
class Reference:
    target_name: str


@dataclass(frozen=True)
class Primitive:
    kind: str
    format: str | None = None


@dataclass(frozen=True)
class ArraySchema:
    items: SchemaType | None = None


@dataclass(frozen=True)
class Property:
    """Object property; ``required`` is independent of the owning parameter."""

    name: str
    schema: SchemaType | None = None
    required: bool = False


@dataclass(frozen=True)
class ObjectSchema:
    properties: tuple[Property, ...] = ()
    additional_properties: SchemaType | None = None


SchemaType = Union[Reference, Primitive, ArraySchema, ObjectSchema]


@dataclass(frozen=True)
class ParameterSpec:
    name: str
    location: Location
    required: bool = False
    schema: SchemaType | None = None
    has_content_media_type: bool = False


def schema_kind(schema: SchemaType | None) -> str:
    """Return 'array', 'object' or 'primitive' for emitter dispatch.

    References and missing schemas serialize like primitives.
    """
    if isinstance(schema, ArraySchema):
        return "array"
    if isinstance(schema, ObjectSchema):
        return "object"
    return "primitive"


def object_properties(schema: SchemaType | None) -> tuple[Property, ...]:
    if isinstance(schema, ObjectSchema):
        return schema.properties
    return ()


def schema_from_openapi(node: Any) -> SchemaType | None:
    """Convert a resolved OpenAPI Schema Object into a SchemaType tree."""
    if not isinstance(node, dict) or not node:
        return None

    if "$ref" in node:
        return Reference(node["$ref"])

    node_type = node.get("type")
    if isinstance(node_type, list):
        # OpenAPI 3.1 nullable form: ["string", "null"]
        node_type = next((t for t in node_type if t != "null"), None)

    if node_type == "array" or "items" in node:
        return ArraySchema(schema_from_openapi(node.get("items")))

    if node_type == "object" or "properties" in node or "additionalProperties" in node:
        required_fields = set(node.get("required", []))
        properties = tuple(
            Property(
                name=prop_name,
                schema=schema_from_openapi(prop_schema),
                required=prop_name in required_fields,
            )
            for prop_name, prop_schema in node.get("properties", {}).items()
        )
        extra = node.get("additionalProperties")
        if extra is True:
            additional: SchemaType | None = ObjectSchema()
        elif isinstance(extra, dict):
            additional = schema_from_openapi(extra) or ObjectSchema()
        else:
            additional = None
        return ObjectSchema(properties=properties, additional_properties=additional)

    if node_type in PRIMITIVE_KINDS:
        return Primitive(node_type, node.get("format"))
    if node_type is None and "format" in node:
        return Primitive("string", node["format"])

    return None


def parameter_from_openapi(
    node: dict[str, Any],
    spec: dict[str, Any] | None = None,
) -> ParameterSpec:
    """Convert an OpenAPI Parameter Object into a ParameterSpec.

    A ``$ref`` parameter is dereferenced once against ``spec``.
    """
    if "$ref" in node and spec is not None:
        node = resolve_ref(spec, node["$ref"])

    location = Location(node.get("in", "query"))
    content = node.get("content") or {}
    schema_node = node.get("schema")
    if content and schema_node is None:
        first_media = next(iter(content.values()))
        schema_node = first_media.get("schema")

    return ParameterSpec(
        name=node["name"],
        location=location,
        required=location is Location.PATH or bool(node.get("required", False)),
        schema=schema_from_openapi(schema_node),
        has_content_media_type=bool(content),
    )
