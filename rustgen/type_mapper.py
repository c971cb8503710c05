"""Map SchemaType trees to Rust type signatures.

Handles:
- Named references (by type name, never inlined)
- Primitive formats (int32, int64, float, double, date, date-time, byte, binary)
- Arrays, whose element types are always treated as required
- Objects with additionalProperties as string-keyed maps
- Option wrapping of non-required values
- abi_stable spellings for GenerationMode.FOREIGN_SAFE
"""

from __future__ import annotations

from .model import (
    ArraySchema,
    GenerationMode,
    ObjectSchema,
    Primitive,
    Reference,
    SchemaType,
)
from .naming import to_type_name

UNIT = "()"
OPAQUE_OBJECT = "serde_json::Value"

_FORMAT_TYPES: dict[str, str] = {
    "int32": "i32",
    "int64": "i64",
    "float": "f32",
    "double": "f64",
    "date": "chrono::NaiveDate",
    "date-time": "chrono::DateTime<chrono::Utc>",
}

_TEXT_FORMATS = frozenset({"byte", "binary", "string"})

_KIND_TYPES: dict[str, str] = {
    "integer": "i64",
    "number": "f64",
    "boolean": "bool",
}


def _from_format(fmt: str, mode: GenerationMode) -> str:
    if fmt in _TEXT_FORMATS:
        return mode.text
    return _FORMAT_TYPES.get(fmt, UNIT)


def _from_schema(schema: SchemaType, required: bool, mode: GenerationMode) -> str:
    if isinstance(schema, ArraySchema):
        return f"{mode.sequence}<{map_type(schema.items, True, mode)}>"

    if isinstance(schema, ObjectSchema):
        if schema.additional_properties is not None:
            value_type = map_type(schema.additional_properties, required, mode)
            return f"{mode.mapping}<{mode.text}, {value_type}>"
        return OPAQUE_OBJECT

    if isinstance(schema, Primitive):
        if schema.format:
            return _from_format(schema.format, mode)
        if schema.kind == "string":
            return mode.text
        return _KIND_TYPES.get(schema.kind, UNIT)

    return UNIT


def map_type(
    schema: SchemaType | None,
    required: bool = True,
    mode: GenerationMode = GenerationMode.STANDARD,
) -> str:
    """Resolve a schema to a Rust type string, Option-wrapped unless required."""
    if schema is None:
        return UNIT

    if isinstance(schema, Reference):
        signature = to_type_name(schema.target_name)
    else:
        signature = _from_schema(schema, required, mode)

    if required:
        return signature
    return f"{mode.option}<{signature}>"
