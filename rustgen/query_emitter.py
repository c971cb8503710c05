"""Emit the Rust block that collects query string pairs.

Arrays repeat the key once per element (``tags=a&tags=b``), objects push
one pair per property, primitives push one pair. Pairs keep declaration
order. Optional values are pushed only inside a presence guard.
"""

from __future__ import annotations

from collections.abc import Sequence

from .fragments import presence_guard, rust_str
from .model import (
    GenerationMode,
    Location,
    ParameterSpec,
    object_properties,
    schema_kind,
)
from .naming import to_param_name
from .params import by_location

QUERY_VAR = "__query_params"


def _push(key: str, value: str) -> str:
    return f"{QUERY_VAR}.push(({rust_str(key)}.to_string(), {value}.to_string()));"


def _array_lines(param: ParameterSpec, ident: str) -> list[str]:
    return [
        f"for el in {ident}.iter() {{",
        f"    {_push(param.name, 'el')}",
        "}",
    ]


def _object_lines(param: ParameterSpec, ident: str, mode: GenerationMode) -> list[str]:
    lines: list[str] = []
    for prop in object_properties(param.schema):
        prop_ident = to_param_name(prop.name)
        field = f"{ident}.{prop_ident}"
        if prop.required:
            lines.append(_push(prop.name, field))
        else:
            lines.extend(presence_guard(prop_ident, field, [_push(prop.name, prop_ident)], mode))
    return lines


def emit_query(
    params: Sequence[ParameterSpec],
    mode: GenerationMode = GenerationMode.STANDARD,
) -> str:
    """Return the query-building block, or '' when there are no query parameters."""
    query_params = by_location(params, Location.QUERY)
    if not query_params:
        return ""

    lines = [f"let mut {QUERY_VAR}: Vec<(String, String)> = Vec::new();"]
    for param in query_params:
        ident = to_param_name(param.name)
        kind = schema_kind(param.schema)
        if kind == "array":
            body = _array_lines(param, ident)
        elif kind == "object":
            body = _object_lines(param, ident, mode)
        else:
            body = [_push(param.name, ident)]

        if param.required:
            lines.extend(body)
        else:
            lines.extend(presence_guard(ident, ident, body, mode))

    return "\n".join(lines)
