"""Emit the Rust block that builds the request HeaderMap.

Only default header serialization (style: simple, explode: false) is
supported; parameters declared with a content media type are skipped.
All cookie parameters are folded into a single Cookie header.
"""

from __future__ import annotations

from collections.abc import Sequence

from .fragments import (
    INDENT,
    format_literal,
    join_elements,
    presence_guard,
    rust_str,
    value_or_empty,
)
from .model import (
    GenerationMode,
    Location,
    ParameterSpec,
    object_properties,
    schema_kind,
)
from .naming import to_param_name
from .params import by_location

HEADERS_VAR = "__headers"
COOKIE_VAR = "__cookie"
COOKIE_SEPARATOR = ";"
OBJECT_PAIR_SEPARATOR = ";"


def _insert(name: str, value: str) -> str:
    return (
        f"{HEADERS_VAR}.insert({name},"
        f" reqwest::header::HeaderValue::from_str(&{value})?);"
    )


def _cookie_fragment(param: ParameterSpec, mode: GenerationMode) -> str:
    ident = to_param_name(param.name)
    value = ident if schema_kind(param.schema) == "primitive" else _value(param, ident, mode)
    fragment = f'format!("{format_literal(param.name)}={{}}", {value})'
    if param.required:
        return fragment
    return value_or_empty(ident, ident, fragment, mode)


def _cookie_lines(cookie_params: list[ParameterSpec], mode: GenerationMode) -> list[str]:
    fragments = [_cookie_fragment(p, mode) for p in cookie_params]
    return [
        f"let {COOKIE_VAR} = [",
        *[f"{INDENT}{fragment}," for fragment in fragments],
        "]",
        f"{INDENT}.into_iter()",
        f"{INDENT}.filter(|fragment| !fragment.is_empty())",
        f"{INDENT}.collect::<Vec<String>>()",
        f"{INDENT}.join({rust_str(COOKIE_SEPARATOR)});",
        f"if !{COOKIE_VAR}.is_empty() {{",
        f"{INDENT}{_insert('reqwest::header::COOKIE', COOKIE_VAR)}",
        "}",
    ]


def _object_value(param: ParameterSpec, ident: str, mode: GenerationMode) -> str:
    pieces: list[str] = []
    args: list[str] = []
    for prop in object_properties(param.schema):
        prop_ident = to_param_name(prop.name)
        field = f"{ident}.{prop_ident}"
        pieces.append(format_literal(prop.name) + ",{}")
        if prop.required:
            args.append(field)
        else:
            args.append(value_or_empty(prop_ident, field, f"{prop_ident}.to_string()", mode))
    if not args:
        return mode.empty
    return f'format!("{OBJECT_PAIR_SEPARATOR.join(pieces)}", {", ".join(args)})'


def _value(param: ParameterSpec, ident: str, mode: GenerationMode) -> str:
    """String expression for a header or cookie value."""
    kind = schema_kind(param.schema)
    if kind == "array":
        return join_elements(ident, ",")
    if kind == "object":
        return _object_value(param, ident, mode)
    return f"{ident}.to_string()"


def _header_lines(param: ParameterSpec, mode: GenerationMode) -> list[str]:
    ident = to_param_name(param.name)
    body = [_insert(rust_str(param.name), _value(param, ident, mode))]

    if param.required:
        return body
    return presence_guard(ident, ident, body, mode)


def emit_headers(
    params: Sequence[ParameterSpec],
    mode: GenerationMode = GenerationMode.STANDARD,
) -> str:
    """Return the header-building block; the HeaderMap is always declared."""
    lines = [f"let mut {HEADERS_VAR} = reqwest::header::HeaderMap::new();"]

    # content-typed parameters need media-type serialization, which is unsupported
    cookie_params = [
        p for p in by_location(params, Location.COOKIE) if not p.has_content_media_type
    ]
    if cookie_params:
        lines.extend(_cookie_lines(cookie_params, mode))

    for param in by_location(params, Location.HEADER):
        if param.has_content_media_type:
            continue
        lines.extend(_header_lines(param, mode))

    return "\n".join(lines)
