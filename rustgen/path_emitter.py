"""Rewrite a URL path template into a Rust expression building the path.

  /users/{id}  ->  format!("/users/{}", id)

Arrays are joined with a URL-encoded comma so the value stays one path
segment; objects are flattened to ``prop%2Cvalue%2Cprop%2Cvalue``.
An optional value that is absent becomes an empty segment.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

from .errors import TemplateResolutionError
from .fragments import format_literal, join_elements, rust_str, value_or_empty
from .model import (
    GenerationMode,
    Location,
    ParameterSpec,
    object_properties,
    schema_kind,
)
from .naming import to_param_name
from .params import by_location

URL_SAFE_COMMA = "%2C"

_PLACEHOLDER = re.compile(r"\{(.*?)\}")


def _object_value(param: ParameterSpec, ident: str, mode: GenerationMode) -> str:
    pieces: list[str] = []
    args: list[str] = []
    for prop in object_properties(param.schema):
        prop_ident = to_param_name(prop.name)
        field = f"{ident}.{prop_ident}"
        pieces.append(format_literal(prop.name) + URL_SAFE_COMMA + "{}")
        if prop.required:
            args.append(field)
        else:
            args.append(value_or_empty(prop_ident, field, f"{prop_ident}.to_string()", mode))

    if not args:
        return mode.empty
    return f'format!("{URL_SAFE_COMMA.join(pieces)}", {", ".join(args)})'


def _path_value(param: ParameterSpec, mode: GenerationMode) -> str:
    """Expression whose Display output replaces the placeholder."""
    ident = to_param_name(param.name)
    kind = schema_kind(param.schema)

    if kind == "array":
        expr = join_elements(ident, URL_SAFE_COMMA)
    elif kind == "object":
        expr = _object_value(param, ident, mode)
    elif param.required:
        return ident
    else:
        expr = f"{ident}.to_string()"

    if param.required:
        return expr
    return value_or_empty(ident, ident, expr, mode)


def emit_path(
    template: str,
    params: Sequence[ParameterSpec],
    mode: GenerationMode = GenerationMode.STANDARD,
) -> str:
    """Return a Rust expression producing the request path for ``template``.

    Raises TemplateResolutionError when a placeholder names no path parameter.
    """
    matches = list(_PLACEHOLDER.finditer(template))
    if not matches:
        return rust_str(template)

    path_params = by_location(params, Location.PATH)
    pieces: list[str] = []
    args: list[str] = []
    pos = 0
    for match in matches:
        name = match.group(1)
        param = next((p for p in path_params if p.name == name), None)
        if param is None:
            raise TemplateResolutionError(name, [p.name for p in path_params])
        pieces.append(format_literal(template[pos:match.start()]))
        pieces.append("{}")
        args.append(_path_value(param, mode))
        pos = match.end()
    pieces.append(format_literal(template[pos:]))

    return f'format!("{"".join(pieces)}", {", ".join(args)})'
