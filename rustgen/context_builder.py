"""Build Jinja2 template context from a resolved OpenAPI document.

Assigns each operation to a client by its first tag, converts its
parameters to ParameterSpec, and pre-renders the path, query and
header fragments for api_client.rs.j2.
"""

from __future__ import annotations

import logging
from typing import Any

from .errors import TemplateResolutionError
from .header_emitter import emit_headers
from .loader import get_base_path, get_paths
from .model import GenerationMode, Location, ParameterSpec, parameter_from_openapi
from .naming import build_method_name, to_param_name, to_type_name
from .params import has_header_or_cookie
from .path_emitter import emit_path
from .query_emitter import emit_query

logger = logging.getLogger(__name__)

_HTTP_METHODS = ("get", "post", "put", "delete", "patch")

DEFAULT_CLIENT = "default"


def client_name_for(operation: dict[str, Any]) -> str:
    """Client type name derived from the operation's first tag."""
    tags = operation.get("tags") or [DEFAULT_CLIENT]
    return f"{to_type_name(tags[0])}ApiClient"


def merge_parameters(
    spec: dict[str, Any],
    path_item: dict[str, Any],
    operation: dict[str, Any],
) -> list[ParameterSpec]:
    """Path-level parameters overlaid by operation-level ones on (name, in)."""
    merged: dict[tuple[str, Location], ParameterSpec] = {}
    for node in [*path_item.get("parameters", []), *operation.get("parameters", [])]:
        param = parameter_from_openapi(node, spec)
        merged[(param.name, param.location)] = param
    return list(merged.values())


def order_arguments(params: list[ParameterSpec]) -> list[ParameterSpec]:
    """Method argument order: path parameters first, then declaration order."""
    return sorted(params, key=lambda p: p.location is not Location.PATH)


def _deduplicate_method_names(operations: list[dict[str, Any]]) -> None:
    """Ensure method names are unique per client by appending the HTTP method."""
    seen: dict[tuple[str, str], int] = {}
    for op in operations:
        key = (op["client"], op["name"])
        if key in seen:
            seen[key] += 1
            op["name"] = f"{op['name']}_{op['method']}"
        else:
            seen[key] = 1

    final_seen: dict[tuple[str, str], int] = {}
    for op in operations:
        key = (op["client"], op["name"])
        if key in final_seen:
            final_seen[key] += 1
            op["name"] = f"{op['name']}_{final_seen[key]}"
        else:
            final_seen[key] = 1


def build_operation(
    spec: dict[str, Any],
    path: str,
    method: str,
    path_item: dict[str, Any],
    mode: GenerationMode,
) -> dict[str, Any]:
    """Build the template context for one operation."""
    operation = path_item[method]
    params = merge_parameters(spec, path_item, operation)

    operation_id = operation.get("operationId")
    name = to_param_name(operation_id) if operation_id else build_method_name(method, path)

    return {
        "name": name,
        "method": method,
        "path": path,
        "client": client_name_for(operation),
        "summary": operation.get("summary", ""),
        "params": params,
        "args": order_arguments(params),
        "path_expr": emit_path(path, params, mode),
        "query_snippet": emit_query(params, mode),
        "header_snippet": emit_headers(params, mode),
        "has_headers": has_header_or_cookie(params),
    }


def build_context(
    spec: dict[str, Any],
    mode: GenerationMode = GenerationMode.STANDARD,
) -> dict[str, Any]:
    """Build the full template context from the OpenAPI document."""
    operations: list[dict[str, Any]] = []

    for path, path_item in sorted(get_paths(spec).items()):
        for method in _HTTP_METHODS:
            if method not in path_item:
                continue
            try:
                op = build_operation(spec, path, method, path_item, mode)
            except TemplateResolutionError:
                logger.error("unresolved path template in %s %s", method.upper(), path)
                raise
            logger.debug("built %s %s as %s.%s", method.upper(), path, op["client"], op["name"])
            operations.append(op)

    _deduplicate_method_names(operations)

    clients: dict[str, list[dict[str, Any]]] = {}
    for op in operations:
        clients.setdefault(op["client"], []).append(op)

    info = spec.get("info", {})
    return {
        "clients": clients,
        "operations": operations,
        "operation_count": len(operations),
        "base_path": get_base_path(spec),
        "mode": mode,
        "foreign_safe": mode is GenerationMode.FOREIGN_SAFE,
        "title": info.get("title", ""),
        "api_version": info.get("version", "unknown"),
    }
