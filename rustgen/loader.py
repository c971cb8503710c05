"""Load an OpenAPI document and look things up in it.

JSON is read with the json module; .yaml/.yml files with PyYAML.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

import yaml


def load_spec(path: Path) -> dict[str, Any]:
    """Load the OpenAPI document from disk."""
    with open(path, encoding="utf-8") as f:
        if Path(path).suffix.lower() in (".yaml", ".yml"):
            return yaml.safe_load(f)
        return json.load(f)


def get_paths(spec: dict[str, Any]) -> dict[str, Any]:
    """Extract paths from the spec."""
    return spec.get("paths", {})


def resolve_ref(spec: dict[str, Any], ref: str) -> dict[str, Any]:
    """Resolve a local $ref pointer in the spec."""
    parts = ref.lstrip("#/").split("/")
    node = spec
    for part in parts:
        node = node[part.replace("~1", "/").replace("~0", "~")]
    return node


def url_path(url: str) -> str:
    """Return the path of an absolute URL, or the input if it is already a path."""
    parsed = urlparse(url)
    if not parsed.scheme or not parsed.netloc:
        return url
    return parsed.path or "/"


def get_base_path(spec: dict[str, Any]) -> str:
    """Base path of the first declared server, without a trailing slash."""
    servers = spec.get("servers") or []
    if not servers:
        return ""
    return url_path(servers[0].get("url", "")).rstrip("/")
