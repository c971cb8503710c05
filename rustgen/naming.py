"""Turn schema identifiers into Rust identifiers.

  - to_param_name     userId -> user_id, type -> r#type, self -> self_
  - to_type_name      #/components/schemas/pet-owner -> PetOwner
  - to_file_name      PetApiClient.rs -> pet_api_client.rs
  - build_method_name GET /pets/{petId} -> get_pets_by_pet_id

Every function is total: any input yields a usable identifier.
"""

from __future__ import annotations

import re

# Strict, reserved and edition-specific keywords
RUST_KEYWORDS = frozenset({
    "abstract", "as", "async", "await", "become", "box", "break", "const",
    "continue", "crate", "do", "dyn", "else", "enum", "extern", "false",
    "final", "fn", "for", "gen", "if", "impl", "in", "let", "loop", "macro",
    "match", "mod", "move", "mut", "override", "priv", "pub", "ref",
    "return", "self", "static", "struct", "super", "trait", "true", "try",
    "type", "typeof", "unsafe", "unsized", "use", "virtual", "where",
    "while", "yield",
})

# Keywords that cannot be written as raw identifiers
_NON_RAW_KEYWORDS = frozenset({"crate", "self", "super"})

_RAW_IDENT = re.compile(r"^r#([a-z_][a-z0-9_]*)$")

_METHOD_VERBS: dict[str, str] = {
    "get": "list",
    "post": "create",
    "put": "update",
    "delete": "delete",
    "patch": "patch",
}


def _camel_to_snake(name: str) -> str:
    """Convert camelCase or PascalCase to snake_case, splitting digit runs."""
    s1 = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1_\2", name)
    s2 = re.sub(r"([a-z\d])([A-Z])", r"\1_\2", s1)
    return re.sub(r"([A-Za-z])(\d)", r"\1_\2", s2).lower()


def to_param_name(name: str) -> str:
    """Normalize a raw parameter or property name to a Rust identifier.

    Idempotent: feeding the result back in returns it unchanged.
    """
    raw = _RAW_IDENT.match(name)
    if raw and raw.group(1) in RUST_KEYWORDS:
        return name

    name = re.sub(r"[^A-Za-z0-9_]", "", name)
    name = _camel_to_snake(name)
    # generated locals use a "__" prefix; parameters never do
    name = re.sub(r"^_+", "_", name)
    if not name.strip("_"):
        return "param"
    if name[0].isdigit():
        name = "_" + name

    if name in _NON_RAW_KEYWORDS:
        return name + "_"
    if name in RUST_KEYWORDS:
        return "r#" + name
    return name


def to_type_name(ref: str) -> str:
    """PascalCase type name for the target of a schema reference."""
    target = ref.rsplit("/", 1)[-1]
    parts = [p for p in re.split(r"[^A-Za-z0-9]+", target) if p]
    name = "".join(p[:1].upper() + p[1:] for p in parts)
    if not name:
        return "Model"
    if name[0].isdigit():
        name = "_" + name
    return name


def to_file_name(filename: str) -> str:
    """Lower snake-case form of a generated file name, extension kept."""
    stem, dot, ext = filename.rpartition(".")
    if not dot:
        stem, ext = filename, ""
    snake = _camel_to_snake(stem).strip("_") or stem.lower()
    return f"{snake}.{ext.lower()}" if dot else snake


def build_method_name(method: str, path: str) -> str:
    """Build a client method name from HTTP method and path.

    Used for operations without an operationId.
    """
    method_lower = method.lower()
    segments = [s for s in path.split("/") if s]
    ends_with_param = bool(segments) and segments[-1].startswith("{")

    if method_lower == "get":
        verb = "get" if ends_with_param else "list"
    else:
        verb = _METHOD_VERBS.get(method_lower, method_lower)

    words: list[str] = []
    for segment in segments:
        if segment.startswith("{") and segment.endswith("}"):
            words.append("by_" + to_param_name(segment[1:-1]).removeprefix("r#"))
        else:
            cleaned = to_param_name(segment).removeprefix("r#").strip("_")
            if cleaned and cleaned != "param":
                words.append(cleaned)

    if not words:
        return f"{verb}_root"
    return to_param_name("_".join([verb, *words]))
