"""Small Rust snippet builders shared by the emitters."""

from __future__ import annotations

from .model import GenerationMode

INDENT = "    "


def rust_str(value: str) -> str:
    """Rust string literal for ``value``."""
    escaped = (
        value.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
    )
    return f'"{escaped}"'


def format_literal(value: str) -> str:
    """Escape literal text for use inside a format! string."""
    return rust_str(value)[1:-1].replace("{", "{{").replace("}", "}}")


def indent(lines: list[str], depth: int = 1) -> list[str]:
    return [INDENT * depth + line if line else line for line in lines]


def presence_guard(binding: str, target: str, body: list[str], mode: GenerationMode) -> list[str]:
    """``if let Some(binding) = &target { body }`` in the mode's idiom."""
    return [
        f"if let {mode.some}({binding}) = &{target} {{",
        *indent(body),
        "}",
    ]


def value_or_empty(binding: str, target: str, expr: str, mode: GenerationMode) -> str:
    """Block expression yielding ``expr`` when ``target`` is present, else an empty string."""
    return (
        f"{{ if let {mode.some}({binding}) = &{target} {{ {expr} }}"
        f" else {{ {mode.empty} }} }}"
    )


def join_elements(target: str, separator: str) -> str:
    """Stringify every element of ``target`` and join with ``separator``."""
    return (
        f"{target}.iter().map(|el| el.to_string())"
        f".collect::<Vec<String>>().join({rust_str(separator)})"
    )
