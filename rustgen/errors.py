"""Errors raised while emitting client code."""

from __future__ import annotations


class GeneratorError(Exception):
    """Base class for generator failures."""


class TemplateResolutionError(GeneratorError):
    """A path template placeholder has no matching path parameter."""

    def __init__(self, placeholder: str, known: list[str]) -> None:
        self.placeholder = placeholder
        self.known = list(known)
        known_str = ", ".join(f"'{name}'" for name in self.known) or "none"
        super().__init__(
            f"cannot find PATH parameter named '{placeholder}'"
            f" in available path parameters: {known_str}"
        )
