"""Partition an operation's parameters by transport location."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from .model import Location, ParameterSpec


def by_location(params: Iterable[ParameterSpec], location: Location | str) -> list[ParameterSpec]:
    """Return the parameters at ``location``, in input order."""
    location = Location(location)
    return [p for p in params if p.location is location]


def has_header_or_cookie(params: Sequence[ParameterSpec] | None) -> bool:
    """True if any parameter travels in a header or cookie."""
    if not params:
        return False
    return any(p.location in (Location.HEADER, Location.COOKIE) for p in params)
