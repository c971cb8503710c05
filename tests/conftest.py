"""Shared fixtures: a small petstore document and parameter builders."""

from __future__ import annotations

import copy
from typing import Any

import pytest

from rustgen.model import Location, ParameterSpec, Primitive

_PETSTORE: dict[str, Any] = {
    "openapi": "3.0.3",
    "info": {"title": "Petstore", "version": "1.2.0"},
    "servers": [{"url": "https://api.example.com/v1/"}],
    "components": {
        "parameters": {
            "TraceId": {
                "name": "X-Trace-Id",
                "in": "header",
                "schema": {"type": "string"},
            },
        },
        "schemas": {
            "Pet": {
                "type": "object",
                "properties": {
                    "id": {"type": "integer", "format": "int64"},
                    "name": {"type": "string"},
                    "parent": {"$ref": "#/components/schemas/Pet"},
                },
                "required": ["id", "name"],
            },
        },
    },
    "paths": {
        "/pets": {
            "get": {
                "operationId": "listPets",
                "summary": "List all pets",
                "tags": ["pets"],
                "parameters": [
                    {"name": "limit", "in": "query", "required": True,
                     "schema": {"type": "integer", "format": "int32"}},
                    {"name": "tags", "in": "query",
                     "schema": {"type": "array", "items": {"type": "string"}}},
                    {"$ref": "#/components/parameters/TraceId"},
                ],
            },
            "post": {
                "operationId": "createPet",
                "tags": ["pets"],
                "parameters": [
                    {"name": "session", "in": "cookie", "required": True,
                     "schema": {"type": "string"}},
                    {"name": "theme", "in": "cookie", "schema": {"type": "string"}},
                ],
            },
        },
        "/pets/{petId}": {
            "parameters": [
                {"name": "petId", "in": "path", "required": True,
                 "schema": {"type": "integer", "format": "int64"}},
            ],
            "get": {
                "operationId": "showPetById",
                "tags": ["pets"],
            },
            "delete": {
                "tags": ["pets"],
            },
        },
        "/health": {
            "get": {},
        },
    },
}


@pytest.fixture
def petstore() -> dict[str, Any]:
    """A fresh copy of the petstore document for each test."""
    return copy.deepcopy(_PETSTORE)


def param(
    name: str,
    location: Location | str,
    required: bool = False,
    schema=None,
    has_content_media_type: bool = False,
) -> ParameterSpec:
    """Shorthand ParameterSpec constructor; schema defaults to a string."""
    return ParameterSpec(
        name=name,
        location=Location(location),
        required=required,
        schema=Primitive("string") if schema is None else schema,
        has_content_media_type=has_content_media_type,
    )
