"""OpenAPI customization.

Adds tag descriptions and documents the plain-text error and throttling
responses every /v1 operation can return, which FastAPI cannot infer from
the route signatures.
"""

from __future__ import annotations

from typing import Any, Dict

from fastapi import FastAPI

TAGS_METADATA = [
    {
        "name": "Random",
        "description": "Random integers, floats, dictionary words and dice rolls.",
    },
    {
        "name": "Identifiers",
        "description": "ULID, NanoID and UUID (v4/v7) generation.",
    },
    {
        "name": "Health",
        "description": "Liveness check.",
    },
]

_PLAIN_TEXT = {"text/plain": {"schema": {"type": "string"}}}

_V1_RESPONSES = {
    "400": {"description": "Invalid query parameters", "content": _PLAIN_TEXT},
    "429": {"description": "Too many requests", "content": _PLAIN_TEXT},
}


def apply_openapi_customizations(app: FastAPI) -> None:
    """Patch FastAPI's OpenAPI generation with tags and plain-text responses."""

    original_openapi = app.openapi

    def custom_openapi() -> Dict[str, Any]:
        if app.openapi_schema:
            return app.openapi_schema

        schema = original_openapi()

        tags = schema.setdefault("tags", [])
        existing_tag_names = {t.get("name") for t in tags}
        for tag in TAGS_METADATA:
            if tag["name"] not in existing_tag_names:
                tags.append(tag)

        for path, methods in schema.get("paths", {}).items():
            if not path.startswith("/v1/"):
                continue
            for method_obj in methods.values():
                if not isinstance(method_obj, dict):
                    continue
                responses = method_obj.setdefault("responses", {})
                # Query coercion failures are answered as 400 plain text, not 422
                responses.pop("422", None)
                for status_code, response in _V1_RESPONSES.items():
                    responses.setdefault(status_code, response)

        app.openapi_schema = schema
        return schema

    app.openapi = custom_openapi  # type: ignore[assignment]
