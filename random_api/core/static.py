"""Bundled front-end served at the application root."""

from __future__ import annotations

from pathlib import Path

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

STATIC_DIR = Path(__file__).resolve().parents[1] / "static"


class CachedStaticFiles(StaticFiles):
    """StaticFiles that marks every successful response as briefly cacheable."""

    def __init__(self, *, max_age: int, **kwargs) -> None:
        super().__init__(**kwargs)
        self.max_age = max_age

    async def get_response(self, path, scope):  # type: ignore[override]
        response = await super().get_response(path, scope)
        if response.status_code < 400:
            response.headers.setdefault("Cache-Control", f"public, max-age={self.max_age}")
        return response


def mount_static_site(app: FastAPI, *, max_age: int, directory: Path = STATIC_DIR) -> None:
    """Mount the front-end at ``/``. Must run after API routers are included."""
    app.mount(
        "/",
        CachedStaticFiles(max_age=max_age, directory=directory, html=True),
        name="static",
    )
