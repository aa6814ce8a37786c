from __future__ import annotations

from fastapi import APIRouter

from random_api import __version__
from random_api.services.dictionary_store import get_dictionary_store

router = APIRouter(tags=["Health"])


@router.get("/health")
def health_check() -> dict:
    """Liveness check; also confirms the word lists are loaded."""

    store = get_dictionary_store()
    return {
        "status": "ok",
        "version": __version__,
        "dictionaries": len(store.categories),
    }
