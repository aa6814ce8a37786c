from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Query
from fastapi.responses import PlainTextResponse

from random_api.services import identifiers

router = APIRouter(tags=["Identifiers"], default_response_class=PlainTextResponse)


@router.get("/ulid", response_class=PlainTextResponse)
def ulid() -> str:
    """New 26-character ULID."""
    return identifiers.new_ulid()


@router.get("/nanoid", response_class=PlainTextResponse)
def nanoid(
    size: Annotated[int, Query(description="Length, from 1 to 200")] = identifiers.NANOID_DEFAULT_SIZE,
) -> str:
    """New NanoID of ``size`` characters."""
    return identifiers.new_nanoid(size)


@router.get("/uuid", response_class=PlainTextResponse)
def uuid(
    version: Annotated[str, Query(description="'4' (random) or '7' (time-ordered)")] = "4",
) -> str:
    """New UUID of the requested version."""
    return identifiers.new_uuid(version)
