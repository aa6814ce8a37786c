"""Unique identifier generators: ULID, NanoID and UUID v4/v7."""

from __future__ import annotations

import uuid

from nanoid import generate as generate_nanoid
from ulid import ULID
from uuid6 import uuid7

from random_api.core.errors import ValidationAppError

NANOID_DEFAULT_SIZE = 21
NANOID_MIN_SIZE = 1
NANOID_MAX_SIZE = 200

UUID_VERSIONS = ("4", "7")


def new_ulid() -> str:
    """Return a fresh 26-character, time-sortable ULID."""
    return str(ULID())


def new_nanoid(size: int = NANOID_DEFAULT_SIZE) -> str:
    """Return a URL-safe NanoID of ``size`` characters.

    Raises:
        ValidationAppError: If ``size`` is outside 1..200.
    """
    if size < NANOID_MIN_SIZE or size > NANOID_MAX_SIZE:
        raise ValidationAppError(
            code="invalid_size",
            message=f"Invalid size, must be between {NANOID_MIN_SIZE} and {NANOID_MAX_SIZE}",
            details={"parameter": "size", "value": size},
        )
    return generate_nanoid(size=size)


def new_uuid(version: str = "4") -> str:
    """Return a canonical UUID string of the given version ("4" or "7").

    Raises:
        ValidationAppError: For any other version.
    """
    if version == "4":
        return str(uuid.uuid4())
    if version == "7":
        return str(uuid7())

    raise ValidationAppError(
        code="invalid_uuid_version",
        message="Invalid UUID version, must be 4 or 7",
        details={"parameter": "version", "value": version, "allowed": list(UUID_VERSIONS)},
    )
