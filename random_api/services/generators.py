"""Numeric, word and dice generators behind the /v1 endpoints.

Randomness comes from the module-level ``random`` generator, which is fine
for this service: values are not meant to be unpredictable to an attacker.
"""

from __future__ import annotations

import logging
import math
import random

from random_api.core.errors import ValidationAppError
from random_api.services import dice
from random_api.services.dictionary_store import DictionaryStore

logger = logging.getLogger(__name__)

DEFAULT_CATEGORY = "words"
DICE_OUTPUTS = ("sum", "full")


def random_int(min_value: int = 0, max_value: int = 100) -> int:
    """Return a uniformly random integer in ``[min_value, max_value)``.

    Negative ranges are shifted onto ``[0, max_value - min_value)`` before
    sampling and shifted back afterwards.

    Raises:
        ValidationAppError: If ``min_value >= max_value``.
    """
    if min_value >= max_value:
        raise ValidationAppError(
            code="invalid_range",
            message=f"min {min_value} should be less than max {max_value}",
            details={"min_value": min_value, "max_value": max_value},
        )

    offset = 0
    if min_value < 0:
        offset = min_value
        max_value -= offset
        min_value = 0

    return random.randrange(max_value - min_value) + min_value + offset


def random_float(min_value: float = 0.0, max_value: float = 1.0) -> float:
    """Return a uniformly random float in ``[min_value, max_value)``.

    Raises:
        ValidationAppError: If a bound is NaN/infinite or ``min_value >= max_value``.
    """
    if not (math.isfinite(min_value) and math.isfinite(max_value)):
        raise ValidationAppError(
            code="invalid_range",
            message="min and max must be finite numbers",
            details={"min_value": min_value, "max_value": max_value},
        )
    if min_value >= max_value:
        raise ValidationAppError(
            code="invalid_range",
            message=f"min {min_value:f} should be less than max {max_value:f}",
            details={"min_value": min_value, "max_value": max_value},
        )

    # Interpolating keeps each term finite even when max - min overflows
    weight = random.random()
    value = min_value * (1.0 - weight) + max_value * weight
    # Rounding can step just outside the range
    return value if min_value <= value < max_value else min_value


def random_words(
    store: DictionaryStore,
    category: str = DEFAULT_CATEGORY,
    count: int = 1,
    separator: str = " ",
    *,
    max_count: int | None = None,
) -> str:
    """Pick ``count`` words from ``category`` with replacement and join them.

    Args:
        store: Loaded dictionaries.
        category: Dictionary name, see ``store.categories``.
        count: Number of words to draw.
        separator: String placed between words.
        max_count: Upper bound for ``count``; unbounded when None.

    Raises:
        ValidationAppError: If the category is unknown or ``count`` is out of range.
    """
    words = store.get(category)
    if words is None:
        raise ValidationAppError(
            code="invalid_category",
            message="Invalid category, must be one of " + ", ".join(store.categories),
            details={"parameter": "category", "allowed": list(store.categories)},
        )

    if count < 1 or (max_count is not None and count > max_count):
        message = (
            f"Invalid count, must be between 1 and {max_count}"
            if max_count is not None
            else "Invalid count, must be at least 1"
        )
        raise ValidationAppError(
            code="invalid_count",
            message=message,
            details={"parameter": "count", "value": count},
        )

    return separator.join(random.choices(words, k=count))


def roll_dice(notation: str = "1d6", output: str = "sum", *, max_length: int = 100) -> str:
    """Roll ``notation`` and render the total or the full breakdown.

    Args:
        notation: Dice notation, see :mod:`random_api.services.dice`.
        output: "sum" for the total only, "full" for total plus individual dice.
        max_length: Longest notation accepted.

    Raises:
        ValidationAppError: On empty/oversized input, bad notation, or unknown output.
    """
    if not notation or len(notation) > max_length:
        raise ValidationAppError(
            code="invalid_dice_input",
            message="Invalid input",
            details={"parameter": "input"},
        )

    if output not in DICE_OUTPUTS:
        raise ValidationAppError(
            code="invalid_dice_output",
            message="invalid output, must be sum or full",
            details={"parameter": "output", "value": output, "allowed": list(DICE_OUTPUTS)},
        )

    try:
        result = dice.roll(notation)
    except dice.DiceError as exc:
        logger.info("dice.invalid_notation", extra={"reason": str(exc)})
        raise ValidationAppError(
            code="invalid_dice_notation",
            message=str(exc),
            details={"parameter": "input"},
        ) from exc

    if output == "sum":
        return str(result.total)
    return result.breakdown()
