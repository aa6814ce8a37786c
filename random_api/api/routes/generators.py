from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from fastapi.responses import PlainTextResponse

from random_api.core.config import settings
from random_api.services import generators
from random_api.services.dictionary_store import DictionaryStore, get_dictionary_store

router = APIRouter(tags=["Random"], default_response_class=PlainTextResponse)


@router.get("/int", response_class=PlainTextResponse)
def random_int(
    min_value: Annotated[int, Query(alias="min", description="Inclusive lower bound")] = 0,
    max_value: Annotated[int, Query(alias="max", description="Exclusive upper bound")] = 100,
) -> str:
    """Random integer in ``[min, max)``; 400 when ``min >= max``."""
    return str(generators.random_int(min_value, max_value))


@router.get("/float", response_class=PlainTextResponse)
def random_float(
    min_value: Annotated[float, Query(alias="min", description="Inclusive lower bound")] = 0.0,
    max_value: Annotated[float, Query(alias="max", description="Exclusive upper bound")] = 1.0,
) -> str:
    """Random float in ``[min, max)``; 400 when ``min >= max``."""
    return str(generators.random_float(min_value, max_value))


@router.get("/word", response_class=PlainTextResponse)
def random_word(
    store: Annotated[DictionaryStore, Depends(get_dictionary_store)],
    category: Annotated[str, Query(description="Dictionary to draw from")] = generators.DEFAULT_CATEGORY,
    count: Annotated[int, Query(description="Number of words")] = 1,
    separator: Annotated[str, Query(description="Placed between words")] = " ",
) -> str:
    """One or more random words from a dictionary, joined by ``separator``.

    Unknown categories are rejected with the list of valid ones.
    """
    return generators.random_words(
        store,
        category,
        count,
        separator,
        max_count=settings.app.max_word_count,
    )


@router.get("/dice", response_class=PlainTextResponse)
def random_dice(
    notation: Annotated[str, Query(alias="input", description="Dice notation, e.g. 3d6kh2")] = "1d6",
    output: Annotated[str, Query(description="'sum' or 'full'")] = "sum",
) -> str:
    """Roll dice notation and return the total, or the full breakdown."""
    return generators.roll_dice(
        notation,
        output,
        max_length=settings.app.max_dice_input_length,
    )
