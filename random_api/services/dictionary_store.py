"""Word lists used by the /v1/word endpoint.

Each category is a text file with one entry per line under
``random_api/dictionaries``. Files are read once; the resulting tuples are
shared read-only across requests.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Mapping

logger = logging.getLogger(__name__)

DICTIONARY_DIR = Path(__file__).resolve().parents[1] / "dictionaries"

# Each category is backed by <name>.txt
CATEGORIES: tuple[str, ...] = (
    "animals",
    "words",
    "cities",
    "countries",
    "fruits",
    "vegetables",
    "lorem-ipsum",
    "nouns",
)


class DictionaryStore:
    """Immutable mapping of category name to its words.

    Attributes:
        categories: Category names in their canonical order.
    """

    def __init__(self, dictionaries: Mapping[str, tuple[str, ...]]) -> None:
        empty = [name for name, words in dictionaries.items() if not words]
        if empty:
            raise ValueError(f"dictionaries without words: {', '.join(empty)}")
        self._dictionaries = MappingProxyType(dict(dictionaries))
        self.categories: tuple[str, ...] = tuple(self._dictionaries)

    @classmethod
    def from_directory(
        cls, directory: Path = DICTIONARY_DIR, categories: tuple[str, ...] = CATEGORIES
    ) -> "DictionaryStore":
        """Load ``<directory>/<category>.txt`` for every category.

        Raises:
            FileNotFoundError: If a category file is missing.
            ValueError: If a category file contains no words.
        """
        loaded: dict[str, tuple[str, ...]] = {}
        for category in categories:
            path = directory / f"{category}.txt"
            lines = path.read_text(encoding="utf-8").splitlines()
            loaded[category] = tuple(line.strip() for line in lines if line.strip())
            logger.debug(
                "dictionary.loaded",
                extra={"category": category, "word_count": len(loaded[category])},
            )
        return cls(loaded)

    def __contains__(self, category: object) -> bool:
        return category in self._dictionaries

    def get(self, category: str) -> tuple[str, ...] | None:
        """Return the words for ``category``, or None when it is unknown."""
        return self._dictionaries.get(category)

    def __getitem__(self, category: str) -> tuple[str, ...]:
        return self._dictionaries[category]


@lru_cache(maxsize=1)
def get_dictionary_store() -> DictionaryStore:
    """Process-wide store, loaded on first use."""
    store = DictionaryStore.from_directory()
    logger.info("dictionary.store_ready", extra={"categories": list(store.categories)})
    return store
