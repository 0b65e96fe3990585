"""
Text helpers shared by the retrieval pipeline and the API layer.

All functions are pure (no I/O, no network).
"""

from __future__ import annotations

import re
from typing import Iterable

# Runs of anything that is not a letter or digit (underscore counts as a separator)
_TERM_SPLIT = re.compile(r"[\W_]+")
_WHITESPACE = re.compile(r"\s+")


def significant_terms(
    query: str,
    stopwords: Iterable[str],
    min_length: int = 3,
) -> list[str]:
    """
    Split a query into the terms used for relevance matching.

    Lowercases, splits on non-alphanumeric runs, then drops tokens shorter
    than ``min_length`` and stopwords. Order and duplicates are preserved.
    An empty result means "no filtering criteria", not "match nothing".

        >>> significant_terms("Što je pravilnik?", {"što", "je"})
        ['pravilnik']
    """
    stop = {w.lower() for w in stopwords}
    return [
        token
        for token in _TERM_SPLIT.split((query or "").lower())
        if len(token) >= min_length and token not in stop
    ]


def normalize_whitespace(text: str | None) -> str:
    """Collapse whitespace runs to single spaces and trim."""
    return _WHITESPACE.sub(" ", text or "").strip()


def preview(text: str | None, limit: int = 200) -> str:
    """First ``limit`` characters, with an ellipsis when cut."""
    text = text or ""
    if len(text) <= limit:
        return text
    return text[:limit] + "..."
