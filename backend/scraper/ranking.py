"""
Search ranking over a catalog snapshot.

Entries sharing at least one whole word with the query come first; within
each partition entries are ordered by the smallest Levenshtein distance
between the raw query and any of their titles.
"""
from __future__ import annotations

from typing import Iterable

from rapidfuzz.distance import Levenshtein

from .models import CatalogEntry

DEFAULT_SEARCH_LIMIT = 20


def tokenize(text: str) -> frozenset[str]:
    """Lower-case ``text`` and split it on whitespace into a word set."""

    return frozenset(text.lower().split())


def has_exact_word_match(query: str, titles: Iterable[str]) -> bool:
    query_words = tokenize(query)
    if not query_words:
        return False
    return any(query_words & tokenize(title) for title in titles)


def title_distance(query: str, titles: Iterable[str]) -> int:
    """Smallest edit distance between ``query`` and any candidate title."""

    distances = [Levenshtein.distance(query, title) for title in titles]
    return min(distances) if distances else len(query)


def rank_key(query: str, entry: CatalogEntry) -> tuple[bool, int]:
    titles = entry.titles
    return not has_exact_word_match(query, titles), title_distance(query, titles)


def rank(
    query: str,
    snapshot: Iterable[CatalogEntry],
    limit: int = DEFAULT_SEARCH_LIMIT,
) -> list[CatalogEntry]:
    """Order the whole snapshot for ``query`` and keep the first ``limit`` entries."""

    if limit <= 0:
        return []
    ordered = sorted(snapshot, key=lambda entry: rank_key(query, entry))
    return ordered[:limit]
