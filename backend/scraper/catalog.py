"""
In-memory catalog snapshot shared between refresh and search.
"""
from __future__ import annotations

from threading import Lock
from typing import Iterable, Iterator, Tuple

from .models import CatalogEntry


class CatalogSnapshot:
    """Immutable, ordered view of the catalog at one point in time."""

    __slots__ = ("_entries",)

    def __init__(self, entries: Iterable[CatalogEntry] = ()) -> None:
        self._entries: Tuple[CatalogEntry, ...] = tuple(entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[CatalogEntry]:
        return iter(self._entries)


class CatalogStore:
    """Owns the current snapshot and swaps it atomically on publish.

    Readers call ``current()`` without locking and keep whichever snapshot
    they received; the writer lock only serialises concurrent refreshes.
    """

    def __init__(self) -> None:
        self._snapshot = CatalogSnapshot()
        self._lock = Lock()

    def current(self) -> CatalogSnapshot:
        return self._snapshot

    def publish(self, entries: Iterable[CatalogEntry]) -> CatalogSnapshot:
        """Install a new snapshot built from ``entries`` and return it."""

        snapshot = CatalogSnapshot(entries)
        with self._lock:
            self._snapshot = snapshot
        return snapshot
