"""Merge per-page episode batches into one ordered episode list."""
from __future__ import annotations

from typing import Iterable, Sequence

from .models import Episode


def parse_number(value: object) -> int:
    """Best-effort integer conversion used for season and episode identifiers.

    ``None``, blank strings and anything ``int()`` rejects map to ``0`` so a
    single malformed attribute never discards the rest of a season.
    """

    if value is None:
        return 0
    text = str(value).strip()
    if not text:
        return 0
    try:
        return int(text)
    except ValueError:
        return 0


def episode_sort_key(episode: Episode) -> tuple[int, int]:
    return episode.season_number, episode.episode_number


def aggregate(
    primary: Sequence[Episode],
    additional_batches: Iterable[Sequence[Episode]] = (),
) -> list[Episode]:
    """Concatenate the primary batch and additional batches, then sort.

    Batches are concatenated in the order given (primary page first, then
    season pages in discovery order). ``sorted`` is stable, so episodes that
    share a season/episode slot keep their encounter order and duplicates
    are preserved.
    """

    merged: list[Episode] = list(primary)
    for batch in additional_batches:
        merged.extend(batch)
    return sorted(merged, key=episode_sort_key)
