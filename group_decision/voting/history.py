from __future__ import annotations

import logging

from ..decisions.models import HistoryEntry

logger = logging.getLogger(__name__)

_history: dict[str, list[HistoryEntry]] = {}


def record_outcome(collection_id: str, entry: HistoryEntry) -> None:
    _history.setdefault(collection_id, []).append(entry)


def get_history(collection_id: str) -> list[HistoryEntry]:
    return list(_history.get(collection_id, []))


def reset_history(collection_id: str, restaurant_id: str | None = None) -> int:
    """Delete history so weights return to full.

    Removes every entry for the collection, or only those for
    *restaurant_id* when given.  Returns the number of entries removed.
    """
    entries = _history.get(collection_id, [])
    if restaurant_id is None:
        kept: list[HistoryEntry] = []
    else:
        kept = [e for e in entries if e.restaurant_id != restaurant_id]
    removed = len(entries) - len(kept)
    _history[collection_id] = kept

    logger.info(
        "Weights reset for collection %s (restaurant=%s, removed=%d)",
        collection_id, restaurant_id, removed,
    )
    return removed


def clear_history() -> None:
    _history.clear()
