"""
Rolling-window weights for history-weighted random selection.

Every restaurant starts at a weight of 1.0.  Each time it was selected
within the last ``window_days`` its weight is multiplied by
``1 - decay_per_recent_selection``, and the result is clamped to ``floor``
so a restaurant is never removed from contention.  Selections older than
the window are ignored entirely, so weights return to 1.0 once a
restaurant's recent selections age out.
"""
from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Sequence
from datetime import datetime, timedelta

import numpy as np
import pandas as pd

from .models import HistoryEntry, RestaurantWeight, as_utc

BASELINE_WEIGHT = 1.0


def validate_weight_params(window_days: int, decay_per_recent_selection: float, floor: float) -> None:
    if window_days <= 0:
        raise ValueError("window_days must be positive")
    if not 0.0 <= decay_per_recent_selection < 1.0:
        raise ValueError("decay_per_recent_selection must be in [0, 1)")
    if not 0.0 < floor <= BASELINE_WEIGHT:
        raise ValueError("floor must be in (0, 1]")


def _in_window(entry: HistoryEntry, start: datetime, now: datetime) -> bool:
    return start <= entry.selected_at <= now


def recent_selection_counts(
    history: Iterable[HistoryEntry],
    now: datetime,
    window_days: int = 30,
) -> Counter[str]:
    """Count selections per restaurant inside ``[now - window_days, now]``."""
    now = as_utc(now)
    start = now - timedelta(days=window_days)
    return Counter(e.restaurant_id for e in history if _in_window(e, start, now))


def compute_weights(
    universe: Sequence[str],
    history: Iterable[HistoryEntry],
    now: datetime,
    window_days: int = 30,
    decay_per_recent_selection: float = 0.5,
    floor: float = 0.1,
) -> dict[str, float]:
    """Return the raw (unnormalised) sampling weight of every restaurant in *universe*."""
    validate_weight_params(window_days, decay_per_recent_selection, floor)

    ids = list(dict.fromkeys(universe))
    if not ids:
        return {}

    counts = recent_selection_counts(history, now, window_days)
    exponents = np.array([counts.get(rid, 0) for rid in ids], dtype=float)
    weights = BASELINE_WEIGHT * np.power(1.0 - decay_per_recent_selection, exponents)
    weights = np.maximum(weights, floor)

    return {rid: float(w) for rid, w in zip(ids, weights)}


def selection_stats(
    universe: Sequence[str],
    history: Iterable[HistoryEntry],
    now: datetime,
    window_days: int = 30,
    decay_per_recent_selection: float = 0.5,
    floor: float = 0.1,
) -> list[RestaurantWeight]:
    """Per-restaurant weight, selection counts and time until full weight.

    Sorted by current weight (highest first), then by restaurant id.
    """
    now = as_utc(now)
    history = list(history)
    weights = compute_weights(
        universe, history, now, window_days, decay_per_recent_selection, floor,
    )
    ids = list(weights)
    start = now - timedelta(days=window_days)

    df = pd.DataFrame(
        [
            {
                "restaurant_id": e.restaurant_id,
                "selected_at": e.selected_at,
                "recent": _in_window(e, start, now),
            }
            for e in history
            if e.restaurant_id in weights
        ],
        columns=["restaurant_id", "selected_at", "recent"],
    )

    if df.empty:
        grouped = pd.DataFrame(columns=["selection_count", "recent_selections", "last_selected"])
        newest_recent = pd.Series(dtype=object)
    else:
        df["recent"] = df["recent"].astype(bool)
        grouped = df.groupby("restaurant_id").agg(
            selection_count=("selected_at", "size"),
            recent_selections=("recent", "sum"),
            last_selected=("selected_at", "max"),
        )
        newest_recent = df.loc[df["recent"]].groupby("restaurant_id")["selected_at"].max()

    stats: list[RestaurantWeight] = []
    for rid in ids:
        if rid in grouped.index:
            row = grouped.loc[rid]
            selection_count = int(row["selection_count"])
            recent = int(row["recent_selections"])
            last_selected = pd.Timestamp(row["last_selected"]).to_pydatetime()
        else:
            selection_count, recent, last_selected = 0, 0, None

        days_until_full = 0
        if rid in newest_recent.index:
            newest = pd.Timestamp(newest_recent.loc[rid]).to_pydatetime()
            days_since = (now - newest).days
            days_until_full = max(0, window_days - days_since)

        stats.append(RestaurantWeight(
            restaurant_id=rid,
            current_weight=weights[rid],
            selection_count=selection_count,
            recent_selections=recent,
            last_selected=last_selected,
            days_until_full_weight=days_until_full,
        ))

    stats.sort(key=lambda s: (-s.current_weight, s.restaurant_id))
    return stats
