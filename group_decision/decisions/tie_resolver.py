"""
Winner selection shared by both decision methods.

``MAX_SCORE`` picks the highest-valued restaurant and breaks ties uniformly
at random.  ``WEIGHTED_SAMPLE`` treats the values as relative weights and
draws one restaurant from the normalised distribution.

Candidates are always visited in sorted-id order so the same table and the
same seeded generator give the same winner, regardless of how the table was
built.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Mapping

import numpy as np

from .errors import EmptyUniverse


class ResolveMode(str, Enum):
    MAX_SCORE = "max-score"
    WEIGHTED_SAMPLE = "weighted-sample"


@dataclass(frozen=True)
class Resolution:
    winner: str
    tied_set: tuple[str, ...]

    @property
    def tie_count(self) -> int:
        """Breadth of the tie (2-way, 3-way, ...), or 0 when there is none."""
        return len(self.tied_set) if len(self.tied_set) > 1 else 0


def _resolve_max_score(table: Mapping[str, float], rng: np.random.Generator) -> Resolution:
    best = max(table.values())
    tied = tuple(rid for rid in sorted(table) if table[rid] == best)
    if len(tied) == 1:
        return Resolution(winner=tied[0], tied_set=tied)
    pick = int(rng.integers(len(tied)))
    return Resolution(winner=tied[pick], tied_set=tied)


def _resolve_weighted(table: Mapping[str, float], rng: np.random.Generator) -> Resolution:
    ids = sorted(table)
    weights = np.array([table[rid] for rid in ids], dtype=float)
    if (weights < 0).any():
        raise ValueError("Weights must be non-negative")
    total = weights.sum()
    if total <= 0:
        raise ValueError("Total weight must be positive")

    cdf = np.cumsum(weights / total)
    draw = rng.random()
    idx = int(np.searchsorted(cdf, draw, side="right"))
    # Guard against cdf[-1] rounding to slightly below 1.0
    idx = min(idx, len(ids) - 1)
    return Resolution(winner=ids[idx], tied_set=(ids[idx],))


def resolve(
    table: Mapping[str, float],
    mode: ResolveMode,
    rng: np.random.Generator,
) -> Resolution:
    """Pick a winner from *table* using *mode* and the injected generator."""
    if not table:
        raise EmptyUniverse()

    if ResolveMode(mode) is ResolveMode.MAX_SCORE:
        return _resolve_max_score(table, rng)
    return _resolve_weighted(table, rng)
