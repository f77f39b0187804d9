from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from group_decision.decisions.models import HistoryEntry
from group_decision.decisions.weights import compute_weights, selection_stats

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)
UNIVERSE = ["a", "b", "c"]


def _picked(rid: str, days_ago: float) -> HistoryEntry:
    return HistoryEntry(restaurant_id=rid, selected_at=NOW - timedelta(days=days_ago))


# ── Decay ────────────────────────────────────────────────────────────────


def test_no_history_keeps_baseline():
    assert compute_weights(UNIVERSE, [], NOW) == {"a": 1.0, "b": 1.0, "c": 1.0}


def test_each_recent_selection_applies_one_decay_step():
    history = [_picked("a", 1), _picked("b", 2), _picked("b", 10)]
    weights = compute_weights(UNIVERSE, history, NOW, decay_per_recent_selection=0.5, floor=0.1)
    assert weights["a"] == pytest.approx(0.5)
    assert weights["b"] == pytest.approx(0.25)
    assert weights["c"] == 1.0


def test_weight_is_clamped_to_floor():
    history = [_picked("a", d) for d in range(1, 6)]
    weights = compute_weights(UNIVERSE, history, NOW, decay_per_recent_selection=0.5, floor=0.1)
    assert weights["a"] == pytest.approx(0.1)


@pytest.mark.parametrize("floor", [0.01, 0.1, 0.25])
def test_floor_invariant_for_any_history_depth(floor):
    for depth in range(0, 60):
        history = [_picked("a", (i % 29) + 0.5) for i in range(depth)]
        weights = compute_weights(
            UNIVERSE, history, NOW, decay_per_recent_selection=0.9, floor=floor,
        )
        assert all(w >= floor for w in weights.values())
        assert all(w > 0 for w in weights.values())


# ── Rolling window ───────────────────────────────────────────────────────


class TestRollingWindow:
    def test_out_of_window_history_is_ignored(self):
        history = [_picked("a", 31), _picked("a", 45), _picked("a", 400)]
        weights = compute_weights(UNIVERSE, history, NOW, window_days=30)
        assert weights["a"] == 1.0

    def test_window_start_is_inclusive(self):
        history = [_picked("a", 30)]
        weights = compute_weights(UNIVERSE, history, NOW, window_days=30)
        assert weights["a"] == pytest.approx(0.5)

    def test_just_outside_window(self):
        history = [HistoryEntry(
            restaurant_id="a",
            selected_at=NOW - timedelta(days=30, seconds=1),
        )]
        assert compute_weights(UNIVERSE, history, NOW, window_days=30)["a"] == 1.0

    def test_future_entries_are_ignored(self):
        history = [_picked("a", -2)]
        assert compute_weights(UNIVERSE, history, NOW)["a"] == 1.0

    def test_custom_window(self):
        history = [_picked("a", 5)]
        assert compute_weights(UNIVERSE, history, NOW, window_days=3)["a"] == 1.0
        assert compute_weights(UNIVERSE, history, NOW, window_days=7)["a"] == pytest.approx(0.5)

    def test_naive_timestamps_treated_as_utc(self):
        naive = HistoryEntry(restaurant_id="a", selected_at=datetime(2024, 5, 30, 12, 0))
        weights = compute_weights(UNIVERSE, [naive], NOW)
        assert weights["a"] == pytest.approx(0.5)


def test_history_for_unknown_restaurants_is_ignored():
    weights = compute_weights(UNIVERSE, [_picked("zz", 1)], NOW)
    assert weights == {"a": 1.0, "b": 1.0, "c": 1.0}


@pytest.mark.parametrize(
    "kwargs",
    [
        {"window_days": 0},
        {"decay_per_recent_selection": 1.0},
        {"decay_per_recent_selection": -0.1},
        {"floor": 0.0},
        {"floor": 1.5},
    ],
)
def test_invalid_parameters_rejected(kwargs):
    with pytest.raises(ValueError):
        compute_weights(UNIVERSE, [], NOW, **kwargs)


# ── Selection stats ──────────────────────────────────────────────────────


class TestSelectionStats:
    def test_stats_per_restaurant(self):
        history = [_picked("a", 5), _picked("a", 40), _picked("c", 50)]
        stats = {s.restaurant_id: s for s in selection_stats(UNIVERSE, history, NOW)}

        assert stats["a"].current_weight == pytest.approx(0.5)
        assert stats["a"].selection_count == 2
        assert stats["a"].recent_selections == 1
        assert stats["a"].last_selected == NOW - timedelta(days=5)
        assert stats["a"].days_until_full_weight == 25

        assert stats["b"].current_weight == 1.0
        assert stats["b"].selection_count == 0
        assert stats["b"].last_selected is None
        assert stats["b"].days_until_full_weight == 0

        assert stats["c"].current_weight == 1.0
        assert stats["c"].selection_count == 1
        assert stats["c"].recent_selections == 0
        assert stats["c"].days_until_full_weight == 0

    def test_sorted_by_weight_then_id(self):
        history = [_picked("a", 1), _picked("b", 1), _picked("b", 2)]
        order = [s.restaurant_id for s in selection_stats(UNIVERSE, history, NOW)]
        assert order == ["c", "a", "b"]

    def test_empty_history(self):
        stats = selection_stats(UNIVERSE, [], NOW)
        assert [s.current_weight for s in stats] == [1.0, 1.0, 1.0]
        assert all(s.selection_count == 0 for s in stats)
