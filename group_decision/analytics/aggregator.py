from __future__ import annotations

from collections import Counter
from typing import Any


def compute_analytics(events: list[dict[str, Any]]) -> dict[str, Any]:
    decisions = [e for e in events if e["type"] == "decision"]
    total = len(decisions)

    # Method usage
    method_counter: Counter[str] = Counter(d["method"] for d in decisions)
    by_method = {m: method_counter.get(m, 0) for m in ("tiered", "random")}

    # Ties (tiered only)
    tiered = [d for d in decisions if d["method"] == "tiered"]
    ties = [d for d in tiered if d.get("tie_count", 0) > 1]
    tie_breadth: Counter[int] = Counter(d["tie_count"] for d in ties)

    # Turnout
    votes = [d.get("vote_count", 0) for d in tiered]
    avg_votes = round(sum(votes) / len(votes), 1) if votes else 0.0

    # Most chosen restaurants
    winner_counter: Counter[str] = Counter(d["restaurant_id"] for d in decisions)
    top_restaurants = [
        {"restaurant_id": rid, "count": c} for rid, c in winner_counter.most_common(10)
    ]

    return {
        "total_decisions": total,
        "by_method": by_method,
        "tie_rate": round(len(ties) / len(tiered) * 100, 1) if tiered else 0.0,
        "tie_breadth": {f"{k}-way": v for k, v in sorted(tie_breadth.items())},
        "avg_votes_per_tiered_decision": avg_votes,
        "top_restaurants": top_restaurants,
    }
