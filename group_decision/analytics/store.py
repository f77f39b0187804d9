from __future__ import annotations

import time
from typing import Any

from ..decisions.models import DecisionResult

_events: list[dict[str, Any]] = []


def record_decision(collection_id: str, result: DecisionResult) -> None:
    _events.append({
        "type": "decision",
        "timestamp": time.time(),
        "collection_id": collection_id,
        "method": result.method,
        "restaurant_id": result.restaurant_id,
        "tie_count": result.tie_count,
        "vote_count": result.vote_count,
    })


def get_events() -> list[dict[str, Any]]:
    return _events


def clear_events() -> None:
    _events.clear()
