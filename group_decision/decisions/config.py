from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from .weights import validate_weight_params

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")

_SEED = os.getenv("DECISION_RANDOM_SEED", "")


@dataclass(frozen=True)
class DecisionConfig:
    window_days: int = int(os.getenv("DECISION_WINDOW_DAYS", "30"))
    decay_per_recent_selection: float = float(os.getenv("DECISION_DECAY_PER_SELECTION", "0.5"))
    floor: float = float(os.getenv("DECISION_WEIGHT_FLOOR", "0.1"))
    random_seed: int | None = int(_SEED) if _SEED.strip() else None

    def __post_init__(self) -> None:
        validate_weight_params(self.window_days, self.decay_per_recent_selection, self.floor)


DEFAULT_DECISION_CONFIG = DecisionConfig()
