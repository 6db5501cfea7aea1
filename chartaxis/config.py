from __future__ import annotations

from dataclasses import dataclass

import math


DEFAULT_MAX_TICKS = 20
DEFAULT_INCREASE_RATIO = 8.0
DEFAULT_DECREASE_RATIO = 8.0
DEFAULT_MAX_ITERATIONS = 12


@dataclass(frozen=True)
class ArrangerConfig:
    max_ticks: int = DEFAULT_MAX_TICKS
    increase_ratio: float = DEFAULT_INCREASE_RATIO
    decrease_ratio: float = DEFAULT_DECREASE_RATIO
    max_iterations: int = DEFAULT_MAX_ITERATIONS
    show_minor_ticks: bool = True

    def __post_init__(self) -> None:
        if self.max_ticks < 2:
            raise ValueError("max_ticks must be >= 2")
        for name in ("increase_ratio", "decrease_ratio"):
            value = getattr(self, name)
            if not math.isfinite(value) or value <= 0:
                raise ValueError(f"{name} must be finite and > 0")
        if self.max_iterations < 0:
            raise ValueError("max_iterations must be >= 0")
