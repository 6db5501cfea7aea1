from __future__ import annotations

from dataclasses import dataclass

import math

from chartaxis.errors import InvalidRangeError


@dataclass(frozen=True)
class Range:
    """Closed numeric interval ``[min, max]``.

    Transformations never mutate a range; they build a new one.
    """

    min: float
    max: float

    def __post_init__(self) -> None:
        lo = float(self.min)
        hi = float(self.max)
        if math.isnan(lo) or math.isnan(hi):
            raise InvalidRangeError("range bounds must not be NaN")
        if lo > hi:
            raise InvalidRangeError(f"range min must be <= max (got {lo} > {hi})")
        object.__setattr__(self, "min", lo)
        object.__setattr__(self, "max", hi)

    @property
    def is_point(self) -> bool:
        # Exact comparison: a tiny but non-zero span is still an interval.
        return self.min == self.max

    @property
    def span(self) -> float:
        return self.max - self.min


def with_finite_bounds(value_range: Range) -> Range:
    """Replace infinite bounds so the result is a usable finite interval.

    An open end falls back to 0 (min) or 1 (max), moved further out when the
    other bound is already past it.
    """
    lo, hi = value_range.min, value_range.max
    lo_ok, hi_ok = math.isfinite(lo), math.isfinite(hi)
    if lo_ok and hi_ok:
        return value_range
    if not lo_ok and not hi_ok:
        return Range(0.0, 1.0)
    if not lo_ok:
        return Range(min(0.0, hi - 1.0), hi)
    return Range(lo, max(1.0, lo + 1.0))
