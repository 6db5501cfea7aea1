from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

import math

import numpy as np

from chartaxis.ranges import Range


DEFAULT_MINOR_TICKS_COUNT = 4
LINEAR_MIN_LEVEL = -3
LINEAR_MAX_LEVEL = 9
LINEAR_INITIAL_LEVEL = 3
_STEP_DIVISORS = (1.0, 2.0, 5.0)

LOG_MIN_LEVEL = -3
LOG_MAX_LEVEL = 2
_LOG_DECADE_STRIDES = {-3: 10, -2: 5, -1: 2}
_LOG_MANTISSAS = {0: (1,), 1: (1, 2, 5), 2: (1, 2, 3, 4, 5, 6, 7, 8, 9)}


class MinorTicksSource(Protocol):
    ticks_count: int

    def create_ticks(self, value_range: Range, major_ticks: np.ndarray) -> np.ndarray: ...


class TickGenerator(Protocol):
    """Pluggable major/minor tick strategy.

    A generator owns an opaque density level. Callers only step it up or down;
    whatever level a pass ends on is where the next pass starts.
    """

    def begin_pass(self, value_range: Range) -> None: ...

    def get_ticks(self, value_range: Range) -> np.ndarray: ...

    def get_minor_ticks(self, value_range: Range) -> np.ndarray: ...

    def increase_density(self) -> None: ...

    def decrease_density(self) -> None: ...


@dataclass
class MinorTicksProvider:
    ticks_count: int = DEFAULT_MINOR_TICKS_COUNT

    def __post_init__(self) -> None:
        if self.ticks_count < 1:
            raise ValueError("ticks_count must be >= 1")

    def create_ticks(self, value_range: Range, major_ticks: np.ndarray) -> np.ndarray:
        majors = np.asarray(major_ticks, dtype=np.float64)
        if majors.size < 2 or value_range.is_point:
            return np.empty(0, dtype=np.float64)
        step = float(majors[1] - majors[0])
        if step <= 0 or not np.isfinite(step):
            return np.empty(0, dtype=np.float64)
        delta = step / (self.ticks_count + 1)
        offsets = delta * np.arange(1, self.ticks_count + 1, dtype=np.float64)

        # Include the partial intervals before the first and after the last major tick.
        starts = np.concatenate(([majors[0] - step], majors, [majors[-1]]))
        starts = np.unique(starts)
        out = (starts[:, None] + offsets[None, :]).ravel()
        eps = abs(step) * 1e-9
        mask = (out >= value_range.min - eps) & (out <= value_range.max + eps)
        out = out[mask]
        near_major = np.isclose(out[:, None], majors[None, :], rtol=0.0, atol=eps).any(axis=1)
        return np.unique(out[~near_major])


def _span_exponent(vmin: float, vmax: float) -> int:
    span = vmax - vmin
    if math.isfinite(span):
        if span <= 0:
            raise ValueError("range must have a positive span")
        return math.floor(math.log10(span))
    # Halve both bounds so the difference stays representable.
    return math.floor(math.log10(0.5 * vmax - 0.5 * vmin) + math.log10(2.0))


def linear_step(vmin: float, vmax: float, level: int) -> float:
    q, r = divmod(level, 3)
    try:
        return 10.0 ** (_span_exponent(vmin, vmax) - q) / _STEP_DIVISORS[r]
    except OverflowError:
        return math.inf


def multiples_in_range(vmin: float, vmax: float, step: float) -> np.ndarray:
    if not math.isfinite(step) or step <= 0:
        return np.empty(0, dtype=np.float64)
    first = math.ceil(vmin / step - 1e-9)
    last = math.floor(vmax / step + 1e-9)
    if last < first:
        return np.empty(0, dtype=np.float64)
    ticks = np.arange(first, last + 1, dtype=np.float64) * step
    # Normalize floating-point drift so values like -4.44e-16 become 0.
    ticks = np.rint(ticks / step) * step
    ticks[np.isclose(ticks, 0.0, rtol=0.0, atol=step * 1e-9)] = 0.0
    return np.unique(ticks)


@dataclass
class LinearTickGenerator:
    """Ticks on multiples of a decimal 1-2-5 step."""

    warm_start: bool = True
    initial_level: int = LINEAR_INITIAL_LEVEL
    minor_provider: MinorTicksSource = field(default_factory=MinorTicksProvider)
    level: int = field(init=False)

    def __post_init__(self) -> None:
        if not LINEAR_MIN_LEVEL <= self.initial_level <= LINEAR_MAX_LEVEL:
            raise ValueError(f"initial_level must be within [{LINEAR_MIN_LEVEL}, {LINEAR_MAX_LEVEL}]")
        self.level = self.initial_level

    def begin_pass(self, value_range: Range) -> None:
        if not self.warm_start:
            self.level = self.initial_level

    def step_for(self, value_range: Range) -> float:
        level = self.level
        step = linear_step(value_range.min, value_range.max, level)
        # A step finer than the float grid at this magnitude would repeat values.
        resolution = float(np.spacing(max(abs(value_range.min), abs(value_range.max))))
        while step < resolution and level > LINEAR_MIN_LEVEL:
            level -= 1
            step = linear_step(value_range.min, value_range.max, level)
        return step

    def get_ticks(self, value_range: Range) -> np.ndarray:
        if value_range.is_point:
            return np.asarray([value_range.min], dtype=np.float64)
        return multiples_in_range(value_range.min, value_range.max, self.step_for(value_range))

    def get_minor_ticks(self, value_range: Range) -> np.ndarray:
        if value_range.is_point:
            return np.empty(0, dtype=np.float64)
        majors = self.get_ticks(value_range)
        if majors.size < 2:
            # Subdivide the step itself so a sparse axis still gets minor ticks.
            step = self.step_for(value_range)
            if not math.isfinite(step):
                return np.empty(0, dtype=np.float64)
            first = math.floor(value_range.min / step) * step
            majors = np.asarray([first, first + step], dtype=np.float64)
        return self.minor_provider.create_ticks(value_range, majors)

    def increase_density(self) -> None:
        self.level = min(LINEAR_MAX_LEVEL, self.level + 1)

    def decrease_density(self) -> None:
        self.level = max(LINEAR_MIN_LEVEL, self.level - 1)


@dataclass
class LogTickGenerator:
    """Decade ticks for strictly positive ranges."""

    warm_start: bool = True
    initial_level: int = 0
    level: int = field(init=False)

    def __post_init__(self) -> None:
        if not LOG_MIN_LEVEL <= self.initial_level <= LOG_MAX_LEVEL:
            raise ValueError(f"initial_level must be within [{LOG_MIN_LEVEL}, {LOG_MAX_LEVEL}]")
        self.level = self.initial_level

    def begin_pass(self, value_range: Range) -> None:
        if not self.warm_start:
            self.level = self.initial_level

    def get_ticks(self, value_range: Range) -> np.ndarray:
        if value_range.is_point:
            return np.asarray([value_range.min], dtype=np.float64)
        if self.level < 0:
            stride = _LOG_DECADE_STRIDES[self.level]
            return self._candidates(value_range, (1,), stride=stride)
        return self._candidates(value_range, _LOG_MANTISSAS[self.level])

    def get_minor_ticks(self, value_range: Range) -> np.ndarray:
        if value_range.is_point or self.level >= 2:
            return np.empty(0, dtype=np.float64)
        used = set(_LOG_MANTISSAS[max(0, self.level)])
        rest = tuple(m for m in range(2, 10) if m not in used)
        return self._candidates(value_range, rest)

    def increase_density(self) -> None:
        self.level = min(LOG_MAX_LEVEL, self.level + 1)

    def decrease_density(self) -> None:
        self.level = max(LOG_MIN_LEVEL, self.level - 1)

    @staticmethod
    def _candidates(value_range: Range, mantissas: tuple[int, ...], *, stride: int = 1) -> np.ndarray:
        if value_range.min <= 0:
            raise ValueError("log ticks require a strictly positive range")
        lo = math.floor(math.log10(value_range.min))
        hi = math.ceil(math.log10(value_range.max))
        decades = np.arange(lo, hi + 1)
        decades = decades[decades % stride == 0]
        if decades.size == 0 or not mantissas:
            return np.empty(0, dtype=np.float64)
        values = (np.asarray(mantissas, dtype=np.float64)[None, :] * (10.0 ** decades.astype(np.float64))[:, None]).ravel()
        eps = value_range.max * 1e-12
        mask = (values >= value_range.min * (1 - 1e-12)) & (values <= value_range.max + eps)
        return np.sort(values[mask])
