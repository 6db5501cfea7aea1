from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

import math

from chartaxis.ranges import Range


class DataTransform(Protocol):
    def data_to_plot(self, value: float) -> float: ...

    def plot_to_data(self, value: float) -> float: ...


@dataclass(frozen=True)
class IdentityDataTransform:
    def data_to_plot(self, value: float) -> float:
        return float(value)

    def plot_to_data(self, value: float) -> float:
        return float(value)


@dataclass(frozen=True)
class Log10DataTransform:
    def data_to_plot(self, value: float) -> float:
        v = float(value)
        if v <= 0:
            return -math.inf
        return math.log10(v)

    def plot_to_data(self, value: float) -> float:
        try:
            return 10.0 ** float(value)
        except OverflowError:
            return math.inf


def range_to_data(value_range: Range, transform: DataTransform) -> Range:
    return Range(transform.plot_to_data(value_range.min), transform.plot_to_data(value_range.max))
