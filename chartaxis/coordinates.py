from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

import math

from chartaxis.ranges import Range


class CoordinateMapper(Protocol):
    def to_screen(
        self,
        value: float,
        value_range: Range,
        axis_length: float,
        *,
        is_reversed: bool = False,
        is_horizontal: bool = True,
    ) -> float: ...


@dataclass(frozen=True)
class LinearCoordinateMapper:
    """Linear plot-space to screen-space projection along one axis.

    Vertical axes are mirrored because screen y grows downwards.
    """

    def to_screen(
        self,
        value: float,
        value_range: Range,
        axis_length: float,
        *,
        is_reversed: bool = False,
        is_horizontal: bool = True,
    ) -> float:
        if value_range.is_point:
            return axis_length / 2.0
        low = value_range.max if is_reversed else value_range.min
        high = value_range.min if is_reversed else value_range.max
        if math.isfinite(high - low):
            offset = (float(value) - low) * axis_length / (high - low)
        else:
            # Halve every term so differences near the float limit stay finite.
            offset = (0.5 * float(value) - 0.5 * low) / (0.5 * high - 0.5 * low) * axis_length
        if is_horizontal:
            return offset
        return axis_length - offset
