from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Sequence

import logging
import math

import numpy as np

from chartaxis.config import ArrangerConfig
from chartaxis.coordinates import CoordinateMapper, LinearCoordinateMapper
from chartaxis.labels import LabelMeasurer
from chartaxis.ranges import Range, with_finite_bounds
from chartaxis.ticks import TickGenerator
from chartaxis.transforms import DataTransform, IdentityDataTransform, range_to_data


LOGGER = logging.getLogger(__name__)


class TickChange(Enum):
    INCREASE = -1
    OK = 0
    DECREASE = 1


@dataclass(frozen=True)
class LabelPlacement:
    tick: float
    offset: float
    extent: float


@dataclass(frozen=True)
class ArrangementResult:
    major_ticks: tuple[float, ...]
    minor_ticks: tuple[float, ...] = ()
    labels: tuple[LabelPlacement, ...] = ()
    iterations: int = 0

    @property
    def tick_count(self) -> int:
        return len(self.major_ticks)


def check_labels_arrangement(
    placements: Sequence[LabelPlacement],
    *,
    increase_ratio: float,
    decrease_ratio: float,
) -> TickChange:
    """Classify label spacing along the axis.

    Any adjacent pair closer than ``extent * decrease_ratio / 2`` asks for fewer
    ticks. Otherwise, if every pair is at least ``extent * increase_ratio / 2``
    apart, the axis can take more ticks.
    """
    ordered = sorted(placements, key=lambda p: p.offset)
    for cur, nxt in zip(ordered, ordered[1:]):
        if cur.offset + cur.extent * decrease_ratio / 2.0 > nxt.offset:
            return TickChange.DECREASE

    for cur, nxt in zip(ordered, ordered[1:]):
        if cur.offset + cur.extent * increase_ratio / 2.0 > nxt.offset:
            return TickChange.OK
    return TickChange.INCREASE


@dataclass
class TickArranger:
    """Chooses major ticks whose labels neither collide nor sit too far apart.

    The search is a bounded hill climb over the generator's density levels.
    The generator keeps whatever level the pass ends on, so a following pass
    with similar inputs starts close to its answer. Callers must not run two
    passes on the same generator concurrently.
    """

    generator: TickGenerator
    measurer: LabelMeasurer
    mapper: CoordinateMapper = field(default_factory=LinearCoordinateMapper)
    data_transform: DataTransform = field(default_factory=IdentityDataTransform)
    config: ArrangerConfig = field(default_factory=ArrangerConfig)

    def arrange(
        self,
        value_range: Range,
        axis_length: float,
        max_ticks: int | None = None,
        *,
        is_horizontal: bool = True,
        is_reversed: bool = False,
    ) -> ArrangementResult:
        limit = self.config.max_ticks if max_ticks is None else int(max_ticks)
        if limit < 2:
            raise ValueError("max_ticks must be >= 2")
        value_range = with_finite_bounds(value_range)
        data_range = with_finite_bounds(range_to_data(value_range, self.data_transform))

        def place(ticks: np.ndarray) -> list[LabelPlacement]:
            return [
                LabelPlacement(
                    tick=float(t),
                    offset=self.mapper.to_screen(
                        self.data_transform.data_to_plot(float(t)),
                        value_range,
                        axis_length,
                        is_reversed=is_reversed,
                        is_horizontal=is_horizontal,
                    ),
                    extent=float(self.measurer.measure(float(t))),
                )
                for t in ticks
            ]

        if value_range.is_point or data_range.is_point:
            single = np.asarray([data_range.min], dtype=np.float64)
            return ArrangementResult(major_ticks=(data_range.min,), labels=tuple(place(single)))

        self.generator.begin_pass(data_range)
        ticks = np.asarray(self.generator.get_ticks(data_range), dtype=np.float64)
        placements = place(ticks)

        if not _is_usable_length(axis_length):
            LOGGER.debug("axis length %r is degenerate; keeping %d initial ticks", axis_length, ticks.size)
            return self._result(data_range, ticks, placements, iterations=0)

        result = self._classify(placements, ticks.size, limit)
        iterations = 0
        while result is not TickChange.OK and iterations < self.config.max_iterations:
            iterations += 1
            if result is TickChange.INCREASE:
                self.generator.increase_density()
            else:
                self.generator.decrease_density()
            new_ticks = np.asarray(self.generator.get_ticks(data_range), dtype=np.float64)
            LOGGER.debug("tick arrangement step %d: %s -> %d ticks", iterations, result.name, new_ticks.size)

            if new_ticks.size > limit and result is TickChange.INCREASE:
                LOGGER.debug("%d ticks exceed max_ticks=%d; stepping back", new_ticks.size, limit)
                self.generator.decrease_density()
                break
            if new_ticks.size < 2 and result is TickChange.DECREASE:
                LOGGER.debug("fewer than 2 ticks; stepping back")
                self.generator.increase_density()
                break

            prev_ticks, prev_placements = ticks, placements
            ticks = new_ticks
            placements = place(ticks)
            new_result = self._classify(placements, ticks.size, limit)
            if new_result is result:
                continue

            if new_result is not TickChange.OK:
                # Overshot: keep the previous set and nudge the density back towards it.
                if result is TickChange.DECREASE:
                    if prev_ticks.size < limit:
                        ticks, placements = prev_ticks, prev_placements
                        self.generator.increase_density()
                        LOGGER.debug("direction reversed; rolled back to %d ticks", ticks.size)
                elif prev_ticks.size >= 2:
                    ticks, placements = prev_ticks, prev_placements
                    self.generator.decrease_density()
                    LOGGER.debug("direction reversed; rolled back to %d ticks", ticks.size)
            break
        else:
            if result is not TickChange.OK:
                LOGGER.debug("tick arrangement did not converge after %d iterations", iterations)

        return self._result(data_range, ticks, placements, iterations=iterations)

    def _classify(self, placements: Sequence[LabelPlacement], count: int, limit: int) -> TickChange:
        if count > limit:
            return TickChange.DECREASE
        if count < 2:
            return TickChange.INCREASE
        return check_labels_arrangement(
            placements,
            increase_ratio=self.config.increase_ratio,
            decrease_ratio=self.config.decrease_ratio,
        )

    def _result(
        self,
        data_range: Range,
        ticks: np.ndarray,
        placements: list[LabelPlacement],
        *,
        iterations: int,
    ) -> ArrangementResult:
        minor: tuple[float, ...] = ()
        if self.config.show_minor_ticks:
            minor_ticks = self.generator.get_minor_ticks(data_range)
            if minor_ticks is not None:
                minor = tuple(float(v) for v in minor_ticks)
        return ArrangementResult(
            major_ticks=tuple(float(v) for v in ticks),
            minor_ticks=minor,
            labels=tuple(placements),
            iterations=iterations,
        )


def _is_usable_length(axis_length: float) -> bool:
    return math.isfinite(axis_length) and axis_length > 0
