from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Literal, Sequence

import math

from chartaxis.arrange import ArrangementResult, TickArranger
from chartaxis.config import DEFAULT_MAX_TICKS, ArrangerConfig
from chartaxis.coordinates import LinearCoordinateMapper
from chartaxis.labels import (
    DEFAULT_FONT_FAMILY,
    DEFAULT_FONT_SIZE_PX,
    LabelMeasurer,
    SizedLabelMeasurer,
    TextLabelMeasurer,
    format_tick,
    format_ticks_for_axis,
)
from chartaxis.ranges import Range, with_finite_bounds
from chartaxis.ticks import LinearTickGenerator, TickGenerator
from chartaxis.transforms import DataTransform, IdentityDataTransform


AxisOrientation = Literal["top", "bottom", "left", "right"]

DEFAULT_TICK_LENGTH = 10.0
DEFAULT_TICK_WIDTH = 1.0
DEFAULT_LABEL_OFFSET = 5.0
UNBOUNDED_AXIS_EXTENT = 128.0

Point = tuple[float, float]


@dataclass(frozen=True)
class TickSegment:
    start: Point
    end: Point


@dataclass(frozen=True)
class LabelBox:
    tick: float
    text: str
    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class AxisLayout:
    major_segments: tuple[TickSegment, ...]
    minor_segments: tuple[TickSegment, ...]
    labels: tuple[LabelBox, ...]
    width: float
    height: float
    arrangement: ArrangementResult


@dataclass
class Axis:
    """Horizontal or vertical axis: ticks, minor ticks and positioned labels.

    ``value_range`` is in plot coordinates; ``data_transform`` maps it back to
    the data values the ticks and labels are expressed in. Call ``layout``
    whenever the size or any setting changes.
    """

    orientation: AxisOrientation = "bottom"
    value_range: Range = field(default_factory=lambda: Range(0.0, 1.0))
    is_reversed: bool = False
    data_transform: DataTransform = field(default_factory=IdentityDataTransform)
    tick_generator: TickGenerator = field(default_factory=LinearTickGenerator)
    formatter: Callable[[float], str] | None = None
    measurer: LabelMeasurer | None = None
    font_family: str = DEFAULT_FONT_FAMILY
    font_size_px: float = DEFAULT_FONT_SIZE_PX
    max_ticks: int = DEFAULT_MAX_TICKS
    tick_length: float = DEFAULT_TICK_LENGTH
    tick_width: float = DEFAULT_TICK_WIDTH
    minor_tick_length: float = DEFAULT_TICK_LENGTH / 2.0
    label_offset: float = DEFAULT_LABEL_OFFSET
    are_ticks_visible: bool = True
    are_minor_ticks_visible: bool = True
    ticks: tuple[float, ...] | None = None

    def __post_init__(self) -> None:
        if self.orientation not in ("top", "bottom", "left", "right"):
            raise ValueError(f"unknown axis orientation: {self.orientation!r}")
        if self.max_ticks < 2:
            raise ValueError("max_ticks must be >= 2")

    @property
    def is_horizontal(self) -> bool:
        return self.orientation in ("top", "bottom")

    def set_range(self, vmin: float, vmax: float) -> "Axis":
        self.value_range = Range(vmin, vmax)
        return self

    def set_max_ticks(self, max_ticks: int) -> "Axis":
        if max_ticks < 2:
            raise ValueError("max_ticks must be >= 2")
        self.max_ticks = int(max_ticks)
        return self

    def set_reversed(self, reversed_: bool) -> "Axis":
        self.is_reversed = bool(reversed_)
        return self

    def set_ticks_visible(self, visible: bool) -> "Axis":
        self.are_ticks_visible = bool(visible)
        self.are_minor_ticks_visible = bool(visible)
        return self

    def set_minor_ticks_visible(self, visible: bool) -> "Axis":
        self.are_minor_ticks_visible = bool(visible)
        return self

    def set_ticks(self, ticks: Sequence[float] | None) -> "Axis":
        self.ticks = None if not ticks else tuple(float(t) for t in ticks)
        return self

    def label_measurer(self) -> LabelMeasurer:
        if self.measurer is not None:
            return self.measurer
        return TextLabelMeasurer(
            is_horizontal=self.is_horizontal,
            font_family=self.font_family,
            font_size_px=self.font_size_px,
            formatter=self.formatter or format_tick,
        )

    def label_texts(self, ticks: Sequence[float]) -> list[str]:
        if self.formatter is not None:
            return [self.formatter(float(t)) for t in ticks]
        return format_ticks_for_axis(ticks)

    def layout(self, width: float, height: float) -> AxisLayout:
        width = UNBOUNDED_AXIS_EXTENT if math.isinf(width) else float(width)
        height = UNBOUNDED_AXIS_EXTENT if math.isinf(height) else float(height)
        length = width if self.is_horizontal else height
        plot_range = with_finite_bounds(self.value_range)
        measurer = self.label_measurer()
        mapper = LinearCoordinateMapper()

        arranger = TickArranger(
            generator=self.tick_generator,
            measurer=measurer,
            mapper=mapper,
            data_transform=self.data_transform,
            config=ArrangerConfig(
                max_ticks=self.max_ticks,
                show_minor_ticks=self.are_ticks_visible and self.are_minor_ticks_visible,
            ),
        )
        arrangement = arranger.arrange(
            plot_range,
            length,
            is_horizontal=self.is_horizontal,
            is_reversed=self.is_reversed,
        )

        def coord(tick: float) -> float:
            return mapper.to_screen(
                self.data_transform.data_to_plot(tick),
                plot_range,
                length,
                is_reversed=self.is_reversed,
                is_horizontal=self.is_horizontal,
            )

        label_ticks = self.ticks if self.ticks else arrangement.major_ticks
        texts = self.label_texts(label_ticks)
        sizes = [self._label_size(measurer, t, text) for t, text in zip(label_ticks, texts, strict=True)]
        max_w = max((w for w, _ in sizes), default=0.0)
        max_h = max((h for _, h in sizes), default=0.0)

        if self.is_horizontal:
            out_w, out_h = width, self.tick_length + max_h
        else:
            out_w, out_h = self.tick_length + max_w + self.label_offset, height

        usable = math.isfinite(length) and length > 0
        major: list[TickSegment] = []
        minor: list[TickSegment] = []
        if usable and self.are_ticks_visible:
            major_ticks = arrangement.major_ticks
            # A generator may start one step below the range; that tick is not drawn.
            if major_ticks and self.data_transform.data_to_plot(major_ticks[0]) < plot_range.min:
                major_ticks = major_ticks[1:]
            major = [self._segment(coord(t), self.tick_length, out_w, out_h) for t in major_ticks]
            minor = [self._segment(coord(t), self.minor_tick_length, out_w, out_h) for t in arrangement.minor_ticks]

        labels: list[LabelBox] = []
        if usable:
            for tick, text, (w, h) in zip(label_ticks, texts, sizes, strict=True):
                x, y = self._label_origin(coord(tick), w, h, max_w)
                labels.append(LabelBox(tick=tick, text=text, x=x, y=y, width=w, height=h))

        return AxisLayout(
            major_segments=tuple(major),
            minor_segments=tuple(minor),
            labels=tuple(labels),
            width=out_w,
            height=out_h,
            arrangement=arrangement,
        )

    def _label_size(self, measurer: LabelMeasurer, tick: float, text: str) -> tuple[float, float]:
        if isinstance(measurer, TextLabelMeasurer):
            w, h = measurer.text_size(text)
        elif isinstance(measurer, SizedLabelMeasurer):
            w, h = measurer.size(tick)
        else:
            extent = measurer.measure(tick)
            w, h = (extent, 0.0) if self.is_horizontal else (0.0, extent)
        return (float(w), float(h))

    def _segment(self, c: float, tick_len: float, out_w: float, out_h: float) -> TickSegment:
        if self.orientation == "bottom":
            return TickSegment(start=(c, 0.0), end=(c, tick_len))
        if self.orientation == "top":
            return TickSegment(start=(c, out_h - tick_len), end=(c, out_h))
        if self.orientation == "right":
            return TickSegment(start=(0.0, c), end=(tick_len, c))
        return TickSegment(start=(out_w - tick_len, c), end=(out_w, c))

    def _label_origin(self, c: float, w: float, h: float, max_w: float) -> Point:
        if self.orientation == "bottom":
            return (c - w / 2.0, self.tick_length)
        if self.orientation == "top":
            return (c - w / 2.0, 0.0)
        if self.orientation == "right":
            return (self.tick_length + self.label_offset, c - h / 2.0)
        # Left labels are right-aligned, label_offset away from the ticks.
        return (max_w - w, c - h / 2.0)
