from chartaxis.arrange import ArrangementResult, LabelPlacement, TickArranger, TickChange, check_labels_arrangement
from chartaxis.axis import Axis, AxisLayout, LabelBox, TickSegment
from chartaxis.config import ArrangerConfig
from chartaxis.coordinates import CoordinateMapper, LinearCoordinateMapper
from chartaxis.errors import ChartAxisError, InvalidRangeError
from chartaxis.labels import FixedLabelMeasurer, LabelMeasurer, TextLabelMeasurer, format_tick, format_ticks_for_axis
from chartaxis.ranges import Range, with_finite_bounds
from chartaxis.ticks import LinearTickGenerator, LogTickGenerator, MinorTicksProvider, TickGenerator
from chartaxis.transforms import DataTransform, IdentityDataTransform, Log10DataTransform

__all__ = [
    "ArrangementResult",
    "ArrangerConfig",
    "Axis",
    "AxisLayout",
    "ChartAxisError",
    "CoordinateMapper",
    "DataTransform",
    "FixedLabelMeasurer",
    "IdentityDataTransform",
    "InvalidRangeError",
    "LabelBox",
    "LabelMeasurer",
    "LabelPlacement",
    "LinearCoordinateMapper",
    "LinearTickGenerator",
    "Log10DataTransform",
    "LogTickGenerator",
    "MinorTicksProvider",
    "Range",
    "TextLabelMeasurer",
    "TickArranger",
    "TickChange",
    "TickGenerator",
    "TickSegment",
    "check_labels_arrangement",
    "format_tick",
    "format_ticks_for_axis",
    "with_finite_bounds",
]
