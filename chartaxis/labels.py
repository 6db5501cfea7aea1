from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from functools import lru_cache
from typing import Callable, Protocol, Sequence, runtime_checkable

import math

import numpy as np
from PIL import ImageFont


DEFAULT_FONT_FAMILY = "DejaVu Sans"
DEFAULT_FONT_SIZE_PX = 12.0
# Pillow searches the platform font directories for bare file names.
FALLBACK_FONT_FILES = (
    "DejaVuSans.ttf",
    "LiberationSans-Regular.ttf",
    "Arial.ttf",
    "Helvetica.ttc",
)

DEFAULT_DECIMALS = 6
MAX_DECIMALS = 12
SCIENTIFIC_ABOVE = 1e6
SCIENTIFIC_BELOW = 1e-6


class LabelMeasurer(Protocol):
    def measure(self, tick: float) -> float: ...


@runtime_checkable
class SizedLabelMeasurer(Protocol):
    def measure(self, tick: float) -> float: ...

    def size(self, tick: float) -> tuple[float, float]: ...


def step_decimals(step: float | None) -> int:
    """Number of fraction digits needed to tell ticks ``step`` apart."""
    if step is None or not math.isfinite(step) or step <= 0:
        return DEFAULT_DECIMALS
    # 12 significant digits drop drift such as 0.30000000000000004.
    exponent = Decimal(f"{step:.12g}").normalize().as_tuple().exponent
    return min(MAX_DECIMALS, max(0, -int(exponent)))


def format_tick(value: float, *, step: float | None = None) -> str:
    v = float(value)
    if not math.isfinite(v):
        return str(v)
    if v == 0 or (step is not None and math.isfinite(step) and step > 0 and abs(v) <= step * 1e-9):
        return "0"
    magnitude = abs(v)
    tiny_step = step is not None and 0 < step < 1e-4
    if magnitude >= SCIENTIFIC_ABOVE or magnitude < SCIENTIFIC_BELOW or tiny_step:
        return f"{v:.4e}"
    text = f"{v:.{step_decimals(step)}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


def tick_step(ticks: Sequence[float] | np.ndarray) -> float | None:
    values = np.unique(np.asarray(ticks, dtype=np.float64))
    if values.size < 2:
        return None
    return float(np.min(np.diff(values)))


def format_ticks_for_axis(ticks: Sequence[float] | np.ndarray) -> list[str]:
    """Format a tick set with one shared precision taken from its spacing."""
    step = tick_step(ticks)
    return [format_tick(float(v), step=step) for v in ticks]


@dataclass(frozen=True)
class FixedLabelMeasurer:
    extent: float

    def __post_init__(self) -> None:
        if not math.isfinite(self.extent) or self.extent < 0:
            raise ValueError("extent must be finite and >= 0")

    def measure(self, tick: float) -> float:
        return float(self.extent)

    def size(self, tick: float) -> tuple[float, float]:
        return (float(self.extent), float(self.extent))


@dataclass
class TextLabelMeasurer:
    """Measures formatted tick labels with a Pillow font.

    ``measure`` returns the width for horizontal axes and the height for
    vertical ones.
    """

    is_horizontal: bool = True
    font_family: str = DEFAULT_FONT_FAMILY
    font_size_px: float = DEFAULT_FONT_SIZE_PX
    formatter: Callable[[float], str] = field(default=format_tick)

    def label_text(self, tick: float) -> str:
        return self.formatter(float(tick))

    def text_size(self, text: str) -> tuple[int, int]:
        return text_size(text, font_family=self.font_family, font_size_px=self.font_size_px)

    def size(self, tick: float) -> tuple[int, int]:
        return self.text_size(self.label_text(tick))

    def measure(self, tick: float) -> float:
        w, h = self.size(tick)
        return float(w if self.is_horizontal else h)


def text_size(
    text: str,
    *,
    font_family: str = DEFAULT_FONT_FAMILY,
    font_size_px: float = DEFAULT_FONT_SIZE_PX,
) -> tuple[int, int]:
    font = _font(font_family, max(1, int(round(font_size_px))))
    # Measure a reference glyph for empty labels so line height stays stable.
    left, top, right, bottom = font.getbbox(text or "0")
    width = int(right - left) if text else 0
    return (max(0, width), max(1, int(bottom - top)))


@lru_cache(maxsize=64)
def _font(font_family: str, size_px: int) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    compact = font_family.replace(" ", "")
    names = [f"{compact}.ttf", f"{compact}.otf", f"{compact}.ttc", *FALLBACK_FONT_FILES]
    for name in names:
        try:
            return ImageFont.truetype(name, size=size_px)
        except OSError:
            continue
    return ImageFont.load_default()
