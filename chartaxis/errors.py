from __future__ import annotations


class ChartAxisError(ValueError):
    pass


class InvalidRangeError(ChartAxisError):
    pass
