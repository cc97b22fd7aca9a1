from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from wxcontours.contours.grid import GridValues


@dataclass(frozen=True)
class ContourLevels:
    start: float
    end: float
    interval: float

    @property
    def values(self) -> list[float]:
        count = round((self.end - self.start) / self.interval) + 1
        return [self.start + i * self.interval for i in range(count)]


def find_value_range(values: GridValues) -> tuple[float, float] | None:
    """(min, max) over finite samples, ``None`` when the grid has none."""
    finite = [v for row in values for v in row if v is not None and math.isfinite(v)]
    if not finite:
        return None
    return min(finite), max(finite)


def select_levels(values: GridValues, interval: float) -> ContourLevels | None:
    """
    Evenly spaced levels bracketing the grid's data range.

    The first level is at or below the minimum, the last at or above the
    maximum. ``None`` means the grid holds no data (not an error).
    """
    if interval <= 0:
        msg = f'Contour interval must be positive, got {interval}'
        raise ValueError(msg)
    value_range = find_value_range(values)
    if value_range is None:
        return None
    min_val, max_val = value_range
    start = math.floor(min_val / interval) * interval
    end = math.ceil(max_val / interval) * interval
    return ContourLevels(start=start, end=end, interval=interval)
