"""
Sample grid of forecast values over a geographic box.

Row 0 is the northern edge (``lat_max``), column 0 the western edge
(``lon_min``). ``None`` marks a sample without data and is never read as 0.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any

from wxcontours.shared.constants import CELSIUS_VARIABLE_MARKERS

logger = logging.getLogger(__name__)

GridValues = list[list[float | None]]


@dataclass(frozen=True)
class GridBounds:
    lat_min: float
    lat_max: float
    lon_min: float
    lon_max: float


@dataclass(frozen=True)
class SampleGrid:
    values: GridValues
    bounds: GridBounds

    @property
    def rows(self) -> int:
        return len(self.values)

    @property
    def cols(self) -> int:
        return len(self.values[0]) if self.values else 0

    def to_lonlat(self, gx: float, gy: float) -> tuple[float, float]:
        """Convert fractional (column, row) grid coordinates to (lon, lat)."""
        b = self.bounds
        lat_step = (b.lat_max - b.lat_min) / (self.rows - 1)
        lon_step = (b.lon_max - b.lon_min) / (self.cols - 1)
        return b.lon_min + gx * lon_step, b.lat_max - gy * lat_step


def celsius_to_fahrenheit(c: float) -> float:
    return c * 9 / 5 + 32


def is_celsius_variable(variable: str) -> bool:
    return any(marker in variable for marker in CELSIUS_VARIABLE_MARKERS)


def convert_units(variable: str, value: float | None) -> float | None:
    """Temperature-family values go °C → °F; everything else passes through."""
    if value is None:
        return None
    if is_celsius_variable(variable):
        return celsius_to_fahrenheit(value)
    return value


def _hourly_value(entry: Any, variable: str, hour: int) -> float | None:
    if not isinstance(entry, dict):
        return None
    hourly = entry.get('hourly')
    if not isinstance(hourly, dict):
        return None
    series = hourly.get(variable)
    if not isinstance(series, list) or not (0 <= hour < len(series)):
        return None
    raw = series[hour]
    if raw is None:
        return None
    value = float(raw)
    return value if math.isfinite(value) else None


def build_grid(
    payload: Any,
    variable: str,
    hour: int,
    *,
    rows: int,
    cols: int,
    bounds: GridBounds,
) -> SampleGrid:
    """
    Arrange per-point forecast responses into a ``rows x cols`` grid.

    Args:
        payload: Decoded upstream JSON. A list carries one entry per sample in
            row-major order; a single object (one-location answer) only fills
            the first sample.
        variable: Hourly variable name to read.
        hour: Index into the hourly array.

    Raises:
        ValueError: payload is neither a list nor an object, or a value is
            not numeric.

    """
    if isinstance(payload, list):
        entries = payload
    elif isinstance(payload, dict):
        entries = [payload]
    else:
        msg = f'Unexpected forecast payload type: {type(payload).__name__}'
        raise ValueError(msg)

    values: GridValues = []
    missing = 0
    for row in range(rows):
        row_values: list[float | None] = []
        for col in range(cols):
            idx = row * cols + col
            entry = entries[idx] if idx < len(entries) else None
            value = convert_units(variable, _hourly_value(entry, variable, hour))
            if value is None:
                missing += 1
            row_values.append(value)
        values.append(row_values)

    if missing:
        logger.debug('Grid %dx%d: %d samples without data', rows, cols, missing)
    return SampleGrid(values=values, bounds=bounds)


def bilinear_sample(values: GridValues, x: float, y: float) -> float | None:
    """
    Bilinear value at fractional column ``x`` and row ``y``.

    Coordinates are clamped to the grid. Integer coordinates return the
    stored sample unchanged. When a surrounding corner has no data the
    result is the stored sample if (x, y) sits exactly on one, otherwise the
    first present corner (TL, TR, BL, BR), otherwise ``None``.
    """
    h = len(values)
    w = len(values[0]) if h else 0
    if h == 0 or w == 0:
        return None

    x = min(max(x, 0.0), w - 1.0)
    y = min(max(y, 0.0), h - 1.0)

    x0 = min(math.floor(x), max(w - 2, 0))
    y0 = min(math.floor(y), max(h - 2, 0))
    x1 = min(x0 + 1, w - 1)
    y1 = min(y0 + 1, h - 1)
    dx = x - x0
    dy = y - y0

    v00 = values[y0][x0]
    v10 = values[y0][x1]
    v01 = values[y1][x0]
    v11 = values[y1][x1]

    if v00 is None or v10 is None or v01 is None or v11 is None:
        if dx in (0.0, 1.0) and dy in (0.0, 1.0):
            return values[y1 if dy else y0][x1 if dx else x0]
        return next((v for v in (v00, v10, v01, v11) if v is not None), None)

    v0 = v00 * (1 - dx) + v10 * dx
    v1 = v01 * (1 - dx) + v11 * dx
    return v0 * (1 - dy) + v1 * dy


def resample_grid(grid: SampleGrid, factor: int) -> SampleGrid:
    """Refine the grid ``factor`` times per cell; input samples are kept."""
    if factor <= 1 or grid.rows < 2 or grid.cols < 2:
        return grid
    rows = (grid.rows - 1) * factor + 1
    cols = (grid.cols - 1) * factor + 1
    values = [
        [bilinear_sample(grid.values, c / factor, r / factor) for c in range(cols)]
        for r in range(rows)
    ]
    return SampleGrid(values=values, bounds=grid.bounds)
