"""
Marching squares over a ``SampleGrid``.

Each 2x2 cell is classified against the level (bit set when a corner is
``>= level``; TL=1, TR=2, BR=4, BL=8), crossings are interpolated on the
edges whose corners straddle the level and joined per the case table.
Cells with a missing corner are skipped.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from wxcontours.shared.constants import (
    MIN_GRID_SIZE,
    MS_AMBIGUOUS_CASES,
    MS_CONNECT_LEFT_BOTTOM,
    MS_CONNECT_LEFT_RIGHT,
    MS_CONNECT_RIGHT_BOTTOM,
    MS_CONNECT_TOP_BOTTOM,
    MS_CONNECT_TOP_LEFT,
    MS_CONNECT_TOP_RIGHT,
    MS_MASK_BL,
    MS_MASK_BR,
    MS_MASK_TL,
    MS_MASK_TL_BR,
    MS_MASK_TR,
    MS_MASK_TR_BL,
    MS_NO_CONTOUR_CASES,
)

if TYPE_CHECKING:
    from wxcontours.contours.grid import SampleGrid

# (lon, lat)
Point = tuple[float, float]
Segment = tuple[Point, Point]


class Edge(str, Enum):
    TOP = 'top'
    RIGHT = 'right'
    BOTTOM = 'bottom'
    LEFT = 'left'


EdgePairs = tuple[tuple[Edge, Edge], ...]


@dataclass(frozen=True)
class EdgeCrossings:
    top: Point | None = None
    right: Point | None = None
    bottom: Point | None = None
    left: Point | None = None

    def get(self, edge: Edge) -> Point | None:
        return getattr(self, edge.value)


def _table() -> dict[int, EdgePairs]:
    table: dict[int, EdgePairs] = {}
    groups: list[tuple[tuple[int, int], Edge, Edge]] = [
        (MS_CONNECT_TOP_LEFT, Edge.TOP, Edge.LEFT),
        (MS_CONNECT_TOP_RIGHT, Edge.TOP, Edge.RIGHT),
        (MS_CONNECT_LEFT_RIGHT, Edge.LEFT, Edge.RIGHT),
        (MS_CONNECT_RIGHT_BOTTOM, Edge.RIGHT, Edge.BOTTOM),
        (MS_CONNECT_TOP_BOTTOM, Edge.TOP, Edge.BOTTOM),
        (MS_CONNECT_LEFT_BOTTOM, Edge.LEFT, Edge.BOTTOM),
    ]
    for masks, a, b in groups:
        for mask in masks:
            table[mask] = ((a, b),)
    for mask in MS_NO_CONTOUR_CASES:
        table[mask] = ()
    return table


# Unambiguous cases -> edge pairs
EDGE_PAIRS_BY_CASE: dict[int, EdgePairs] = _table()

_TR_BL: EdgePairs = ((Edge.TOP, Edge.RIGHT), (Edge.BOTTOM, Edge.LEFT))
_TL_BR: EdgePairs = ((Edge.TOP, Edge.LEFT), (Edge.BOTTOM, Edge.RIGHT))

# Saddle cases keyed by (case, diagonal average (TL+BR)/2 >= level)
SADDLE_EDGE_PAIRS: dict[tuple[int, bool], EdgePairs] = {
    (MS_MASK_TL_BR, True): _TR_BL,
    (MS_MASK_TL_BR, False): _TL_BR,
    (MS_MASK_TR_BL, True): _TL_BR,
    (MS_MASK_TR_BL, False): _TR_BL,
}


def cell_case(tl: float, tr: float, br: float, bl: float, level: float) -> int:
    return (
        (MS_MASK_TL if tl >= level else 0)
        | (MS_MASK_TR if tr >= level else 0)
        | (MS_MASK_BR if br >= level else 0)
        | (MS_MASK_BL if bl >= level else 0)
    )


def edge_pairs(case: int, tl: float, br: float, level: float) -> EdgePairs:
    """Edge pairs joined in a cell; saddles are resolved by the TL/BR average."""
    if case in MS_AMBIGUOUS_CASES:
        return SADDLE_EDGE_PAIRS[(case, (tl + br) / 2 >= level)]
    return EDGE_PAIRS_BY_CASE[case]


def _crosses(case: int, mask_a: int, mask_b: int) -> bool:
    return bool(case & mask_a) != bool(case & mask_b)


def cell_crossings(
    grid: SampleGrid,
    row: int,
    col: int,
    corners: tuple[float, float, float, float],
    case: int,
    level: float,
) -> EdgeCrossings:
    """Interpolated crossing on every edge whose two corners straddle the level."""
    tl, tr, br, bl = corners
    top = right = bottom = left = None
    if _crosses(case, MS_MASK_TL, MS_MASK_TR):
        t = (level - tl) / (tr - tl)
        top = grid.to_lonlat(col + t, row)
    if _crosses(case, MS_MASK_TR, MS_MASK_BR):
        t = (level - tr) / (br - tr)
        right = grid.to_lonlat(col + 1, row + t)
    if _crosses(case, MS_MASK_BL, MS_MASK_BR):
        t = (level - bl) / (br - bl)
        bottom = grid.to_lonlat(col + t, row + 1)
    if _crosses(case, MS_MASK_TL, MS_MASK_BL):
        t = (level - tl) / (bl - tl)
        left = grid.to_lonlat(col, row + t)
    return EdgeCrossings(top=top, right=right, bottom=bottom, left=left)


def cell_segments(grid: SampleGrid, row: int, col: int, level: float) -> list[Segment]:
    """Segments (0, 1 or 2) of the cell whose top-left sample is (row, col)."""
    row0 = grid.values[row]
    row1 = grid.values[row + 1]
    tl = row0[col]
    tr = row0[col + 1]
    br = row1[col + 1]
    bl = row1[col]
    if tl is None or tr is None or br is None or bl is None:
        return []

    case = cell_case(tl, tr, br, bl, level)
    if case in MS_NO_CONTOUR_CASES:
        return []

    crossings = cell_crossings(grid, row, col, (tl, tr, br, bl), case, level)
    segments: list[Segment] = []
    for a, b in edge_pairs(case, tl, br, level):
        pa = crossings.get(a)
        pb = crossings.get(b)
        if pa is not None and pb is not None:
            segments.append((pa, pb))
    return segments


def march_level(grid: SampleGrid, level: float) -> list[Segment]:
    """Unordered isoline segments of one level over the whole grid."""
    segments: list[Segment] = []
    if grid.rows < MIN_GRID_SIZE or grid.cols < MIN_GRID_SIZE:
        return segments
    for row in range(grid.rows - 1):
        for col in range(grid.cols - 1):
            segments.extend(cell_segments(grid, row, col, level))
    return segments
