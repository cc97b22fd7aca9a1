from __future__ import annotations

from typing import TYPE_CHECKING

from wxcontours.shared.constants import MIN_POINTS_FOR_LINE, STITCH_EPSILON_DEG

if TYPE_CHECKING:
    from wxcontours.contours.marching import Point, Segment


def points_match(a: Point, b: Point, eps: float = STITCH_EPSILON_DEG) -> bool:
    return abs(a[0] - b[0]) < eps and abs(a[1] - b[1]) < eps


def stitch_segments(
    segments: list[Segment],
    *,
    eps: float = STITCH_EPSILON_DEG,
) -> list[list[Point]]:
    """
    Greedily chain segments sharing endpoints into maximal polylines.

    Every unused segment seeds a polyline; unused segments are then attached
    to its tail or head, by either endpoint, until a full pass adds nothing.
    Quadratic in the segment count, which stays small at sample grid sizes.
    A closed isoline comes out with coinciding first and last points.
    """
    polylines: list[list[Point]] = []
    used = [False] * len(segments)

    for i, (a, b) in enumerate(segments):
        if used[i]:
            continue
        used[i] = True
        poly = [a, b]

        extended = True
        while extended:
            extended = False
            for j, (sa, sb) in enumerate(segments):
                if used[j]:
                    continue
                if points_match(poly[-1], sa, eps):
                    poly.append(sb)
                elif points_match(poly[-1], sb, eps):
                    poly.append(sa)
                elif points_match(poly[0], sb, eps):
                    poly.insert(0, sa)
                elif points_match(poly[0], sa, eps):
                    poly.insert(0, sb)
                else:
                    continue
                used[j] = True
                extended = True

        if len(poly) >= MIN_POINTS_FOR_LINE:
            polylines.append(poly)
    return polylines
