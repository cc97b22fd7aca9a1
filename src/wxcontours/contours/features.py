from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from wxcontours.contours.levels import select_levels
from wxcontours.contours.marching import march_level
from wxcontours.contours.stitching import stitch_segments
from wxcontours.shared.constants import MIN_POINTS_FOR_LINE

if TYPE_CHECKING:
    from wxcontours.contours.grid import SampleGrid
    from wxcontours.contours.marching import Point

logger = logging.getLogger(__name__)


def format_level(level: float) -> int | float:
    """Integral levels are reported without a fractional part."""
    return int(level) if float(level).is_integer() else level


@dataclass(frozen=True)
class ContourFeature:
    level: float
    label: str
    coordinates: list[Point]

    def to_geojson(self) -> dict[str, Any]:
        return {
            'type': 'Feature',
            'properties': {'level': format_level(self.level), 'label': self.label},
            'geometry': {
                'type': 'LineString',
                'coordinates': [[lon, lat] for lon, lat in self.coordinates],
            },
        }


def emit_features(
    level: float,
    polylines: list[list[Point]],
    unit: str,
) -> list[ContourFeature]:
    label = f'{format_level(level)}{unit}'
    return [
        ContourFeature(level=level, label=label, coordinates=poly)
        for poly in polylines
        if len(poly) >= MIN_POINTS_FOR_LINE
    ]


def feature_collection(features: list[ContourFeature]) -> dict[str, Any]:
    return {
        'type': 'FeatureCollection',
        'features': [f.to_geojson() for f in features],
    }


def build_contour_features(
    grid: SampleGrid,
    interval: float,
    unit: str,
) -> list[ContourFeature]:
    """Contour every derived level of the grid; an empty grid yields no features."""
    levels = select_levels(grid.values, interval)
    if levels is None:
        logger.info('Grid has no data, returning empty contour set')
        return []

    features: list[ContourFeature] = []
    for level in levels.values:
        segments = march_level(grid, level)
        polylines = stitch_segments(segments)
        logger.debug(
            'Level %s: %d segments, %d polylines', level, len(segments), len(polylines)
        )
        features.extend(emit_features(level, polylines, unit))
    return features
