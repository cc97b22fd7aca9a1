"""
Contour engine: sample grid, level selection, marching squares, stitching.
"""
from wxcontours.contours.features import (
    ContourFeature,
    build_contour_features,
    emit_features,
    feature_collection,
)
from wxcontours.contours.grid import (
    GridBounds,
    SampleGrid,
    bilinear_sample,
    build_grid,
    resample_grid,
)
from wxcontours.contours.levels import ContourLevels, select_levels
from wxcontours.contours.marching import march_level
from wxcontours.contours.stitching import stitch_segments

__all__ = [
    'ContourFeature',
    'ContourLevels',
    'GridBounds',
    'SampleGrid',
    'bilinear_sample',
    'build_contour_features',
    'build_grid',
    'emit_features',
    'feature_collection',
    'march_level',
    'resample_grid',
    'select_levels',
    'stitch_segments',
]
