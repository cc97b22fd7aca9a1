"""
Regular lat/lon sample grid over a padded bbox and the batched forecast call.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import numpy as np

from wxcontours.contours.grid import GridBounds
from wxcontours.infrastructure.http.client import fetch_json
from wxcontours.shared.constants import SAMPLE_COORD_DECIMALS

if TYPE_CHECKING:
    import aiohttp

    from wxcontours.domain.models import BBox, GridSamplerConfig
    from wxcontours.forecast.registry import ModelDefinition

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SamplePoints:
    """Sample coordinates in row-major order, row 0 on the northern edge."""

    bounds: GridBounds
    rows: int
    cols: int
    lats: list[float]
    lons: list[float]


def padded_bounds(bbox: BBox, padding_ratio: float) -> GridBounds:
    lat_pad = (bbox.north - bbox.south) * padding_ratio
    lon_pad = (bbox.east - bbox.west) * padding_ratio
    return GridBounds(
        lat_min=bbox.south - lat_pad,
        lat_max=bbox.north + lat_pad,
        lon_min=bbox.west - lon_pad,
        lon_max=bbox.east + lon_pad,
    )


def sample_points(bbox: BBox, rows: int, cols: int, padding_ratio: float) -> SamplePoints:
    bounds = padded_bounds(bbox, padding_ratio)
    row_lats = np.linspace(bounds.lat_max, bounds.lat_min, rows)
    col_lons = np.linspace(bounds.lon_min, bounds.lon_max, cols)
    lat_grid, lon_grid = np.meshgrid(row_lats, col_lons, indexing='ij')
    return SamplePoints(
        bounds=bounds,
        rows=rows,
        cols=cols,
        lats=lat_grid.ravel().tolist(),
        lons=lon_grid.ravel().tolist(),
    )


def _coord_list(values: list[float]) -> str:
    return ','.join(f'{v:.{SAMPLE_COORD_DECIMALS}f}' for v in values)


class GridSampler:
    """Requests one variable at every sample point in a single call.

    Usage:
        sampler = GridSampler(session, config)
        points = sampler.points(bbox)
        payload = await sampler.fetch(points, 'temperature_2m', hour=6, model=gfs)
    """

    def __init__(self, client: aiohttp.ClientSession, config: GridSamplerConfig) -> None:
        self.client = client
        self.config = config

    def points(self, bbox: BBox) -> SamplePoints:
        return sample_points(
            bbox, self.config.rows, self.config.cols, self.config.padding_ratio
        )

    def endpoint_url(self, model: ModelDefinition) -> str:
        return f'{self.config.base_url}/{model.endpoint}'

    def build_params(
        self,
        points: SamplePoints,
        variable: str,
        hour: int,
        model: ModelDefinition,
    ) -> dict[str, str]:
        params = {
            'latitude': _coord_list(points.lats),
            'longitude': _coord_list(points.lons),
            'hourly': variable,
            'forecast_hours': str(hour + 1),
        }
        if model.open_meteo_model:
            params['models'] = model.open_meteo_model
        if self.config.api_key:
            params['apikey'] = self.config.api_key
        return params

    async def fetch(
        self,
        points: SamplePoints,
        variable: str,
        hour: int,
        model: ModelDefinition,
    ) -> Any:
        url = self.endpoint_url(model)
        logger.debug(
            'Requesting %s for %d points from %s (hour %d)',
            variable, len(points.lats), url, hour,
        )
        return await fetch_json(
            self.client,
            url,
            params=self.build_params(points, variable, hour, model),
            timeout_s=self.config.timeout_s,
        )
