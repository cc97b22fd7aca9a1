from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any

from wxcontours.contours.features import build_contour_features, feature_collection
from wxcontours.contours.grid import build_grid, resample_grid
from wxcontours.domain.models import BBox
from wxcontours.forecast.registry import resolve_model
from wxcontours.shared.constants import (
    CONTOUR_INTERVAL_BY_FAMILY,
    CONTOUR_UNIT_BY_FAMILY,
    MAX_FORECAST_HOUR,
    variable_family,
)
from wxcontours.shared.exceptions import ComputationError, InvalidRequestError

if TYPE_CHECKING:
    from wxcontours.forecast.sampler import GridSampler

logger = logging.getLogger(__name__)


class ContourService:
    """Request-scoped contour pipeline: sample, build grid, contour, emit.

    Holds no per-request state; every call owns its grid, segments and
    polylines.
    """

    def __init__(self, sampler: GridSampler) -> None:
        self.sampler = sampler

    async def generate(
        self,
        model_id: str,
        variable: str,
        bbox: BBox | str | None,
        hour: int = 0,
    ) -> dict[str, Any]:
        """
        GeoJSON ``FeatureCollection`` of contour lines for one variable.

        Raises:
            InvalidRequestError: bad bbox, hour, model or variable.
            UpstreamUnavailableError: the forecast call failed.
            ComputationError: malformed upstream payload or anything
                unexpected after the fetch.

        """
        box = bbox if isinstance(bbox, BBox) else BBox.parse(bbox)
        model = resolve_model(model_id, variable)
        if not (0 <= hour <= MAX_FORECAST_HOUR):
            msg = f'hour must be between 0 and {MAX_FORECAST_HOUR}'
            raise InvalidRequestError(msg)

        family = variable_family(variable)
        interval = CONTOUR_INTERVAL_BY_FAMILY[family]
        unit = CONTOUR_UNIT_BY_FAMILY[family]

        t0 = time.perf_counter()
        points = self.sampler.points(box)
        payload = await self.sampler.fetch(points, variable, hour, model)

        try:
            grid = build_grid(
                payload,
                variable,
                hour,
                rows=points.rows,
                cols=points.cols,
                bounds=points.bounds,
            )
            grid = resample_grid(grid, self.sampler.config.resample_factor)
            features = build_contour_features(grid, interval, unit)
        except Exception as e:
            logger.exception('Error generating contours for %s/%s', model.id, variable)
            msg = 'Failed to generate contours'
            raise ComputationError(msg) from e

        logger.info(
            'Contours %s/%s hour=%d: %d features (%s family) in %.0f ms',
            model.id,
            variable,
            hour,
            len(features),
            family.value,
            (time.perf_counter() - t0) * 1000,
        )
        return feature_collection(features)
