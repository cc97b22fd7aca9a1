from __future__ import annotations

import math

from pydantic import BaseModel, ValidationError, field_validator, model_validator

from wxcontours.shared.constants import (
    CONTOUR_CACHE_MAX_AGE_S,
    HTTP_TIMEOUT_DEFAULT,
    HTTP_USER_AGENT,
    MIN_GRID_SIZE,
    OPEN_METEO_BASE_URL,
    SAMPLE_GRID_PADDING_RATIO,
    SAMPLE_GRID_SIZE,
)
from wxcontours.shared.exceptions import InvalidRequestError

BBOX_COMPONENTS = 4


class BBox(BaseModel):
    """Requested map extent in degrees, ``west,south,east,north``."""

    model_config = {'frozen': True}

    west: float
    south: float
    east: float
    north: float

    @field_validator('west', 'south', 'east', 'north')
    @classmethod
    def validate_finite(cls, v: float) -> float:
        if not math.isfinite(v):
            msg = 'bbox components must be finite numbers'
            raise ValueError(msg)
        return v

    @model_validator(mode='after')
    def validate_order(self) -> BBox:
        if not self.west < self.east:
            msg = 'bbox west must be less than east'
            raise ValueError(msg)
        if not self.south < self.north:
            msg = 'bbox south must be less than north'
            raise ValueError(msg)
        return self

    @classmethod
    def parse(cls, raw: str | None) -> BBox:
        """Parse the ``bbox`` query parameter, raising ``InvalidRequestError``."""
        if not raw:
            msg = 'Missing or invalid bbox parameter'
            raise InvalidRequestError(msg)
        parts = raw.split(',')
        if len(parts) != BBOX_COMPONENTS:
            msg = 'Missing or invalid bbox parameter'
            raise InvalidRequestError(msg)
        try:
            west, south, east, north = (float(p) for p in parts)
            return cls(west=west, south=south, east=east, north=north)
        except (ValueError, ValidationError) as e:
            msg = f'Missing or invalid bbox parameter: {e}'
            raise InvalidRequestError(msg) from None


class GridSamplerConfig(BaseModel):
    """Point-forecast source and sample grid resolution."""

    model_config = {'extra': 'ignore'}

    base_url: str = OPEN_METEO_BASE_URL
    api_key: str | None = None
    rows: int = SAMPLE_GRID_SIZE
    cols: int = SAMPLE_GRID_SIZE
    padding_ratio: float = SAMPLE_GRID_PADDING_RATIO
    timeout_s: float = HTTP_TIMEOUT_DEFAULT
    user_agent: str = HTTP_USER_AGENT
    # 1 = contour the sampled grid as is; k > 1 refines it k times per cell
    resample_factor: int = 1

    @field_validator('rows', 'cols')
    @classmethod
    def validate_grid_size(cls, v: int) -> int:
        if v < MIN_GRID_SIZE:
            msg = f'grid size must be at least {MIN_GRID_SIZE}'
            raise ValueError(msg)
        return v

    @field_validator('padding_ratio')
    @classmethod
    def validate_padding(cls, v: float) -> float:
        if not (0.0 <= v < 1.0):
            msg = 'padding_ratio must be in [0.0, 1.0)'
            raise ValueError(msg)
        return v

    @field_validator('timeout_s')
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            msg = 'timeout_s must be positive'
            raise ValueError(msg)
        return v

    @field_validator('resample_factor')
    @classmethod
    def validate_resample_factor(cls, v: int) -> int:
        if v < 1:
            msg = 'resample_factor must be >= 1'
            raise ValueError(msg)
        return v

    @field_validator('base_url')
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip('/')


class ServiceSettings(BaseModel):
    """Everything the entry point needs to assemble the service."""

    model_config = {'extra': 'ignore'}

    sampler: GridSamplerConfig = GridSamplerConfig()
    log_level: str = 'INFO'
    host: str = '127.0.0.1'
    port: int = 8000
    cache_max_age_s: int = CONTOUR_CACHE_MAX_AGE_S

    @field_validator('log_level')
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        level = str(v).upper()
        if level not in ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'):
            msg = f'Unknown log level: {v}'
            raise ValueError(msg)
        return level
