"""Domain layer - request and configuration models."""
from wxcontours.domain.models import BBox, GridSamplerConfig, ServiceSettings

__all__ = [
    'BBox',
    'GridSamplerConfig',
    'ServiceSettings',
]
