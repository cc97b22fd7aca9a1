"""Error taxonomy of the contour pipeline.

An empty grid is not an error: ``select_levels`` returns ``None`` and the
pipeline answers with an empty feature collection.
"""

from __future__ import annotations


class ContourError(Exception):
    """Base class for failures surfaced to the caller."""


class InvalidRequestError(ContourError):
    """Malformed bbox, unknown model or unsupported model/variable combination."""


class UpstreamUnavailableError(ContourError):
    """The point-forecast source failed, timed out or answered non-success."""

    def __init__(self, message: str, *, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


class ComputationError(ContourError):
    """Unexpected failure while turning the upstream payload into contours."""
