from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI

from wxcontours import __version__
from wxcontours.api.routes import build_contours_router
from wxcontours.forecast.sampler import GridSampler
from wxcontours.infrastructure.http.client import make_http_session
from wxcontours.services.contour_service import ContourService

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from wxcontours.domain.models import ServiceSettings

logger = logging.getLogger(__name__)


def create_app(settings: ServiceSettings) -> FastAPI:
    """FastAPI app owning one HTTP session for the forecast source."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        session = make_http_session(settings.sampler.user_agent)
        app.state.contour_service = ContourService(GridSampler(session, settings.sampler))
        logger.info('Forecast source: %s', settings.sampler.base_url)
        try:
            yield
        finally:
            await session.close()

    app = FastAPI(title='wxcontours', version=__version__, lifespan=lifespan)
    app.include_router(build_contours_router(cache_max_age_s=settings.cache_max_age_s))
    return app
