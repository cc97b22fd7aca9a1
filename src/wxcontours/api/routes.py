"""Contour endpoints.

Handlers are built inside build_contours_router() and read the contour
service from ``request.app.state`` so the router carries no globals.
"""
from __future__ import annotations

import logging

from fastapi import APIRouter, Query, Request
from fastapi.responses import JSONResponse

from wxcontours.forecast.registry import (
    get_models_by_category,
    get_supported_models,
    model_variables,
)
from wxcontours.shared.constants import (
    CONTOUR_CACHE_MAX_AGE_S,
    HTTP_BAD_REQUEST,
    HTTP_INTERNAL_ERROR,
)
from wxcontours.shared.exceptions import (
    ComputationError,
    InvalidRequestError,
    UpstreamUnavailableError,
)

logger = logging.getLogger(__name__)


def build_contours_router(*, cache_max_age_s: int = CONTOUR_CACHE_MAX_AGE_S) -> APIRouter:
    router = APIRouter(prefix='/api/contours')

    @router.get('/models')
    async def api_models(category: str | None = Query(None)):
        if category is None:
            models = get_supported_models()
        else:
            try:
                models = [
                    m for m in get_models_by_category(category) if m.open_meteo_support
                ]
            except ValueError:
                return JSONResponse(
                    {'error': f'Unknown category: {category}'},
                    status_code=HTTP_BAD_REQUEST,
                )
        return {
            'models': [
                {
                    'id': m.id,
                    'name': m.name,
                    'category': m.category.value,
                    'variables': [v.model_dump() for v in model_variables(m)],
                }
                for m in models
            ]
        }

    @router.get('/models/{model}/{variable}')
    async def api_contours(
        request: Request,
        model: str,
        variable: str,
        hour: int = Query(0),
        bbox: str | None = Query(None),
    ):
        service = request.app.state.contour_service
        try:
            collection = await service.generate(model, variable, bbox, hour)
        except InvalidRequestError as e:
            return JSONResponse({'error': str(e)}, status_code=HTTP_BAD_REQUEST)
        except UpstreamUnavailableError as e:
            logger.warning('Upstream failure for %s/%s: %s', model, variable, e)
            return JSONResponse(
                {'error': 'Failed to fetch data'}, status_code=HTTP_INTERNAL_ERROR
            )
        except ComputationError:
            return JSONResponse(
                {'error': 'Failed to generate contours'}, status_code=HTTP_INTERNAL_ERROR
            )
        return JSONResponse(
            collection,
            headers={
                'Cache-Control': f'public, max-age={cache_max_age_s}',
                'Access-Control-Allow-Origin': '*',
            },
        )

    return router
