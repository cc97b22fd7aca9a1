"""Command-line entry point: run the HTTP host or contour one request."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys

from wxcontours.shared.constants import LOG_FORMAT
from wxcontours.shared.exceptions import ContourError

logger = logging.getLogger(__name__)


def setup_logging(level: str = 'INFO') -> None:
    """Configure application logging to stdout."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='wxcontours',
        description='Contour lines (isopleths) from point-forecast grids',
    )
    parser.add_argument('--config', default=None, help='Path to settings TOML')
    sub = parser.add_subparsers(dest='command', required=True)

    serve = sub.add_parser('serve', help='Run the HTTP API')
    serve.add_argument('--host', default=None)
    serve.add_argument('--port', type=int, default=None)

    once = sub.add_parser('contours', help='Print contours for one request as GeoJSON')
    once.add_argument('--model', required=True, help='Model id, e.g. gfs')
    once.add_argument('--variable', required=True, help='Hourly variable, e.g. temperature_2m')
    once.add_argument('--bbox', required=True, help='west,south,east,north')
    once.add_argument('--hour', type=int, default=0)

    init = sub.add_parser('init-config', help='Write default settings TOML')
    init.add_argument('path', nargs='?', default=None)
    return parser


async def _contours_once(settings, args: argparse.Namespace) -> dict:
    from wxcontours.forecast.sampler import GridSampler
    from wxcontours.infrastructure.http.client import make_http_session
    from wxcontours.services.contour_service import ContourService

    async with make_http_session(settings.sampler.user_agent) as session:
        service = ContourService(GridSampler(session, settings.sampler))
        return await service.generate(args.model, args.variable, args.bbox, args.hour)


def main(argv: list[str] | None = None) -> int:
    from wxcontours.services.settings_service import load_settings, save_settings
    from wxcontours.shared.constants import SETTINGS_PATH

    args = build_parser().parse_args(argv)

    if args.command == 'init-config':
        from wxcontours.domain.models import ServiceSettings

        path = args.path or args.config or SETTINGS_PATH
        save_settings(ServiceSettings(), path)
        print(path)
        return 0

    try:
        settings = load_settings(args.config)
    except (OSError, ValueError) as e:
        print(f'Failed to load settings: {e}', file=sys.stderr)
        return 2
    setup_logging(settings.log_level)

    if args.command == 'serve':
        import uvicorn

        from wxcontours.api.app import create_app

        host = args.host or settings.host
        port = args.port or settings.port
        logger.info('Starting wxcontours on %s:%d', host, port)
        uvicorn.run(create_app(settings), host=host, port=port, log_config=None)
        return 0

    try:
        collection = asyncio.run(_contours_once(settings, args))
    except ContourError as e:
        logger.error('Contour request failed: %s', e)
        return 1
    json.dump(collection, sys.stdout, ensure_ascii=False)
    sys.stdout.write('\n')
    return 0


if __name__ == '__main__':
    sys.exit(main())
