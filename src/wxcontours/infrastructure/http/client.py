from __future__ import annotations

import logging
import ssl
from typing import Any

import aiohttp
import certifi

from wxcontours.shared.constants import HTTP_OK, HTTP_TIMEOUT_DEFAULT, HTTP_USER_AGENT
from wxcontours.shared.exceptions import ComputationError, UpstreamUnavailableError

logger = logging.getLogger(__name__)


def make_http_session(user_agent: str = HTTP_USER_AGENT) -> aiohttp.ClientSession:
    # SSL context with the certifi CA bundle
    ssl_context = ssl.create_default_context(cafile=certifi.where())
    connector = aiohttp.TCPConnector(ssl=ssl_context)
    return aiohttp.ClientSession(
        connector=connector,
        headers={'User-Agent': user_agent},
    )


async def fetch_json(
    client: aiohttp.ClientSession,
    url: str,
    *,
    params: dict[str, str] | None = None,
    timeout_s: float = HTTP_TIMEOUT_DEFAULT,
) -> Any:
    """
    GET ``url`` once and decode the JSON body.

    No retries. A non-200 status, a timeout or a connection failure raises
    ``UpstreamUnavailableError``; a body that is not JSON raises
    ``ComputationError``.
    """
    timeout = aiohttp.ClientTimeout(total=timeout_s)
    try:
        async with client.get(url, params=params, timeout=timeout) as resp:
            sc = resp.status
            if sc != HTTP_OK:
                msg = f'Forecast source answered HTTP {sc}'
                raise UpstreamUnavailableError(msg, status=sc)
            try:
                return await resp.json(content_type=None)
            except ValueError as e:
                logger.warning('Forecast source at %s sent malformed JSON: %s', url, e)
                msg = 'Forecast source sent a malformed payload'
                raise ComputationError(msg) from e
    except (TimeoutError, aiohttp.ClientError) as e:
        logger.warning('Forecast request to %s failed: %s', url, e)
        msg = 'Forecast source is unreachable or timed out'
        raise UpstreamUnavailableError(msg) from None
