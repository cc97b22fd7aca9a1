from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import tomlkit
from dotenv import load_dotenv
from pydantic import ValidationError
from tomlkit.exceptions import ParseError

from wxcontours.domain.models import ServiceSettings
from wxcontours.shared.constants import (
    OPEN_METEO_BASE_URL,
    OPEN_METEO_CUSTOMER_BASE_URL,
    SECRETS_ENV_FILES,
    SETTINGS_PATH,
)

logger = logging.getLogger(__name__)

ENV_API_KEY = 'OPEN_METEO_API_KEY'
ENV_BASE_URL = 'OPEN_METEO_BASE_URL'
ENV_LOG_LEVEL = 'WXCONTOURS_LOG_LEVEL'


def _load_secrets(candidates: tuple[str | Path, ...]) -> None:
    for p in candidates:
        path = Path(p)
        if path.exists():
            load_dotenv(path)
            logger.debug('Loaded environment from %s', path)
            break


def read_settings_file(path: Path) -> dict[str, Any]:
    text = path.read_text(encoding='utf-8')
    try:
        return tomlkit.parse(text).unwrap()
    except ParseError as e:
        msg = f'Invalid settings file {path}: {e}'
        raise ValueError(msg) from None


def load_settings(
    path: str | Path | None = None,
    *,
    env_files: tuple[str | Path, ...] = SECRETS_ENV_FILES,
) -> ServiceSettings:
    """
    Settings from an optional TOML file, overridden by the environment.

    Secrets are read from the first existing ``env_files`` entry. When an API
    key is configured but no base URL is, the customer endpoint is used.
    """
    settings_path = Path(path or SETTINGS_PATH)
    data: dict[str, Any] = {}
    if settings_path.exists():
        data = read_settings_file(settings_path)
        logger.info('Settings loaded from %s', settings_path)
    elif path is not None:
        msg = f'Settings file not found: {settings_path}'
        raise FileNotFoundError(msg)

    _load_secrets(env_files)

    sampler: dict[str, Any] = dict(data.get('sampler') or {})
    api_key = os.getenv(ENV_API_KEY, '').strip()
    base_url = os.getenv(ENV_BASE_URL, '').strip()
    if api_key:
        sampler['api_key'] = api_key
    if base_url:
        sampler['base_url'] = base_url
    elif sampler.get('api_key') and 'base_url' not in sampler:
        sampler['base_url'] = OPEN_METEO_CUSTOMER_BASE_URL
    data['sampler'] = sampler

    log_level = os.getenv(ENV_LOG_LEVEL, '').strip()
    if log_level:
        data['log_level'] = log_level

    try:
        return ServiceSettings.model_validate(data)
    except ValidationError as e:
        msg = f'Invalid settings: {e}'
        raise ValueError(msg) from None


def save_settings(settings: ServiceSettings, path: str | Path) -> None:
    """Write settings as TOML; the API key is never written to disk.

    A default base URL is left out so a later API key can switch endpoints.
    """
    data = settings.model_dump(mode='json', exclude_none=True)
    sampler = data.get('sampler', {})
    sampler.pop('api_key', None)
    if sampler.get('base_url') == OPEN_METEO_BASE_URL:
        sampler.pop('base_url')
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(tomlkit.dumps(data), encoding='utf-8')
