"""Pytest configuration and fixtures for wxcontours tests."""

import sys
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

# Add src directory to path for imports
src_path = Path(__file__).parent.parent / 'src'
sys.path.insert(0, str(src_path))


def make_mock_session(payload=None, *, status=200, exc=None):
    """aiohttp-like session whose get() yields one canned response."""
    mock_response = MagicMock()
    mock_response.status = status
    mock_response.json = AsyncMock(return_value=payload)
    mock_response.__aenter__ = AsyncMock(return_value=mock_response)
    mock_response.__aexit__ = AsyncMock(return_value=None)

    mock_session = MagicMock()
    if exc is not None:
        mock_session.get = MagicMock(side_effect=exc)
    else:
        mock_session.get = MagicMock(return_value=mock_response)
    return mock_session


def hourly_payload(variable, grid_values, hour=0):
    """Open-Meteo style multi-location answer for a 2-D list of values."""
    entries = []
    for row in grid_values:
        for value in row:
            series = [None] * hour + [value]
            entries.append({'hourly': {'time': [], variable: series}})
    return entries


@pytest.fixture
def mock_session_factory():
    return make_mock_session


@pytest.fixture
def payload_factory():
    return hourly_payload
