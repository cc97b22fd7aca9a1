"""HTTP client infrastructure."""
from wxcontours.infrastructure.http.client import fetch_json, make_http_session

__all__ = [
    'fetch_json',
    'make_http_session',
]
