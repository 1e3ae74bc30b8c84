"""
Global pytest configuration and fixtures.
"""

import json
import warnings
from pathlib import Path
from unittest.mock import AsyncMock

import pytest
from multidict import CIMultiDict

from apod_client.api.apod_api_client import APODClient, APODHTTPResponse, HTTPClient

DATA_DIR = Path(__file__).parent / "data"


def pytest_configure(config):
    """Configure pytest to suppress RuntimeWarnings."""
    warnings.filterwarnings("ignore", message=".*AsyncMockMixin.*was never awaited.*")


def load_payload(name: str) -> dict:
    """Load a canned APOD response from tests/data."""
    with open(DATA_DIR / name, "r", encoding="utf-8") as f:
        return json.load(f)


def make_response(status_code=200, payload=None, headers=None, body=None):
    """Build a raw HTTP response as returned by an HTTPClient."""
    if body is None:
        body = json.dumps(payload if payload is not None else {}).encode("utf-8")
    return APODHTTPResponse(
        status_code=status_code,
        headers=CIMultiDict(headers or {}),
        body=body,
        url="https://api.nasa.gov/planetary/apod",
    )


@pytest.fixture
def ok_payload():
    """Provide a complete APOD image entry."""
    return load_payload("ok.json")


@pytest.fixture
def video_payload():
    """Provide an APOD video entry without HD URL or copyright."""
    return load_payload("video.json")


@pytest.fixture
def rate_limit_headers():
    """Provide rate limit headers as sent by api.nasa.gov."""
    return {"X-RateLimit-Limit": "1000", "X-RateLimit-Remaining": "37"}


@pytest.fixture
def mock_http_client():
    """Create mock HTTP client."""
    return AsyncMock(spec=HTTPClient)


@pytest.fixture
def apod_client(mock_http_client):
    """Create APOD client backed by the mock HTTP client."""
    return APODClient("test_api_key", http_client=mock_http_client)
