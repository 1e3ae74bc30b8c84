"""
API integration for the apod-client package.

This module handles communication with the APOD endpoint,
including error handling and response parsing.
"""

from .apod_api_client import (
    APODClient,
    APODClientError,
    APODDeserializationError,
    APODHTTPResponse,
    APODHttpStatusError,
    APODTransportError,
    AioHttpClient,
    HTTPClient,
)

__all__ = [
    "APODClient",
    "APODClientError",
    "APODTransportError",
    "APODHttpStatusError",
    "APODDeserializationError",
    "APODHTTPResponse",
    "HTTPClient",
    "AioHttpClient",
]
