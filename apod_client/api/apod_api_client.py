"""
APOD API client for fetching NASA's Astronomy Picture of the Day.

This module handles all communication with the APOD endpoint: building the
request URL, performing the GET through an injectable HTTP client, checking
the response status, decoding the picture metadata and reading the rate
limit headers. Every failure is raised as an APODClientError subclass.
"""

import asyncio
import json
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple, Union

import aiohttp
from multidict import CIMultiDict
from yarl import URL

from ..managers.apod_config import APODConfig, DEFAULT_BASE_URL
from ..models.apod_data import APODMetadata, Date, RateLimitInfo
from ..version import get_user_agent

logger = logging.getLogger(__name__)


class APODClientError(Exception):
    """Base exception for APOD client errors."""

    pass


class APODTransportError(APODClientError):
    """Exception for network, connection, TLS and timeout failures."""

    def __init__(self, cause: BaseException):
        super().__init__(f"Transport error: {cause}")
        self.cause = cause


class APODHttpStatusError(APODClientError):
    """Exception for non-success HTTP status codes returned upstream."""

    def __init__(self, status_code: int, reason: Optional[str] = None):
        message = f"Request failed with HTTP status {status_code}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
        self.status_code = status_code
        self.reason = reason


class APODDeserializationError(APODClientError):
    """Exception for response bodies that are not the expected JSON."""

    def __init__(self, message: str):
        super().__init__(f"Could not decode APOD response: {message}")
        self.message = message


@dataclass(frozen=True)
class APODHTTPResponse:
    """Container for a raw HTTP response."""

    status_code: int
    headers: Mapping[str, str]
    body: bytes
    url: str
    reason: Optional[str] = None


class HTTPClient(ABC):
    """Abstract HTTP client interface for dependency injection."""

    @abstractmethod
    async def get(
        self, url: Union[str, URL], params: Optional[Dict[str, str]] = None
    ) -> APODHTTPResponse:
        """Make HTTP GET request."""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close HTTP client."""
        pass


class AioHttpClient(HTTPClient):
    """
    Concrete HTTP client implementation using aiohttp.

    The underlying session is created on first use and reused by every
    request, so concurrent calls share one connection pool.
    """

    def __init__(
        self,
        timeout_seconds: Optional[float] = None,
        user_agent: Optional[str] = None,
    ):
        """
        Initialize HTTP client.

        Args:
            timeout_seconds: Total request timeout. None keeps aiohttp's default.
            user_agent: User-Agent header, defaults to the package's own.
        """
        self._timeout = (
            aiohttp.ClientTimeout(total=timeout_seconds)
            if timeout_seconds is not None
            else None
        )
        self._user_agent = user_agent or get_user_agent()
        self._session: Optional[aiohttp.ClientSession] = None

    async def _ensure_session(self) -> aiohttp.ClientSession:
        """Ensure session is created."""
        if self._session is None or self._session.closed:
            kwargs: Dict[str, Any] = {"headers": {"User-Agent": self._user_agent}}
            if self._timeout is not None:
                kwargs["timeout"] = self._timeout
            self._session = aiohttp.ClientSession(**kwargs)
        return self._session

    async def get(
        self, url: Union[str, URL], params: Optional[Dict[str, str]] = None
    ) -> APODHTTPResponse:
        """Make HTTP GET request and read the whole body."""
        session = await self._ensure_session()

        try:
            async with session.get(url, params=params) as response:
                body = await response.read()
                return APODHTTPResponse(
                    status_code=response.status,
                    headers=CIMultiDict(response.headers),
                    body=body,
                    url=str(response.url),
                    reason=response.reason,
                )
        except (aiohttp.ClientError, asyncio.TimeoutError, OSError) as e:
            raise APODTransportError(e) from e

    async def close(self) -> None:
        """Close HTTP client."""
        if self._session and not self._session.closed:
            await self._session.close()
        self._session = None


class APODClient:
    """
    Asynchronous client for the Astronomy Picture of the Day API.

    Holds no per-call state, so one instance can serve many concurrent
    tasks and clients with different keys can coexist.

    Example:
        async with APODClient("DEMO_KEY") as client:
            metadata, rate_limit = await client.get_picture(Date.today(), hd=True)
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        http_client: Optional[HTTPClient] = None,
    ):
        """
        Initialize APOD client.

        Args:
            api_key: NASA API key, passed upstream verbatim
            base_url: APOD endpoint, overridable for testing or proxies
            http_client: HTTP client implementation (AioHttpClient if None)
        """
        url = URL(base_url)
        if url.scheme not in ("http", "https") or not url.host:
            raise ValueError(f"Invalid APOD base URL: {base_url}")

        self._api_key = api_key
        self._base_url = url
        self._http_client = http_client or AioHttpClient()

    @classmethod
    def from_config(cls, config: APODConfig) -> "APODClient":
        """Create client from an APOD configuration."""
        http_client = AioHttpClient(
            timeout_seconds=config.timeout_seconds, user_agent=config.user_agent
        )
        return cls(config.api_key, base_url=config.base_url, http_client=http_client)

    @property
    def api_key(self) -> str:
        return self._api_key

    @property
    def base_url(self) -> str:
        return str(self._base_url)

    def build_url(self, date: Date, hd: bool = False) -> URL:
        """Build the request URL for the given date selector."""
        params = {"api_key": self._api_key, "hd": "true" if hd else "false"}
        params.update(date.as_params())
        return self._base_url.update_query(params)

    async def get_picture(
        self, date: Date, hd: bool = False
    ) -> Tuple[APODMetadata, RateLimitInfo]:
        """
        Retrieve picture metadata for the given date.

        Args:
            date: Which picture to fetch
            hd: Whether the HD image URL should be returned when available

        Returns:
            Tuple[APODMetadata, RateLimitInfo]: Parsed metadata and the quota
            reported alongside it

        Raises:
            APODTransportError: The request could not be completed
            APODHttpStatusError: Upstream answered with a 4xx/5xx status
            APODDeserializationError: The body is not the expected JSON
        """
        url = self.build_url(date, hd)
        logger.debug(f"Requesting APOD for {date} (hd={hd}): {_mask_api_key(url)}")

        response = await self._http_client.get(url)

        if response.status_code >= 400:
            raise APODHttpStatusError(response.status_code, response.reason)

        metadata = self._parse_metadata(response.body, date, hd)
        rate_limit = RateLimitInfo.from_headers(response.headers)

        logger.debug(
            f"APOD returned '{metadata.title}' for {metadata.date} "
            f"(rate limit remaining: {rate_limit.remaining})"
        )
        return metadata, rate_limit

    def _parse_metadata(self, body: bytes, date: Date, hd: bool) -> APODMetadata:
        """Decode response body into APODMetadata."""
        try:
            payload = json.loads(body)
        except ValueError:
            raise APODDeserializationError("response body is not valid JSON") from None

        if date.is_random:
            # count=1 answers with a one-element array
            if not isinstance(payload, list) or len(payload) != 1:
                raise APODDeserializationError(
                    "expected a single-entry JSON array for a random picture"
                )
            payload = payload[0]

        try:
            return APODMetadata.from_dict(payload, hd=hd)
        except ValueError as e:
            raise APODDeserializationError(str(e)) from e

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._http_client.close()
        logger.debug("APODClient closed")

    async def __aenter__(self) -> "APODClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()


def _mask_api_key(url: URL) -> str:
    if "api_key" not in url.query:
        return str(url)
    return str(url.update_query(api_key="REDACTED"))
