"""
apod-client

An asynchronous client for NASA's "Astronomy Picture of the Day" API,
built on aiohttp.

Example:
    import asyncio
    from apod_client import APODClient, Date

    async def main():
        async with APODClient("DEMO_KEY") as client:
            metadata, rate_limit = await client.get_picture(Date.today(), hd=True)
            print(metadata.title, rate_limit.remaining)

    asyncio.run(main())
"""

from .version import __version__
from .api.apod_api_client import (
    APODClient,
    APODClientError,
    APODDeserializationError,
    APODHttpStatusError,
    APODTransportError,
)
from .managers.apod_config import APODConfig
from .models.apod_data import APODMetadata, Date, DateKind, RateLimitInfo

__all__ = [
    "__version__",
    "APODClient",
    "APODClientError",
    "APODTransportError",
    "APODHttpStatusError",
    "APODDeserializationError",
    "APODConfig",
    "APODMetadata",
    "Date",
    "DateKind",
    "RateLimitInfo",
]
