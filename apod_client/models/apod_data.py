"""
APOD data models for the apod-client package.

This module contains the immutable value objects exchanged with callers:
the date selector used to build a request, the picture metadata parsed from
a response and the rate limit information read from the response headers.
"""

import logging
from dataclasses import dataclass
from datetime import date as calendar_date
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Mapping, Optional

logger = logging.getLogger(__name__)

RATE_LIMIT_HEADER = "X-RateLimit-Limit"
RATE_LIMIT_REMAINING_HEADER = "X-RateLimit-Remaining"


class DateKind(Enum):
    """Enumeration of supported date selectors."""
    TODAY = "today"
    ON = "on"
    RANDOM = "random"


@dataclass(frozen=True)
class Date:
    """
    Immutable selector for the picture to fetch.

    Use the factory methods rather than the constructor:
    ``Date.today()``, ``Date.on(datetime.date(1995, 6, 16))`` or
    ``Date.random()``.
    """
    kind: DateKind
    value: Optional[calendar_date] = None

    def __post_init__(self):
        """Validate selector consistency on creation."""
        if not isinstance(self.kind, DateKind):
            raise ValueError(f"Invalid date kind: {self.kind!r}")

        if self.kind == DateKind.ON:
            if not isinstance(self.value, calendar_date):
                raise ValueError("Date.on requires a datetime.date value")
        elif self.value is not None:
            raise ValueError(f"{self.kind.value} selector does not take a date value")

    @classmethod
    def today(cls) -> "Date":
        """Select the picture of the current day (upstream time zone)."""
        return cls(DateKind.TODAY)

    @classmethod
    def on(cls, value: calendar_date) -> "Date":
        """Select the picture published on a specific calendar day."""
        return cls(DateKind.ON, value)

    @classmethod
    def random(cls) -> "Date":
        """Let the upstream pick one random picture."""
        return cls(DateKind.RANDOM)

    @property
    def is_random(self) -> bool:
        return self.kind == DateKind.RANDOM

    def as_params(self) -> Dict[str, str]:
        """Get the query parameters contributed by this selector."""
        if self.kind == DateKind.ON:
            return {"date": self._iso_date()}
        if self.kind == DateKind.RANDOM:
            return {"count": "1"}
        return {}

    def __str__(self) -> str:
        if self.kind == DateKind.ON:
            return self._iso_date()
        return self.kind.value

    def _iso_date(self) -> str:
        # datetime is a date subclass; only the calendar day is sent
        if isinstance(self.value, datetime):
            return self.value.date().isoformat()
        return self.value.isoformat()


@dataclass(frozen=True)
class APODMetadata:
    """
    Immutable metadata for an Astronomy Picture of the Day entry.

    Field names follow the upstream JSON keys, except ``hd_url`` which is
    published upstream as ``hdurl``.
    """
    title: str
    explanation: str
    url: str
    media_type: str
    date: str
    hd_url: Optional[str] = None
    copyright: Optional[str] = None

    REQUIRED_FIELDS = ("title", "explanation", "url", "media_type", "date")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], hd: bool = True) -> "APODMetadata":
        """
        Create metadata from a decoded APOD JSON object.

        Unknown keys are ignored. ``hd_url`` is only kept when ``hd`` is set
        and the entry actually has an HD variant.

        Raises:
            ValueError: if the payload is not an object or a required field
                is missing or not a string.
        """
        if not isinstance(data, Mapping):
            raise ValueError(f"expected a JSON object, got {type(data).__name__}")

        missing = [name for name in cls.REQUIRED_FIELDS if name not in data]
        if missing:
            raise ValueError(f"missing required field(s): {', '.join(missing)}")

        for name in cls.REQUIRED_FIELDS:
            if not isinstance(data[name], str):
                raise ValueError(f"field '{name}' must be a string")

        hd_url = data.get("hdurl") if hd else None
        copyright_holder = data.get("copyright")

        if hd_url is not None and not isinstance(hd_url, str):
            raise ValueError("field 'hdurl' must be a string")
        if copyright_holder is not None and not isinstance(copyright_holder, str):
            raise ValueError("field 'copyright' must be a string")

        return cls(
            title=data["title"],
            explanation=data["explanation"],
            url=data["url"],
            media_type=data["media_type"],
            date=data["date"],
            hd_url=hd_url,
            copyright=copyright_holder,
        )

    @property
    def is_image(self) -> bool:
        return self.media_type == "image"

    @property
    def is_video(self) -> bool:
        return self.media_type == "video"

    @property
    def has_hd_image(self) -> bool:
        return self.hd_url is not None and self.hd_url.strip() != ""

    @property
    def best_url(self) -> str:
        """Get the HD URL when available, the standard URL otherwise."""
        return self.hd_url if self.has_hd_image else self.url


@dataclass(frozen=True)
class RateLimitInfo:
    """
    Immutable API quota information for the key in use.

    Either field is ``None`` when the upstream did not report it.
    """
    limit: Optional[int] = None
    remaining: Optional[int] = None

    @classmethod
    def from_headers(cls, headers: Mapping[str, str]) -> "RateLimitInfo":
        """Parse rate limit headers, ignoring missing or malformed values."""
        return cls(
            limit=_parse_int_header(headers, RATE_LIMIT_HEADER),
            remaining=_parse_int_header(headers, RATE_LIMIT_REMAINING_HEADER),
        )

    @property
    def is_known(self) -> bool:
        return self.limit is not None and self.remaining is not None

    @property
    def is_exhausted(self) -> bool:
        """Check if the upstream reported no remaining requests."""
        return self.remaining is not None and self.remaining <= 0


def _parse_int_header(headers: Mapping[str, str], name: str) -> Optional[int]:
    raw = headers.get(name)
    if raw is None:
        # Plain dicts are not case-insensitive like aiohttp's header mapping
        lowered = name.lower()
        raw = next((v for k, v in headers.items() if k.lower() == lowered), None)
    if raw is None:
        return None

    try:
        return int(str(raw).strip())
    except ValueError:
        logger.debug(f"Ignoring malformed {name} header: {raw!r}")
        return None
