"""
APOD configuration management for the apod-client package.

This module handles client configuration using Pydantic models for type
safety and validation. Settings are read from the "apod" section of a JSON
config file and can be overridden through environment variables.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from pydantic import BaseModel, Field, field_validator
from yarl import URL

from ..version import get_user_agent

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.nasa.gov/planetary/apod"
DEMO_API_KEY = "DEMO_KEY"

ENV_API_KEY = "NASA_API_KEY"
ENV_BASE_URL = "APOD_BASE_URL"
ENV_TIMEOUT_SECONDS = "APOD_TIMEOUT_SECONDS"


class APODConfig(BaseModel):
    """Configuration for APOD API access."""

    api_key: str = Field(default=DEMO_API_KEY, description="NASA API key")
    base_url: str = Field(default=DEFAULT_BASE_URL, description="APOD endpoint URL")
    timeout_seconds: Optional[float] = Field(
        default=None,
        gt=0,
        description="Total request timeout, None for the transport default",
    )
    user_agent: str = Field(
        default_factory=get_user_agent, description="User-Agent header value"
    )

    @field_validator("api_key")
    @classmethod
    def validate_api_key(cls, v):
        """Validate API key is not empty."""
        if not v.strip():
            raise ValueError("API key cannot be empty")
        return v

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v):
        """Validate base URL is an absolute http(s) URL."""
        url = URL(v.strip())
        if url.scheme not in ("http", "https") or not url.host:
            raise ValueError(f"Invalid APOD base URL: {v}")
        return str(url)

    @property
    def uses_demo_key(self) -> bool:
        return self.api_key == DEMO_API_KEY

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "APODConfig":
        """Create APOD config from dictionary."""
        return cls(**data)

    def to_dict(self) -> Dict[str, Any]:
        """Convert APOD config to dictionary."""
        return self.model_dump()

    @classmethod
    def from_file(cls, config_path: Union[str, Path]) -> "APODConfig":
        """Load APOD configuration from the "apod" section of a JSON file."""
        config_path = Path(config_path)
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            logger.warning(f"APOD config file not found: {config_path}")
            return cls()
        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON in APOD config: {e}")
            raise ValueError(f"Invalid APOD configuration file: {e}")

        if not isinstance(data, dict):
            raise ValueError("Invalid APOD configuration file: expected a JSON object")

        section = data.get("apod", {})
        if not isinstance(section, dict):
            raise ValueError(
                "Invalid APOD configuration file: \"apod\" section must be a JSON object"
            )

        return cls.from_dict(section)

    @classmethod
    def from_env(
        cls, environ: Optional[Mapping[str, str]] = None, base: Optional["APODConfig"] = None
    ) -> "APODConfig":
        """
        Create APOD config from environment variables.

        Variables that are unset keep the values of ``base`` (or the defaults).
        """
        environ = os.environ if environ is None else environ
        data = base.to_dict() if base else {}

        if environ.get(ENV_API_KEY):
            data["api_key"] = environ[ENV_API_KEY]
        if environ.get(ENV_BASE_URL):
            data["base_url"] = environ[ENV_BASE_URL]
        if environ.get(ENV_TIMEOUT_SECONDS):
            try:
                data["timeout_seconds"] = float(environ[ENV_TIMEOUT_SECONDS])
            except ValueError:
                raise ValueError(
                    f"{ENV_TIMEOUT_SECONDS} must be a number, "
                    f"got {environ[ENV_TIMEOUT_SECONDS]!r}"
                )

        return cls.from_dict(data)

    @classmethod
    def load(
        cls,
        config_path: Optional[Union[str, Path]] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> "APODConfig":
        """Load configuration from file (if given) then apply environment overrides."""
        base = cls.from_file(config_path) if config_path else cls()
        config = cls.from_env(environ, base=base)

        if config.uses_demo_key:
            logger.warning("Using NASA DEMO_KEY, which is heavily rate limited")
        return config

    def to_summary_dict(self) -> dict:
        """Get configuration summary with the API key masked."""
        return {
            "api_key": f"{self.api_key[:4]}..." if len(self.api_key) > 4 else "****",
            "base_url": self.base_url,
            "timeout_seconds": self.timeout_seconds,
            "user_agent": self.user_agent,
        }
