"""
Configuration management for the apod-client package.
"""

from .apod_config import APODConfig

__all__ = ["APODConfig"]
