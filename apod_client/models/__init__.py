"""
Data models for the apod-client package.

This module contains the value objects exchanged with callers.
"""

from .apod_data import APODMetadata, Date, DateKind, RateLimitInfo

__all__ = ["APODMetadata", "Date", "DateKind", "RateLimitInfo"]
