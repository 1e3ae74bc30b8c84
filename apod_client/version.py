"""
Version information for the apod-client package.

Centralized version management used by the package metadata and the
default HTTP User-Agent.
"""

__version__ = "1.0.0"
__version_info__ = (1, 0, 0)
__app_name__ = "apod-client"
__description__ = "Asynchronous client for NASA's Astronomy Picture of the Day API"


def get_user_agent() -> str:
    """Get the User-Agent sent with every request."""
    return f"{__app_name__}/{__version__}"
